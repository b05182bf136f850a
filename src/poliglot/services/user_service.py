"""User service: registration, login and best-effort profile writes."""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from pwdlib import PasswordHash
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from poliglot.config import settings
from poliglot.models.models import UserDocument
from poliglot.models.progress_models import User, UserProgress
from poliglot.models.word_models import Mode, ProficiencyLevel
from poliglot import monitoring

logger = logging.getLogger(__name__)

password_hash = PasswordHash.recommended()

AUTH_LENGTH_ERROR = "Username and password must be at least {min_length} characters"
USER_EXISTS_ERROR = "User already exists"
INVALID_CREDENTIALS_ERROR = "Invalid credentials"
REGISTRATION_FAILED_ERROR = "Registration failed. Please try again."
DATABASE_UNAVAILABLE_ERROR = "Database unavailable. Please check your internet connection and try again."

DEFAULT_MODE = Mode.ADULT
DEFAULT_LEVEL = ProficiencyLevel.EASY


@dataclass
class AuthResult:
    """Outcome of a registration."""
    success: bool
    error: Optional[str] = None


@dataclass
class LoginResult:
    """Outcome of a login."""
    user: Optional[User] = None
    uid: Optional[str] = None
    error: Optional[str] = None


def username_to_email(username: str) -> str:
    """Use the username as email if it has an '@', else add the technical domain."""
    if "@" in username:
        return username
    return f"{username}@{settings.auth.email_domain}"


def hash_password(plain_password: str) -> str:
    """Hash a plain password for storage with pepper."""
    return password_hash.hash(plain_password + settings.auth.password_pepper)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored hash."""
    return password_hash.verify(plain_password + settings.auth.password_pepper, hashed_password)


def empty_progress() -> Dict[str, Any]:
    return UserProgress().to_dict()


def migrate_progress(data: Any) -> Tuple[Dict[str, Any], bool]:
    """Bring a stored progress document to the per-mode shape.

    Returns the document and whether it changed. A legacy flat document
    (``seenWordIds``/``learnedWordIds`` at the top level) moves under
    ``adult``.
    """
    if isinstance(data, dict) and "kid" in data and "adult" in data:
        return data, False

    if isinstance(data, dict) and (data.get("seenWordIds") or data.get("learnedWordIds")):
        progress = empty_progress()
        progress["adult"] = {
            "seenWordIds": list(data.get("seenWordIds") or []),
            "learnedWordIds": list(data.get("learnedWordIds") or []),
        }
        return progress, True

    return empty_progress(), True


def _parse_mode(value: Optional[str]) -> Mode:
    try:
        return Mode(value)
    except ValueError:
        return DEFAULT_MODE


def _parse_level(value: Optional[str]) -> ProficiencyLevel:
    try:
        return ProficiencyLevel(value)
    except ValueError:
        return DEFAULT_LEVEL


class UserService:
    """Service for user documents.

    Writes are best effort: database errors are logged and reported through
    return values, never raised to the caller.
    """

    def __init__(self, db: Session):
        """Initialize the service with a database session."""
        self.db = db

    def _get_document(self, uid: str) -> Optional[UserDocument]:
        return self.db.get(UserDocument, uid)

    def _get_document_by_email(self, email: str) -> Optional[UserDocument]:
        return self.db.query(UserDocument).filter(UserDocument.email == email).first()

    def _fail(self, operation: str, error: Exception) -> None:
        self.db.rollback()
        monitoring.backend_errors.labels(operation=operation).inc()
        logger.error(f"Error during {operation}: {error}")

    def register(self, username: str, password: str) -> AuthResult:
        """Register a new user with default mode, level and empty progress."""
        min_length = settings.auth.min_length
        if len(username) < min_length or len(password) < min_length:
            return AuthResult(False, AUTH_LENGTH_ERROR.format(min_length=min_length))

        email = username_to_email(username)
        try:
            if self._get_document_by_email(email) is not None:
                return AuthResult(False, USER_EXISTS_ERROR)

            document = UserDocument(
                email=email,
                username=username,
                password_hash=hash_password(password),
                mode=DEFAULT_MODE.value,
                level=DEFAULT_LEVEL.value,
                progress=empty_progress(),
            )
            self.db.add(document)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Duplicate registration for {email}: {e}")
            return AuthResult(False, USER_EXISTS_ERROR)
        except SQLAlchemyError as e:
            self._fail("register", e)
            return AuthResult(False, REGISTRATION_FAILED_ERROR)

        monitoring.registered_users.inc()
        logger.info(f"Registered user {username}")
        return AuthResult(True)

    def login(self, username: str, password: str) -> LoginResult:
        """Log a user in, migrating and back-filling the stored document."""
        email = username_to_email(username)
        try:
            document = self._get_document_by_email(email)
        except SQLAlchemyError as e:
            self._fail("login", e)
            monitoring.logins.labels(outcome="error").inc()
            return LoginResult(error=DATABASE_UNAVAILABLE_ERROR)

        if document is None or not verify_password(password, document.password_hash):
            monitoring.logins.labels(outcome="invalid").inc()
            logger.info(f"Invalid credentials for {email}")
            return LoginResult(error=INVALID_CREDENTIALS_ERROR)

        user = self._load_user(document, fallback_username=username)
        monitoring.logins.labels(outcome="success").inc()
        logger.info(f"User {user.username} logged in")
        return LoginResult(user=user, uid=document.uid)

    def get_user(self, uid: str) -> Optional[User]:
        """Restore a user from a saved session uid."""
        try:
            document = self._get_document(uid)
        except SQLAlchemyError as e:
            self._fail("get_user", e)
            return None
        if document is None:
            return None
        return self._load_user(document, fallback_username=document.email.split("@")[0])

    def _load_user(self, document: UserDocument, fallback_username: str) -> User:
        """Build a User from its document, writing back any repairs."""
        progress, migrated = migrate_progress(document.progress)
        user = User(
            username=document.username or fallback_username,
            mode=_parse_mode(document.mode),
            level=_parse_level(document.level),
            progress=UserProgress.from_dict(progress),
        )

        repaired = migrated or not document.username or not document.mode or not document.level
        if repaired:
            try:
                document.progress = progress
                document.username = user.username
                document.mode = user.mode.value
                document.level = user.level.value
                self.db.commit()
                logger.info(f"Repaired stored document for {user.username}")
            except SQLAlchemyError as e:
                self._fail("repair", e)
        return user

    def _update(self, uid: str, operation: str, **fields: Any) -> bool:
        try:
            document = self._get_document(uid)
            if document is None:
                logger.warning(f"Cannot {operation}: no user with uid {uid}")
                return False
            for name, value in fields.items():
                setattr(document, name, value)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail(operation, e)
            return False
        logger.debug(f"{operation} for {uid}: {', '.join(fields)}")
        return True

    def update_progress(self, uid: str, progress: UserProgress) -> bool:
        """Overwrite the stored progress document."""
        return self._update(uid, "update_progress", progress=progress.to_dict())

    def update_mode(self, uid: str, mode: Mode) -> bool:
        return self._update(uid, "update_mode", mode=mode.value)

    def update_level(self, uid: str, level: ProficiencyLevel) -> bool:
        return self._update(uid, "update_level", level=level.value)
