"""Learning service: the per-user coordinator of activities and progress."""
import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Union

from poliglot.config import settings
from poliglot.errors import NoActiveUserError, NoBackendError, TestLockedError
from poliglot.models.progress_models import ProgressDelta, User, UserProgress
from poliglot.models.word_models import Language, Mode, ProficiencyLevel, Word
from poliglot.services import selection_service
from poliglot.services.catalog_service import WordCatalog
from poliglot.services.progress_service import ProgressStore
from poliglot.services.quiz_service import QuizSession
from poliglot.services.selection_service import DictionaryTab
from poliglot.services.session_service import StudySession
from poliglot.services.user_service import AuthResult, LoginResult, UserService
from poliglot import monitoring

logger = logging.getLogger(__name__)


@dataclass
class DashboardStats:
    """Counters shown on the dashboard for the active mode."""
    mode: Mode
    level: ProficiencyLevel
    seen: int
    learned: int
    can_test: bool
    test_threshold: int


class LearningService:
    """Service for the logged-in user's activities.

    Holds at most one active session. Starting an activity abandons the
    previous one without committing it.
    """

    def __init__(
        self,
        catalog: WordCatalog,
        user_service: Optional[UserService] = None,
        rng: Optional[random.Random] = None,
        language: Language = Language.RUSSIAN,
    ):
        self.catalog = catalog
        self.user_service = user_service
        self.rng = rng or random.Random()
        self.language = language
        self.user: Optional[User] = None
        self.uid: Optional[str] = None
        self.store: Optional[ProgressStore] = None
        self.active_session: Optional[Union[StudySession, QuizSession]] = None

    # Authentication

    def register(self, username: str, password: str) -> AuthResult:
        return self._require_backend().register(username, password)

    def login(self, username: str, password: str) -> LoginResult:
        """Log in and make the user active."""
        result = self._require_backend().login(username, password)
        if result.user is not None:
            self.set_user(result.user, result.uid)
        return result

    def restore(self, uid: str) -> Optional[User]:
        """Restore a saved session by uid."""
        user = self._require_backend().get_user(uid)
        if user is not None:
            self.set_user(user, uid)
        return user

    def set_user(self, user: User, uid: Optional[str] = None) -> None:
        self.abandon_session()
        self.user = user
        self.uid = uid
        self.store = ProgressStore(user, writer=self._write_progress if uid else None)

    def logout(self) -> None:
        self.abandon_session()
        if self.user is not None:
            logger.info(f"User {self.user.username} logged out")
        self.user = None
        self.uid = None
        self.store = None

    def _require_user(self) -> User:
        if self.user is None:
            raise NoActiveUserError("No user is logged in")
        return self.user

    def _require_backend(self) -> UserService:
        if self.user_service is None:
            raise NoBackendError("No user backend is configured")
        return self.user_service

    def _write_progress(self, progress: UserProgress) -> None:
        if self.user_service is not None:
            self.user_service.update_progress(self.uid, progress)

    # Settings

    def toggle_mode(self) -> Mode:
        """Switch between kid and adult mode."""
        user = self._require_user()
        user.mode = Mode.ADULT if user.mode == Mode.KID else Mode.KID
        logger.info(f"User {user.username} switched to {user.mode.value} mode")
        if self.user_service is not None and self.uid:
            self.user_service.update_mode(self.uid, user.mode)
        return user.mode

    def set_level(self, level: ProficiencyLevel) -> None:
        user = self._require_user()
        user.level = level
        logger.info(f"User {user.username} set level {level.value}")
        if self.user_service is not None and self.uid:
            self.user_service.update_level(self.uid, level)

    # Activities

    def words(self) -> List[Word]:
        """Get the catalog slice for the active mode and level."""
        user = self._require_user()
        return self.catalog.words_for(user.mode, user.level)

    def dashboard(self) -> DashboardStats:
        user = self._require_user()
        return DashboardStats(
            mode=user.mode,
            level=user.level,
            seen=self.store.seen_count(),
            learned=self.store.learned_count(),
            can_test=self.store.can_take_test(),
            test_threshold=settings.learning.test_unlock_threshold,
        )

    def abandon_session(self) -> None:
        if isinstance(self.active_session, StudySession):
            self.active_session.abandon()
        self.active_session = None

    def _start_pass(self, words: List[Word], activity: str) -> StudySession:
        self.abandon_session()
        mode = self.user.mode

        def commit(delta: ProgressDelta) -> None:
            self.store.merge(mode, delta)
            monitoring.sessions_completed.labels(activity=activity).inc()

        session = StudySession(words, on_complete=commit, activity=activity)
        self.active_session = session
        monitoring.sessions_started.labels(activity=activity).inc()
        logger.info(f"Started {activity} session for {self.user.username} with {len(words)} words")
        return session

    def start_study(self) -> StudySession:
        """Start a pass through the next unseen words."""
        user = self._require_user()
        words = selection_service.study_queue(self.words(), user.current_progress)
        return self._start_pass(words, "study")

    def start_review(self) -> StudySession:
        """Start a pass through the learned words in random order."""
        user = self._require_user()
        words = selection_service.review_queue(self.words(), user.current_progress, rng=self.rng)
        return self._start_pass(words, "review")

    def start_test(self) -> QuizSession:
        """Start a quiz over a sample of learned words."""
        user = self._require_user()
        if not self.store.can_take_test():
            raise TestLockedError(self.store.learned_count(), settings.learning.test_unlock_threshold)

        self.abandon_session()
        words = selection_service.test_set(self.words(), user.current_progress, rng=self.rng)
        session = QuizSession(words, language=self.language, rng=self.rng)
        self.active_session = session
        monitoring.sessions_started.labels(activity="test").inc()
        logger.info(f"Started test for {user.username} with {len(words)} questions")
        return session

    def dictionary(self, tab: DictionaryTab = DictionaryTab.MINE, query: str = "") -> List[Word]:
        user = self._require_user()
        return selection_service.dictionary_view(self.catalog.all_words(), user.progress, tab, query)
