"""Database models for the application."""
import uuid

from sqlalchemy import Column, JSON, String

from poliglot.models.base import Base, TimestampMixin


def new_uid() -> str:
    """Generate an opaque user identifier."""
    return uuid.uuid4().hex


class UserDocument(Base, TimestampMixin):
    """User document keyed by an opaque uid.

    Progress is stored as a single JSON document in the shape
    ``{"kid": {"seenWordIds": [...], "learnedWordIds": [...]}, "adult": {...}}``.
    """

    __tablename__ = "users"

    uid = Column(String, primary_key=True, default=new_uid)
    email = Column(String, unique=True, nullable=False, index=True)
    username = Column(String, nullable=True)
    password_hash = Column(String, nullable=False)
    mode = Column(String, nullable=True)
    level = Column(String, nullable=True)
    progress = Column(JSON, nullable=True)
