"""Test configuration."""
import os
import random
from pathlib import Path
from typing import Generator, List

import pytest
from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

# Set test environment before any imports
os.environ["ENV"] = "test"

# Load test environment variables
test_env_path = Path(__file__).parent.parent.parent.parent / ".env.test"
load_dotenv(test_env_path)

# Import after environment setup
from poliglot.models.base import Base
from poliglot.models import models  # noqa: F401
from poliglot.models.progress_models import User
from poliglot.models.word_models import Category, Mode, ProficiencyLevel, Translations, Word
from poliglot.services.catalog_service import WordCatalog


def make_word(index: int, prefix: str = "w", level: ProficiencyLevel = ProficiencyLevel.EASY) -> Word:
    """Create a word with distinct texts in every language."""
    return Word(
        id=f"{prefix}{index}",
        english=f"{prefix}word{index}",
        transcription=f"[{prefix}{index}]",
        translations=Translations(russian=f"{prefix}слово{index}", armenian=f"{prefix}բառ{index}"),
        category=Category.ADVANCED if level == ProficiencyLevel.ADVANCED else Category.BASIC,
        level=level,
    )


def make_words(count: int, prefix: str = "w", level: ProficiencyLevel = ProficiencyLevel.EASY) -> List[Word]:
    return [make_word(i, prefix, level) for i in range(count)]


@pytest.fixture
def rng() -> random.Random:
    """Seeded randomness source."""
    return random.Random(1234)


@pytest.fixture
def kid_words() -> List[Word]:
    return make_words(20, prefix="k")


@pytest.fixture
def adult_words() -> List[Word]:
    return (
        make_words(5, prefix="e", level=ProficiencyLevel.EASY)
        + make_words(25, prefix="m", level=ProficiencyLevel.MEDIUM)
        + make_words(5, prefix="a", level=ProficiencyLevel.ADVANCED)
    )


@pytest.fixture
def catalog(kid_words: List[Word], adult_words: List[Word]) -> WordCatalog:
    return WordCatalog(kid_words, adult_words)


@pytest.fixture
def kid_user() -> User:
    return User(username="kiddo1", mode=Mode.KID)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create a fresh in-memory database session for each test."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    db = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()
