"""Configuration settings for the application."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Define base directory
BASE_DIR = Path(__file__).parent.parent.parent

# Load environment variables from .env file
env_file = ".env.test" if os.getenv("ENV") == "test" else ".env"
load_dotenv(env_file)


# Define data directories from environment variables
DATA_DIR = Path(os.getenv("DATA_DIR", "./data"))
DICTIONARIES_DIR = DATA_DIR / "dictionaries"
KID_CATALOG_PATH = Path(os.getenv("KID_CATALOG_PATH", str(DICTIONARIES_DIR / "kids.json")))
ADULT_CATALOG_PATH = Path(os.getenv("ADULT_CATALOG_PATH", str(DICTIONARIES_DIR / "adults.json")))

# Learning settings
STUDY_BATCH_SIZE = 15  # new words per study pass
TEST_SIZE = 10  # questions per test
TEST_UNLOCK_THRESHOLD = 20  # learned words needed before the test opens
QUIZ_PLACEHOLDER = "???"


def ensure_directories() -> None:
    """Ensure all required directories exist."""
    directories = [
        DATA_DIR,
        DICTIONARIES_DIR,
    ]

    for directory in directories:
        directory.mkdir(parents=True, exist_ok=True)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class PathSettings:
    """Path configuration settings."""
    base_dir: Path = BASE_DIR
    data_dir: Path = DATA_DIR
    dictionaries_dir: Path = DICTIONARIES_DIR
    kid_catalog: Path = KID_CATALOG_PATH
    adult_catalog: Path = ADULT_CATALOG_PATH


@dataclass
class DatabaseSettings:
    """Database configuration settings."""
    url: str = os.getenv("DATABASE_URL", "sqlite:///poliglot.db")
    echo: bool = _env_flag("DATABASE_ECHO", "false")


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    dir: Optional[str] = os.getenv("LOG_DIR", None)
    rotation: str = os.getenv("LOG_ROTATION", "midnight")
    interval: int = int(os.getenv("LOG_INTERVAL", "1"))
    backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "7"))


@dataclass
class LearningSettings:
    """Learning process settings."""
    study_batch_size: int = int(os.getenv("STUDY_BATCH_SIZE", str(STUDY_BATCH_SIZE)))
    test_size: int = int(os.getenv("TEST_SIZE", str(TEST_SIZE)))
    test_unlock_threshold: int = int(os.getenv("TEST_UNLOCK_THRESHOLD", str(TEST_UNLOCK_THRESHOLD)))
    quiz_distractors: int = int(os.getenv("QUIZ_DISTRACTORS", "3"))
    quiz_placeholder: str = os.getenv("QUIZ_PLACEHOLDER", QUIZ_PLACEHOLDER)


@dataclass
class AuthSettings:
    """Registration and login settings."""
    min_length: int = int(os.getenv("AUTH_MIN_LENGTH", "6"))
    email_domain: str = os.getenv("AUTH_EMAIL_DOMAIN", "lingua.local")
    password_pepper: str = os.getenv("PASSWORD_PEPPER", "")


@dataclass
class CatalogSettings:
    """Word catalog loading settings."""
    fill_transcriptions: bool = _env_flag("CATALOG_FILL_TRANSCRIPTIONS", "true")


def get_path_settings() -> PathSettings:
    """Get path settings."""
    return PathSettings()


def get_database_settings() -> DatabaseSettings:
    """Get database settings."""
    return DatabaseSettings()


def get_logging_settings() -> LoggingSettings:
    """Get logging settings."""
    return LoggingSettings()


def get_learning_settings() -> LearningSettings:
    """Get learning settings."""
    return LearningSettings()


def get_auth_settings() -> AuthSettings:
    """Get auth settings."""
    return AuthSettings()


def get_catalog_settings() -> CatalogSettings:
    """Get catalog settings."""
    return CatalogSettings()


@dataclass
class Settings:
    """Main settings class that combines all configuration settings."""
    paths: PathSettings = field(default_factory=get_path_settings)
    database: DatabaseSettings = field(default_factory=get_database_settings)
    logging: LoggingSettings = field(default_factory=get_logging_settings)
    learning: LearningSettings = field(default_factory=get_learning_settings)
    auth: AuthSettings = field(default_factory=get_auth_settings)
    catalog: CatalogSettings = field(default_factory=get_catalog_settings)

    def validate(self) -> None:
        """Validate settings and raise ValueError if invalid."""
        if self.learning.study_batch_size < 1:
            raise ValueError("STUDY_BATCH_SIZE must be positive")

        if self.learning.test_size < 1:
            raise ValueError("TEST_SIZE must be positive")

        if self.learning.test_unlock_threshold < 0:
            raise ValueError("TEST_UNLOCK_THRESHOLD cannot be negative")

        if self.learning.quiz_distractors < 1:
            raise ValueError("QUIZ_DISTRACTORS must be positive")

        if self.auth.min_length < 1:
            raise ValueError("AUTH_MIN_LENGTH must be positive")


# Create global settings instance
settings = Settings()
settings.validate()
