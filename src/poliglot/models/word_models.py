"""Models for vocabulary items and display settings."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Language(Enum):
    """Display languages."""
    ENGLISH = "EN"
    RUSSIAN = "RU"
    ARMENIAN = "AM"


class Mode(Enum):
    """Age mode, selects the catalog partition."""
    KID = "KID"
    ADULT = "ADULT"


class ProficiencyLevel(Enum):
    """Difficulty tier of the adult catalog."""
    EASY = "easy"
    MEDIUM = "medium"
    ADVANCED = "advanced"


class Category(Enum):
    """Coarse word category."""
    BASIC = "basic"
    ADVANCED = "advanced"


@dataclass(frozen=True)
class Translations:
    """Translations of an english word."""
    russian: str
    armenian: str


@dataclass(frozen=True)
class Word:
    """Immutable vocabulary item."""
    id: str
    english: str
    transcription: str
    translations: Translations
    category: Category = Category.BASIC
    level: ProficiencyLevel = ProficiencyLevel.EASY
    image: Optional[str] = None  # base64 data or reference

    @property
    def russian(self) -> str:
        return self.translations.russian

    @property
    def armenian(self) -> str:
        return self.translations.armenian

    def text_in(self, language: Language) -> str:
        """Get the word text in the given display language."""
        if language == Language.RUSSIAN:
            return self.translations.russian
        if language == Language.ARMENIAN:
            return self.translations.armenian
        return self.english

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match against english or either translation."""
        query = query.lower()
        return (
            query in self.english.lower()
            or query in self.translations.russian.lower()
            or query in self.translations.armenian.lower()
        )
