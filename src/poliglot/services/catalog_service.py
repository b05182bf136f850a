"""Word catalog: the immutable kid and adult vocabulary partitions."""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

import eng_to_ipa as ipa

from poliglot.config import settings
from poliglot.errors import CatalogError
from poliglot.models.word_models import Category, Mode, ProficiencyLevel, Translations, Word
from poliglot import monitoring

logger = logging.getLogger(__name__)

ADVANCED_DIFFICULTIES = {"advanced", "hard", "difficult"}


def level_from_difficulty(difficulty: Optional[str]) -> ProficiencyLevel:
    """Map a raw difficulty tag to a proficiency level. Unknown tags are EASY."""
    difficulty = (difficulty or "").lower()
    if difficulty == "medium":
        return ProficiencyLevel.MEDIUM
    if difficulty in ADVANCED_DIFFICULTIES:
        return ProficiencyLevel.ADVANCED
    return ProficiencyLevel.EASY


def category_from_difficulty(difficulty: Optional[str]) -> Category:
    """Map a raw difficulty tag to a category."""
    if (difficulty or "").lower() in ADVANCED_DIFFICULTIES:
        return Category.ADVANCED
    return Category.BASIC


def generate_transcription(text: str) -> str:
    """Generate an IPA transcription, or an empty string if any part is unknown."""
    try:
        transcription = ipa.convert(text)
    except Exception as e:
        logger.warning(f"Error generating transcription for word: {text}, error: {e}")
        return ""
    if not transcription or "*" in transcription:
        return ""
    return transcription


def word_from_raw(raw: Dict[str, Any], level_from_record: bool, fill_transcription: bool = False) -> Word:
    """Build a Word from a raw export record.

    Kid records carry no meaningful difficulty, so their level is always EASY.
    """
    difficulty = raw.get("difficulty")
    english = raw.get("english", "")
    transcription = raw.get("transcription") or ""
    if not transcription and fill_transcription and english:
        transcription = generate_transcription(english)

    return Word(
        id=str(raw["id"]),
        english=english,
        transcription=transcription,
        translations=Translations(
            russian=raw.get("russian", ""),
            armenian=raw.get("armenian", ""),
        ),
        category=category_from_difficulty(difficulty),
        level=level_from_difficulty(difficulty) if level_from_record else ProficiencyLevel.EASY,
        image=raw.get("imageBase64"),
    )


class WordCatalog:
    """Process-wide word catalog, loaded once and never mutated."""

    def __init__(self, kid_words: Iterable[Word], adult_words: Iterable[Word]):
        self._kid_words = tuple(kid_words)
        self._adult_words = tuple(adult_words)
        self._all_words = self._kid_words + self._adult_words
        self._by_id = {}
        for word in self._all_words:
            # First occurrence wins, kid words come first
            self._by_id.setdefault(word.id, word)

    @classmethod
    def from_raw(
        cls,
        kid_records: Iterable[Dict[str, Any]],
        adult_records: Iterable[Dict[str, Any]],
        fill_transcriptions: Optional[bool] = None,
    ) -> "WordCatalog":
        """Build a catalog from raw export records."""
        if fill_transcriptions is None:
            fill_transcriptions = settings.catalog.fill_transcriptions
        kid_words = [word_from_raw(raw, level_from_record=False) for raw in kid_records]
        adult_words = [
            word_from_raw(raw, level_from_record=True, fill_transcription=fill_transcriptions)
            for raw in adult_records
        ]
        return cls(kid_words, adult_words)

    @property
    def kid_words(self) -> Sequence[Word]:
        return self._kid_words

    @property
    def adult_words(self) -> Sequence[Word]:
        return self._adult_words

    def words_for(self, mode: Mode, level: ProficiencyLevel) -> List[Word]:
        """Get the words visible in the given mode and level, in stored order."""
        if mode == Mode.KID:
            return list(self._kid_words)
        return [word for word in self._adult_words if word.level == level]

    def all_words(self) -> List[Word]:
        """Get the combined catalog: kid words followed by adult words."""
        return list(self._all_words)

    def get_word(self, word_id: str) -> Optional[Word]:
        """Get a word by ID."""
        return self._by_id.get(word_id)

    def __len__(self) -> int:
        return len(self._all_words)


def _read_records(path: Path) -> List[Dict[str, Any]]:
    if not path.exists():
        logger.warning(f"Catalog file not found: {path}, using an empty partition")
        return []
    try:
        with path.open(encoding="utf-8") as f:
            records = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Could not read catalog file {path}: {e}") from e
    if not isinstance(records, list):
        raise CatalogError(f"Catalog file {path} must contain a JSON array")
    return records


def load_catalog(
    kid_path: Optional[Path] = None,
    adult_path: Optional[Path] = None,
    fill_transcriptions: Optional[bool] = None,
) -> WordCatalog:
    """Load the catalog from the kid and adult JSON exports."""
    kid_path = Path(kid_path or settings.paths.kid_catalog)
    adult_path = Path(adult_path or settings.paths.adult_catalog)

    catalog = WordCatalog.from_raw(
        _read_records(kid_path),
        _read_records(adult_path),
        fill_transcriptions=fill_transcriptions,
    )
    monitoring.catalog_words.labels(partition="kid").set(len(catalog.kid_words))
    monitoring.catalog_words.labels(partition="adult").set(len(catalog.adult_words))
    logger.info(
        f"Catalog loaded: {len(catalog.kid_words)} kid words, {len(catalog.adult_words)} adult words"
    )
    return catalog
