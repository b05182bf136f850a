"""Word selection for study, review, test and dictionary views.

All functions are pure reads of the catalog slice and progress they are
given. Randomized orderings take an injectable ``random.Random`` so callers
can pass a seeded generator.
"""
import logging
import random
from enum import Enum
from typing import List, Optional, Sequence

from poliglot.config import settings
from poliglot.models.progress_models import ModeProgress, UserProgress
from poliglot.models.word_models import Word

logger = logging.getLogger(__name__)

_default_rng = random.Random()


class DictionaryTab(Enum):
    """Dictionary views."""
    MINE = "MY"
    ALL = "ALL"


def _shuffled(words: List[Word], rng: Optional[random.Random]) -> List[Word]:
    (rng or _default_rng).shuffle(words)
    return words


def study_queue(
    words: Sequence[Word],
    progress: ModeProgress,
    batch_size: Optional[int] = None,
) -> List[Word]:
    """Get the next batch of unseen words in catalog order."""
    if batch_size is None:
        batch_size = settings.learning.study_batch_size
    unseen = [word for word in words if word.id not in progress.seen_word_ids]
    return unseen[:batch_size]


def review_queue(
    words: Sequence[Word],
    progress: ModeProgress,
    rng: Optional[random.Random] = None,
) -> List[Word]:
    """Get all learned words in random order."""
    learned = [word for word in words if word.id in progress.learned_word_ids]
    return _shuffled(learned, rng)


def test_set(
    words: Sequence[Word],
    progress: ModeProgress,
    size: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> List[Word]:
    """Get a random sample of learned words for a test.

    Callers are responsible for the unlock threshold; with fewer learned
    words this simply returns a shorter list.
    """
    if size is None:
        size = settings.learning.test_size
    learned = [word for word in words if word.id in progress.learned_word_ids]
    return _shuffled(learned, rng)[:size]


def filter_words(words: Sequence[Word], query: str = "") -> List[Word]:
    """Filter words by a case-insensitive substring of any of their texts."""
    query = (query or "").strip().lower()
    if not query:
        return list(words)
    return [word for word in words if word.matches(query)]


def dictionary_view(
    all_words: Sequence[Word],
    progress: UserProgress,
    tab: DictionaryTab = DictionaryTab.MINE,
    query: str = "",
) -> List[Word]:
    """Get the dictionary words for a tab.

    MINE holds words learned in either mode, independent of the active mode.
    """
    if tab == DictionaryTab.MINE:
        learned_ids = progress.all_learned_ids()
        base = [word for word in all_words if word.id in learned_ids]
    else:
        base = list(all_words)
    result = filter_words(base, query)
    logger.debug(f"Dictionary view {tab.value} with query '{query}': {len(result)} words")
    return result
