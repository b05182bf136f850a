"""Progress store: merges session deltas into a user's per-mode progress."""
import logging
from typing import Callable, Optional

from poliglot.config import settings
from poliglot.models.progress_models import ProgressDelta, User, UserProgress
from poliglot.models.word_models import Mode
from poliglot import monitoring

logger = logging.getLogger(__name__)

# Receives the whole progress document after every merge
ProgressWriter = Callable[[UserProgress], object]


class ProgressStore:
    """Owns the in-memory progress of the active user.

    Merges are applied to the in-memory user first, then handed to the
    writer. A failing writer is logged and never rolls the merge back.
    """

    def __init__(self, user: User, writer: Optional[ProgressWriter] = None):
        self.user = user
        self.writer = writer

    def merge(self, mode: Mode, delta: ProgressDelta) -> UserProgress:
        """Union-merge a session delta into the given mode's progress."""
        current = self.user.progress.for_mode(mode)
        updated = current.merged(delta)
        newly_learned = len(updated.learned_word_ids) - len(current.learned_word_ids)

        self.user.progress = self.user.progress.with_mode(mode, updated)
        if newly_learned:
            monitoring.words_learned.labels(mode=mode.value).inc(newly_learned)
        logger.info(
            f"Merged progress for {self.user.username} ({mode.value}): "
            f"{len(updated.seen_word_ids)} seen, {len(updated.learned_word_ids)} learned"
        )
        self._write()
        return self.user.progress

    def _write(self) -> None:
        if self.writer is None:
            return
        try:
            self.writer(self.user.progress)
        except Exception as e:
            monitoring.backend_errors.labels(operation="update_progress").inc()
            logger.error(f"Error writing progress for {self.user.username}: {e}")

    def learned_count(self, mode: Optional[Mode] = None) -> int:
        return len(self.user.progress.for_mode(mode or self.user.mode).learned_word_ids)

    def seen_count(self, mode: Optional[Mode] = None) -> int:
        return len(self.user.progress.for_mode(mode or self.user.mode).seen_word_ids)

    def can_take_test(self, mode: Optional[Mode] = None) -> bool:
        """Check whether enough words are learned to open the test."""
        return self.learned_count(mode) >= settings.learning.test_unlock_threshold
