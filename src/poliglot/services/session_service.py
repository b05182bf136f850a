"""Study and review sessions: one linear pass through a word list."""
import logging
from enum import Enum
from typing import Callable, List, Optional, Sequence

from poliglot.models.progress_models import ProgressDelta
from poliglot.models.word_models import Word

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Possible session states."""
    EMPTY = "empty"  # No words to show
    ACTIVE = "active"  # Showing the word at the current index
    DONE = "done"  # Delta committed
    ABANDONED = "abandoned"  # Left before the end, nothing committed


class StudySession:
    """Disposable state for one pass through a word list.

    Every ``advance`` records the current word as both seen and learned.
    ``retreat`` undoes the previous word. Reaching the end hands the
    accumulated delta to ``on_complete`` exactly once.
    """

    def __init__(
        self,
        words: Sequence[Word],
        on_complete: Optional[Callable[[ProgressDelta], object]] = None,
        activity: str = "study",
    ):
        self.words: List[Word] = list(words)
        self.on_complete = on_complete
        self.activity = activity
        self.index = 0
        self.delta = ProgressDelta()
        self.state = SessionState.ACTIVE if self.words else SessionState.EMPTY

    @property
    def current_word(self) -> Optional[Word]:
        if self.state != SessionState.ACTIVE:
            return None
        return self.words[self.index]

    @property
    def is_last(self) -> bool:
        return self.state == SessionState.ACTIVE and self.index == len(self.words) - 1

    @property
    def is_finished(self) -> bool:
        return self.state in (SessionState.DONE, SessionState.ABANDONED, SessionState.EMPTY)

    def advance(self) -> SessionState:
        """Mark the current word and move on, committing after the last one."""
        if self.state != SessionState.ACTIVE:
            return self.state

        word_id = self.words[self.index].id
        self.delta.seen.add(word_id)
        self.delta.learned.add(word_id)

        if self.index == len(self.words) - 1:
            self.state = SessionState.DONE
            logger.info(f"{self.activity.capitalize()} session done: {len(self.delta.learned)} words")
            if self.on_complete is not None:
                self.on_complete(self.delta)
        else:
            self.index += 1
        return self.state

    def retreat(self) -> SessionState:
        """Step back and undo the previous word. No-op on the first word."""
        if self.state != SessionState.ACTIVE or self.index == 0:
            return self.state

        previous_id = self.words[self.index - 1].id
        self.delta.seen.discard(previous_id)
        self.delta.learned.discard(previous_id)
        self.index -= 1
        return self.state

    def abandon(self) -> None:
        """Leave the session without committing anything."""
        if self.state == SessionState.ACTIVE:
            logger.debug(f"{self.activity.capitalize()} session abandoned at {self.index}")
            self.state = SessionState.ABANDONED
