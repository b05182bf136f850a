"""Models for per-user learning progress."""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Set

from poliglot.models.word_models import Mode, ProficiencyLevel


def _ids(values: Optional[Iterable[Any]]) -> Set[str]:
    # Catalog ids are strings, stored documents may hold numbers
    return {str(value) for value in values or []}


@dataclass
class ProgressDelta:
    """Word ids accumulated during one session."""
    seen: Set[str] = field(default_factory=set)
    learned: Set[str] = field(default_factory=set)

    def is_empty(self) -> bool:
        return not self.seen and not self.learned


@dataclass
class ModeProgress:
    """Seen and learned word ids for one mode.

    The two sets are independent: ``learned_word_ids`` is not required to be
    a subset of ``seen_word_ids``.
    """
    seen_word_ids: Set[str] = field(default_factory=set)
    learned_word_ids: Set[str] = field(default_factory=set)

    def merged(self, delta: ProgressDelta) -> "ModeProgress":
        """Return the union of this progress and the delta."""
        return ModeProgress(
            seen_word_ids=self.seen_word_ids | delta.seen,
            learned_word_ids=self.learned_word_ids | delta.learned,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seenWordIds": sorted(self.seen_word_ids),
            "learnedWordIds": sorted(self.learned_word_ids),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ModeProgress":
        data = data or {}
        return cls(
            seen_word_ids=_ids(data.get("seenWordIds")),
            learned_word_ids=_ids(data.get("learnedWordIds")),
        )


@dataclass
class UserProgress:
    """Two independent progress tracks, one per mode."""
    kid: ModeProgress = field(default_factory=ModeProgress)
    adult: ModeProgress = field(default_factory=ModeProgress)

    def for_mode(self, mode: Mode) -> ModeProgress:
        return self.kid if mode == Mode.KID else self.adult

    def with_mode(self, mode: Mode, progress: ModeProgress) -> "UserProgress":
        """Return a copy with the given mode's progress replaced."""
        if mode == Mode.KID:
            return UserProgress(kid=progress, adult=self.adult)
        return UserProgress(kid=self.kid, adult=progress)

    def all_learned_ids(self) -> Set[str]:
        """Learned ids across both modes."""
        return self.kid.learned_word_ids | self.adult.learned_word_ids

    def to_dict(self) -> Dict[str, Any]:
        return {"kid": self.kid.to_dict(), "adult": self.adult.to_dict()}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "UserProgress":
        data = data or {}
        return cls(
            kid=ModeProgress.from_dict(data.get("kid")),
            adult=ModeProgress.from_dict(data.get("adult")),
        )


@dataclass
class User:
    """In-memory user state."""
    username: str
    mode: Mode = Mode.ADULT
    level: ProficiencyLevel = ProficiencyLevel.EASY
    progress: UserProgress = field(default_factory=UserProgress)

    @property
    def current_progress(self) -> ModeProgress:
        return self.progress.for_mode(self.mode)
