"""Multiple-choice quiz generation and scoring."""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from poliglot.config import settings
from poliglot.models.word_models import Language, Word
from poliglot import monitoring

logger = logging.getLogger(__name__)

_default_rng = random.Random()


@dataclass
class QuizQuestion:
    """One question: a word and its shuffled answer options."""
    word: Word
    correct: str
    options: List[str]
    selected: Optional[str] = None

    @property
    def is_answered(self) -> bool:
        return self.selected is not None

    @property
    def is_correct(self) -> bool:
        return self.selected == self.correct


@dataclass
class QuizResult:
    """Final score of a quiz."""
    score: int
    total: int
    answers: List[bool] = field(default_factory=list)


class QuizState(Enum):
    """Possible quiz states."""
    ASKING = "asking"  # Waiting for an answer
    ANSWERED = "answered"  # Answer locked, waiting for next_question
    FINISHED = "finished"  # Results available


def build_question(
    word: Word,
    candidates: Sequence[Word],
    language: Language,
    rng: Optional[random.Random] = None,
    distractor_count: Optional[int] = None,
    placeholder: Optional[str] = None,
) -> QuizQuestion:
    """Build a question with one correct answer and padded distractors."""
    rng = rng or _default_rng
    if distractor_count is None:
        distractor_count = settings.learning.quiz_distractors
    if placeholder is None:
        placeholder = settings.learning.quiz_placeholder

    correct = word.text_in(language)
    # Synonyms sharing the correct text would make a second right answer
    others = [
        candidate for candidate in candidates
        if candidate.id != word.id and candidate.text_in(language) != correct
    ]
    rng.shuffle(others)
    distractors = [other.text_in(language) for other in others[:distractor_count]]
    while len(distractors) < distractor_count:
        distractors.append(placeholder)

    options = [correct] + distractors
    rng.shuffle(options)
    return QuizQuestion(word=word, correct=correct, options=options)


class QuizSession:
    """Disposable state for one test run.

    ``select`` locks the current question; later selects are ignored until
    ``next_question`` moves on. The feedback delay between the two is left
    to the caller.
    """

    def __init__(
        self,
        words: Sequence[Word],
        language: Language = Language.RUSSIAN,
        rng: Optional[random.Random] = None,
    ):
        self.words: List[Word] = list(words)
        self.language = language
        self.rng = rng or _default_rng
        self.index = 0
        self.score = 0
        self.answers: List[bool] = []
        self.question: Optional[QuizQuestion] = None
        if self.words:
            self.state = QuizState.ASKING
            self.question = self._build_question()
        else:
            self.state = QuizState.FINISHED

    def _build_question(self) -> QuizQuestion:
        return build_question(self.words[self.index], self.words, self.language, rng=self.rng)

    @property
    def total(self) -> int:
        return len(self.words)

    @property
    def is_finished(self) -> bool:
        return self.state == QuizState.FINISHED

    def select(self, option: str) -> Optional[bool]:
        """Answer the current question. Returns None if input is locked."""
        if self.state != QuizState.ASKING:
            return None

        self.question.selected = option
        correct = self.question.is_correct
        self.answers.append(correct)
        if correct:
            self.score += 1
        monitoring.quiz_answers.labels(outcome="correct" if correct else "incorrect").inc()
        self.state = QuizState.ANSWERED
        return correct

    def next_question(self) -> QuizState:
        """Move past an answered question, finishing after the last one."""
        if self.state != QuizState.ANSWERED:
            return self.state

        if self.index < len(self.words) - 1:
            self.index += 1
            self.question = self._build_question()
            self.state = QuizState.ASKING
        else:
            self.state = QuizState.FINISHED
            monitoring.quiz_score_ratio.observe(self.score / self.total)
            logger.info(f"Quiz finished: {self.score}/{self.total}")
        return self.state

    @property
    def result(self) -> Optional[QuizResult]:
        if self.state != QuizState.FINISHED:
            return None
        return QuizResult(score=self.score, total=self.total, answers=list(self.answers))
