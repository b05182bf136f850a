"""Tests for the quiz engine."""
from dataclasses import replace

import pytest

from poliglot.models.word_models import Language, Translations
from poliglot.services.quiz_service import QuizSession, QuizState, build_question

from conftest import make_words


@pytest.mark.parametrize("count", [1, 2, 3, 4, 10])
def test_question_has_four_options_with_one_correct(count, rng) -> None:
    words = make_words(count)
    question = build_question(words[0], words, Language.RUSSIAN, rng=rng)

    assert len(question.options) == 4
    assert question.options.count(question.correct) == 1
    assert question.correct == "wслово0"


def test_question_pads_with_placeholder(rng) -> None:
    words = make_words(2)
    question = build_question(words[0], words, Language.ENGLISH, rng=rng)
    assert sorted(question.options) == sorted(["wword0", "wword1", "???", "???"])


def test_distractors_come_from_other_candidates(rng) -> None:
    words = make_words(10)
    question = build_question(words[3], words, Language.ARMENIAN, rng=rng)
    candidates = {word.armenian for word in words}
    assert set(question.options) <= candidates
    assert len(set(question.options)) == 4


def test_synonyms_are_not_offered_as_distractors(rng) -> None:
    """Test that words sharing the correct translation never appear as options."""
    big, large, small = make_words(3)
    large = replace(large, translations=Translations(russian=big.russian, armenian=large.armenian))

    question = build_question(big, [big, large, small], Language.RUSSIAN, rng=rng)

    assert question.options.count(question.correct) == 1
    assert sorted(question.options) == sorted([big.russian, small.russian, "???", "???"])


def test_select_locks_question() -> None:
    words = make_words(2)
    session = QuizSession(words, language=Language.ENGLISH)

    correct = session.question.correct
    assert session.select(correct) is True
    assert session.state == QuizState.ANSWERED
    # Locked until the next question
    assert session.select("anything") is None
    assert session.score == 1


def test_full_quiz_scores_and_finishes(rng) -> None:
    words = make_words(3)
    session = QuizSession(words, language=Language.RUSSIAN, rng=rng)

    session.select(session.question.correct)
    assert session.next_question() == QuizState.ASKING
    wrong = next(option for option in session.question.options if option != session.question.correct)
    assert session.select(wrong) is False
    session.next_question()
    session.select(session.question.correct)
    assert session.result is None

    assert session.next_question() == QuizState.FINISHED
    assert session.result.score == 2
    assert session.result.total == 3
    assert session.result.answers == [True, False, True]


def test_next_question_requires_answer() -> None:
    session = QuizSession(make_words(2))
    assert session.next_question() == QuizState.ASKING
    assert session.index == 0


def test_empty_quiz_is_finished() -> None:
    session = QuizSession([])
    assert session.is_finished
    assert session.question is None
    assert session.result.total == 0
    assert session.select("x") is None
