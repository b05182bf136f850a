"""Tests for domain and database models."""
from sqlalchemy.orm import Session

from poliglot.models.models import UserDocument
from poliglot.models.progress_models import ModeProgress, ProgressDelta, User, UserProgress
from poliglot.models.word_models import Language, Mode, ProficiencyLevel

from conftest import make_word


def test_word_text_in_language() -> None:
    """Test picking the word text for each display language."""
    word = make_word(1)
    assert word.text_in(Language.ENGLISH) == "wword1"
    assert word.text_in(Language.RUSSIAN) == "wслово1"
    assert word.text_in(Language.ARMENIAN) == "wբառ1"
    assert word.russian == word.translations.russian


def test_word_matches_is_case_insensitive() -> None:
    """Test substring matching against every language."""
    word = make_word(7)
    assert word.matches("WORD7")
    assert word.matches("слово")
    assert word.matches("բառ7")
    assert not word.matches("missing")


def test_mode_progress_merge_is_union() -> None:
    """Test that merging never removes ids."""
    progress = ModeProgress(seen_word_ids={"a", "b"}, learned_word_ids={"a"})
    merged = progress.merged(ProgressDelta(seen={"c"}, learned={"b"}))
    assert merged.seen_word_ids == {"a", "b", "c"}
    assert merged.learned_word_ids == {"a", "b"}
    # Original is untouched
    assert progress.learned_word_ids == {"a"}


def test_user_progress_document_shape() -> None:
    """Test the persisted progress document."""
    progress = UserProgress(
        kid=ModeProgress(seen_word_ids={"k2", "k1"}, learned_word_ids={"k1"}),
    )
    document = progress.to_dict()
    assert document == {
        "kid": {"seenWordIds": ["k1", "k2"], "learnedWordIds": ["k1"]},
        "adult": {"seenWordIds": [], "learnedWordIds": []},
    }
    assert UserProgress.from_dict(document) == progress


def test_user_progress_from_partial_document() -> None:
    """Test that missing keys load as empty sets."""
    progress = UserProgress.from_dict({"kid": {"learnedWordIds": ["x"]}})
    assert progress.kid.learned_word_ids == {"x"}
    assert progress.kid.seen_word_ids == set()
    assert progress.adult == ModeProgress()


def test_numeric_ids_load_as_strings() -> None:
    """Test that numeric ids in a stored document match string catalog ids."""
    progress = ModeProgress.from_dict({"seenWordIds": [0, "1"], "learnedWordIds": [0]})
    assert progress.seen_word_ids == {"0", "1"}
    assert progress.learned_word_ids == {"0"}


def test_user_current_progress_follows_mode() -> None:
    """Test that the current progress follows the active mode."""
    user = User(username="tester", mode=Mode.KID)
    user.progress = user.progress.with_mode(Mode.KID, ModeProgress(learned_word_ids={"k1"}))
    assert user.current_progress.learned_word_ids == {"k1"}
    user.mode = Mode.ADULT
    assert user.current_progress.learned_word_ids == set()
    assert user.level == ProficiencyLevel.EASY


def test_user_document_creation(db: Session) -> None:
    """Test storing a user document."""
    document = UserDocument(
        email="tester@lingua.local",
        username="tester",
        password_hash="hash",
        mode=Mode.ADULT.value,
        level=ProficiencyLevel.EASY.value,
        progress=UserProgress().to_dict(),
    )
    db.add(document)
    db.commit()
    db.refresh(document)

    assert document.uid is not None
    assert len(document.uid) == 32
    assert document.created_at is not None
    assert document.progress["adult"]["learnedWordIds"] == []
