"""Tests for the progress store."""
from unittest.mock import Mock

from poliglot.models.progress_models import ModeProgress, ProgressDelta, User
from poliglot.models.word_models import Mode
from poliglot.services.progress_service import ProgressStore


def test_merge_updates_only_the_given_mode(kid_user: User) -> None:
    store = ProgressStore(kid_user)
    store.merge(Mode.KID, ProgressDelta(seen={"k1"}, learned={"k1"}))

    assert kid_user.progress.kid == ModeProgress(seen_word_ids={"k1"}, learned_word_ids={"k1"})
    assert kid_user.progress.adult == ModeProgress()


def test_merge_is_idempotent(kid_user: User) -> None:
    store = ProgressStore(kid_user)
    delta = ProgressDelta(seen={"k1", "k2"}, learned={"k1", "k2"})
    store.merge(Mode.KID, delta)
    once = kid_user.progress.to_dict()
    store.merge(Mode.KID, delta)
    assert kid_user.progress.to_dict() == once


def test_merge_writes_whole_progress() -> None:
    user = User(username="writer1")
    writer = Mock()
    store = ProgressStore(user, writer=writer)

    progress = store.merge(Mode.ADULT, ProgressDelta(seen={"a1"}, learned={"a1"}))

    writer.assert_called_once_with(progress)


def test_failing_writer_keeps_in_memory_state() -> None:
    """Test that a backend failure is not rolled back or raised."""
    user = User(username="offline1")
    store = ProgressStore(user, writer=Mock(side_effect=RuntimeError("backend down")))

    store.merge(Mode.ADULT, ProgressDelta(seen={"a1"}, learned={"a1"}))

    assert user.progress.adult.learned_word_ids == {"a1"}


def test_test_gate_threshold(kid_user: User) -> None:
    store = ProgressStore(kid_user)
    store.merge(Mode.KID, ProgressDelta(learned={f"k{i}" for i in range(19)}))
    assert store.learned_count() == 19
    assert store.seen_count() == 0
    assert not store.can_take_test()

    store.merge(Mode.KID, ProgressDelta(learned={"k19"}))
    assert store.can_take_test()
    # The other mode has its own count
    assert not store.can_take_test(Mode.ADULT)
