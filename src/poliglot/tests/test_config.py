"""Tests for configuration settings."""
import pytest

from poliglot.config import Settings, settings


def test_settings_defaults():
    """Test default learning settings."""
    assert settings.learning.study_batch_size == 15
    assert settings.learning.test_size == 10
    assert settings.learning.test_unlock_threshold == 20
    assert settings.learning.quiz_distractors == 3
    assert settings.learning.quiz_placeholder == "???"
    assert settings.auth.min_length == 6
    assert settings.auth.email_domain == "lingua.local"


@pytest.mark.parametrize(
    "group, field_name, value, message",
    [
        ("learning", "study_batch_size", 0, "STUDY_BATCH_SIZE"),
        ("learning", "test_size", 0, "TEST_SIZE"),
        ("learning", "test_unlock_threshold", -1, "TEST_UNLOCK_THRESHOLD"),
        ("learning", "quiz_distractors", 0, "QUIZ_DISTRACTORS"),
        ("auth", "min_length", 0, "AUTH_MIN_LENGTH"),
    ],
)
def test_validate_rejects_invalid_values(group, field_name, value, message):
    """Test that validation names the offending setting."""
    test_settings = Settings()
    setattr(getattr(test_settings, group), field_name, value)
    with pytest.raises(ValueError, match=message):
        test_settings.validate()


if __name__ == "__main__":
    pytest.main([__file__])
