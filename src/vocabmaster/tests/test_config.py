"""Tests for configuration settings."""
import pytest

from vocabmaster.config import (
    DATA_DIR,
    MEDIA_DIR,
    PRONUNCIATIONS_DIR,
    LearningSettings,
    ProgressSettings,
    Settings,
    settings,
)


def test_base_directories_exist():
    """Test that all required directories exist."""
    assert DATA_DIR.exists()
    assert MEDIA_DIR.exists()
    assert PRONUNCIATIONS_DIR.exists()


def test_settings_defaults():
    """Test default learning and progress values."""
    assert settings.learning.initial_interval_days == 1
    assert settings.learning.initial_ease_factor == 2.5
    assert settings.learning.min_ease_factor == 1.3
    assert settings.learning.graduation_intervals == [3, 7]
    assert settings.learning.learned_streak == 3
    assert settings.learning.pairing_batch_size == 6
    assert settings.learning.choice_options == 4
    assert settings.progress.xp_per_correct == 10
    assert settings.progress.perfect_session_bonus == 30
    assert settings.progress.word_learned_bonus == 50
    assert settings.progress.new_word_bonus == 15
    assert settings.progress.xp_per_level == 100


def test_test_environment():
    """Test that the test database is used."""
    assert settings.database.url == "sqlite:///:memory:"


@pytest.mark.parametrize(
    "learning",
    [
        LearningSettings(min_ease_factor=3.0),
        LearningSettings(initial_interval_days=0),
        LearningSettings(graduation_intervals=[7, 3]),
        LearningSettings(pairing_batch_size=1),
        LearningSettings(choice_options=1),
        LearningSettings(similarity_threshold=0),
    ],
)
def test_validate_rejects_invalid_learning_settings(learning):
    with pytest.raises(ValueError):
        Settings(learning=learning).validate()


def test_validate_rejects_invalid_progress_settings():
    with pytest.raises(ValueError):
        Settings(progress=ProgressSettings(xp_per_level=0)).validate()


def test_validate_accepts_defaults():
    Settings().validate()


def test_pronunciation_language():
    """Test that only the spoken (source) language is configured."""
    assert settings.learning.source_lang == "en"
    assert not hasattr(settings.learning, "target_lang")
