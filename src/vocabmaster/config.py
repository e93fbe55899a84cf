"""Configuration settings for the vocabulary trainer."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Define base directory
BASE_DIR = Path(__file__).parent.parent.parent

# Load environment variables from .env file
env_file = ".env.test" if os.getenv("ENV") == "test" else ".env"
load_dotenv(env_file)


# Define data directories from environment variables
DATA_DIR = Path(os.getenv("DATA_DIR", "./data"))
MEDIA_DIR = DATA_DIR / "media"
PRONUNCIATIONS_DIR = MEDIA_DIR / "pronunciations"

# Scheduling constants
INITIAL_INTERVAL_DAYS = 1
INITIAL_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
GRADUATION_INTERVALS = [3, 7]  # first and second review after a correct answer


def ensure_directories() -> None:
    """Ensure all required directories exist."""
    directories = [
        DATA_DIR,
        MEDIA_DIR,
        PRONUNCIATIONS_DIR,
    ]

    for directory in directories:
        directory.mkdir(parents=True, exist_ok=True)


@dataclass
class PathSettings:
    """Path configuration settings."""
    base_dir: Path = BASE_DIR
    data_dir: Path = DATA_DIR
    media_dir: Path = MEDIA_DIR
    pronunciations_dir: Path = PRONUNCIATIONS_DIR


@dataclass
class DatabaseSettings:
    """Database configuration settings."""
    url: str = os.getenv("DATABASE_URL", "sqlite:///vocabmaster.db")
    echo: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    dir: Optional[str] = os.getenv("LOG_DIR", None)
    rotation: str = os.getenv("LOG_ROTATION", "midnight")
    interval: int = int(os.getenv("LOG_INTERVAL", "1"))
    backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "7"))


@dataclass
class LearningSettings:
    """Spaced repetition and exercise settings."""
    initial_interval_days: int = INITIAL_INTERVAL_DAYS
    initial_ease_factor: float = INITIAL_EASE_FACTOR
    min_ease_factor: float = MIN_EASE_FACTOR
    ease_bonus: float = float(os.getenv("EASE_BONUS", "0.1"))
    ease_penalty: float = float(os.getenv("EASE_PENALTY", "0.2"))
    graduation_intervals: list[int] = field(default_factory=lambda: list(GRADUATION_INTERVALS))
    learned_streak: int = int(os.getenv("LEARNED_STREAK", "3"))
    pairing_batch_size: int = int(os.getenv("PAIRING_BATCH_SIZE", "6"))
    choice_options: int = int(os.getenv("CHOICE_OPTIONS", "4"))
    similarity_threshold: float = float(os.getenv("SIMILARITY_THRESHOLD", "0.8"))
    auto_pronounce: bool = os.getenv("AUTO_PRONOUNCE", "true").lower() == "true"
    source_lang: str = os.getenv("SOURCE_LANG", "en")


@dataclass
class ProgressSettings:
    """Experience points and level settings."""
    xp_per_correct: int = int(os.getenv("XP_PER_CORRECT", "10"))
    perfect_session_bonus: int = int(os.getenv("PERFECT_SESSION_BONUS", "30"))
    perfect_session_min_items: int = int(os.getenv("PERFECT_SESSION_MIN_ITEMS", "5"))
    word_learned_bonus: int = int(os.getenv("WORD_LEARNED_BONUS", "50"))
    new_word_bonus: int = int(os.getenv("NEW_WORD_BONUS", "15"))
    xp_per_level: int = int(os.getenv("XP_PER_LEVEL", "100"))


@dataclass
class MonitoringSettings:
    """Metrics exporter settings."""
    port: Optional[int] = int(os.environ["MONITORING_PORT"]) if os.getenv("MONITORING_PORT") else None


def get_path_settings() -> PathSettings:
    """Get path settings."""
    return PathSettings()


def get_database_settings() -> DatabaseSettings:
    """Get database settings."""
    return DatabaseSettings()


def get_logging_settings() -> LoggingSettings:
    """Get logging settings."""
    return LoggingSettings()


def get_learning_settings() -> LearningSettings:
    """Get learning settings."""
    return LearningSettings()


def get_progress_settings() -> ProgressSettings:
    """Get progress settings."""
    return ProgressSettings()


def get_monitoring_settings() -> MonitoringSettings:
    """Get monitoring settings."""
    return MonitoringSettings()


@dataclass
class Settings:
    """Main settings class that combines all configuration settings."""
    paths: PathSettings = field(default_factory=get_path_settings)
    database: DatabaseSettings = field(default_factory=get_database_settings)
    logging: LoggingSettings = field(default_factory=get_logging_settings)
    learning: LearningSettings = field(default_factory=get_learning_settings)
    progress: ProgressSettings = field(default_factory=get_progress_settings)
    monitoring: MonitoringSettings = field(default_factory=get_monitoring_settings)

    def validate(self) -> None:
        """Validate settings and raise ValueError if invalid."""
        learning = self.learning
        if learning.min_ease_factor > learning.initial_ease_factor:
            raise ValueError("MIN_EASE_FACTOR cannot be greater than the initial ease factor")

        if learning.initial_interval_days < 1:
            raise ValueError("Initial interval must be at least one day")

        intervals = learning.graduation_intervals
        if len(intervals) != 2 or intervals[0] < 1 or intervals[0] > intervals[1]:
            raise ValueError("Graduation intervals must be two ascending positive values")

        if learning.learned_streak < 1:
            raise ValueError("LEARNED_STREAK must be positive")

        if learning.pairing_batch_size < 2:
            raise ValueError("PAIRING_BATCH_SIZE must be at least 2")

        if learning.choice_options < 2:
            raise ValueError("CHOICE_OPTIONS must be at least 2")

        if not 0 < learning.similarity_threshold <= 1:
            raise ValueError("SIMILARITY_THRESHOLD must be between 0 and 1")

        if self.progress.xp_per_level < 1:
            raise ValueError("XP_PER_LEVEL must be positive")


# Create global settings instance
settings = Settings()
settings.validate()
