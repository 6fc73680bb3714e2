"""Configuration settings for the vocabulary core."""
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ieltsprep.errors import InvalidConfiguration

# Define package directory
PACKAGE_DIR = Path(__file__).parent

# Load environment variables from .env file
env_file = ".env.test" if os.getenv("ENV") == "test" else ".env"
load_dotenv(env_file)

# Bundled content
DEFAULT_VOCABULARY_FILE = PACKAGE_DIR / "data" / "vocabulary.json"

# Review policy defaults
DEFAULT_BASE_INTERVAL_DAYS = 1.0
DEFAULT_GROWTH_FACTOR = 2.0
DEFAULT_MAX_INTERVAL_DAYS = 180.0
DEFAULT_LEARNED_THRESHOLD = 5


@dataclass
class DatabaseSettings:
    """Database configuration settings."""
    url: str = field(default_factory=lambda: os.getenv("DATABASE_URL", "sqlite:///ieltsprep.db"))
    echo: bool = field(default_factory=lambda: os.getenv("DATABASE_ECHO", "false").lower() == "true")


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    dir: Optional[str] = field(default_factory=lambda: os.getenv("LOG_DIR", None))
    rotation: str = field(default_factory=lambda: os.getenv("LOG_ROTATION", "midnight"))
    interval: int = field(default_factory=lambda: int(os.getenv("LOG_INTERVAL", "1")))
    backup_count: int = field(default_factory=lambda: int(os.getenv("LOG_BACKUP_COUNT", "7")))


@dataclass
class ContentSettings:
    """Vocabulary content settings."""
    vocabulary_file: Path = field(
        default_factory=lambda: Path(os.getenv("VOCABULARY_FILE", str(DEFAULT_VOCABULARY_FILE)))
    )


@dataclass
class RotationSettings:
    """Daily word rotation settings."""
    window_size: int = field(default_factory=lambda: int(os.getenv("DAILY_WINDOW_SIZE", "10")))


@dataclass
class ReviewSettings:
    """Spaced repetition settings."""
    base_interval_days: float = field(
        default_factory=lambda: float(os.getenv("REVIEW_BASE_INTERVAL_DAYS", str(DEFAULT_BASE_INTERVAL_DAYS)))
    )
    growth_factor: float = field(
        default_factory=lambda: float(os.getenv("REVIEW_GROWTH_FACTOR", str(DEFAULT_GROWTH_FACTOR)))
    )
    max_interval_days: float = field(
        default_factory=lambda: float(os.getenv("REVIEW_MAX_INTERVAL_DAYS", str(DEFAULT_MAX_INTERVAL_DAYS)))
    )
    learned_threshold: int = field(
        default_factory=lambda: int(os.getenv("REVIEW_LEARNED_THRESHOLD", str(DEFAULT_LEARNED_THRESHOLD)))
    )


@dataclass
class ExamSettings:
    """Exam countdown defaults, used when nothing is stored."""
    default_months_ahead: int = field(default_factory=lambda: int(os.getenv("EXAM_DEFAULT_MONTHS_AHEAD", "3")))
    default_target_band: float = field(
        default_factory=lambda: float(os.getenv("EXAM_DEFAULT_TARGET_BAND", "7.0"))
    )


@dataclass
class MonitoringSettings:
    """Prometheus exporter settings."""
    enabled: bool = field(default_factory=lambda: os.getenv("METRICS_ENABLED", "false").lower() == "true")
    port: int = field(default_factory=lambda: int(os.getenv("METRICS_PORT", "9090")))


def get_database_settings() -> DatabaseSettings:
    """Get database settings."""
    return DatabaseSettings()


def get_logging_settings() -> LoggingSettings:
    """Get logging settings."""
    return LoggingSettings()


def get_content_settings() -> ContentSettings:
    """Get content settings."""
    return ContentSettings()


def get_rotation_settings() -> RotationSettings:
    """Get rotation settings."""
    return RotationSettings()


def get_review_settings() -> ReviewSettings:
    """Get review settings."""
    return ReviewSettings()


def get_exam_settings() -> ExamSettings:
    """Get exam settings."""
    return ExamSettings()


def get_monitoring_settings() -> MonitoringSettings:
    """Get monitoring settings."""
    return MonitoringSettings()


@dataclass
class Settings:
    """Main settings class that combines all configuration settings."""
    database: DatabaseSettings = field(default_factory=get_database_settings)
    logging: LoggingSettings = field(default_factory=get_logging_settings)
    content: ContentSettings = field(default_factory=get_content_settings)
    rotation: RotationSettings = field(default_factory=get_rotation_settings)
    review: ReviewSettings = field(default_factory=get_review_settings)
    exam: ExamSettings = field(default_factory=get_exam_settings)
    monitoring: MonitoringSettings = field(default_factory=get_monitoring_settings)

    def validate(self) -> None:
        """Validate settings and raise InvalidConfiguration if invalid."""
        if self.rotation.window_size < 1:
            raise InvalidConfiguration("DAILY_WINDOW_SIZE must be positive")

        if not math.isfinite(self.review.base_interval_days) or self.review.base_interval_days <= 0:
            raise InvalidConfiguration("REVIEW_BASE_INTERVAL_DAYS must be positive")

        if not math.isfinite(self.review.growth_factor) or self.review.growth_factor < 1:
            raise InvalidConfiguration("REVIEW_GROWTH_FACTOR must be at least 1")

        if not math.isfinite(self.review.max_interval_days) or (
            self.review.max_interval_days < self.review.base_interval_days
        ):
            raise InvalidConfiguration(
                "REVIEW_MAX_INTERVAL_DAYS cannot be less than REVIEW_BASE_INTERVAL_DAYS"
            )

        if self.review.learned_threshold < 1:
            raise InvalidConfiguration("REVIEW_LEARNED_THRESHOLD must be positive")

        if self.exam.default_months_ahead < 0:
            raise InvalidConfiguration("EXAM_DEFAULT_MONTHS_AHEAD cannot be negative")

        if not 0 < self.exam.default_target_band <= 9:
            raise InvalidConfiguration("EXAM_DEFAULT_TARGET_BAND must be above 0 and at most 9")


# Create global settings instance
settings = Settings()
settings.validate()
