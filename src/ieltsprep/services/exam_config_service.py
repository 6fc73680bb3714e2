"""Exam date and target band configuration with a fallback policy."""
import calendar
import logging
import threading
from datetime import date
from typing import Callable, Dict, Iterator, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ieltsprep import monitoring
from ieltsprep.clock import Clock, SystemClock, as_utc
from ieltsprep.config import ExamSettings, settings
from ieltsprep.errors import InvalidConfiguration, PersistenceFailure
from ieltsprep.models.models import ConfigEntry

logger = logging.getLogger(__name__)

EXAM_DATE_KEY = "examDate"
TARGET_BAND_KEY = "targetBand"


class ConfigStore(Protocol):
    """Key-value store for learner-level configuration."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryConfigStore:
    """Dict-backed config store."""

    def __init__(self, values: Optional[Dict[str, str]] = None):
        self._values = dict(values or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._values[key] = value


class SqlAlchemyConfigStore:
    """Config store backed by the ``config_entries`` table."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        try:
            with self.session_factory() as session:
                entry = session.query(ConfigEntry).filter(ConfigEntry.key == key).first()
                return entry.value if entry else None
        except SQLAlchemyError as e:
            monitoring.persistence_errors.labels(operation_type="config_get").inc()
            logger.error(f"Failed to read config key {key}: {e}")
            raise PersistenceFailure(f"Could not read config key {key!r}") from e

    def set(self, key: str, value: str) -> None:
        try:
            with self.session_factory() as session, session.begin():
                entry = session.query(ConfigEntry).filter(ConfigEntry.key == key).first()
                if entry is None:
                    session.add(ConfigEntry(key=key, value=value))
                else:
                    entry.value = value
        except SQLAlchemyError as e:
            monitoring.persistence_errors.labels(operation_type="config_set").inc()
            logger.error(f"Failed to write config key {key}: {e}")
            raise PersistenceFailure(f"Could not write config key {key!r}") from e


def add_months(day: date, months: int) -> date:
    """Shift ``day`` by whole months, clamping to the last day of the target month."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last_day))


def validate_band(band: float) -> float:
    """IELTS bands run up to 9 in half-band steps; zero is reserved for unset."""
    band = float(band)
    if not 0 < band <= 9 or not (band * 2).is_integer():
        raise InvalidConfiguration(f"Target band must be between 0.5 and 9 in steps of 0.5, got {band}")
    return band


class ExamConfigService:
    """Reads and writes the exam date and target band.

    Values are read from the primary store, then the fallback store, then
    the configured defaults. Writes go to both stores.
    """

    def __init__(
        self,
        primary: ConfigStore,
        fallback: Optional[ConfigStore] = None,
        clock: Optional[Clock] = None,
        exam_settings: Optional[ExamSettings] = None,
    ):
        self.primary = primary
        self.fallback = fallback
        self.clock = clock or SystemClock()
        self.exam_settings = exam_settings or settings.exam

    def _stores(self) -> Iterator[ConfigStore]:
        yield self.primary
        if self.fallback is not None:
            yield self.fallback

    def _today(self) -> date:
        return as_utc(self.clock.now()).date()

    def _write(self, key: str, value: str) -> None:
        for store in self._stores():
            store.set(key, value)

    def get_exam_date(self) -> date:
        """Stored exam date, or a default some months from today."""
        for store in self._stores():
            raw = store.get(EXAM_DATE_KEY)
            if raw is None:
                continue
            try:
                return date.fromisoformat(raw)
            except ValueError:
                logger.warning(f"Ignoring malformed exam date {raw!r}")
        return add_months(self._today(), self.exam_settings.default_months_ahead)

    def set_exam_date(self, exam_date: date) -> None:
        self._write(EXAM_DATE_KEY, exam_date.isoformat())
        logger.info(f"Exam date set to {exam_date.isoformat()}")

    def get_target_band(self) -> float:
        """Stored target band, or the configured default."""
        for store in self._stores():
            raw = store.get(TARGET_BAND_KEY)
            if raw is None:
                continue
            try:
                band = float(raw)
            except ValueError:
                logger.warning(f"Ignoring malformed target band {raw!r}")
                continue
            # Zero means unset.
            if band == 0:
                continue
            try:
                return validate_band(band)
            except InvalidConfiguration:
                logger.warning(f"Ignoring out of range target band {raw!r}")
        return self.exam_settings.default_target_band

    def set_target_band(self, band: float) -> None:
        band = validate_band(band)
        self._write(TARGET_BAND_KEY, str(band))
        logger.info(f"Target band set to {band}")

    def days_remaining(self, today: Optional[date] = None) -> int:
        """Whole days until the exam, never negative."""
        today = today or self._today()
        return max(0, (self.get_exam_date() - today).days)

    def countdown_stage(self, today: Optional[date] = None) -> str:
        days = self.days_remaining(today)
        if days > 30:
            return "relaxed"
        if days > 14:
            return "focused"
        return "final"
