"""Deterministic daily word rotation."""
from datetime import date
from typing import List, Sequence, TypeVar

from ieltsprep.errors import InvalidConfiguration

T = TypeVar("T")


def day_of_year(day: date) -> int:
    """1-based ordinal of ``day`` within its year, leap-year aware."""
    return day.timetuple().tm_yday


def select_daily_indices(day: date, catalog_size: int, window_size: int) -> List[int]:
    """Catalog indices shown on ``day``.

    The window starts at ``(day_of_year * window_size) % catalog_size`` and
    wraps around the end of the catalog, so a catalog smaller than the window
    repeats words within the same day.
    """
    if catalog_size <= 0:
        raise InvalidConfiguration("Cannot select daily words from an empty catalog")
    if window_size <= 0:
        raise InvalidConfiguration("Window size must be positive")

    start = (day_of_year(day) * window_size) % catalog_size
    return [(start + offset) % catalog_size for offset in range(window_size)]


class DailyRotationSelector:
    """Picks a fixed-size window of words for a calendar date.

    Holds no state besides the window size; the same date always gives the
    same window on any device.
    """

    def __init__(self, window_size: int):
        if window_size <= 0:
            raise InvalidConfiguration("Window size must be positive")
        self.window_size = window_size

    def select_indices(self, day: date, catalog_size: int) -> List[int]:
        return select_daily_indices(day, catalog_size, self.window_size)

    def select(self, day: date, catalog: Sequence[T]) -> List[T]:
        return [catalog[index] for index in self.select_indices(day, len(catalog))]
