#!/usr/bin/env python3
"""
Month Cache
Single-slot memo of the month grids built for the initial calendar window.
"""

from datetime import date
from typing import Callable, List, Optional, Tuple

from groupevent.models.calendar_models import MonthGrid, MonthWindow
from groupevent.services.month_grid_builder import build_month_window


class MonthCache:
    """
    Holds the grids for one (reference month, window) pair.

    A lookup with any other reference month or window misses; storing a new
    entry overwrites the previous one.
    """

    def __init__(self):
        self._key: Optional[Tuple[int, int, int, int]] = None
        self._months: Optional[List[MonthGrid]] = None

    @staticmethod
    def _make_key(reference: date, window: MonthWindow) -> Tuple[int, int, int, int]:
        return (reference.year, reference.month, window.start, window.end)

    def get(self, reference: date, window: MonthWindow) -> Optional[List[MonthGrid]]:
        """Return the cached grids if reference month and window match, else None."""
        if self._key is None or self._key != self._make_key(reference, window):
            return None
        return list(self._months)

    def put(self, reference: date, window: MonthWindow, months: List[MonthGrid]) -> None:
        self._key = self._make_key(reference, window)
        self._months = list(months)

    def get_or_build(self, reference: date, window: MonthWindow,
                     builder: Callable[[date, MonthWindow], List[MonthGrid]] = build_month_window) -> List[MonthGrid]:
        """
        Return cached grids, building and caching them on a miss.

        Args:
            reference: Any date inside the reference month
            window: Month offsets to materialise
            builder: Function producing the grids on a miss

        Returns:
            The month grids for the window
        """
        months = self.get(reference, window)
        if months is None:
            months = builder(reference, window)
            self.put(reference, window, months)
        return months

    def clear(self) -> None:
        self._key = None
        self._months = None

    @property
    def is_empty(self) -> bool:
        return self._key is None
