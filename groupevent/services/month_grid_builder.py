#!/usr/bin/env python3
"""
Month Grid Builder
Builds Sunday-first calendar grids for single months and for month windows
around a reference date.
"""

import calendar
import math
from datetime import date
from typing import List, Optional, Tuple

from groupevent.models.calendar_models import MonthGrid, MonthWindow


def normalize_month(year: int, month: int) -> Tuple[int, int]:
    """
    Roll an out-of-range 0-based month into the neighbouring years.

    Args:
        year: Any integer year
        month: 0-based month, may be negative or above 11

    Returns:
        (year, month) with month in [0, 11], e.g. (2024, 13) -> (2025, 1)
    """
    year_delta, month = divmod(month, 12)
    return year + year_delta, month


def build_month_grid(year: int, month: int) -> MonthGrid:
    """
    Build the display grid for one month.

    Args:
        year: Any integer year (proleptic Gregorian)
        month: 0-based month; values outside [0, 11] are rolled over

    Returns:
        MonthGrid with leading None cells for the weekdays before day 1
        and trailing None cells filling the last week
    """
    year, month = normalize_month(year, month)

    # calendar.monthrange accepts years outside datetime's range by mapping them
    # into the 400-year Gregorian cycle.
    first_weekday, days_in_month = calendar.monthrange(year, month + 1)
    # Convert to our format (0=Sunday, 6=Saturday)
    starting_weekday = (first_weekday + 1) % 7

    cells: List[Optional[int]] = [None] * starting_weekday
    cells.extend(range(1, days_in_month + 1))
    rows_needed = math.ceil(len(cells) / 7)
    cells.extend([None] * (rows_needed * 7 - len(cells)))

    return MonthGrid(
        year=year,
        month=month,
        cells=tuple(cells),
        days_in_month=days_in_month,
        starting_weekday=starting_weekday,
        rows_needed=rows_needed
    )


def month_at_offset(reference: date, offset: int) -> Tuple[int, int]:
    """Return (year, 0-based month) for the month `offset` months from `reference`."""
    return normalize_month(reference.year, reference.month - 1 + offset)


def build_month_window(reference: date, window: MonthWindow) -> List[MonthGrid]:
    """
    Build grids for every month in the window, oldest first.

    Args:
        reference: Any date inside the reference month
        window: Month offsets relative to the reference month

    Returns:
        List of window.month_count MonthGrid objects
    """
    months = []
    for offset in window.offsets():
        year, month = month_at_offset(reference, offset)
        months.append(build_month_grid(year, month))
    return months
