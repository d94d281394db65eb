#!/usr/bin/env python3
"""
Event Date Binner
Normalizes the many textual date shapes the backend produces into canonical
YYYY-MM-DD keys and groups events by those keys.
"""

import calendar
import re
from datetime import date, datetime, timezone
from typing import Any, Callable, Iterable, Optional

from dateutil import parser as date_parser

from groupevent.models.calendar_models import BinResult

CANONICAL_DATE = re.compile(r'^\d{4}-\d{2}-\d{2}$')
DATE_RANGE_SEPARATOR = ' to '

# 2024-07-19T23:30:00Z, 2024-07-19T23:30:00.000+02:00, 2024-07-19 23:30Z
_ISO_TIMESTAMP = re.compile(r'^\d{4}-\d{2}-\d{2}T|\dZ$')

_WEEKDAY_NAMES = '|'.join(
    [name for name in calendar.day_name] + [abbr for abbr in calendar.day_abbr]
)
# "Sat, July 19" / "FALLBACK - Saturday July 19"; a written year ("Sat, July 19, 2025")
# leaves the string to the generic parser
_WEEKDAY_MONTH_DAY = re.compile(
    r'\b(?:' + _WEEKDAY_NAMES + r')\.?,?\s+([A-Za-z]+)\.?\s+(\d{1,2})\b(?!,?\s*\d{4})',
    re.IGNORECASE
)

_MONTHS_BY_NAME = {}
for _number in range(1, 13):
    _MONTHS_BY_NAME[calendar.month_name[_number].lower()] = _number
    _MONTHS_BY_NAME[calendar.month_abbr[_number].lower()] = _number
_MONTHS_BY_NAME['sept'] = 9


def _canonical(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def _parse_canonical(text: str) -> Optional[str]:
    try:
        return _canonical(date.fromisoformat(text))
    except ValueError:
        return None


def _parse_iso_timestamp(text: str) -> Optional[str]:
    """Calendar date of an ISO timestamp, read in UTC."""
    try:
        instant = date_parser.isoparse(text)
        if instant.tzinfo is not None:
            instant = instant.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None
    return _canonical(instant)


def _parse_weekday_month_day(text: str, year: int) -> Optional[str]:
    match = _WEEKDAY_MONTH_DAY.search(text)
    if not match:
        return None
    month = _MONTHS_BY_NAME.get(match.group(1).lower())
    if month is None:
        return None
    try:
        return _canonical(date(year, month, int(match.group(2))))
    except ValueError:
        return None


def _parse_generic(text: str, today: date) -> Optional[str]:
    """
    Free-form parse anchored to local midnight of `today`'s year.

    The string must name both a month and a day: it is parsed against two
    defaults that differ in month and day, and any disagreement means one of
    them was filled in. A missing year is taken from `today`.
    """
    try:
        parsed = date_parser.parse(text, default=datetime(today.year, 1, 1))
        check = date_parser.parse(text, default=datetime(today.year, 2, 2))
    except (ValueError, OverflowError):
        return None
    if (parsed.month, parsed.day) != (check.month, check.day):
        return None
    # Wall-clock fields as written; no timezone conversion.
    return _canonical(parsed)


def default_date_of(record: Any) -> Optional[str]:
    """
    Extract the date-bearing field of a record.

    Supports CalendarEvent-like objects (start_date, then raw_date), flat dicts
    with 'date', and group event dicts with original_event_data.date.
    """
    if isinstance(record, dict):
        if 'date' in record:
            return record.get('date')
        original = record.get('original_event_data')
        if isinstance(original, dict):
            return original.get('date')
        return None
    start_date = getattr(record, 'start_date', None)
    if start_date:
        return start_date
    return getattr(record, 'raw_date', None)


class EventDateBinner:
    """Normalizes event dates and groups events by canonical date."""

    def __init__(self, today: Optional[date] = None):
        """
        Initialize the binner.

        Args:
            today: Date used to fill in a missing year. Defaults to the current
                date, read on each call so a long-lived binner follows the clock.
        """
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    def normalize(self, value: Any) -> Optional[str]:
        """
        Normalize a date string to YYYY-MM-DD.

        Rules, first match wins:
            1. already YYYY-MM-DD
            2. date range "A to B" -> A
            3. ISO timestamp -> date in UTC (final, even when unparseable)
            4. "<weekday>, <month> <day>" -> that day in the current year
            5. generic parse, local wall-clock date

        Args:
            value: Raw date value from the backend

        Returns:
            Canonical date string, or None if no rule yields a valid date
        """
        if not isinstance(value, str):
            return None
        text = value.strip()
        if not text:
            return None

        if DATE_RANGE_SEPARATOR in text:
            text = text.split(DATE_RANGE_SEPARATOR, 1)[0].strip()

        if CANONICAL_DATE.match(text):
            return _parse_canonical(text)

        if _ISO_TIMESTAMP.search(text):
            # A timestamp with no representable UTC date is dropped, not reparsed
            return _parse_iso_timestamp(text)

        result = _parse_weekday_month_day(text, self.today.year)
        if result:
            return result

        return _parse_generic(text, self.today)

    def bin(self, records: Iterable[Any],
            date_of: Callable[[Any], Optional[str]] = default_date_of) -> BinResult:
        """
        Group records by canonical date, preserving input order in each bucket.

        Args:
            records: Event records in source order
            date_of: Function returning a record's raw date value

        Returns:
            BinResult whose buckets hold the records themselves; records with
            unparseable dates are counted in `dropped`
        """
        result = BinResult()
        for record in records:
            key = self.normalize(date_of(record))
            if key is None:
                result.dropped += 1
                continue
            result.buckets.setdefault(key, []).append(record)
            result.placed += 1
        return result
