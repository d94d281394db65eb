#!/usr/bin/env python3
"""
Calendar Data Models
Data classes for the group calendar: month grids, month windows, and events.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class MonthGrid:
    """One calendar month's display geometry (Sunday-first, 7 columns)."""
    year: int
    month: int  # 0-based: 0=January, 11=December
    cells: Tuple[Optional[int], ...]  # padded with None to whole weeks
    days_in_month: int
    starting_weekday: int  # 0=Sunday, 6=Saturday
    rows_needed: int

    @property
    def calendar_month(self) -> int:
        """1-based month, as used by the calendar and datetime modules."""
        return self.month + 1

    def date_key(self, day: int) -> str:
        """Canonical YYYY-MM-DD key for a day of this month."""
        return f"{self.year:04d}-{self.calendar_month:02d}-{day:02d}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'year': self.year,
            'month': self.month,
            'cells': list(self.cells),
            'days_in_month': self.days_in_month,
            'starting_weekday': self.starting_weekday,
            'rows_needed': self.rows_needed
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MonthGrid':
        """Create from dictionary."""
        return cls(
            year=data['year'],
            month=data['month'],
            cells=tuple(data['cells']),
            days_in_month=data['days_in_month'],
            starting_weekday=data['starting_weekday'],
            rows_needed=data['rows_needed']
        )

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, json_str: str) -> 'MonthGrid':
        """Create from JSON string."""
        return cls.from_dict(json.loads(json_str))


@dataclass(frozen=True)
class MonthWindow:
    """
    Half-open range [start, end) of month offsets relative to a reference date.

    MonthWindow(-2, 3) covers two months before through two months after the
    reference month.
    """
    start: int
    end: int

    def __post_init__(self):
        if self.end <= self.start:
            raise ValueError(f"Month window end ({self.end}) must be greater than start ({self.start})")

    @property
    def month_count(self) -> int:
        return self.end - self.start

    def offsets(self) -> List[int]:
        return list(range(self.start, self.end))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {'start': self.start, 'end': self.end}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MonthWindow':
        """Create from dictionary."""
        return cls(start=data['start'], end=data['end'])


DEFAULT_WINDOW = MonthWindow(start=-2, end=3)

DEFAULT_EVENT_COLOR = '#D4A574'


@dataclass
class CalendarEvent:
    """Client-side projection of a remote group event."""
    id: str
    title: str
    start_date: Optional[str]  # canonical YYYY-MM-DD, None when unparseable
    color: str = DEFAULT_EVENT_COLOR
    raw_date: Optional[str] = None
    end_date: Optional[str] = None
    icon: str = 'calendar'
    participants: int = 0
    payload: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'id': self.id,
            'title': self.title,
            'start_date': self.start_date,
            'color': self.color,
            'raw_date': self.raw_date,
            'end_date': self.end_date,
            'icon': self.icon,
            'participants': self.participants,
            'payload': self.payload
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CalendarEvent':
        """Create from dictionary."""
        return cls(
            id=str(data['id']),
            title=data['title'],
            start_date=data.get('start_date'),
            color=data.get('color', DEFAULT_EVENT_COLOR),
            raw_date=data.get('raw_date'),
            end_date=data.get('end_date'),
            icon=data.get('icon', 'calendar'),
            participants=data.get('participants', 0),
            payload=data.get('payload', {})
        )

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, json_str: str) -> 'CalendarEvent':
        """Create from JSON string."""
        return cls.from_dict(json.loads(json_str))


@dataclass
class BinResult:
    """Events grouped by canonical date, plus how many records were dropped."""
    buckets: Dict[str, List[Any]] = field(default_factory=dict)
    placed: int = 0
    dropped: int = 0

    @property
    def total(self) -> int:
        return self.placed + self.dropped

    def events_on(self, date_key: str) -> List[Any]:
        return self.buckets.get(date_key, [])


@dataclass
class CalendarCell:
    """A grid cell joined with the events that fall on it."""
    day: Optional[int]
    date_key: Optional[str]
    events: List[CalendarEvent] = field(default_factory=list)

    @property
    def has_events(self) -> bool:
        return len(self.events) > 0

    @property
    def event_count(self) -> int:
        return len(self.events)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (events reduced to their ids)."""
        return {
            'day': self.day,
            'date': self.date_key,
            'event_ids': [event.id for event in self.events]
        }


@dataclass
class NavigationTarget:
    """Where a tap on a calendar cell leads."""
    route: str
    params: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {'route': self.route, 'params': dict(self.params)}
