#!/usr/bin/env python3
"""
Group Calendar
Ties the month grids, the window expander and the date binner to a group's
events fetched from the API, and decides where a tapped day leads.
"""

import json
from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from groupevent.integrations.api_client import ApiError, ApiService
from groupevent.models.calendar_models import (
    DEFAULT_EVENT_COLOR,
    DEFAULT_WINDOW,
    BinResult,
    CalendarCell,
    CalendarEvent,
    MonthGrid,
    NavigationTarget,
)
from groupevent.models.event_models import GroupEventRecord
from groupevent.services.event_date_binner import EventDateBinner
from groupevent.services.month_cache import MonthCache
from groupevent.services.month_grid_builder import build_month_grid, build_month_window, month_at_offset
from groupevent.services.month_window import TOP, ExpansionDecision, MonthWindowExpander, ScrollMetrics

# Rendered geometry used to compensate the scroll offset after a top expansion
ROW_HEIGHT = 70
MONTH_CHROME_HEIGHT = 220

EVENT_DETAIL_ROUTE = '/event-detail'
DATE_EVENTS_ROUTE = '/date-events'


def month_height(grid: MonthGrid) -> int:
    """Rendered height of one month: header, weekday labels and rows."""
    return MONTH_CHROME_HEIGHT + grid.rows_needed * ROW_HEIGHT


def to_calendar_event(record: GroupEventRecord, binner: EventDateBinner) -> CalendarEvent:
    """Project a validated group event record onto the calendar."""
    raw_date = record.raw_date
    return CalendarEvent(
        id=str(record.id),
        title=record.display_name,
        start_date=binner.normalize(raw_date),
        color=record.created_by_color or DEFAULT_EVENT_COLOR,
        raw_date=raw_date,
        payload=record.model_dump(exclude_none=True)
    )


def parse_group_events(raw_events: Any, binner: EventDateBinner) -> List[CalendarEvent]:
    """
    Validate raw group event records into CalendarEvents.

    Records that fail validation are skipped. Events whose date cannot be
    parsed are kept with start_date None; binning drops them.
    """
    if not isinstance(raw_events, list):
        return []

    events = []
    for raw in raw_events:
        try:
            record = GroupEventRecord.model_validate(raw)
        except ValidationError as e:
            print(f"Skipping invalid group event record: {e.error_count()} validation error(s)")
            continue
        events.append(to_calendar_event(record, binner))
    return events


class GroupCalendar:
    """Calendar state and behaviour for one group."""

    def __init__(self, api: ApiService, group_id: str, reference: date = None,
                 cache: MonthCache = None, expander: MonthWindowExpander = None,
                 binner: EventDateBinner = None):
        """
        Initialize the calendar.

        Args:
            api: Client used to fetch the group's events
            group_id: Group whose events are shown
            reference: Date whose month is offset 0 (default: today)
            cache: Month grid cache, shared across calendars if desired
            expander: Scroll-driven window expander (default window -2..3)
            binner: Date normalizer (default: current-date binner)
        """
        self.api = api
        self.group_id = group_id
        self.reference = reference or date.today()
        self.cache = cache if cache is not None else MonthCache()
        self.expander = expander or MonthWindowExpander()
        self.binner = binner or EventDateBinner()
        self.events: List[CalendarEvent] = []
        self.bins = BinResult()

    @property
    def window(self):
        return self.expander.window

    def months(self) -> List[MonthGrid]:
        """
        Grids for the current window.

        Only the initial (default) window goes through the cache; expanded
        windows are rebuilt.
        """
        if self.window == DEFAULT_WINDOW:
            return self.cache.get_or_build(self.reference, self.window)
        return build_month_window(self.reference, self.window)

    def load_events(self) -> BinResult:
        """
        Fetch the group's events and bin them by date.

        A failed fetch leaves the calendar empty; it is not retried.
        """
        try:
            events_data = self.api.get_group_events(self.group_id)
        except ApiError as e:
            print(f"Failed to fetch group events: {e}")
            events_data = {}

        raw_events = events_data.get('events', []) if isinstance(events_data, dict) else []
        self.events = parse_group_events(raw_events, self.binner)
        self.bins = self.binner.bin(self.events)
        if self.bins.dropped:
            print(f"Dropped {self.bins.dropped} event(s) with unparseable dates")
        return self.bins

    def events_on(self, date_key: str) -> List[CalendarEvent]:
        return self.bins.events_on(date_key)

    def cells(self, grid: MonthGrid) -> List[CalendarCell]:
        """Join a month grid with the binned events."""
        cells = []
        for day in grid.cells:
            if day is None:
                cells.append(CalendarCell(day=None, date_key=None))
                continue
            key = grid.date_key(day)
            cells.append(CalendarCell(day=day, date_key=key, events=list(self.events_on(key))))
        return cells

    def tap(self, grid: MonthGrid, day: Optional[int]) -> Optional[NavigationTarget]:
        """
        Resolve a tap on a day cell.

        Returns:
            Event detail for a single event, the date list for several events,
            or None for blank cells and days without events
        """
        if day is None:
            return None
        return self.tap_date(grid.date_key(day))

    def tap_date(self, date_key: str) -> Optional[NavigationTarget]:
        events = self.events_on(date_key)
        if not events:
            return None
        if len(events) == 1:
            return NavigationTarget(
                route=EVENT_DETAIL_ROUTE,
                params={'event': json.dumps(events[0].payload)}
            )
        return NavigationTarget(
            route=DATE_EVENTS_ROUTE,
            params={'date': date_key, 'groupId': str(self.group_id)}
        )

    def date_events(self, date_key: str) -> List[Dict[str, Any]]:
        """
        Re-fetch the group's events and keep those on date_key.

        Returns:
            Raw event records in source order; empty if the fetch fails
        """
        try:
            events_data = self.api.get_group_events(self.group_id)
        except ApiError as e:
            print(f"Failed to fetch events for date: {e}")
            return []

        raw_events = events_data.get('events', []) if isinstance(events_data, dict) else []
        matching = []
        for raw in raw_events:
            if not isinstance(raw, dict):
                continue
            original = raw.get('original_event_data')
            if not isinstance(original, dict):
                continue
            if self.binner.normalize(original.get('date')) == date_key:
                matching.append(raw)
        return matching

    def on_scroll(self, metrics: ScrollMetrics) -> ExpansionDecision:
        decision = self.expander.on_scroll(metrics)
        if decision.expanded:
            for offset in decision.added_offsets:
                year, month = month_at_offset(self.reference, offset)
                print(f"Loading month: {month + 1:02d}/{year}")
        return decision

    def settle(self, decision: ExpansionDecision) -> Optional[float]:
        """
        Release the edge of a laid-out expansion.

        Returns:
            For a top expansion, the scroll offset to apply in one step so the
            previously visible month stays in place; None otherwise
        """
        if not decision.expanded:
            return None
        added_height = 0
        if decision.edge == TOP:
            for offset in decision.added_offsets:
                year, month = month_at_offset(self.reference, offset)
                added_height += month_height(build_month_grid(year, month))
        return self.expander.settle(decision.edge, added_height)
