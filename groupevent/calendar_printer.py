#!/usr/bin/env python3
"""
Calendar Printer for Group Events
Fetches a group's events and prints the month window as text calendars.
"""

import argparse
import calendar
from datetime import date
from typing import List, Optional

from groupevent.integrations.api_client import ApiService
from groupevent.models.calendar_models import DEFAULT_WINDOW, CalendarCell, MonthGrid, MonthWindow
from groupevent.services.group_calendar import GroupCalendar
from groupevent.services.month_window import MonthWindowExpander

DAY_HEADERS = ['Sun', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat']
CELL_WIDTH = 6


def format_cell(cell: CalendarCell) -> str:
    """Day number, marked with "*" for one event or "+N" for N events."""
    if cell.day is None:
        return ' ' * CELL_WIDTH
    if cell.event_count == 0:
        marker = ''
    elif cell.event_count == 1:
        marker = '*'
    else:
        marker = f"+{cell.event_count}"
    return f"{cell.day:>3}{marker}".ljust(CELL_WIDTH)


def format_month(grid: MonthGrid, cells: List[CalendarCell]) -> str:
    """Render one month as a Sunday-first text grid."""
    title = f"{calendar.month_name[grid.calendar_month]} {grid.year}"
    width = CELL_WIDTH * 7
    lines = [title.center(width).rstrip(), ''.join(h.rjust(3).ljust(CELL_WIDTH) for h in DAY_HEADERS).rstrip()]

    for row in range(grid.rows_needed):
        row_cells = cells[row * 7:(row + 1) * 7]
        lines.append(''.join(format_cell(cell) for cell in row_cells).rstrip())

    return '\n'.join(lines)


def format_calendar(group_calendar: GroupCalendar) -> str:
    """Render every month in the calendar's window, followed by an event list."""
    sections = []
    for grid in group_calendar.months():
        sections.append(format_month(grid, group_calendar.cells(grid)))

    listed = [event for event in group_calendar.events if event.start_date]
    if listed:
        event_lines = ['Events:']
        for event in sorted(listed, key=lambda e: e.start_date):
            event_lines.append(f"  {event.start_date}  {event.title}")
        sections.append('\n'.join(event_lines))

    return '\n\n'.join(sections)


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description='Print a group calendar with its events')
    parser.add_argument('--group', required=True, help='Group ID')
    parser.add_argument('--reference', help='Reference date YYYY-MM-DD (default: today)')
    parser.add_argument('--start', type=int, default=DEFAULT_WINDOW.start,
                        help='First month offset from the reference month')
    parser.add_argument('--end', type=int, default=DEFAULT_WINDOW.end,
                        help='Month offset after the last month shown (exclusive)')
    parser.add_argument('--base-url', help='API base URL (default: GROUPEVENT_API_BASE_URL)')
    parser.add_argument('--output', help='Output text file path (optional)')

    args = parser.parse_args(argv)

    try:
        reference = date.fromisoformat(args.reference) if args.reference else date.today()
        window = MonthWindow(args.start, args.end)

        group_calendar = GroupCalendar(
            ApiService(base_url=args.base_url),
            args.group,
            reference=reference,
            expander=MonthWindowExpander(window=window)
        )

        print(f"Loading events for group {args.group}...")
        bins = group_calendar.load_events()
        print(f"Placed {bins.placed} event(s) on {len(bins.buckets)} day(s)\n")

        output = format_calendar(group_calendar)

        if args.output:
            with open(args.output, 'w') as f:
                f.write(output + '\n')
            print(f"Calendar saved to {args.output}")
        else:
            print(output)

    except Exception as e:
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    exit(main())
