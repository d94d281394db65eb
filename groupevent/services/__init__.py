"""Business logic services for the group calendar."""

__all__ = [
    'build_month_grid',
    'build_month_window',
    'MonthCache',
    'MonthWindowExpander',
    'EventDateBinner',
    'GroupCalendar',
    'SavedEventsStore'
]

from groupevent.services.event_date_binner import EventDateBinner
from groupevent.services.group_calendar import GroupCalendar
from groupevent.services.month_cache import MonthCache
from groupevent.services.month_grid_builder import build_month_grid, build_month_window
from groupevent.services.month_window import MonthWindowExpander
from groupevent.services.saved_events import SavedEventsStore
