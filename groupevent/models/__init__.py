"""Data models for calendars, remote events, and expenses."""

__all__ = [
    'MonthGrid',
    'MonthWindow',
    'CalendarEvent',
    'CalendarCell',
    'NavigationTarget',
    'BinResult',
    'GroupEventRecord',
    'CatalogEventRecord',
    'EventListing',
    'Expense',
    'ExpenseParticipant'
]

from groupevent.models.calendar_models import (
    BinResult,
    CalendarCell,
    CalendarEvent,
    MonthGrid,
    MonthWindow,
    NavigationTarget,
)
from groupevent.models.event_models import CatalogEventRecord, EventListing, GroupEventRecord
from groupevent.models.expense_models import Expense, ExpenseParticipant
