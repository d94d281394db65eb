# calendar_service.py
from datetime import date
from typing import Any, List, Optional

from fastapi import FastAPI
from pydantic import BaseModel

from groupevent.integrations.api_client import ApiService
from groupevent.models.calendar_models import DEFAULT_WINDOW, MonthWindow
from groupevent.services.event_date_binner import EventDateBinner
from groupevent.services.group_calendar import GroupCalendar
from groupevent.services.month_cache import MonthCache
from groupevent.services.month_window import MonthWindowExpander

app = FastAPI(title="Group Calendar Service")
api = ApiService()
month_cache = MonthCache()


# Request models for POST endpoints
class BinEventsRequest(BaseModel):
    events: List[Any]
    today: Optional[str] = None  # YYYY-MM-DD used to fill in missing years


class TapRequest(BaseModel):
    date: str  # YYYY-MM-DD
    reference: Optional[str] = None


def _parse_reference(reference: Optional[str]) -> date:
    if not reference:
        return date.today()
    return date.fromisoformat(reference)


def _group_calendar(group_id: str, reference: Optional[str], start: int, end: int) -> GroupCalendar:
    return GroupCalendar(
        api,
        group_id,
        reference=_parse_reference(reference),
        cache=month_cache,
        expander=MonthWindowExpander(window=MonthWindow(start, end))
    )


@app.get("/calendar/months")
async def get_months(reference: Optional[str] = None,
                     start: int = DEFAULT_WINDOW.start, end: int = DEFAULT_WINDOW.end):
    """
    Month grids for a window around the reference date.

    /calendar/months?reference=2024-03-15&start=-1&end=1
    """
    try:
        window = MonthWindow(start, end)
        months = month_cache.get_or_build(_parse_reference(reference), window)
        return {
            "success": True,
            "window": window.to_dict(),
            "months": [grid.to_dict() for grid in months]
        }
    except Exception as e:
        return {"success": False, "error": str(e)}


@app.post("/calendar/bin")
async def bin_events(request: BinEventsRequest):
    """Group raw event records by canonical date."""
    try:
        today = date.fromisoformat(request.today) if request.today else None
        result = EventDateBinner(today=today).bin(request.events)
        return {
            "success": True,
            "buckets": result.buckets,
            "placed": result.placed,
            "dropped": result.dropped
        }
    except Exception as e:
        return {"success": False, "error": str(e)}


@app.get("/groups/{group_id}/calendar")
async def get_group_calendar(group_id: str, reference: Optional[str] = None,
                             start: int = DEFAULT_WINDOW.start, end: int = DEFAULT_WINDOW.end):
    """Month grids for a group with the ids of the events on each day."""
    try:
        group_calendar = _group_calendar(group_id, reference, start, end)
        bins = group_calendar.load_events()
        months = []
        for grid in group_calendar.months():
            month = grid.to_dict()
            month["cells"] = [cell.to_dict() for cell in group_calendar.cells(grid)]
            months.append(month)
        return {
            "success": True,
            "group_id": group_id,
            "window": group_calendar.window.to_dict(),
            "months": months,
            "events": {event.id: event.to_dict() for event in group_calendar.events if event.start_date},
            "dropped": bins.dropped
        }
    except Exception as e:
        return {"success": False, "error": str(e)}


@app.get("/groups/{group_id}/calendar/{calendar_date}/events")
async def get_date_events(group_id: str, calendar_date: str):
    """Events of a group on one day (YYYY-MM-DD)."""
    try:
        date.fromisoformat(calendar_date)
        group_calendar = _group_calendar(group_id, None, DEFAULT_WINDOW.start, DEFAULT_WINDOW.end)
        return {
            "success": True,
            "date": calendar_date,
            "events": group_calendar.date_events(calendar_date)
        }
    except Exception as e:
        return {"success": False, "error": str(e)}


@app.post("/groups/{group_id}/calendar/tap")
async def tap_date(group_id: str, request: TapRequest):
    """Where tapping a day leads: event detail, date list, or nowhere."""
    try:
        date.fromisoformat(request.date)
        group_calendar = _group_calendar(group_id, request.reference, DEFAULT_WINDOW.start, DEFAULT_WINDOW.end)
        group_calendar.load_events()
        target = group_calendar.tap_date(request.date)
        return {
            "success": True,
            "date": request.date,
            "target": target.to_dict() if target else None
        }
    except Exception as e:
        return {"success": False, "error": str(e)}

# ###########################################
# How to start:
#  uvicorn groupevent.api.calendar_service:app --host 0.0.0.0 --port 8000
# ###########################################
