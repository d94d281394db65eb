#!/usr/bin/env python3
"""
Event Catalog
Loads the shared event catalog for browsing, with search, tag filtering,
sorting, and a hardcoded fallback list when the backend is unavailable.
"""

from typing import Iterable, List, Optional

from pydantic import ValidationError

from groupevent.integrations.api_client import ApiError, ApiService
from groupevent.models.event_models import CatalogEventRecord, EventListing
from groupevent.services.event_date_binner import DATE_RANGE_SEPARATOR

FALLBACK_PREFIX = 'FALLBACK - '

PREDEFINED_TAGS = [
    'free', 'family-friendly', 'music', 'outdoor', 'indoor', 'nightlife',
    'food', 'exercise', 'arts', 'educational', 'social', 'entertainment'
]

SORT_MODES = ('date', 'name', 'newest')


def fallback_events() -> List[EventListing]:
    """Placeholder events shown when the catalog cannot be loaded."""
    return [
        EventListing(
            id=1,
            name="FALLBACK - Summer Music Festival",
            date="FALLBACK - Sat, July 19",
            description="FALLBACK - Live bands, food trucks, and craft beer",
            time="FALLBACK - 2:00 PM",
            price="FALLBACK - $15 per person",
            distance="FALLBACK - 12 miles away",
            type="festival",
            tags=["music", "family-friendly", "outdoor"]
        ),
        EventListing(
            id=2,
            name="FALLBACK - Jazz Night at Blue Note",
            date="FALLBACK - Fri, July 18",
            description="FALLBACK - Local jazz quartet performing classics",
            time="FALLBACK - 7:00 PM",
            price="FALLBACK - $20 cover",
            distance="FALLBACK - 3 miles away",
            type="music",
            tags=["music", "nightlife", "indoor"]
        ),
        EventListing(
            id=3,
            name="FALLBACK - Hiking at Auburn State Park",
            date="FALLBACK - Sun, July 21",
            description="FALLBACK - Morning hike with scenic views",
            time="FALLBACK - 8:00 AM",
            price="FALLBACK - $5 parking",
            distance="FALLBACK - 25 miles away",
            type="outdoor",
            tags=["outdoor", "exercise", "family-friendly"]
        ),
    ]


def strip_fallback_prefix(text: str) -> str:
    if text.startswith(FALLBACK_PREFIX):
        return text[len(FALLBACK_PREFIX):]
    return text


def format_price(record: CatalogEventRecord) -> str:
    if record.is_free:
        return 'Free'
    price = record.price
    if isinstance(price, float) and price.is_integer():
        price = int(price)
    currency = record.currency or ''
    return f"${price} {currency}".rstrip()


def to_listing(record: CatalogEventRecord) -> EventListing:
    """Convert a catalog record to the list representation."""
    return EventListing(
        id=record.id,
        name=record.name,
        date=record.date or 'TBD',
        description=record.description or '',
        time=record.time or 'TBD',
        price=format_price(record),
        distance='5 miles away',
        type=record.category or 'music',
        tags=list(record.tags)
    )


def load_events(api: ApiService, device_id: str = None) -> List[EventListing]:
    """
    Fetch the catalog as listings.

    Falls back to fallback_events() when the request fails or the catalog is
    empty. Records that fail validation are skipped.
    """
    try:
        response = api.get_all_events(device_id)
    except ApiError as e:
        print(f"Failed to load events, using fallback list: {e}")
        return fallback_events()

    raw_events = response.get('events') if isinstance(response, dict) else None
    if not raw_events:
        return fallback_events()

    listings = []
    for raw in raw_events:
        try:
            listings.append(to_listing(CatalogEventRecord.model_validate(raw)))
        except ValidationError as e:
            print(f"Skipping invalid catalog event: {e.error_count()} validation error(s)")
    return listings or fallback_events()


def filter_events(events: Iterable[EventListing], query: str = '',
                  tags: Optional[List[str]] = None) -> List[EventListing]:
    """
    Filter listings by free-text query and required tags.

    The query matches case-insensitively against name, description, type and
    date; every selected tag must be present on an event.
    """
    filtered = list(events)

    needle = query.strip().lower()
    if needle:
        filtered = [
            event for event in filtered
            if needle in event.name.lower()
            or needle in event.description.lower()
            or needle in event.type.lower()
            or needle in event.date.lower()
        ]

    if tags:
        filtered = [event for event in filtered if all(tag in event.tags for tag in tags)]

    return filtered


def all_tags(events: Iterable[EventListing]) -> List[str]:
    """Predefined tags plus every tag used by an event, sorted."""
    tag_set = set(PREDEFINED_TAGS)
    for event in events:
        tag_set.update(event.tags)
    return sorted(tag_set)


def sort_events(events: Iterable[EventListing], mode: str = 'newest') -> List[EventListing]:
    """
    Sort listings.

    Args:
        events: Listings to sort
        mode: 'date' (start of a date range), 'name', or 'newest' (id descending)

    Raises:
        ValueError: For an unknown mode
    """
    if mode == 'date':
        return sorted(events, key=lambda e: (e.date or '').split(DATE_RANGE_SEPARATOR)[0])
    if mode == 'name':
        return sorted(events, key=lambda e: e.name)
    if mode == 'newest':
        return sorted(events, key=lambda e: str(e.id), reverse=True)
    raise ValueError(f"Unknown sort mode: {mode}. Expected one of {', '.join(SORT_MODES)}")
