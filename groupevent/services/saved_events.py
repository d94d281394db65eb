"""Saved events: the user's bookmarked listings, kept in local storage."""

import json
from typing import Any, Dict, List, Union

from groupevent.integrations.storage import StorageError

SAVED_EVENTS_KEY = '@saved_events'

EventId = Union[int, str]


def _event_id(event: Union[Dict[str, Any], Any]) -> EventId:
    if isinstance(event, dict):
        return event['id']
    return event.id


def _snapshot(event: Union[Dict[str, Any], Any]) -> Dict[str, Any]:
    if isinstance(event, dict):
        return dict(event)
    return event.model_dump()


class SavedEventsStore:
    """
    The saved-events list, stored as one JSON array under a fixed key.

    Read once by load(); rewritten on every toggle or removal.
    """

    def __init__(self, storage, key: str = SAVED_EVENTS_KEY):
        self.storage = storage
        self.key = key
        self._events: List[Dict[str, Any]] = []

    @property
    def events(self) -> List[Dict[str, Any]]:
        return list(self._events)

    def load(self) -> List[Dict[str, Any]]:
        """Read the saved list; unreadable or malformed data yields an empty list."""
        try:
            raw = self.storage.get_item(self.key)
            stored = json.loads(raw) if raw else []
        except (StorageError, json.JSONDecodeError) as e:
            print(f"Failed to load saved events: {e}")
            stored = []

        events = []
        seen = set()
        for event in stored if isinstance(stored, list) else []:
            if not isinstance(event, dict) or 'id' not in event or event['id'] in seen:
                continue
            seen.add(event['id'])
            events.append(event)
        self._events = events
        return self.events

    def _persist(self) -> None:
        try:
            self.storage.set_item(self.key, json.dumps(self._events))
        except StorageError as e:
            print(f"Failed to save saved events: {e}")

    def is_saved(self, event_id: EventId) -> bool:
        return any(event['id'] == event_id for event in self._events)

    def toggle(self, event) -> bool:
        """
        Save an unsaved event or unsave a saved one.

        Args:
            event: An EventListing or an event dict with an 'id'

        Returns:
            True if the event is saved after the call
        """
        event_id = _event_id(event)
        if self.is_saved(event_id):
            self._events = [e for e in self._events if e['id'] != event_id]
            saved = False
        else:
            self._events.append(_snapshot(event))
            saved = True
        self._persist()
        return saved

    def remove(self, event_id: EventId) -> None:
        if not self.is_saved(event_id):
            return
        self._events = [e for e in self._events if e['id'] != event_id]
        self._persist()
