#!/usr/bin/env python3
"""
Remote Event Records
Pydantic models validating the untyped JSON returned by the backend before it
reaches the calendar and catalog code.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator


class OriginalEventData(BaseModel):
    """The catalog event a group event was created from."""
    model_config = ConfigDict(extra='allow')

    name: Optional[str] = None
    description: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    location: Optional[str] = None
    venue_name: Optional[str] = None


class GroupEventRecord(BaseModel):
    """An event as returned by GET /groups/{id}/events."""
    model_config = ConfigDict(extra='allow')

    id: Union[int, str]
    custom_name: Optional[str] = None
    created_by_device_id: Optional[str] = None
    created_by_username: Optional[str] = None
    created_by_color: Optional[str] = None
    original_event_data: Optional[OriginalEventData] = None

    @property
    def display_name(self) -> str:
        if self.custom_name:
            return self.custom_name
        if self.original_event_data and self.original_event_data.name:
            return self.original_event_data.name
        return 'Untitled Event'

    @property
    def raw_date(self) -> Optional[str]:
        if self.original_event_data is None:
            return None
        return self.original_event_data.date


class CatalogEventRecord(BaseModel):
    """An event from the shared catalog (GET /events/all)."""
    model_config = ConfigDict(extra='allow')

    id: Union[int, str]
    name: str
    date: Optional[str] = None
    time: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Union[float, str]] = None
    is_free: bool = False
    currency: Optional[str] = None
    category: Optional[str] = None
    tags: List[str] = []

    @field_validator('tags', mode='before')
    @classmethod
    def _none_tags(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator('is_free', mode='before')
    @classmethod
    def _none_is_free(cls, value: Any) -> Any:
        return False if value is None else value


class EventListing(BaseModel):
    """An event as shown in the catalog list and saved-events tab."""
    id: Union[int, str]
    name: str
    date: str
    description: str = ''
    time: str = 'TBD'
    price: str = ''
    distance: str = ''
    type: str = 'music'
    tags: List[str] = []

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
