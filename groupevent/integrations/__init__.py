"""Collaborators outside the calendar core: the remote API and local storage."""

__all__ = [
    'ApiService',
    'ApiError',
    'DeviceManager',
    'GroupService',
    'JsonFileStorage',
    'StorageError'
]

from groupevent.integrations.api_client import ApiError, ApiService, DeviceManager, GroupService
from groupevent.integrations.storage import JsonFileStorage, StorageError
