"""JSON-file key-value storage for the client's local state."""

import json
import os
from typing import Dict, Optional

from groupevent import config


class StorageError(Exception):
    """Raised when the storage file cannot be read or written."""


class JsonFileStorage:
    """
    String key-value store persisted as one JSON object on disk.

    Values are opaque strings (callers serialize their own JSON), mirroring the
    getItem/setItem contract of mobile key-value storage.
    """

    def __init__(self, path: str = None):
        self.path = path or config.STORAGE_PATH

    def _read_all(self) -> Dict[str, str]:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                stored = json.load(f)
        except FileNotFoundError:
            return {}
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as err:
            raise StorageError(f"Could not read storage file {self.path}: {err}") from err
        if not isinstance(stored, dict):
            raise StorageError(f"Storage file {self.path} does not contain a JSON object")
        return stored

    def _write_all(self, data: Dict[str, str]) -> None:
        directory = os.path.dirname(self.path)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
        except OSError as err:
            raise StorageError(f"Could not write storage file {self.path}: {err}") from err

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value for key, or None if absent."""
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)
