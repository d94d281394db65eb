#!/usr/bin/env python3
"""Tests for the JSON-file key-value storage."""

import json

import pytest

from groupevent import config
from groupevent.integrations.storage import JsonFileStorage, StorageError


@pytest.fixture
def storage_path(tmp_path):
    return tmp_path / 'state' / 'storage.json'


class TestJsonFileStorage:

    def test_missing_file_reads_as_empty(self, storage_path):
        assert JsonFileStorage(str(storage_path)).get_item('device_id') is None

    def test_set_creates_file_and_directory(self, storage_path):
        storage = JsonFileStorage(str(storage_path))
        storage.set_item('device_id', 'linux_1_abc')

        assert json.loads(storage_path.read_text()) == {'device_id': 'linux_1_abc'}
        assert JsonFileStorage(str(storage_path)).get_item('device_id') == 'linux_1_abc'

    def test_keys_are_independent(self, storage_path):
        storage = JsonFileStorage(str(storage_path))
        storage.set_item('a', '1')
        storage.set_item('b', '2')
        storage.remove_item('a')

        assert storage.get_item('a') is None
        assert storage.get_item('b') == '2'

    def test_remove_missing_key_is_noop(self, storage_path):
        storage = JsonFileStorage(str(storage_path))
        storage.remove_item('nothing')
        assert not storage_path.exists()

    def test_non_string_values_are_ignored(self, storage_path):
        storage_path.parent.mkdir(parents=True)
        storage_path.write_text(json.dumps({'count': 3}))
        assert JsonFileStorage(str(storage_path)).get_item('count') is None

    def test_corrupt_file_raises(self, storage_path):
        storage_path.parent.mkdir(parents=True)
        storage_path.write_text('{not json')

        with pytest.raises(StorageError):
            JsonFileStorage(str(storage_path)).get_item('device_id')

    def test_non_object_file_raises(self, storage_path):
        storage_path.parent.mkdir(parents=True)
        storage_path.write_text('[1, 2]')

        with pytest.raises(StorageError):
            JsonFileStorage(str(storage_path)).set_item('k', 'v')

    def test_default_path_from_config(self, monkeypatch, tmp_path):
        monkeypatch.setattr(config, 'STORAGE_PATH', str(tmp_path / 'default.json'))
        storage = JsonFileStorage()
        storage.set_item('k', 'v')
        assert (tmp_path / 'default.json').exists()

    def test_undecodable_file_raises(self, storage_path):
        storage_path.parent.mkdir(parents=True)
        storage_path.write_bytes(b'\xff\xfe{not json')

        with pytest.raises(StorageError):
            JsonFileStorage(str(storage_path)).get_item('device_id')
