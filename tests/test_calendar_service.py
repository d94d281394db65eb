#!/usr/bin/env python3
"""
Tests for the calendar HTTP service.
The backend client is replaced with a MagicMock.
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from groupevent.api import calendar_service
from groupevent.integrations.api_client import ApiError
from groupevent.services.group_calendar import DATE_EVENTS_ROUTE, EVENT_DETAIL_ROUTE
from groupevent.services.month_cache import MonthCache

GROUP_EVENTS = {
    'events': [
        {'id': 1, 'custom_name': 'Dinner', 'original_event_data': {'name': 'Dinner', 'date': '2024-03-15'}},
        {'id': 2, 'original_event_data': {'name': 'Jazz', 'date': '2024-03-20T02:00:00Z'}},
        {'id': 3, 'original_event_data': {'name': 'Market', 'date': '2024-03-20 to 2024-03-21'}},
        {'id': 4, 'original_event_data': {'name': 'Someday', 'date': 'TBD'}},
    ]
}


@pytest.fixture
def backend(monkeypatch):
    mock_api = MagicMock()
    mock_api.get_group_events.return_value = GROUP_EVENTS
    monkeypatch.setattr(calendar_service, 'api', mock_api)
    monkeypatch.setattr(calendar_service, 'month_cache', MonthCache())
    return mock_api


@pytest.fixture
def client(backend):
    return TestClient(calendar_service.app)


class TestMonthsEndpoint:

    def test_months_for_window(self, client):
        response = client.get('/calendar/months', params={'reference': '2024-03-15', 'start': -1, 'end': 1})
        data = response.json()

        assert response.status_code == 200
        assert data['success'] is True
        assert data['window'] == {'start': -1, 'end': 1}
        february, march = data['months']
        assert february['cells'] == [None] * 4 + list(range(1, 30)) + [None] * 2
        assert march['rows_needed'] == 6

    def test_default_window(self, client):
        data = client.get('/calendar/months', params={'reference': '2024-01-10'}).json()
        assert [(m['year'], m['month']) for m in data['months']] == [
            (2023, 10), (2023, 11), (2024, 0), (2024, 1), (2024, 2)
        ]

    def test_empty_window_is_an_error(self, client):
        data = client.get('/calendar/months', params={'start': 2, 'end': 2}).json()
        assert data['success'] is False
        assert 'error' in data

    def test_bad_reference(self, client):
        assert client.get('/calendar/months', params={'reference': 'March'}).json()['success'] is False


class TestBinEndpoint:

    def test_bin_mixed_formats(self, client):
        payload = {
            'today': '2024-05-01',
            'events': [
                {'date': '2024-07-19'},
                {'date': 'FALLBACK - Sat, July 19'},
                {'date': '2024-07-20T05:00:00Z'},
                {'date': 'not a date'},
            ]
        }
        data = client.post('/calendar/bin', json=payload).json()

        assert data['success'] is True
        assert data['buckets'] == {
            '2024-07-19': [{'date': '2024-07-19'}, {'date': 'FALLBACK - Sat, July 19'}],
            '2024-07-20': [{'date': '2024-07-20T05:00:00Z'}],
        }
        assert data['placed'] == 3
        assert data['dropped'] == 1


class TestGroupCalendarEndpoints:

    def test_group_calendar(self, client, backend):
        data = client.get('/groups/g1/calendar', params={'reference': '2024-03-15', 'start': 0, 'end': 1}).json()

        assert data['success'] is True
        backend.get_group_events.assert_called_once_with('g1')
        march = data['months'][0]
        by_day = {cell['day']: cell for cell in march['cells'] if cell['day']}
        assert by_day[15]['event_ids'] == ['1']
        assert by_day[20]['event_ids'] == ['2', '3']
        assert by_day[20]['date'] == '2024-03-20'
        assert set(data['events']) == {'1', '2', '3'}
        assert data['dropped'] == 1

    def test_group_calendar_when_backend_fails(self, client, backend):
        backend.get_group_events.side_effect = ApiError('HTTP 500', status=500)

        data = client.get('/groups/g1/calendar', params={'reference': '2024-03-15'}).json()

        assert data['success'] is True
        assert data['events'] == {}
        assert len(data['months']) == 5

    def test_date_events(self, client):
        data = client.get('/groups/g1/calendar/2024-03-20/events').json()

        assert data['success'] is True
        assert [e['id'] for e in data['events']] == [2, 3]

    def test_date_events_bad_date(self, client):
        assert client.get('/groups/g1/calendar/20-03-2024/events').json()['success'] is False

    def test_tap_single_event(self, client):
        data = client.post('/groups/g1/calendar/tap', json={'date': '2024-03-15'}).json()
        assert data['target']['route'] == EVENT_DETAIL_ROUTE

    def test_tap_several_events(self, client):
        data = client.post('/groups/g1/calendar/tap', json={'date': '2024-03-20'}).json()
        assert data['target'] == {'route': DATE_EVENTS_ROUTE, 'params': {'date': '2024-03-20', 'groupId': 'g1'}}

    def test_tap_empty_day(self, client):
        data = client.post('/groups/g1/calendar/tap', json={'date': '2024-03-01'}).json()
        assert data['success'] is True
        assert data['target'] is None
