#!/usr/bin/env python3
"""Tests for catalog loading, filtering and sorting."""

from unittest.mock import MagicMock

import pytest

from groupevent.integrations.api_client import ApiError
from groupevent.models.event_models import CatalogEventRecord, EventListing
from groupevent.services.event_catalog import (
    FALLBACK_PREFIX,
    PREDEFINED_TAGS,
    all_tags,
    fallback_events,
    filter_events,
    format_price,
    load_events,
    sort_events,
    strip_fallback_prefix,
)

CATALOG = {
    'events': [
        {'id': 1, 'name': 'Jazz Night', 'date': '2024-07-19', 'time': '7:00 PM',
         'price': '20', 'currency': 'USD', 'category': 'music', 'tags': ['music', 'nightlife']},
        {'id': 2, 'name': 'Park Cleanup', 'date': '2024-07-13 to 2024-07-14',
         'is_free': True, 'category': 'outdoor', 'tags': None},
        {'name': 'No id, skipped'},
    ]
}


@pytest.fixture
def listings():
    return [
        EventListing(id=1, name='Jazz Night', date='2024-07-19', description='Quartet', type='music',
                     tags=['music', 'nightlife']),
        EventListing(id=3, name='Art Walk', date='2024-07-05', description='Galleries downtown', type='arts',
                     tags=['arts', 'outdoor', 'free']),
        EventListing(id=2, name='Park Cleanup', date='2024-07-13 to 2024-07-14', type='outdoor',
                     tags=['outdoor', 'free']),
    ]


class TestLoadEvents:

    def test_records_become_listings(self):
        api = MagicMock()
        api.get_all_events.return_value = CATALOG

        events = load_events(api, device_id='dev-1')

        api.get_all_events.assert_called_once_with('dev-1')
        assert [e.id for e in events] == [1, 2]
        assert events[0].price == '$20 USD'
        assert events[0].type == 'music'
        assert events[1].price == 'Free'
        assert events[1].tags == []
        assert events[1].time == 'TBD'

    def test_failure_uses_fallback(self):
        api = MagicMock()
        api.get_all_events.side_effect = ApiError('offline')

        events = load_events(api)

        assert len(events) == 3
        assert all(e.name.startswith(FALLBACK_PREFIX) for e in events)

    def test_empty_catalog_uses_fallback(self):
        api = MagicMock()
        api.get_all_events.return_value = {'events': []}
        assert load_events(api) == fallback_events()


class TestFormatting:

    def test_price_without_currency(self):
        assert format_price(CatalogEventRecord(id=1, name='x', price='12')) == '$12'

    def test_whole_number_price(self):
        assert format_price(CatalogEventRecord(id=1, name='x', price=15, currency='USD')) == '$15 USD'
        assert format_price(CatalogEventRecord(id=1, name='x', price=12.5, currency='USD')) == '$12.5 USD'

    def test_strip_fallback_prefix(self):
        assert strip_fallback_prefix('FALLBACK - Sat, July 19') == 'Sat, July 19'
        assert strip_fallback_prefix('2024-07-19') == '2024-07-19'


class TestFilterAndSort:

    def test_query_matches_name_description_type_and_date(self, listings):
        assert [e.id for e in filter_events(listings, 'JAZZ')] == [1]
        assert [e.id for e in filter_events(listings, 'galleries')] == [3]
        assert [e.id for e in filter_events(listings, 'outdoor')] == [2]
        assert [e.id for e in filter_events(listings, '07-13')] == [2]

    def test_all_selected_tags_required(self, listings):
        assert [e.id for e in filter_events(listings, tags=['outdoor', 'free'])] == [3, 2]
        assert [e.id for e in filter_events(listings, tags=['outdoor', 'arts'])] == [3]

    def test_blank_query_keeps_everything(self, listings):
        assert filter_events(listings, '   ') == listings

    def test_all_tags(self, listings):
        tags = all_tags(listings)
        assert tags == sorted(tags)
        assert set(PREDEFINED_TAGS) <= set(tags)

    def test_sort_modes(self, listings):
        assert [e.id for e in sort_events(listings, 'date')] == [3, 2, 1]
        assert [e.id for e in sort_events(listings, 'name')] == [3, 1, 2]
        assert [e.id for e in sort_events(listings, 'newest')] == [3, 2, 1]

    def test_unknown_sort_mode(self, listings):
        with pytest.raises(ValueError):
            sort_events(listings, 'distance')
