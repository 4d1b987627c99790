"""
Pytest fixtures and configuration for the storefront admin backend tests

Repositories talk to Supabase through a chained query builder; the
`supabase_client` fixture returns a MagicMock whose builder methods all
return the same query object, so a test only sets what `.execute()` returns.
"""
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

QUERY_METHODS = [
    "table", "select", "insert", "update", "upsert", "delete",
    "eq", "neq", "gte", "lte", "lt", "gt", "in_", "is_",
    "order", "limit", "range",
]


def make_supabase_mock(data=None, count=None):
    """
    Supabase client double

    client.table(...).select(...).eq(...).execute() returns an object with
    `.data` and `.count`; client.rpc(...).execute() shares the same result.
    """
    client = MagicMock()
    query = MagicMock()

    for name in QUERY_METHODS:
        getattr(query, name).return_value = query
    query.not_ = query

    client.table.return_value = query
    client.rpc.return_value = query
    query.execute.return_value = MagicMock(data=data, count=count)

    client.query = query
    return client


@pytest.fixture
def supabase_client():
    return make_supabase_mock(data=[])


@pytest.fixture
def supabase_factory():
    """make_supabase_mock, for tests that need a specific result"""
    return make_supabase_mock


@pytest.fixture
def store_row():
    """A `stores` row as returned by the database"""
    return {
        "id": "store-1",
        "user_id": "user-1",
        "name": "Boutique Faso",
        "slug": "boutique-faso",
        "subdomain": "boutique-faso",
        "description": "Handmade clothing and accessories from Ouagadougou artisans, shipped worldwide.",
        "default_currency": "XOF",
        "is_active": True,
        "logo_url": "https://cdn.example.com/logo.png",
        "banner_url": None,
        "og_image": None,
        "contact_email": "contact@boutique-faso.example",
        "contact_phone": None,
        "meta_title": None,
        "meta_description": None,
        "legal_pages": {
            "terms_of_service": "Terms text",
            "privacy_policy": "",
        },
        "google_analytics_id": "G-ABCDEF1234",
        "google_analytics_enabled": True,
        "facebook_pixel_id": "123456789012345",
        "facebook_pixel_enabled": False,
        "custom_domain": None,
        "domain_status": None,
        "domain_verification_token": None,
        "ssl_enabled": None,
        "minimum_order_amount": "1000.00",
        "created_at": "2024-01-10T08:00:00+00:00",
        "updated_at": "2024-03-05T17:30:00+00:00",
    }


@pytest.fixture
def store(store_row):
    from storefront_admin.domain.store import Store
    return Store.from_row(store_row)


@pytest.fixture
def fixed_now():
    return datetime(2024, 3, 15, 12, 0, 0, tzinfo=timezone.utc)
