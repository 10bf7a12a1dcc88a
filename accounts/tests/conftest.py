import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from accounts.factories import AccountFactory


@pytest.fixture(autouse=True)
def clear_cache():
    """Start every test with an empty token store and throttle history."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def client():
    """Provides a DRF API client for making requests in tests."""
    return APIClient()


@pytest.fixture
def account_factory(db):
    """A factory to create account instances."""

    def _create_account(**kwargs):
        return AccountFactory(**kwargs)

    return _create_account
