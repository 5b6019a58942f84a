"""
Test configuration for the loyalty server.
"""
import pytest
from rest_framework.test import APIClient


@pytest.fixture(autouse=True)
def clear_throttle_cache():
    """Every test starts with no throttle history."""
    # Import here to avoid Django setup issues
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for():
    """Return an APIClient authenticated as the given user."""
    def _client_for(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client
    return _client_for


def _user_with_role(role):
    from apps.users.models import Role
    from tests.factories import UserFactory
    return UserFactory(role=Role(role), verified=True)


@pytest.fixture
def regular_user(db):
    return _user_with_role('regular')


@pytest.fixture
def cashier(db):
    return _user_with_role('cashier')


@pytest.fixture
def manager(db):
    return _user_with_role('manager')


@pytest.fixture
def superuser(db):
    return _user_with_role('superuser')
