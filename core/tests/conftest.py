import pytest
from django.core.cache import cache

from core.models import User
from core.tests.factories import auth_client, make_room, make_user


@pytest.fixture(autouse=True)
def _clear_cache():
    # throttle counters and the facilities list live in the cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def guest(db):
    return make_user()


@pytest.fixture
def other_guest(db):
    return make_user(email='other@example.com', full_name='Other Guest')


@pytest.fixture
def admin(db):
    return make_user(email='admin@example.com', role=User.ROLE_ADMIN, full_name='Admin User')


@pytest.fixture
def room(db):
    return make_room()


@pytest.fixture
def guest_client(guest):
    return auth_client(guest)


@pytest.fixture
def admin_client(admin):
    return auth_client(admin)
