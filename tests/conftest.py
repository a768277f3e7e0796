"""Global test fixtures and utilities for cyberaware tests"""
import random
from datetime import datetime, date, timedelta, timezone

import pytest

from cyberaware.models.profile import Profile
from cyberaware.models.state import initial_state
from cyberaware.services.game_service import GameService
from cyberaware.store.container import GameStore
from cyberaware.store.persistence import InMemoryStorage
from cyberaware.store.policy import GamificationPolicy


class FakeClock:
    """Callable clock that only moves when told to"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


# ============================================================================
# Time Fixtures
# ============================================================================

@pytest.fixture
def fixed_now():
    """Noon UTC on a fixed day"""
    return datetime(2024, 3, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def today(fixed_now):
    return fixed_now.date()


@pytest.fixture
def yesterday(today):
    return today - timedelta(days=1)


@pytest.fixture
def clock(fixed_now):
    return FakeClock(fixed_now)


# ============================================================================
# Policy & Store Fixtures
# ============================================================================

@pytest.fixture
def policy(clock):
    """Default policy driven by the fixed clock"""
    return GamificationPolicy(clock=clock)


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def store(storage, policy):
    """Store over empty in-memory storage, disposed after the test"""
    game_store = GameStore.create(storage=storage, policy=policy)
    yield game_store
    game_store.dispose()


@pytest.fixture
def service(store):
    return GameService(store, rng=random.Random(42))


# ============================================================================
# Profile Fixtures
# ============================================================================

@pytest.fixture
def alice(fixed_now):
    """Registered profile"""
    return Profile(nickname="alice", role="Student", password="s3cret", last_activity=fixed_now)


@pytest.fixture
def bob(fixed_now):
    """Second registered profile"""
    return Profile(nickname="bob", role="Developer", password="hunter2", last_activity=fixed_now)


@pytest.fixture
def guest(fixed_now):
    return Profile(nickname="visitor", role="Student", is_guest=True, last_activity=fixed_now)


@pytest.fixture
def empty_state():
    return initial_state()
