"""Unit tests for the GameStore container (cyberaware/store/container.py)"""
from unittest.mock import Mock

import pytest

from cyberaware.config import STORAGE_KEY
from cyberaware.exceptions import StoreDisposedError
from cyberaware.models.intents import (
    Authenticate,
    GrantXP,
    Logout,
    RegisterProfile,
    Reset,
    SetActiveProfile,
)
from cyberaware.store.container import GameStore
from cyberaware.store.persistence import InMemoryStorage, serialize_roster
from cyberaware.store.reducer import Failure


class CountingStorage(InMemoryStorage):
    """In-memory storage that counts writes"""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.writes = 0

    def set_item(self, key, value):
        self.writes += 1
        super().set_item(key, value)


@pytest.fixture
def counting_storage():
    return CountingStorage()


@pytest.fixture
def counting_store(counting_storage, policy):
    with GameStore.create(storage=counting_storage, policy=policy) as game_store:
        yield game_store


# ============================================================================
# Lifecycle Tests
# ============================================================================

class TestLifecycle:
    """Test create/dispose"""

    def test_create_rehydrates_roster(self, alice, bob, policy):
        """Test registered profiles are loaded at creation"""
        storage = InMemoryStorage({STORAGE_KEY: serialize_roster([alice, bob])})

        store = GameStore.create(storage=storage, policy=policy)

        assert [p.id for p in store.state.roster] == [alice.id, bob.id]
        assert store.state.profile is None

    def test_create_with_corrupt_storage(self, policy):
        """Test corrupt storage yields an empty roster"""
        storage = InMemoryStorage({STORAGE_KEY: "]]"})

        store = GameStore.create(storage=storage, policy=policy)

        assert store.state.roster == []

    def test_create_with_custom_key(self, alice, policy):
        storage = InMemoryStorage({"other_key": serialize_roster([alice])})

        store = GameStore.create(storage=storage, policy=policy, storage_key="other_key")

        assert len(store.state.roster) == 1

    def test_dispatch_after_dispose_raises(self, store):
        """Test a disposed store refuses intents"""
        store.dispose()

        assert store.disposed is True
        with pytest.raises(StoreDisposedError):
            store.dispatch(Logout())

    def test_dispose_is_idempotent(self, store):
        store.dispose()
        store.dispose()

        assert store.disposed is True

    def test_context_manager_disposes(self, storage, policy):
        with GameStore.create(storage=storage, policy=policy) as store:
            assert store.disposed is False

        assert store.disposed is True


# ============================================================================
# Persistence Tests
# ============================================================================

class TestPersistence:
    """Test when the roster is written"""

    def test_register_persists(self, counting_store, counting_storage, alice):
        """Test registering writes the roster"""
        counting_store.dispatch(RegisterProfile(profile=alice))

        assert counting_storage.writes == 1
        assert alice.nickname in counting_storage.get_item(STORAGE_KEY)

    def test_registered_progress_persists(self, counting_store, counting_storage, alice):
        """Test each change to a registered profile is written"""
        counting_store.dispatch(RegisterProfile(profile=alice))
        counting_store.dispatch(GrantXP(amount=15))

        assert counting_storage.writes == 2
        assert '"xp": 15' in counting_storage.get_item(STORAGE_KEY)

    def test_guest_progress_not_persisted(self, counting_store, counting_storage, guest):
        """Test guest sessions never write"""
        counting_store.dispatch(SetActiveProfile(profile=guest))
        counting_store.dispatch(GrantXP(amount=15))

        assert counting_storage.writes == 0
        assert counting_storage.get_item(STORAGE_KEY) is None

    def test_logout_does_not_write(self, counting_store, counting_storage, alice):
        counting_store.dispatch(RegisterProfile(profile=alice))
        counting_store.dispatch(Logout())

        assert counting_storage.writes == 1

    def test_failed_intent_does_not_write(self, counting_store, counting_storage):
        counting_store.dispatch(Authenticate(nickname="ghost", password="x"))

        assert counting_storage.writes == 0

    def test_reset_clears_persisted_roster(self, counting_store, counting_storage, alice):
        """Test reset writes an empty roster"""
        counting_store.dispatch(RegisterProfile(profile=alice))
        counting_store.dispatch(Reset())

        assert counting_storage.get_item(STORAGE_KEY) == "[]"

    def test_reload_after_register(self, storage, policy, alice):
        """Test a new store sees profiles registered by a previous one"""
        with GameStore.create(storage=storage, policy=policy) as first:
            first.dispatch(RegisterProfile(profile=alice))
            first.dispatch(GrantXP(amount=250))

        second = GameStore.create(storage=storage, policy=policy)
        second.dispatch(Authenticate(nickname="alice", password="s3cret"))

        assert second.state.profile.xp == 250
        assert second.state.profile.level == 2


# ============================================================================
# Subscription Tests
# ============================================================================

class TestSubscriptions:
    """Test listeners and failure observers"""

    def test_listener_receives_transition(self, store, alice):
        """Test listeners see previous state, next state and intent"""
        listener = Mock()
        store.subscribe(listener)
        intent = RegisterProfile(profile=alice)

        store.dispatch(intent)

        listener.assert_called_once()
        previous, current, received = listener.call_args.args
        assert previous.profile is None
        assert current.profile == alice
        assert received is intent

    def test_listener_not_called_without_change(self, store):
        listener = Mock()
        store.subscribe(listener)

        store.dispatch(GrantXP(amount=10))

        listener.assert_not_called()

    def test_unsubscribe(self, store, alice):
        listener = Mock()
        unsubscribe = store.subscribe(listener)

        unsubscribe()
        store.dispatch(RegisterProfile(profile=alice))

        listener.assert_not_called()

    def test_failure_observer(self, store):
        """Test failures are reported to observers"""
        observer = Mock()
        store.observe_failures(observer)
        intent = Authenticate(nickname="ghost", password="x")

        transition = store.dispatch(intent)

        assert transition.failure is Failure.INVALID_CREDENTIALS
        observer.assert_called_once_with(intent, Failure.INVALID_CREDENTIALS)

    def test_dispose_drops_listeners(self, store):
        listener = Mock()
        store.subscribe(listener)

        store.dispose()

        assert store._listeners == []
