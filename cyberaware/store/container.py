"""
Game Store - the state container

Owns the current GameState snapshot. Intents are dispatched to the
reducer; after each transition the store persists the roster if it
changed, then notifies subscribers.

There is no global instance: create one with GameStore.create() and pass it
to whatever needs it, and call dispose() when done.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional
import logging

from cyberaware.config import STORAGE_KEY, STORAGE_PATH
from cyberaware.exceptions import StoreDisposedError
from cyberaware.models.state import GameState, initial_state
from cyberaware.observability.metrics import record_intent
from cyberaware.store.persistence import (
    JsonFileStorage,
    KeyValueStorage,
    load_registered_users,
    save_registered_users,
)
from cyberaware.store.policy import GamificationPolicy
from cyberaware.store.reducer import Failure, Transition, reduce

logger = logging.getLogger(__name__)

# (previous state, next state, intent)
Listener = Callable[[GameState, GameState, object], None]
FailureObserver = Callable[[object, Failure], None]


def _intent_name(intent: object) -> str:
    return getattr(intent, "name", type(intent).__name__)


@dataclass
class GameStore:
    """
    State container with an explicit create/dispose lifecycle.

    Storage and policy are injected; the roster is rehydrated from storage
    by create().
    """

    storage: KeyValueStorage
    policy: GamificationPolicy = field(default_factory=GamificationPolicy.from_config)
    storage_key: str = STORAGE_KEY

    _state: GameState = field(default_factory=initial_state, init=False, repr=False)
    _listeners: List[Listener] = field(default_factory=list, init=False, repr=False)
    _failure_observers: List[FailureObserver] = field(default_factory=list, init=False, repr=False)
    _disposed: bool = field(default=False, init=False, repr=False)

    @classmethod
    def create(
        cls,
        storage: Optional[KeyValueStorage] = None,
        policy: Optional[GamificationPolicy] = None,
        storage_key: str = STORAGE_KEY,
    ) -> "GameStore":
        """
        Build a store and rehydrate the roster

        Args:
            storage: key-value backend, a JsonFileStorage at STORAGE_PATH by default
            policy: reducer policy, built from config by default
            storage_key: key holding the serialized roster

        Returns:
            GameStore: ready to dispatch
        """
        store = cls(
            storage=storage if storage is not None else JsonFileStorage(STORAGE_PATH),
            policy=policy or GamificationPolicy.from_config(),
            storage_key=storage_key,
        )
        store._state = initial_state(load_registered_users(store.storage, storage_key))
        logger.info(f"Game store created with {len(store._state.roster)} registered profiles")
        return store

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispatch(self, intent: object) -> Transition:
        """
        Run an intent through the reducer and publish the result

        Returns:
            The Transition; failure is set when nothing changed for a
            known reason

        Raises:
            StoreDisposedError: if dispose() was already called
        """
        if self._disposed:
            raise StoreDisposedError(operation=f"dispatch {_intent_name(intent)}")

        previous = self._state
        transition = reduce(previous, intent, self.policy)
        self._state = transition.state
        name = _intent_name(intent)

        if transition.failure is not None:
            logger.debug(f"{name} left state unchanged: {transition.failure.value}")
            record_intent(name, transition.failure.value)
            for observer in list(self._failure_observers):
                observer(intent, transition.failure)
        else:
            record_intent(name, "unchanged" if transition.state is previous else "applied")

        # Handlers only build a new roster list when the roster really changes
        if transition.state.roster is not previous.roster:
            save_registered_users(self.storage, transition.state.roster, self.storage_key)

        if transition.state is not previous:
            for listener in list(self._listeners):
                listener(previous, transition.state, intent)

        return transition

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a state listener

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def observe_failures(self, observer: FailureObserver) -> Callable[[], None]:
        """
        Register a callback for intents that changed nothing

        Returns:
            Callable that removes the observer again
        """
        self._failure_observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._failure_observers:
                self._failure_observers.remove(observer)

        return unsubscribe

    def dispose(self) -> None:
        """Drop all listeners and refuse further dispatches"""
        if self._disposed:
            return
        self._listeners.clear()
        self._failure_observers.clear()
        self._disposed = True
        logger.info("Game store disposed")

    def __enter__(self) -> "GameStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()
