"""
Service Container - Dependency Injection Container

Holds the GameStore and the services built on top of it. Services are
lazy-loaded on first access. There is no global instance; the caller owns
the container and disposes it.
"""

from dataclasses import dataclass, field
from typing import Optional
import logging

from cyberaware.store.container import GameStore

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """
    Dependency injection container for services.

    The store is injected; services are lazy-loaded via properties.
    """

    store: GameStore

    _game_service: Optional[object] = field(default=None, init=False, repr=False)

    @property
    def game_service(self):
        """Get GameService instance (lazy-loaded)"""
        if self._game_service is None:
            from cyberaware.services.game_service import GameService
            self._game_service = GameService(self.store)
            logger.debug("GameService instantiated")
        return self._game_service

    def dispose(self) -> None:
        """Dispose the store; services become unusable afterwards"""
        self.store.dispose()
        self._game_service = None
        logger.info("Service container disposed")

    def __enter__(self) -> "ServiceContainer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()
