"""
Service Layer Package

Business logic on top of the game store:
- GameService: sessions, challenges, rewards, assessment, leaderboard
- ServiceContainer: wires the store and services together
"""

from cyberaware.services.container import ServiceContainer
from cyberaware.services.game_service import GameService

__all__ = [
    "ServiceContainer",
    "GameService",
]
