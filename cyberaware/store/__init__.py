"""
State container package

- reducer: pure (state, intent) -> Transition
- persistence: roster <-> key-value storage
- container: GameStore, the explicitly constructed store
"""

from cyberaware.store.container import GameStore
from cyberaware.store.policy import GamificationPolicy, XPValidation
from cyberaware.store.reducer import Failure, Transition, game_reducer, reduce

__all__ = [
    "GameStore",
    "GamificationPolicy",
    "XPValidation",
    "Failure",
    "Transition",
    "game_reducer",
    "reduce",
]
