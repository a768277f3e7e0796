"""Aggregate application state"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from cyberaware.models.profile import Attempt, Profile
from cyberaware.models.quest import GlobalStats, LeaderboardEntry, Quest


class GameState(BaseModel):
    """
    Aggregate root for everything the reducer owns.

    Replaced wholesale on every dispatched intent, never mutated in place.
    `roster` only ever holds registered (non-guest) profiles.
    """
    model_config = ConfigDict(frozen=True)

    profile: Optional[Profile] = None
    current_module: Optional[str] = None
    attempts: list[Attempt] = Field(default_factory=list)
    is_assessment_complete: bool = False
    roster: list[Profile] = Field(default_factory=list)
    daily_quests: list[Quest] = Field(default_factory=list)
    weekly_quests: list[Quest] = Field(default_factory=list)
    leaderboard: list[LeaderboardEntry] = Field(default_factory=list)
    global_stats: GlobalStats = Field(default_factory=GlobalStats)


def initial_state(roster: Optional[list[Profile]] = None) -> GameState:
    """Fresh state, optionally seeded with a rehydrated roster"""
    return GameState(roster=list(roster or []))
