"""
Intents - tagged requests to transition the game state

Each intent is a frozen pydantic model; the reducer dispatches on its class.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from cyberaware.models.achievement import Achievement
from cyberaware.models.profile import Attempt, Profile
from cyberaware.models.quest import GlobalStats, LeaderboardEntry, Quest


class Intent(BaseModel):
    """Base class for all intents"""
    model_config = ConfigDict(frozen=True)

    @property
    def name(self) -> str:
        return type(self).__name__


class SetActiveProfile(Intent):
    profile: Profile


class RegisterProfile(Intent):
    profile: Profile


class Authenticate(Intent):
    nickname: str
    password: str


class GrantXP(Intent):
    amount: int


class RecordAttempt(Intent):
    attempt: Attempt


class UnlockBadge(Intent):
    badge: str


class SelectModule(Intent):
    module_id: Optional[str]


class CompleteAssessment(Intent):
    pass


class UpdateDailyStreak(Intent):
    pass


class CompleteQuest(Intent):
    quest_id: str


class AdvanceQuest(Intent):
    quest_id: str
    amount: int = 1


class AssignQuests(Intent):
    daily: list[Quest] = Field(default_factory=list)
    weekly: list[Quest] = Field(default_factory=list)


class AddAchievement(Intent):
    achievement: Achievement


class UpdatePreferences(Intent):
    """Shallow-merged onto the active profile's preferences"""
    preferences: dict[str, Any]


class UpdateLeaderboard(Intent):
    entries: list[LeaderboardEntry]
    global_stats: Optional[GlobalStats] = None


class Logout(Intent):
    pass


class Reset(Intent):
    pass
