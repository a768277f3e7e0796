"""Quest and leaderboard models"""
from enum import Enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class QuestType(str, Enum):
    """Quest cadence"""
    DAILY = "daily"
    WEEKLY = "weekly"
    SPECIAL = "special"


class Quest(BaseModel):
    """A progress-tracked objective. Progress never goes down."""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    type: QuestType
    progress: int = 0
    max_progress: int
    xp_reward: int
    is_completed: bool = False
    expires_at: datetime
    # Module whose challenges advance this quest; None means any module
    module_id: Optional[str] = None


class LeaderboardEntry(BaseModel):
    """One row of the (mocked) leaderboard"""
    model_config = ConfigDict(frozen=True)

    user_id: str
    nickname: str
    xp: int
    level: int
    badges: int
    streak_days: int


class GlobalStats(BaseModel):
    """Aggregate statistics across the roster"""
    model_config = ConfigDict(frozen=True)

    total_users: int = 0
    total_xp_earned: int = 0
    total_challenges_completed: int = 0
    average_level: float = 1.0
