"""Achievement models for gamification"""
from enum import Enum
from datetime import datetime
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from cyberaware.utils.datetime_helpers import now_utc


class AchievementType(str, Enum):
    """What kind of event an achievement rewards"""
    XP = "xp"
    STREAK = "streak"
    BADGE = "badge"
    LEVEL = "level"
    CHALLENGE = "challenge"
    SPEED = "speed"


class Achievement(BaseModel):
    """Immutable record of a rewarded event"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: f"ach-{uuid4().hex}")
    type: AchievementType
    title: str
    description: str
    value: Optional[int] = None
    timestamp: datetime = Field(default_factory=now_utc)
