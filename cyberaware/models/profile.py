"""Profile-related Pydantic models"""
from datetime import date, datetime
from typing import Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from cyberaware.gamification.xp_system import calculate_level
from cyberaware.models.achievement import Achievement
from cyberaware.utils.datetime_helpers import now_utc, parse_iso_date


class UserPreferences(BaseModel):
    """Preference settings"""
    model_config = ConfigDict(frozen=True, extra="ignore")

    difficulty: Literal["easy", "medium", "hard"] = "medium"
    reminders: bool = True
    sound_enabled: bool = True
    animations_enabled: bool = True


class UserStats(BaseModel):
    """Free-form learning statistics shown on the profile page"""
    model_config = ConfigDict(frozen=True, extra="ignore")

    average_score: float = 0.0
    strongest_module: str = ""
    weakest_module: str = ""
    study_time_minutes: int = 0
    favorite_time_of_day: str = ""


class Profile(BaseModel):
    """
    A learner's progress record, guest or registered.

    `level` is a computed field: it is always derived from `xp` and any
    stored value is ignored on load.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(default_factory=lambda: uuid4().hex)
    nickname: str
    role: str
    password: Optional[str] = None  # registered profiles only, plaintext
    is_guest: bool = False
    xp: int = 0
    streak_days: int = 0
    completed_modules: list[str] = Field(default_factory=list)
    badges: list[str] = Field(default_factory=list)
    last_activity: datetime = Field(default_factory=now_utc)
    has_completed_assessment: bool = False
    daily_login_streak: int = 0
    last_login_date: Optional[date] = None
    weekly_xp: int = 0
    monthly_xp: int = 0
    total_challenges_completed: int = 0
    perfect_score_count: int = 0
    fastest_completion_time: Optional[int] = None  # milliseconds
    achievements: list[Achievement] = Field(default_factory=list)
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    stats: UserStats = Field(default_factory=UserStats)

    @field_validator("last_login_date", mode="before")
    @classmethod
    def _parse_last_login_date(cls, value):
        return parse_iso_date(value)

    @computed_field
    @property
    def level(self) -> int:
        return calculate_level(self.xp)


class Attempt(BaseModel):
    """One challenge submission. Append-only."""
    model_config = ConfigDict(frozen=True)

    challenge_id: str
    correct: bool
    time_ms: int = 0
    timestamp: datetime = Field(default_factory=now_utc)
