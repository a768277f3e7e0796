"""
Achievement System

Builds the immutable achievement records appended to a profile's log:
- XP grants and level-ups
- Badge unlocks
- Daily login streaks
- Challenge completions and fast solves

Records are only ever created here and appended through the AddAchievement
intent; nothing edits them afterwards.
"""

from datetime import datetime
from typing import Optional
from uuid import uuid4
import logging

from cyberaware.models.achievement import Achievement, AchievementType
from cyberaware.utils.datetime_helpers import now_utc

logger = logging.getLogger(__name__)

# Solving a challenge faster than this earns a speed achievement
FAST_SOLVE_THRESHOLD_MS = 10_000


def _build(
    achievement_type: AchievementType,
    id_prefix: str,
    title: str,
    description: str,
    value: Optional[int],
    timestamp: Optional[datetime],
) -> Achievement:
    timestamp = timestamp or now_utc()
    return Achievement(
        id=f"{id_prefix}-{int(timestamp.timestamp() * 1000)}-{uuid4().hex[:6]}",
        type=achievement_type,
        title=title,
        description=description,
        value=value,
        timestamp=timestamp,
    )


def xp_achievement(amount: int, reason: str, timestamp: Optional[datetime] = None) -> Achievement:
    return _build(AchievementType.XP, "xp", "XP Earned", f"+{amount} XP: {reason}", amount, timestamp)


def level_up_achievement(new_level: int, timestamp: Optional[datetime] = None) -> Achievement:
    return _build(
        AchievementType.LEVEL,
        "level",
        "Level Up!",
        f"Reached level {new_level}",
        new_level,
        timestamp,
    )


def badge_achievement(badge: str, timestamp: Optional[datetime] = None) -> Achievement:
    return _build(AchievementType.BADGE, "badge", "Badge Unlocked", f"Earned the {badge} badge", None, timestamp)


def daily_login_achievement(streak: int, reward_xp: int, timestamp: Optional[datetime] = None) -> Achievement:
    """
    Args:
        streak: streak length AFTER today's login
        reward_xp: XP granted for the claim
    """
    return _build(
        AchievementType.STREAK,
        "daily",
        "Daily Login",
        f"Logged in for {streak} days in a row!",
        reward_xp,
        timestamp,
    )


def challenge_achievement(challenge_id: str, xp: int, timestamp: Optional[datetime] = None) -> Achievement:
    return _build(
        AchievementType.CHALLENGE,
        "challenge",
        "Challenge Complete",
        f"Solved {challenge_id}",
        xp,
        timestamp,
    )


def speed_achievement(challenge_id: str, time_ms: int, timestamp: Optional[datetime] = None) -> Optional[Achievement]:
    """Speed achievement for a fast solve, or None if too slow"""
    if time_ms <= 0 or time_ms >= FAST_SOLVE_THRESHOLD_MS:
        return None
    logger.debug(f"Fast solve of {challenge_id} in {time_ms}ms")
    return _build(
        AchievementType.SPEED,
        "speed",
        "Lightning Fast",
        f"Solved {challenge_id} in {time_ms / 1000:.1f}s",
        time_ms,
        timestamp,
    )
