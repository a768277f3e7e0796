"""Reducer policy - the switches for behaviours that are configurable"""
from dataclasses import dataclass, field
from enum import Enum

from cyberaware import config
from cyberaware.utils.datetime_helpers import Clock, now_utc


class XPValidation(str, Enum):
    """How negative XP grants are treated"""
    ALLOW = "allow"  # applied as-is, XP may go below zero
    REJECT = "reject"  # ignored
    CLAMP = "clamp"  # applied, XP floored at zero


@dataclass(frozen=True)
class GamificationPolicy:
    """
    Knobs the reducer consults.

    The defaults reproduce the historical behaviour: negative grants are
    allowed and badges may be unlocked more than once.
    """
    xp_validation: XPValidation = XPValidation.ALLOW
    deduplicate_badges: bool = False
    timezone: str = "UTC"
    clock: Clock = field(default=now_utc, compare=False)

    @classmethod
    def from_config(cls, clock: Clock = now_utc) -> "GamificationPolicy":
        """Build a policy from cyberaware.config"""
        return cls(
            xp_validation=XPValidation(config.XP_VALIDATION),
            deduplicate_badges=config.DEDUPLICATE_BADGES,
            timezone=config.STREAK_TIMEZONE,
            clock=clock,
        )


DEFAULT_POLICY = GamificationPolicy()
