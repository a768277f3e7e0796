"""
Daily Login Streak System

A streak counts consecutive calendar days with a recorded login.

Days are compared as calendar dates, never as elapsed hours: a login at
23:59 followed by one at 00:01 the next day continues the streak. Which
calendar day it is gets decided in one fixed zone (STREAK_TIMEZONE, UTC by
default), so the result does not depend on the machine's locale.
"""

from datetime import date
from enum import Enum
from typing import Dict, Optional, Any
import logging

from cyberaware.utils.datetime_helpers import yesterday_of

logger = logging.getLogger(__name__)


class LastLogin(str, Enum):
    """Where the previous login falls relative to today"""
    TODAY = "today"
    YESTERDAY = "yesterday"
    OLDER = "older"


def classify_last_login(last_login_date: Optional[date], today: date) -> LastLogin:
    """
    Three-way classification of the previous login day

    A missing date (never logged in) and any date that is neither today
    nor yesterday, including future dates, count as OLDER.
    """
    if last_login_date == today:
        return LastLogin.TODAY
    if last_login_date == yesterday_of(today):
        return LastLogin.YESTERDAY
    return LastLogin.OLDER


def next_daily_streak(current_streak: int, last_login_date: Optional[date], today: date) -> int:
    """
    Streak length after logging in today

    Logic:
    - Last login yesterday: streak + 1
    - Last login today: unchanged (already counted)
    - Anything else: reset to 1
    """
    classification = classify_last_login(last_login_date, today)

    if classification is LastLogin.YESTERDAY:
        return current_streak + 1
    if classification is LastLogin.TODAY:
        return current_streak

    if current_streak > 1:
        logger.debug(f"Streak of {current_streak} days broken (last login {last_login_date})")
    return 1


def can_claim_daily_reward(last_login_date: Optional[date], today: date) -> bool:
    """The daily reward can be claimed once per calendar day"""
    return last_login_date != today


def describe_streak(current_streak: int, last_login_date: Optional[date], today: date) -> Dict[str, Any]:
    """
    Streak summary for display

    Returns:
        {
            'current_streak': int,
            'last_login': str (today/yesterday/older),
            'at_risk': bool,  # streak survives only if the user logs in today
            'can_claim_reward': bool
        }
    """
    classification = classify_last_login(last_login_date, today)
    return {
        "current_streak": current_streak,
        "last_login": classification.value,
        "at_risk": classification is LastLogin.YESTERDAY and current_streak > 0,
        "can_claim_reward": can_claim_daily_reward(last_login_date, today),
    }
