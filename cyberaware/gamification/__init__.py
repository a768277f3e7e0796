"""
Gamification system for CyberAware

This module implements the derived-progress calculators:
- XP and leveling
- Daily login streaks
- Baseline assessment scoring
- Challenge helpers (password strength, spin wheel)
- Achievement records

Leaderboard and catalog helpers live in their own modules
(cyberaware.gamification.leaderboard, cyberaware.gamification.catalog)
because they depend on the profile models, which depend on this package.
"""

from cyberaware.gamification.xp_system import calculate_level, calculate_level_progress, get_xp_for_activity
from cyberaware.gamification.streak_system import classify_last_login, next_daily_streak, LastLogin
from cyberaware.gamification.assessment import score_assessment, AssessmentResult

__all__ = [
    "calculate_level",
    "calculate_level_progress",
    "get_xp_for_activity",
    "classify_last_login",
    "next_daily_streak",
    "LastLogin",
    "score_assessment",
    "AssessmentResult",
]
