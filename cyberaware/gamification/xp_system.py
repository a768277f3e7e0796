"""
XP and Leveling System

Level calculations and XP amounts for every rewarded activity.

Leveling Curve:
- Flat: every 200 XP is one level, starting at level 1
- No level cap

XP Award Rules:
- Challenge solved: per-module table indexed by failed tries, e.g.
  15/10/5 by default, 20/15/10 for team security, 12/8/4 for privacy,
  10/7/3 for password multiple-choice questions
- Daily reward: 20 XP + 5 XP per streak day (bonus capped at 50)
- Quick quiz: 20 XP per correct answer
- Spin wheel: see cyberaware.gamification.challenges.SPIN_WHEEL_REWARDS
- Quests: the quest's own xp_reward
"""

from typing import Any, Dict, Tuple
import logging

logger = logging.getLogger(__name__)

XP_PER_LEVEL = 200

# XP for a solve after 0, 1, and 2+ failed tries
ChallengeXPTable = Tuple[int, int, int]
DEFAULT_CHALLENGE_XP: ChallengeXPTable = (15, 10, 5)

DAILY_REWARD_BASE_XP = 20
DAILY_REWARD_XP_PER_STREAK_DAY = 5
DAILY_REWARD_MAX_STREAK_BONUS = 50

QUICK_QUIZ_XP_PER_CORRECT = 20


def calculate_level(total_xp: int) -> int:
    """
    Level for a cumulative XP total: floor(xp / 200) + 1

    Floor division, so a negative total (only reachable through negative
    grants) yields a level below 1.
    """
    return total_xp // XP_PER_LEVEL + 1


def calculate_level_progress(total_xp: int) -> Dict[str, Any]:
    """
    Calculate level and progress towards the next one

    Returns:
        {
            'current_level': int,
            'xp_in_current_level': int,
            'xp_to_next_level': int,
            'total_xp_for_next_level': int,
            'progress_percent': float
        }
    """
    level = calculate_level(total_xp)
    xp_in_level = total_xp % XP_PER_LEVEL
    next_threshold = level * XP_PER_LEVEL

    return {
        "current_level": level,
        "xp_in_current_level": xp_in_level,
        "xp_to_next_level": next_threshold - total_xp,
        "total_xp_for_next_level": next_threshold,
        "progress_percent": xp_in_level / XP_PER_LEVEL * 100,
    }


def xp_for_challenge_attempt(previous_attempts: int, table: ChallengeXPTable = DEFAULT_CHALLENGE_XP) -> int:
    """
    XP for solving a challenge after `previous_attempts` failed tries

    Args:
        previous_attempts: failed submissions before the solve
        table: the module's XP table, see LearningModule.xp_table()
    """
    index = min(max(previous_attempts, 0), len(table) - 1)
    return table[index]


def daily_reward_xp(current_streak: int) -> int:
    """
    XP for claiming the daily reward, based on the streak BEFORE the claim
    """
    streak_bonus = min(max(current_streak, 0) * DAILY_REWARD_XP_PER_STREAK_DAY, DAILY_REWARD_MAX_STREAK_BONUS)
    return DAILY_REWARD_BASE_XP + streak_bonus


def quick_quiz_xp(correct_answers: int) -> int:
    return max(correct_answers, 0) * QUICK_QUIZ_XP_PER_CORRECT


def get_xp_for_activity(activity_type: str, **kwargs) -> int:
    """
    Calculate XP amount for different activity types

    Args:
        activity_type: challenge, daily_reward or quick_quiz
        **kwargs: previous_attempts (plus an optional table), streak or
            correct_answers

    Returns:
        XP amount to award
    """
    if activity_type == "challenge":
        return xp_for_challenge_attempt(
            kwargs.get("previous_attempts", 0),
            kwargs.get("table", DEFAULT_CHALLENGE_XP),
        )
    if activity_type == "daily_reward":
        return daily_reward_xp(kwargs.get("streak", 0))
    if activity_type == "quick_quiz":
        return quick_quiz_xp(kwargs.get("correct_answers", 0))

    logger.warning(f"Unknown activity type '{activity_type}', awarding 0 XP")
    return 0
