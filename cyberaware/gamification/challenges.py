"""
Challenge helpers

- Password strength scoring for the password "builder" challenges
- Spin wheel rewards for the daily mini game
"""

import random
import re
from typing import Dict, List, Optional, Any
import logging

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 12
STRONG_PASSWORD_SCORE = 4
MAX_PASSWORD_SCORE = 5

_SPECIAL_CHARS = re.compile(r'[!@#$%^&*(),.?":{}|<>]')
_COMMON_PATTERNS = re.compile(r"password|123|qwerty|admin", re.IGNORECASE)

SPIN_WHEEL_REWARDS = (10, 25, 50, 5, 100, 15)


def check_password_strength(password: str) -> Dict[str, Any]:
    """
    Score a password from 0 to 5

    One point each for: length >= 12, lowercase, uppercase, digit, special
    character. A common word or pattern costs a point. Never below 0.

    Returns:
        {
            'score': int,
            'is_strong': bool,
            'feedback': list[str]
        }
    """
    score = 0
    feedback: List[str] = []

    if len(password) >= MIN_PASSWORD_LENGTH:
        score += 1
    else:
        feedback.append(f"Use at least {MIN_PASSWORD_LENGTH} characters")

    if re.search(r"[a-z]", password):
        score += 1
    else:
        feedback.append("Include lowercase letters")

    if re.search(r"[A-Z]", password):
        score += 1
    else:
        feedback.append("Include uppercase letters")

    if re.search(r"\d", password):
        score += 1
    else:
        feedback.append("Include numbers")

    if _SPECIAL_CHARS.search(password):
        score += 1
    else:
        feedback.append("Include special characters")

    if _COMMON_PATTERNS.search(password):
        score -= 1
        feedback.append("Avoid common words and patterns")

    score = max(0, score)
    return {
        "score": score,
        "is_strong": score >= STRONG_PASSWORD_SCORE,
        "feedback": feedback,
    }


def spin_wheel(rng: Optional[random.Random] = None) -> int:
    """Pick a spin wheel reward, each segment equally likely"""
    reward = (rng or random).choice(SPIN_WHEEL_REWARDS)
    logger.debug(f"Spin wheel landed on {reward} XP")
    return reward
