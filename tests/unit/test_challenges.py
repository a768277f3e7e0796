"""Unit tests for challenge helpers (cyberaware/gamification/challenges.py)"""
import random
from unittest.mock import Mock

from cyberaware.gamification.challenges import (
    SPIN_WHEEL_REWARDS,
    check_password_strength,
    spin_wheel,
)


# ============================================================================
# Password Strength Tests
# ============================================================================

def test_strong_password():
    """Test a long mixed password scores the maximum"""
    result = check_password_strength("Blue-Otter!Runs7Far")

    assert result["score"] == 5
    assert result["is_strong"] is True
    assert result["feedback"] == []


def test_common_pattern_costs_a_point():
    """Test common words are penalized"""
    result = check_password_strength("Password123!")

    assert result["score"] == 4
    assert result["is_strong"] is True
    assert "Avoid common words and patterns" in result["feedback"]


def test_weak_password_feedback():
    """Test short lowercase password gets actionable feedback"""
    result = check_password_strength("abc")

    assert result["score"] == 1
    assert result["is_strong"] is False
    assert "Use at least 12 characters" in result["feedback"]
    assert "Include uppercase letters" in result["feedback"]
    assert "Include numbers" in result["feedback"]
    assert "Include special characters" in result["feedback"]


def test_score_never_negative():
    """Test the penalty cannot push the score below zero"""
    result = check_password_strength("123")

    assert result["score"] == 0


# ============================================================================
# Spin Wheel Tests
# ============================================================================

def test_spin_wheel_returns_a_segment():
    """Test every spin lands on a wheel segment"""
    rng = random.Random(7)
    for _ in range(20):
        assert spin_wheel(rng) in SPIN_WHEEL_REWARDS


def test_spin_wheel_uses_given_rng():
    """Test the random source is injectable"""
    rng = Mock()
    rng.choice.return_value = 100

    assert spin_wheel(rng) == 100
    rng.choice.assert_called_once_with(SPIN_WHEEL_REWARDS)
