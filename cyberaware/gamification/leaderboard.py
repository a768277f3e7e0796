"""
Leaderboard

There is no leaderboard service: the board is a fixed set of mock rivals
plus the active profile, ranked by XP. Weekly XP is approximated as 30% of
total XP.
"""

from typing import Iterable, List, Optional, Sequence
import logging
import math

from cyberaware.models.profile import Profile
from cyberaware.models.quest import GlobalStats, LeaderboardEntry

logger = logging.getLogger(__name__)

WEEKLY_XP_RATIO = 0.3

MOCK_RIVALS: tuple[LeaderboardEntry, ...] = (
    LeaderboardEntry(user_id="1", nickname="CyberNinja", xp=2450, level=13, badges=8, streak_days=15),
    LeaderboardEntry(user_id="2", nickname="SecureSteve", xp=2100, level=11, badges=6, streak_days=22),
    LeaderboardEntry(user_id="3", nickname="PrivacyPro", xp=1980, level=10, badges=7, streak_days=8),
    LeaderboardEntry(user_id="4", nickname="PhishingHunter", xp=1750, level=9, badges=5, streak_days=12),
    LeaderboardEntry(user_id="5", nickname="DataDefender", xp=1620, level=9, badges=4, streak_days=5),
)


def entry_for_profile(profile: Profile) -> LeaderboardEntry:
    return LeaderboardEntry(
        user_id=profile.id,
        nickname=profile.nickname,
        xp=profile.xp,
        level=profile.level,
        badges=len(profile.badges),
        streak_days=profile.daily_login_streak,
    )


def build_leaderboard(
    profile: Optional[Profile],
    rivals: Sequence[LeaderboardEntry] = MOCK_RIVALS,
) -> List[LeaderboardEntry]:
    """
    Global board: rivals plus the active profile, highest XP first

    Ties keep their input order, rivals before the active profile.
    """
    entries = list(rivals)
    if profile is not None:
        entries.append(entry_for_profile(profile))
    return sorted(entries, key=lambda entry: entry.xp, reverse=True)


def weekly_leaderboard(entries: Iterable[LeaderboardEntry]) -> List[LeaderboardEntry]:
    weekly = [
        entry.model_copy(update={"xp": math.floor(entry.xp * WEEKLY_XP_RATIO)})
        for entry in entries
    ]
    return sorted(weekly, key=lambda entry: entry.xp, reverse=True)


def rank_of(entries: Sequence[LeaderboardEntry], user_id: str) -> Optional[int]:
    """1-based rank of a user, or None if absent"""
    for index, entry in enumerate(entries):
        if entry.user_id == user_id:
            return index + 1
    return None


def xp_to_next_rank(entries: Sequence[LeaderboardEntry], user_id: str) -> Optional[int]:
    """XP needed to overtake the entry directly above, None at rank 1 or if absent"""
    rank = rank_of(entries, user_id)
    if rank is None or rank == 1:
        return None
    return entries[rank - 2].xp - entries[rank - 1].xp


def compute_global_stats(roster: Sequence[Profile], challenges_completed: int = 0) -> GlobalStats:
    """
    Aggregate statistics over registered profiles

    Args:
        roster: registered profiles
        challenges_completed: attempts recorded this session, added to the
            per-profile totals
    """
    if not roster:
        return GlobalStats(total_challenges_completed=challenges_completed)

    total_xp = sum(p.xp for p in roster)
    return GlobalStats(
        total_users=len(roster),
        total_xp_earned=total_xp,
        total_challenges_completed=sum(p.total_challenges_completed for p in roster) + challenges_completed,
        average_level=sum(p.level for p in roster) / len(roster),
    )
