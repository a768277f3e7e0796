"""
Static learning content: modules, badges and quest seeds
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Optional, Tuple

from cyberaware.gamification.xp_system import DEFAULT_CHALLENGE_XP, ChallengeXPTable
from cyberaware.models.quest import Quest, QuestType
from cyberaware.utils.datetime_helpers import now_utc


@dataclass(frozen=True)
class LearningModule:
    id: str
    name: str
    description: str
    challenges: int
    xp_reward: int
    difficulty: str
    estimated_minutes: int
    topics: Tuple[str, ...]
    badge: str  # unlocked by solving the first challenge on the first try
    challenge_xp: ChallengeXPTable = DEFAULT_CHALLENGE_XP
    multiple_choice_xp: Optional[ChallengeXPTable] = None

    def xp_table(self, multiple_choice: bool = False) -> ChallengeXPTable:
        """Per-attempt XP for this module's challenges"""
        if multiple_choice and self.multiple_choice_xp is not None:
            return self.multiple_choice_xp
        return self.challenge_xp


@dataclass(frozen=True)
class BadgeDefinition:
    id: str
    name: str
    description: str
    category: str
    difficulty: str
    xp_reward: int
    max_progress: int
    coming_soon: bool = False


MODULES: Tuple[LearningModule, ...] = (
    LearningModule(
        id="password",
        name="Password Security",
        description="Master strong password creation and management techniques",
        challenges=8,
        xp_reward=150,
        difficulty="Beginner",
        estimated_minutes=15,
        topics=("Password strength", "Password managers", "Common attacks"),
        badge="Password Pro",
        multiple_choice_xp=(10, 7, 3),
    ),
    LearningModule(
        id="phishing",
        name="Phishing Defense",
        description="Identify and avoid email and web-based social engineering threats",
        challenges=10,
        xp_reward=200,
        difficulty="Intermediate",
        estimated_minutes=20,
        topics=("Email analysis", "URL inspection", "Social engineering tactics"),
        badge="Phishing Detective",
    ),
    LearningModule(
        id="privacy",
        name="Privacy Protection",
        description="Safeguard your personal information across digital platforms",
        challenges=6,
        xp_reward=120,
        difficulty="Beginner",
        estimated_minutes=12,
        topics=("Social media privacy", "2FA setup", "Data sharing"),
        badge="Privacy Protector",
        challenge_xp=(12, 8, 4),
    ),
    LearningModule(
        id="updates",
        name="Updates & Patches",
        description="Keep your systems secure with proper update management",
        challenges=5,
        xp_reward=100,
        difficulty="Beginner",
        estimated_minutes=10,
        topics=("Auto-updates", "Security patches", "End-of-life software"),
        badge="Update Hero",
    ),
    LearningModule(
        id="backups",
        name="Data Protection",
        description="Protect against data loss with effective backup strategies",
        challenges=5,
        xp_reward=140,
        difficulty="Intermediate",
        estimated_minutes=18,
        topics=("3-2-1 backup rule", "Ransomware recovery", "Cloud backups"),
        badge="Data Guardian",
    ),
    LearningModule(
        id="team-security",
        name="Team Security",
        description="Learn collaborative security practices for teams",
        challenges=9,
        xp_reward=180,
        difficulty="Advanced",
        estimated_minutes=25,
        topics=("Incident response", "Security policies", "Team training"),
        badge="Team Security Leader",
        challenge_xp=(20, 15, 10),
    ),
)

BADGES: Tuple[BadgeDefinition, ...] = (
    BadgeDefinition(
        id="password-pro",
        name="Password Pro",
        description="Create 5 strong passwords in a row",
        category="Password Security",
        difficulty="Beginner",
        xp_reward=50,
        max_progress=5,
    ),
    BadgeDefinition(
        id="phishing-detective",
        name="Phishing Detective",
        description="Correctly identify 5 phishing attempts",
        category="Phishing Defense",
        difficulty="Intermediate",
        xp_reward=75,
        max_progress=5,
    ),
    BadgeDefinition(
        id="privacy-protector",
        name="Privacy Protector",
        description="Complete all privacy scenarios successfully",
        category="Privacy Protection",
        difficulty="Intermediate",
        xp_reward=60,
        max_progress=3,
    ),
    BadgeDefinition(
        id="update-hero",
        name="Update Hero",
        description="Maintain a 7-day update confirmation streak",
        category="System Security",
        difficulty="Beginner",
        xp_reward=40,
        max_progress=7,
        coming_soon=True,
    ),
    BadgeDefinition(
        id="data-guardian",
        name="Data Guardian",
        description="Complete backup simulation and quiz with 80%+ score",
        category="Data Protection",
        difficulty="Intermediate",
        xp_reward=65,
        max_progress=1,
        coming_soon=True,
    ),
    BadgeDefinition(
        id="cyber-master",
        name="Cyber Master",
        description="Earn all other badges and reach Level 10",
        category="Achievement",
        difficulty="Expert",
        xp_reward=200,
        max_progress=1,
        coming_soon=True,
    ),
)

MODULES_BY_ID: Dict[str, LearningModule] = {module.id: module for module in MODULES}
BADGES_BY_NAME: Dict[str, BadgeDefinition] = {badge.name: badge for badge in BADGES}


def get_module(module_id: str) -> Optional[LearningModule]:
    return MODULES_BY_ID.get(module_id)


def default_quests(now: Optional[datetime] = None) -> Tuple[Tuple[Quest, ...], Tuple[Quest, ...]]:
    """
    Seed quests as (daily, weekly), expiring one day and one week from now
    """
    now = now or now_utc()
    daily = (
        Quest(
            id="daily-challenge",
            title="Daily Challenge",
            description="Complete 2 challenges in any module",
            type=QuestType.DAILY,
            max_progress=2,
            xp_reward=25,
            expires_at=now + timedelta(days=1),
        ),
    )
    weekly = (
        Quest(
            id="phishing-focus",
            title="Phishing Focus",
            description="Complete 3 phishing challenges this week",
            type=QuestType.WEEKLY,
            max_progress=3,
            xp_reward=50,
            expires_at=now + timedelta(weeks=1),
            module_id="phishing",
        ),
    )
    return daily, weekly
