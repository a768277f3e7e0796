"""
GameService - Gamification Business Logic

Runs the multi-step flows the screens trigger (register, log in, solve a
challenge, claim the daily reward, play a mini game) as sequences of
intents on a GameStore. All state changes still go through the reducer.
"""

import logging
import random
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from cyberaware import config
from cyberaware.exceptions import InvalidCredentialsError, ValidationError
from cyberaware.gamification.achievement_system import (
    badge_achievement,
    challenge_achievement,
    daily_login_achievement,
    level_up_achievement,
    speed_achievement,
)
from cyberaware.gamification.assessment import AssessmentResult, score_assessment
from cyberaware.gamification.catalog import BADGES, default_quests, get_module
from cyberaware.gamification.challenges import spin_wheel
from cyberaware.gamification.leaderboard import build_leaderboard, compute_global_stats, rank_of
from cyberaware.gamification.streak_system import can_claim_daily_reward, describe_streak
from cyberaware.gamification.xp_system import (
    calculate_level_progress,
    DEFAULT_CHALLENGE_XP,
    daily_reward_xp,
    quick_quiz_xp,
    xp_for_challenge_attempt,
)
from cyberaware.models.achievement import Achievement
from cyberaware.models.intents import (
    AddAchievement,
    AdvanceQuest,
    AssignQuests,
    Authenticate,
    CompleteAssessment,
    GrantXP,
    Logout,
    RecordAttempt,
    RegisterProfile,
    Reset,
    SelectModule,
    SetActiveProfile,
    UnlockBadge,
    UpdateDailyStreak,
    UpdateLeaderboard,
    UpdatePreferences,
)
from cyberaware.models.profile import Attempt, Profile
from cyberaware.models.quest import Quest
from cyberaware.observability.metrics import record_achievement, record_badge, record_xp
from cyberaware.store.container import GameStore
from cyberaware.utils.datetime_helpers import today_in_timezone

logger = logging.getLogger(__name__)


class GameService:
    """
    Service for gamification flows.

    Responsibilities:
    - Session management (guest, register, login, logout)
    - Challenge completion: XP, badges, quests, achievements
    - Daily reward and mini games
    - Assessment completion
    - Leaderboard refresh
    """

    def __init__(self, store: GameStore, rng: Optional[random.Random] = None):
        """
        Initialize GameService.

        Args:
            store: GameStore every flow dispatches to
            rng: random source for the spin wheel
        """
        self.store = store
        self.rng = rng or random.Random()
        # profile id -> last calendar day the wheel was spun
        self._last_spin: Dict[str, date] = {}
        logger.debug("GameService initialized")

    @property
    def profile(self) -> Optional[Profile]:
        return self.store.state.profile

    def _today(self) -> date:
        policy = self.store.policy
        return today_in_timezone(policy.timezone, policy.clock)

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    @staticmethod
    def _require(field: str, value: str) -> str:
        value = (value or "").strip()
        if not value:
            raise ValidationError(f"{field} is required", field=field, value=value)
        return value

    def _ensure_quests(self) -> None:
        """Re-seed each quest list that is empty or has fully expired"""
        state = self.store.state
        now = self.store.policy.clock()
        seed_daily, seed_weekly = default_quests(now)

        def stale(quests: List[Quest]) -> bool:
            return all(quest.expires_at <= now for quest in quests)

        daily = list(seed_daily) if stale(state.daily_quests) else state.daily_quests
        weekly = list(seed_weekly) if stale(state.weekly_quests) else state.weekly_quests
        if daily is not state.daily_quests or weekly is not state.weekly_quests:
            self.store.dispatch(AssignQuests(daily=daily, weekly=weekly))
            logger.debug("Quest lists re-seeded")

    def start_guest_session(self, nickname: str, role: str) -> Profile:
        """
        Continue as a guest; the profile is never persisted

        Raises:
            ValidationError: blank nickname or role
        """
        profile = Profile(
            nickname=self._require("nickname", nickname),
            role=self._require("role", role),
            is_guest=True,
            last_activity=self.store.policy.clock(),
        )
        self.store.dispatch(SetActiveProfile(profile=profile))
        self._ensure_quests()
        logger.info(f"Guest session started for {profile.nickname}")
        return profile

    def register(self, nickname: str, role: str, password: str) -> Profile:
        """
        Register a new profile and make it active

        Raises:
            ValidationError: blank field or nickname already registered
        """
        nickname = self._require("nickname", nickname)
        role = self._require("role", role)
        password = self._require("password", password)

        if any(p.nickname == nickname for p in self.store.state.roster):
            raise ValidationError("nickname is already taken", field="nickname", value=nickname)

        profile = Profile(
            nickname=nickname,
            role=role,
            password=password,
            last_activity=self.store.policy.clock(),
        )
        self.store.dispatch(RegisterProfile(profile=profile))
        self._ensure_quests()
        logger.info(f"Registered profile {profile.id} ({nickname})")
        return profile

    def login(self, nickname: str, password: str) -> Optional[Profile]:
        """
        Log in with a nickname/password pair

        Returns:
            The now-active profile, or None if no registered profile matched
        """
        before = self.profile.id if self.profile else None
        transition = self.store.dispatch(Authenticate(nickname=nickname, password=password))

        if transition.failure is not None:
            logger.info(f"Login failed for nickname '{nickname}'")
            return None

        profile = transition.state.profile
        if profile is not None and profile.id != before:
            logger.info(f"Profile {profile.id} logged in")
        self._ensure_quests()
        return profile

    def login_strict(self, nickname: str, password: str) -> Profile:
        """
        login(), raising instead of returning None

        Raises:
            InvalidCredentialsError: no registered profile matched
        """
        profile = self.login(nickname, password)
        if profile is None:
            raise InvalidCredentialsError(nickname=nickname, operation="login")
        return profile

    def logout(self) -> None:
        self.store.dispatch(Logout())

    def reset(self) -> None:
        """Forget everything, registered profiles included"""
        self._last_spin.clear()
        self.store.dispatch(Reset())

    # ------------------------------------------------------------------
    # Learning
    # ------------------------------------------------------------------

    def complete_assessment(self, answers: Mapping[str, str]) -> AssessmentResult:
        """
        Score the baseline assessment and mark it complete

        Returns:
            AssessmentResult with recommended modules
        """
        result = score_assessment(answers, deduplicate=config.DEDUPLICATE_RECOMMENDATIONS)
        self.store.dispatch(CompleteAssessment())
        logger.info(
            f"Assessment complete: knowledge {result.knowledge_percentage:.0f}%, "
            f"recommended {', '.join(result.recommended_modules) or 'nothing'}"
        )
        return result

    def select_module(self, module_id: str) -> None:
        """
        Raises:
            ValidationError: unknown module id
        """
        if get_module(module_id) is None:
            raise ValidationError("unknown learning module", field="module_id", value=module_id)
        self.store.dispatch(SelectModule(module_id=module_id))

    def update_preferences(self, **preferences: Any) -> bool:
        """
        Returns:
            True if the preferences were applied
        """
        transition = self.store.dispatch(UpdatePreferences(preferences=preferences))
        return transition.failure is None

    def _grant(self, amount: int, source: str) -> Dict[str, Any]:
        """Grant XP and log a level-up achievement when the level changes"""
        profile = self.profile
        old_level = profile.level if profile else None

        transition = self.store.dispatch(GrantXP(amount=amount))
        if transition.failure is not None or transition.state.profile is None:
            return {"xp_awarded": 0, "leveled_up": False, "new_level": old_level}

        record_xp(source, amount)
        new_level = transition.state.profile.level
        leveled_up = old_level is not None and new_level > old_level
        if leveled_up:
            logger.info(f"Profile {transition.state.profile.id} leveled up from {old_level} to {new_level}!")
            self._add_achievement(level_up_achievement(new_level, self.store.policy.clock()))

        return {"xp_awarded": amount, "leveled_up": leveled_up, "new_level": new_level}

    def _add_achievement(self, achievement: Achievement) -> None:
        transition = self.store.dispatch(AddAchievement(achievement=achievement))
        if transition.failure is None:
            record_achievement(achievement.type.value)

    def _advance_quests(self, module_id: Optional[str]) -> List[str]:
        """Advance matching open quests by one; returns ids of newly completed quests"""
        state = self.store.state
        now = self.store.policy.clock()
        completed = []
        for quest in [*state.daily_quests, *state.weekly_quests]:
            if quest.is_completed or quest.expires_at <= now:
                continue
            if quest.module_id is not None and quest.module_id != module_id:
                continue
            transition = self.store.dispatch(AdvanceQuest(quest_id=quest.id))
            advanced = next(
                (q for q in [*transition.state.daily_quests, *transition.state.weekly_quests] if q.id == quest.id),
                None,
            )
            if advanced is not None and advanced.is_completed:
                completed.append(quest.id)
                self._grant(quest.xp_reward, "quest")
                logger.info(f"Quest {quest.id} completed, +{quest.xp_reward} XP")
        return completed

    def complete_challenge(
        self,
        challenge_id: str,
        correct: bool,
        time_ms: int = 0,
        previous_attempts: int = 0,
        module_id: Optional[str] = None,
        first_in_module: bool = False,
        multiple_choice: bool = False,
    ) -> Dict[str, Any]:
        """
        Process a challenge submission.

        Args:
            challenge_id: challenge identifier
            correct: whether the submission was right
            time_ms: time taken
            previous_attempts: failed submissions before this one
            module_id: module the challenge belongs to, defaults to the
                currently selected module
            first_in_module: True for the first challenge of a module; solving
                it on the first try unlocks the module's badge
            multiple_choice: multiple-choice question, which some modules
                reward at a lower rate

        Returns:
            {
                'correct': bool,
                'xp_awarded': int,  # including quest rewards
                'leveled_up': bool,
                'new_level': int,
                'badge_unlocked': str or None,
                'quests_completed': list
            }
        """
        module_id = module_id or self.store.state.current_module
        clock = self.store.policy.clock
        self.store.dispatch(RecordAttempt(attempt=Attempt(
            challenge_id=challenge_id,
            correct=correct,
            time_ms=time_ms,
            timestamp=clock(),
        )))

        result: Dict[str, Any] = {
            "correct": correct,
            "xp_awarded": 0,
            "leveled_up": False,
            "new_level": self.profile.level if self.profile else None,
            "badge_unlocked": None,
            "quests_completed": [],
        }
        if not correct or self.profile is None:
            return result

        module = get_module(module_id) if module_id else None
        table = module.xp_table(multiple_choice) if module is not None else DEFAULT_CHALLENGE_XP
        xp = xp_for_challenge_attempt(previous_attempts, table)
        grant = self._grant(xp, "challenge")
        result.update(grant)
        self._add_achievement(challenge_achievement(challenge_id, xp, clock()))

        fast = speed_achievement(challenge_id, time_ms, clock())
        if fast is not None:
            self._add_achievement(fast)

        if module is not None and first_in_module and previous_attempts == 0:
            transition = self.store.dispatch(UnlockBadge(badge=module.badge))
            if transition.failure is None:
                result["badge_unlocked"] = module.badge
                record_badge(module.badge)
                self._add_achievement(badge_achievement(module.badge, clock()))

        before_quests = self.profile.xp
        self._ensure_quests()
        result["quests_completed"] = self._advance_quests(module_id)
        result["xp_awarded"] += self.profile.xp - before_quests
        result["new_level"] = self.profile.level
        result["leveled_up"] = result["leveled_up"] or (
            grant["new_level"] is not None and self.profile.level > grant["new_level"]
        )
        return result

    # ------------------------------------------------------------------
    # Daily reward & mini games
    # ------------------------------------------------------------------

    def streak_status(self) -> Optional[Dict[str, Any]]:
        if self.profile is None:
            return None
        return describe_streak(self.profile.daily_login_streak, self.profile.last_login_date, self._today())

    def claim_daily_reward(self) -> Dict[str, Any]:
        """
        Claim today's login reward: 20 XP + 5 XP per streak day (max +50)

        Returns:
            {
                'claimed': bool,
                'xp_awarded': int,
                'current_streak': int,
                'message': str
            }
        """
        profile = self.profile
        if profile is None:
            return {"claimed": False, "xp_awarded": 0, "current_streak": 0, "message": "No active profile"}

        if not can_claim_daily_reward(profile.last_login_date, self._today()):
            return {
                "claimed": False,
                "xp_awarded": 0,
                "current_streak": profile.daily_login_streak,
                "message": "Come back tomorrow for more XP",
            }

        reward = daily_reward_xp(profile.daily_login_streak)
        self.store.dispatch(UpdateDailyStreak())
        self._grant(reward, "daily_reward")
        streak = self.profile.daily_login_streak
        self._add_achievement(daily_login_achievement(streak, reward, self.store.policy.clock()))

        logger.info(f"Daily reward claimed by {profile.id}: +{reward} XP, streak {streak}")
        return {
            "claimed": True,
            "xp_awarded": reward,
            "current_streak": streak,
            "message": f"Daily Reward Claimed! +{reward} XP",
        }

    def spin_wheel(self) -> Optional[int]:
        """
        Spin the reward wheel, once per calendar day per profile

        Returns:
            XP won, or None if there is no profile or it already spun today
        """
        profile = self.profile
        if profile is None:
            return None

        today = self._today()
        # earlier days no longer block anyone
        self._last_spin = {pid: day for pid, day in self._last_spin.items() if day == today}
        if self._last_spin.get(profile.id) == today:
            return None

        reward = spin_wheel(self.rng)
        self._last_spin[profile.id] = today
        self._grant(reward, "spin_wheel")
        return reward

    def finish_quick_quiz(self, correct_answers: int) -> int:
        """Award 20 XP per correct quick-quiz answer; returns XP awarded"""
        xp = quick_quiz_xp(correct_answers)
        if xp > 0:
            xp = self._grant(xp, "quick_quiz")["xp_awarded"]
        return xp

    # ------------------------------------------------------------------
    # Progress & ranking
    # ------------------------------------------------------------------

    def level_progress(self) -> Optional[Dict[str, Any]]:
        if self.profile is None:
            return None
        return calculate_level_progress(self.profile.xp)

    def badge_overview(self) -> List[Dict[str, Any]]:
        """
        Badge catalog annotated with the active profile's unlocks

        Returns:
            One dict per badge definition, with an added 'earned' flag
        """
        earned = set(self.profile.badges) if self.profile else set()
        return [
            {
                "id": badge.id,
                "name": badge.name,
                "description": badge.description,
                "category": badge.category,
                "xp_reward": badge.xp_reward,
                "coming_soon": badge.coming_soon,
                "earned": badge.name in earned,
            }
            for badge in BADGES
        ]

    def refresh_leaderboard(self) -> Dict[str, Any]:
        """
        Rebuild the leaderboard and global stats

        Returns:
            {
                'entries': list[LeaderboardEntry],
                'rank': int or None
            }
        """
        state = self.store.state
        entries = build_leaderboard(state.profile)
        stats = compute_global_stats(state.roster, len(state.attempts))
        self.store.dispatch(UpdateLeaderboard(entries=entries, global_stats=stats))
        rank = rank_of(entries, state.profile.id) if state.profile else None
        return {"entries": entries, "rank": rank}
