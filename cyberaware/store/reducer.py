"""
Action Reducer

Pure function mapping (state, intent) to the next state. It is the only
way progress changes.

Contract:
- Never raises and never performs I/O; persistence is applied by the
  caller observing the transition (see cyberaware.store.container)
- Unknown intents and intents that cannot apply (no active profile, bad
  credentials, ...) return the SAME state object
- reduce() additionally reports why nothing happened through
  Transition.failure, which never influences the returned state
- Every change to a non-guest active profile is mirrored into the roster
  by id; guest profiles never enter the roster
"""

from enum import Enum
from typing import Callable, Dict, NamedTuple, Optional, Type

from pydantic import ValidationError as PydanticValidationError

from cyberaware.gamification.streak_system import next_daily_streak
from cyberaware.models.intents import (
    AddAchievement,
    AdvanceQuest,
    AssignQuests,
    Authenticate,
    CompleteAssessment,
    CompleteQuest,
    GrantXP,
    Intent,
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
from cyberaware.models.profile import Profile, UserPreferences
from cyberaware.models.quest import Quest
from cyberaware.models.state import GameState, initial_state
from cyberaware.store.policy import DEFAULT_POLICY, GamificationPolicy, XPValidation
from cyberaware.utils.datetime_helpers import today_in_timezone


class Failure(str, Enum):
    """Why an intent left the state unchanged"""
    NO_ACTIVE_PROFILE = "no_active_profile"
    INVALID_CREDENTIALS = "invalid_credentials"
    NEGATIVE_XP_REJECTED = "negative_xp_rejected"
    DUPLICATE_BADGE = "duplicate_badge"
    QUEST_NOT_FOUND = "quest_not_found"
    INVALID_PAYLOAD = "invalid_payload"
    UNKNOWN_INTENT = "unknown_intent"


class Transition(NamedTuple):
    state: GameState
    failure: Optional[Failure] = None


Handler = Callable[[GameState, Intent, GamificationPolicy], Transition]


# ============================================================================
# Helpers
# ============================================================================

def _replace_profile(state: GameState, updated: Profile, **extra) -> GameState:
    """Swap in an updated active profile and mirror it into the roster"""
    update = {"profile": updated, **extra}
    if not updated.is_guest:
        update["roster"] = [updated if p.id == updated.id else p for p in state.roster]
    return state.model_copy(update=update)


def _unchanged(state: GameState, failure: Failure) -> Transition:
    return Transition(state, failure)


# ============================================================================
# Profile & session intents
# ============================================================================

def _set_active_profile(state: GameState, intent: SetActiveProfile, policy: GamificationPolicy) -> Transition:
    return Transition(state.model_copy(update={"profile": intent.profile}))


def _register_profile(state: GameState, intent: RegisterProfile, policy: GamificationPolicy) -> Transition:
    # Id uniqueness is the caller's responsibility
    update = {"profile": intent.profile}
    if not intent.profile.is_guest:
        update["roster"] = [*state.roster, intent.profile]
    return Transition(state.model_copy(update=update))


def _authenticate(state: GameState, intent: Authenticate, policy: GamificationPolicy) -> Transition:
    match = next(
        (p for p in state.roster if p.nickname == intent.nickname and p.password == intent.password),
        None,
    )
    if match is None:
        return _unchanged(state, Failure.INVALID_CREDENTIALS)

    return Transition(state.model_copy(update={
        "profile": match,
        "is_assessment_complete": match.has_completed_assessment,
    }))


def _logout(state: GameState, intent: Logout, policy: GamificationPolicy) -> Transition:
    # Roster survives a logout
    return Transition(state.model_copy(update={
        "profile": None,
        "current_module": None,
        "attempts": [],
        "is_assessment_complete": False,
    }))


def _reset(state: GameState, intent: Reset, policy: GamificationPolicy) -> Transition:
    return Transition(initial_state())


# ============================================================================
# Progress intents
# ============================================================================

def _grant_xp(state: GameState, intent: GrantXP, policy: GamificationPolicy) -> Transition:
    profile = state.profile
    if profile is None:
        return _unchanged(state, Failure.NO_ACTIVE_PROFILE)

    new_xp = profile.xp + intent.amount
    if intent.amount < 0:
        if policy.xp_validation is XPValidation.REJECT:
            return _unchanged(state, Failure.NEGATIVE_XP_REJECTED)
        if policy.xp_validation is XPValidation.CLAMP:
            new_xp = max(new_xp, 0)

    # level is derived from xp on the model itself
    updated = profile.model_copy(update={"xp": new_xp, "last_activity": policy.clock()})
    return Transition(_replace_profile(state, updated))


def _record_attempt(state: GameState, intent: RecordAttempt, policy: GamificationPolicy) -> Transition:
    return Transition(state.model_copy(update={"attempts": [*state.attempts, intent.attempt]}))


def _unlock_badge(state: GameState, intent: UnlockBadge, policy: GamificationPolicy) -> Transition:
    profile = state.profile
    if profile is None:
        return _unchanged(state, Failure.NO_ACTIVE_PROFILE)
    if policy.deduplicate_badges and intent.badge in profile.badges:
        return _unchanged(state, Failure.DUPLICATE_BADGE)

    updated = profile.model_copy(update={"badges": [*profile.badges, intent.badge]})
    return Transition(_replace_profile(state, updated))


def _select_module(state: GameState, intent: SelectModule, policy: GamificationPolicy) -> Transition:
    return Transition(state.model_copy(update={"current_module": intent.module_id}))


def _complete_assessment(state: GameState, intent: CompleteAssessment, policy: GamificationPolicy) -> Transition:
    profile = state.profile
    if profile is None:
        return _unchanged(state, Failure.NO_ACTIVE_PROFILE)

    updated = profile.model_copy(update={"has_completed_assessment": True})
    return Transition(_replace_profile(state, updated, is_assessment_complete=True))


def _update_daily_streak(state: GameState, intent: UpdateDailyStreak, policy: GamificationPolicy) -> Transition:
    profile = state.profile
    if profile is None:
        return _unchanged(state, Failure.NO_ACTIVE_PROFILE)

    today = today_in_timezone(policy.timezone, policy.clock)
    updated = profile.model_copy(update={
        "daily_login_streak": next_daily_streak(profile.daily_login_streak, profile.last_login_date, today),
        "last_login_date": today,
        "last_activity": policy.clock(),
    })
    return Transition(_replace_profile(state, updated))


def _add_achievement(state: GameState, intent: AddAchievement, policy: GamificationPolicy) -> Transition:
    profile = state.profile
    if profile is None:
        return _unchanged(state, Failure.NO_ACTIVE_PROFILE)

    updated = profile.model_copy(update={"achievements": [*profile.achievements, intent.achievement]})
    return Transition(_replace_profile(state, updated))


def _update_preferences(state: GameState, intent: UpdatePreferences, policy: GamificationPolicy) -> Transition:
    profile = state.profile
    if profile is None:
        return _unchanged(state, Failure.NO_ACTIVE_PROFILE)

    # stored records may carry retired keys, new updates may not
    if not set(intent.preferences) <= set(UserPreferences.model_fields):
        return _unchanged(state, Failure.INVALID_PAYLOAD)

    try:
        merged = UserPreferences.model_validate({**profile.preferences.model_dump(), **intent.preferences})
    except PydanticValidationError:
        return _unchanged(state, Failure.INVALID_PAYLOAD)

    updated = profile.model_copy(update={"preferences": merged})
    return Transition(_replace_profile(state, updated))


# ============================================================================
# Quests & leaderboard
# ============================================================================

def _map_quests(state: GameState, quest_id: str, change: Callable[[Quest], Quest]) -> Optional[GameState]:
    """Apply `change` to matching quests in both lists, None if nothing matched"""
    found = False

    def apply(quests: list[Quest]) -> list[Quest]:
        nonlocal found
        result = []
        for quest in quests:
            if quest.id == quest_id:
                found = True
                quest = change(quest)
            result.append(quest)
        return result

    daily = apply(state.daily_quests)
    weekly = apply(state.weekly_quests)
    if not found:
        return None
    return state.model_copy(update={"daily_quests": daily, "weekly_quests": weekly})


def _complete_quest(state: GameState, intent: CompleteQuest, policy: GamificationPolicy) -> Transition:
    # Progress is not checked against the target
    next_state = _map_quests(state, intent.quest_id, lambda q: q.model_copy(update={"is_completed": True}))
    if next_state is None:
        return _unchanged(state, Failure.QUEST_NOT_FOUND)
    return Transition(next_state)


def _advance_quest(state: GameState, intent: AdvanceQuest, policy: GamificationPolicy) -> Transition:
    if intent.amount <= 0:
        return _unchanged(state, Failure.INVALID_PAYLOAD)

    def advance(quest: Quest) -> Quest:
        progress = min(quest.progress + intent.amount, quest.max_progress)
        progress = max(progress, quest.progress)
        return quest.model_copy(update={
            "progress": progress,
            "is_completed": quest.is_completed or progress >= quest.max_progress,
        })

    next_state = _map_quests(state, intent.quest_id, advance)
    if next_state is None:
        return _unchanged(state, Failure.QUEST_NOT_FOUND)
    return Transition(next_state)


def _assign_quests(state: GameState, intent: AssignQuests, policy: GamificationPolicy) -> Transition:
    return Transition(state.model_copy(update={
        "daily_quests": list(intent.daily),
        "weekly_quests": list(intent.weekly),
    }))


def _update_leaderboard(state: GameState, intent: UpdateLeaderboard, policy: GamificationPolicy) -> Transition:
    update = {"leaderboard": list(intent.entries)}
    if intent.global_stats is not None:
        update["global_stats"] = intent.global_stats
    return Transition(state.model_copy(update=update))


_HANDLERS: Dict[Type[Intent], Handler] = {
    SetActiveProfile: _set_active_profile,
    RegisterProfile: _register_profile,
    Authenticate: _authenticate,
    GrantXP: _grant_xp,
    RecordAttempt: _record_attempt,
    UnlockBadge: _unlock_badge,
    SelectModule: _select_module,
    CompleteAssessment: _complete_assessment,
    UpdateDailyStreak: _update_daily_streak,
    CompleteQuest: _complete_quest,
    AdvanceQuest: _advance_quest,
    AssignQuests: _assign_quests,
    AddAchievement: _add_achievement,
    UpdatePreferences: _update_preferences,
    UpdateLeaderboard: _update_leaderboard,
    Logout: _logout,
    Reset: _reset,
}


def reduce(state: GameState, intent: object, policy: Optional[GamificationPolicy] = None) -> Transition:
    """
    Compute the next state and report why nothing changed, if it didn't

    Args:
        state: current state
        intent: any object; non-intents are treated as unknown
        policy: reducer policy, DEFAULT_POLICY if omitted

    Returns:
        Transition(state, failure)
    """
    handler = _HANDLERS.get(type(intent))
    if handler is None:
        return _unchanged(state, Failure.UNKNOWN_INTENT)
    return handler(state, intent, policy or DEFAULT_POLICY)


def game_reducer(state: GameState, intent: object, policy: Optional[GamificationPolicy] = None) -> GameState:
    """reduce() without the failure side-channel"""
    return reduce(state, intent, policy).state
