"""
Prometheus metrics definitions for cyberaware.

This module defines all metrics collected by the application, organized by category:
- Store metrics: Intents dispatched and their outcome
- Storage metrics: Roster persistence failures
- Gamification metrics: XP, badges and achievements awarded

There is no HTTP server in this package; a host application may expose the
default registry with prometheus_client.start_http_server().
"""

import logging
import sys
from prometheus_client import Counter, Info

from cyberaware import __version__
from cyberaware.config import ENABLE_METRICS

logger = logging.getLogger(__name__)

# =============================================================================
# Store Metrics
# =============================================================================

intents_total = Counter(
    "cyberaware_intents_total",
    "Total intents dispatched to the game store",
    ["intent", "outcome"],  # outcome: applied/unchanged/<failure reason>
)

# =============================================================================
# Storage Metrics
# =============================================================================

storage_errors_total = Counter(
    "cyberaware_storage_errors_total",
    "Total swallowed storage failures",
    ["operation"],  # operation: read/write
)

roster_saves_total = Counter(
    "cyberaware_roster_saves_total",
    "Total successful roster writes",
)

# =============================================================================
# Gamification Metrics
# =============================================================================

xp_awarded_total = Counter(
    "cyberaware_xp_awarded_total",
    "Total XP awarded",
    ["source"],  # source: challenge/daily_reward/spin_wheel/quick_quiz/quest
)

badges_unlocked_total = Counter(
    "cyberaware_badges_unlocked_total",
    "Total badges unlocked",
    ["badge"],
)

achievements_recorded_total = Counter(
    "cyberaware_achievements_recorded_total",
    "Total achievements recorded",
    ["achievement_type"],
)

# =============================================================================
# Application Info
# =============================================================================

app_info = Info(
    "cyberaware_app",
    "Application information",
)


def init_metrics():
    """
    Initialize metrics with application information.

    This should be called once at application startup to set
    static metadata about the application.
    """
    app_info.info(
        {
            "version": __version__,
            "python_version": f"{sys.version_info.major}.{sys.version_info.minor}",
        }
    )

    logger.info("Prometheus metrics initialized")


# =============================================================================
# Helper Functions
# =============================================================================


def record_intent(intent_name: str, outcome: str) -> None:
    """Count a dispatched intent, unless metrics are disabled"""
    if ENABLE_METRICS:
        intents_total.labels(intent=intent_name, outcome=outcome).inc()


def record_storage_error(operation: str) -> None:
    if ENABLE_METRICS:
        storage_errors_total.labels(operation=operation).inc()


def record_roster_save() -> None:
    if ENABLE_METRICS:
        roster_saves_total.inc()


def record_xp(source: str, amount: int) -> None:
    """
    Count awarded XP.

    Prometheus counters only go up, so non-positive grants are skipped.
    """
    if ENABLE_METRICS and amount > 0:
        xp_awarded_total.labels(source=source).inc(amount)


def record_badge(badge: str) -> None:
    if ENABLE_METRICS:
        badges_unlocked_total.labels(badge=badge).inc()


def record_achievement(achievement_type: str) -> None:
    if ENABLE_METRICS:
        achievements_recorded_total.labels(achievement_type=achievement_type).inc()
