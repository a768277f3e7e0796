"""Configuration management"""
import os
from pathlib import Path
from dotenv import load_dotenv

from cyberaware.exceptions import ConfigurationError

load_dotenv()

# Storage
# Flat key-value file standing in for browser local storage
STORAGE_PATH: Path = Path(os.getenv("STORAGE_PATH", "./data/local_storage.json"))
STORAGE_KEY: str = os.getenv("STORAGE_KEY", "cyberaware_registered_users")

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Gamification policy
# IANA zone used to decide what "today" is for daily streaks
STREAK_TIMEZONE: str = os.getenv("STREAK_TIMEZONE", "UTC")
# - 'allow' (default): negative XP grants are applied as-is, no floor
# - 'reject': negative grants are ignored
# - 'clamp': negative grants are applied but XP never drops below zero
XP_VALIDATION: str = os.getenv("XP_VALIDATION", "allow").lower()
DEDUPLICATE_BADGES: bool = os.getenv("DEDUPLICATE_BADGES", "false").lower() == "true"
DEDUPLICATE_RECOMMENDATIONS: bool = os.getenv("DEDUPLICATE_RECOMMENDATIONS", "false").lower() == "true"

# Metrics
ENABLE_METRICS: bool = os.getenv("ENABLE_METRICS", "true").lower() == "true"

XP_VALIDATION_MODES = ("allow", "reject", "clamp")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# Validation
def validate_config() -> None:
    """Validate configuration values"""
    if XP_VALIDATION not in XP_VALIDATION_MODES:
        raise ConfigurationError(
            f"XP_VALIDATION must be one of {', '.join(XP_VALIDATION_MODES)}",
            config_key="XP_VALIDATION",
        )
    if LOG_LEVEL.upper() not in LOG_LEVELS:
        raise ConfigurationError(
            f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}",
            config_key="LOG_LEVEL",
        )
    if not STORAGE_KEY:
        raise ConfigurationError("STORAGE_KEY is required", config_key="STORAGE_KEY")

    from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

    try:
        ZoneInfo(STREAK_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(
            f"STREAK_TIMEZONE '{STREAK_TIMEZONE}' is not a valid IANA zone",
            config_key="STREAK_TIMEZONE",
            cause=e,
        )
