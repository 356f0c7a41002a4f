"""Configuration management"""
import logging
import os
from typing import Optional
from dotenv import load_dotenv
import pytz

from habit_tracker.exceptions import ConfigurationError

load_dotenv()

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Calendar
# IANA timezone used to decide what "today" is and to normalize aware datetimes
DEFAULT_TIMEZONE: str = os.getenv("HABIT_TRACKER_TIMEZONE", "UTC")

# Completion rules
ALLOW_FUTURE_COMPLETIONS: bool = os.getenv("ALLOW_FUTURE_COMPLETIONS", "false").lower() == "true"

# Grouping
PINNED_CATEGORY_TITLE: str = os.getenv("PINNED_CATEGORY_TITLE", "Pinned")


# Validation
def validate_config() -> None:
    """Validate configuration values"""
    try:
        pytz.timezone(DEFAULT_TIMEZONE)
    except pytz.exceptions.UnknownTimeZoneError:
        raise ConfigurationError(
            f"Invalid timezone: '{DEFAULT_TIMEZONE}'. "
            f"Use IANA timezone (e.g., 'Europe/Stockholm', 'America/New_York')",
            config_key="HABIT_TRACKER_TIMEZONE"
        )
    if not isinstance(logging.getLevelName(LOG_LEVEL.upper()), int):
        raise ConfigurationError(f"Invalid log level: '{LOG_LEVEL}'", config_key="LOG_LEVEL")
    if not PINNED_CATEGORY_TITLE.strip():
        raise ConfigurationError("PINNED_CATEGORY_TITLE cannot be empty", config_key="PINNED_CATEGORY_TITLE")


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging for host applications and scripts"""
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, (level or LOG_LEVEL).upper())
    )
