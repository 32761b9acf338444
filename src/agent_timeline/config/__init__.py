"""Configuration module for agent-timeline.

This module provides centralized settings via pydantic-settings and a
YAML loader for per-kind grouper overrides.
"""

from agent_timeline.config.exceptions import ConfigurationError
from agent_timeline.config.loader import ProfileOverride, load_profile_overrides
from agent_timeline.config.settings import (
    GrouperSettings,
    LoggingSettings,
    Settings,
    get_settings,
)

__all__ = [
    "ConfigurationError",
    "get_settings",
    "GrouperSettings",
    "load_profile_overrides",
    "LoggingSettings",
    "ProfileOverride",
    "Settings",
]
