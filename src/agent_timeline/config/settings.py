"""Application settings using pydantic-settings.

This module provides environment variable support for configuration
using pydantic-settings. Settings can be overridden via environment
variables with the appropriate prefix.

Environment Variables:
    AGENT_TIMELINE_GROUPER_MIN_NARRATIVE_LENGTH: Minimum agent text length kept as narrative
    AGENT_TIMELINE_GROUPER_MIN_TERMINAL_LENGTH: Terminal results shorter than this are stubs
    AGENT_TIMELINE_GROUPER_ACKNOWLEDGEMENT_PREFIXES: JSON list of boilerplate prefixes
    AGENT_TIMELINE_GROUPER_DELEGATION_TOOL_NAMES: JSON list of delegation tool names
    AGENT_TIMELINE_LOG_VERBOSE: Enable debug logging
    AGENT_TIMELINE_LOG_JSON_OUTPUT: Emit JSON log lines
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from agent_timeline.config.defaults import (
    DEFAULT_ACKNOWLEDGEMENT_PREFIXES,
    DEFAULT_DELEGATION_TOOL_NAMES,
    DEFAULT_MIN_NARRATIVE_LENGTH,
    DEFAULT_MIN_TERMINAL_LENGTH,
    MAX_LENGTH_CEILING,
    MIN_LENGTH_FLOOR,
)

__all__ = [
    "GrouperSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
]


class GrouperSettings(BaseSettings):
    """Settings shared by the per-kind groupers.

    Attributes:
        min_narrative_length: Agent text must be longer than this to count
            as fallback narrative.
        min_terminal_length: Terminal results shorter than this are replaced
            by fallback narrative when some was accumulated.
        acknowledgement_prefixes: Agent text starting with one of these is
            boilerplate and never kept as narrative.
        delegation_tool_names: Tool names that hand work to a sub-agent.

    """

    model_config = SettingsConfigDict(
        env_prefix="AGENT_TIMELINE_GROUPER_",
        extra="ignore",
    )

    min_narrative_length: int = Field(
        default=DEFAULT_MIN_NARRATIVE_LENGTH,
        ge=MIN_LENGTH_FLOOR,
        le=MAX_LENGTH_CEILING,
        description="Agent text must be longer than this to count as narrative",
    )
    min_terminal_length: int = Field(
        default=DEFAULT_MIN_TERMINAL_LENGTH,
        ge=MIN_LENGTH_FLOOR,
        le=MAX_LENGTH_CEILING,
        description="Terminal results shorter than this are treated as stubs",
    )
    acknowledgement_prefixes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ACKNOWLEDGEMENT_PREFIXES),
        description="Boilerplate prefixes excluded from narrative",
    )
    delegation_tool_names: list[str] = Field(
        default_factory=lambda: list(DEFAULT_DELEGATION_TOOL_NAMES),
        min_length=1,
        description="Tool names that delegate work to a sub-agent",
    )


class LoggingSettings(BaseSettings):
    """Settings for diagnostic logging.

    Attributes:
        verbose: Enable debug-level output.
        json_output: Emit JSON lines instead of console output.

    """

    model_config = SettingsConfigDict(
        env_prefix="AGENT_TIMELINE_LOG_",
        extra="ignore",
    )

    verbose: bool = Field(default=False, description="Enable debug logging")
    json_output: bool = Field(default=False, description="Emit JSON log lines")


class Settings(BaseSettings):
    """Root settings container.

    Aggregates all subsystem settings into a single configuration object.
    Use get_settings() to access the cached singleton instance.

    Attributes:
        grouper: Grouper thresholds and delegation tool names.
        logging: Diagnostic logging settings.

    """

    model_config = SettingsConfigDict(
        env_prefix="AGENT_TIMELINE_",
        extra="ignore",
    )

    grouper: GrouperSettings = Field(default_factory=GrouperSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached settings singleton.

    Returns:
        The Settings instance with values from environment variables.

    """
    return Settings()
