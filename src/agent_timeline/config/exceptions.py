"""Exceptions for config module.

This module defines exceptions related to configuration loading,
parsing, and validation errors.
"""

from agent_timeline.exceptions import AgentTimelineError

__all__ = ["ConfigurationError"]


class ConfigurationError(AgentTimelineError):
    """Base exception for configuration-related errors."""

    pass
