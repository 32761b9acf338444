"""Exceptions for the CLI module.

This module defines exceptions specific to CLI operations.
"""

from agent_timeline.exceptions import AgentTimelineError

__all__ = [
    "CLIError",
    "CommandError",
]


class CLIError(AgentTimelineError):
    """Base exception for CLI-related errors."""

    pass


class CommandError(CLIError):
    """Raised when a command execution fails."""

    pass
