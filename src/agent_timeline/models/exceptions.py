"""Exceptions for models module.

This module defines exceptions related to model validation
and data integrity errors.
"""

from agent_timeline.exceptions import AgentTimelineError

__all__ = ["ModelValidationError"]


class ModelValidationError(AgentTimelineError):
    """Base exception for model validation errors."""

    pass
