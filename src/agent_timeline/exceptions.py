"""Base exceptions for agent-timeline.

This module defines the root exception hierarchy for the package. All
domain-specific exceptions inherit from AgentTimelineError.
"""

__all__ = ["AgentTimelineError"]


class AgentTimelineError(Exception):
    """Base exception for all agent-timeline errors.

    Provides a common exception type for clients to catch package errors.
    """

    pass
