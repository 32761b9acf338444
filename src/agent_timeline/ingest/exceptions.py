"""Exceptions for event log ingestion."""

from agent_timeline.exceptions import AgentTimelineError

__all__ = ["EventLogError"]


class EventLogError(AgentTimelineError):
    """Raised when an event log cannot be read or converted."""

    pass
