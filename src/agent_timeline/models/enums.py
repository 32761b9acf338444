"""Enumeration types for agent-timeline.

This module defines all enum types used throughout the segmentation
engine, including event tags, delegation kinds, lifecycle states and
timeline activity types.
"""

from enum import Enum

__all__ = [
    "EventType",
    "GroupKind",
    "GroupStatus",
    "ActivityType",
    "ActivityStatus",
    "ArtifactCategory",
    "FindingCategory",
]


class EventType(str, Enum):
    """Tag of a conversational log entry.

    Attributes:
        human: A human turn.
        agent_turn: An agent turn, optionally carrying tool invocations.
        result: The outcome of exactly one invocation.
    """

    human = "human"
    agent_turn = "agent_turn"
    result = "result"


class GroupKind(str, Enum):
    """Kind of delegated sub-task.

    Attributes:
        research: Web research sub-agent.
        critique: Report critique sub-agent.
        planning: Research planning sub-agent.
    """

    research = "research"
    critique = "critique"
    planning = "planning"


_STATUS_RANK = {"pending": 0, "in_progress": 1, "completed": 2}


class GroupStatus(str, Enum):
    """Lifecycle of an activity group.

    Statuses are ordered: pending < in_progress < completed.

    Attributes:
        pending: Nothing structured observed yet.
        in_progress: At least one artifact classified, no terminal result.
        completed: Terminal result observed.
    """

    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"

    @property
    def rank(self) -> int:
        """Position of the status in the lifecycle order."""
        return _STATUS_RANK[self.value]


class ActivityType(str, Enum):
    """Type of a timeline activity, used by the renderer to pick a view."""

    research = "research"
    critique = "critique"
    planning = "planning"
    todo = "todo"
    file_write = "file-write"
    file_edit = "file-edit"
    file_update = "file-update"
    search_result = "search-result"
    tool_call = "tool-call"
    unclassified = "unclassified"


class ActivityStatus(str, Enum):
    """Status shown for a timeline activity."""

    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"
    error = "error"


class ArtifactCategory(str, Enum):
    """Bucket an artifact is routed into during a group scan."""

    search_results = "search_results"
    file_reads = "file_reads"
    file_operations = "file_operations"
    critique_outputs = "critique_outputs"
    planning_results = "planning_results"


class FindingCategory(str, Enum):
    """Category of a structured JSON document produced by a critique tool."""

    fact_check = "fact_check"
    structure_evaluation = "structure_evaluation"
    completeness_analysis = "completeness_analysis"
    save_critique = "save_critique"
