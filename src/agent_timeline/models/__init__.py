"""Models module for agent-timeline.

This module contains data models organized by domain:
- base: BaseSchema and FrozenSchema for Pydantic models
- enums: EventType, GroupKind, GroupStatus, ActivityType, ActivityStatus
- events: HumanEvent, AgentTurnEvent, ResultEvent, Invocation
- artifacts: typed artifact records and ArtifactBuckets
- groups: ActivityGroup
- timeline: TimelineActivity and its payloads
- exceptions: ModelValidationError
"""

from agent_timeline.models.artifacts import (
    Artifact,
    ArtifactBuckets,
    CritiqueToolOutput,
    FileOperation,
    FileRead,
    PlanningToolResult,
    SearchResultBatch,
    StructuredFinding,
)
from agent_timeline.models.base import BaseSchema, FrozenSchema
from agent_timeline.models.enums import (
    ActivityStatus,
    ActivityType,
    ArtifactCategory,
    EventType,
    FindingCategory,
    GroupKind,
    GroupStatus,
)
from agent_timeline.models.events import (
    AgentTurnEvent,
    Event,
    EventAdapter,
    EventListAdapter,
    HumanEvent,
    Invocation,
    ResultEvent,
    parse_events,
)
from agent_timeline.models.exceptions import ModelValidationError
from agent_timeline.models.groups import ActivityGroup
from agent_timeline.models.timeline import (
    ActivityPayload,
    EventPayload,
    GroupPayload,
    PlanningStepPayload,
    TimelineActivity,
)

__all__ = [
    "ActivityGroup",
    "ActivityPayload",
    "ActivityStatus",
    "ActivityType",
    "AgentTurnEvent",
    "Artifact",
    "ArtifactBuckets",
    "ArtifactCategory",
    "BaseSchema",
    "CritiqueToolOutput",
    "Event",
    "EventAdapter",
    "EventListAdapter",
    "EventPayload",
    "EventType",
    "FileOperation",
    "FileRead",
    "FindingCategory",
    "FrozenSchema",
    "GroupKind",
    "GroupPayload",
    "GroupStatus",
    "HumanEvent",
    "Invocation",
    "ModelValidationError",
    "PlanningStepPayload",
    "PlanningToolResult",
    "ResultEvent",
    "SearchResultBatch",
    "StructuredFinding",
    "TimelineActivity",
    "parse_events",
]
