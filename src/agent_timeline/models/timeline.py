"""Timeline activity models produced by the merge stage.

A TimelineActivity is either a kind aggregate (all groups of one
delegation kind), a planning mini activity, or one classified residual
event.
"""

from typing import Annotated, Any, Literal

from pydantic import Field

from agent_timeline.models.artifacts import PlanningToolResult
from agent_timeline.models.base import FrozenSchema
from agent_timeline.models.enums import ActivityStatus, ActivityType, GroupKind
from agent_timeline.models.events import AgentTurnEvent, Invocation, ResultEvent
from agent_timeline.models.groups import ActivityGroup

__all__ = [
    "ActivityPayload",
    "EventPayload",
    "GroupPayload",
    "PlanningStepPayload",
    "TimelineActivity",
]


class GroupPayload(FrozenSchema):
    """All groups of one kind, rendered as a single timeline entry."""

    type: Literal["group"] = "group"
    kind: GroupKind
    groups: tuple[ActivityGroup, ...]


class PlanningStepPayload(FrozenSchema):
    """One planning tool result surfaced as a mini timeline entry."""

    type: Literal["planning_step"] = "planning_step"
    group_position: int
    step: PlanningToolResult


class EventPayload(FrozenSchema):
    """A single residual event with whatever the classifier extracted.

    Attributes:
        event: The residual agent turn or result.
        invocation: The invocation the activity describes, if any.
        result: The result correlated with ``invocation``, if seen.
        details: Classifier-specific extras (file name, query, results).

    """

    type: Literal["event"] = "event"
    event: AgentTurnEvent | ResultEvent
    invocation: Invocation | None = None
    result: ResultEvent | None = None
    details: dict[str, Any] = Field(default_factory=dict)


ActivityPayload = Annotated[
    GroupPayload | PlanningStepPayload | EventPayload,
    Field(discriminator="type"),
]


class TimelineActivity(FrozenSchema):
    """An entry of the merged timeline.

    Attributes:
        id: Stable anchor identifier.
        order: Position in the merged timeline.
        source_index: Index of the first contributing event.
        kind: Activity type.
        title: Display title.
        status: Display status.
        payload: Rendered group or classified event.
        is_mini: Whether the entry is a compact sub-item.

    """

    id: str
    order: int = Field(ge=0)
    source_index: int = Field(ge=0)
    kind: ActivityType
    title: str
    status: ActivityStatus
    payload: ActivityPayload
    is_mini: bool = False
