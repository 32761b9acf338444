"""ActivityGroup model for agent-timeline.

An ActivityGroup describes one delegated sub-task invocation and the span
of the log attributed to it.
"""

from pydantic import Field, model_validator

from agent_timeline.models.artifacts import ArtifactBuckets
from agent_timeline.models.base import FrozenSchema
from agent_timeline.models.enums import GroupKind, GroupStatus

__all__ = ["ActivityGroup"]


class ActivityGroup(FrozenSchema):
    """One delegated sub-task and everything folded into it.

    Attributes:
        kind: Delegation kind of the group.
        task_description: Description argument of the delegating invocation.
        delegation_correlation_id: Correlation id of the delegating invocation.
        start_index: Index of the agent turn holding the delegating invocation.
        end_index: Maximum index of any event folded into the group.
        status: Lifecycle status inferred during the scan.
        artifacts: Typed artifact buckets.
        final_payload: Terminal result text or fallback narrative, if any.
        narrative: Substantive agent text accumulated during the scan.
        event_indices: Indices owned by this group, in log order.

    """

    kind: GroupKind
    task_description: str
    delegation_correlation_id: str
    start_index: int = Field(ge=0)
    end_index: int = Field(ge=0)
    status: GroupStatus = GroupStatus.pending
    artifacts: ArtifactBuckets = Field(default_factory=ArtifactBuckets)
    final_payload: str | None = None
    narrative: tuple[str, ...] = ()
    event_indices: tuple[int, ...] = ()

    @model_validator(mode="after")
    def _check_span(self) -> "ActivityGroup":
        if self.end_index < self.start_index:
            raise ValueError(
                f"end_index {self.end_index} precedes start_index {self.start_index}"
            )
        return self

    def spans(self, index: int) -> bool:
        """Return True if ``index`` lies within the group's inclusive span."""
        return self.start_index <= index <= self.end_index

    @property
    def is_completed(self) -> bool:
        """Whether the terminal result was observed."""
        return self.status == GroupStatus.completed
