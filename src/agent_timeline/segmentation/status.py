"""Lifecycle status inference for activity groups."""

from agent_timeline.models.enums import GroupStatus

__all__ = ["StatusTracker", "infer_status"]


def infer_status(artifact_count: int, terminal_seen: bool) -> GroupStatus:
    """Derive a group's status from what its scan has observed.

    Args:
        artifact_count: Number of artifacts classified so far.
        terminal_seen: Whether the terminal result was observed.

    Returns:
        completed once the terminal result is seen, in_progress once any
        artifact was classified, pending otherwise.

    """
    if terminal_seen:
        return GroupStatus.completed
    if artifact_count > 0:
        return GroupStatus.in_progress
    return GroupStatus.pending


class StatusTracker:
    """Monotonic status of one group's scan.

    Every observation is recorded in ``history`` so callers can replay how
    the status evolved. The status never regresses.
    """

    def __init__(self) -> None:
        self._artifacts = 0
        self._terminal_seen = False
        self.history: list[GroupStatus] = [GroupStatus.pending]

    @property
    def status(self) -> GroupStatus:
        return self.history[-1]

    def artifact_classified(self) -> GroupStatus:
        """Record one classified artifact."""
        self._artifacts += 1
        return self._advance()

    def terminal_observed(self) -> GroupStatus:
        """Record the terminal result."""
        self._terminal_seen = True
        return self._advance()

    def _advance(self) -> GroupStatus:
        inferred = infer_status(self._artifacts, self._terminal_seen)
        if inferred.rank > self.status.rank:
            self.history.append(inferred)
        return self.status
