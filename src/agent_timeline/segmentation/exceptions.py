"""Exceptions for the segmentation engine.

Structural anomalies in the log are logged and tolerated. Only violations
of the input contract itself are raised.
"""

from agent_timeline.exceptions import AgentTimelineError

__all__ = ["EventOrderError", "SegmentationError"]


class SegmentationError(AgentTimelineError):
    """Base exception for segmentation errors."""

    pass


class EventOrderError(SegmentationError):
    """Raised when event indices do not match their position in the log.

    The engine requires a chronological, append-only log whose indices
    run 0, 1, 2, ... in order.
    """

    def __init__(self, position: int, index: int) -> None:
        self.position = position
        self.index = index
        super().__init__(
            f"Event at position {position} has index {index}; "
            "indices must equal their position in the log"
        )
