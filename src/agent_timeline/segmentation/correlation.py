"""Correlation index linking invocations to their results.

Built once per engine call in a single forward pass. Every grouper and
the merge stage resolve correlation ids through it.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from agent_timeline.logging_config import get_logger
from agent_timeline.models.events import AgentTurnEvent, Event, Invocation, ResultEvent
from agent_timeline.segmentation.exceptions import EventOrderError

__all__ = ["CorrelationIndex", "InvocationRecord", "check_event_order"]


@dataclass(frozen=True)
class InvocationRecord:
    """An invocation together with the index of the agent turn carrying it."""

    invocation: Invocation
    owner_index: int


def check_event_order(events: Sequence[Event]) -> None:
    """Verify that every event's index equals its position.

    Raises:
        EventOrderError: On the first event that breaks the ordering.

    """
    for position, event in enumerate(events):
        if event.index != position:
            raise EventOrderError(position, event.index)


class CorrelationIndex:
    """Lookup from correlation id to invocation and result.

    Duplicate invocation ids keep the later invocation (last write wins).
    Duplicate result ids keep the first result (first match wins). Both are
    logged as data-quality warnings, as are results whose invocation was
    never seen.
    """

    def __init__(
        self,
        invocations: dict[str, InvocationRecord],
        results: dict[str, ResultEvent],
    ) -> None:
        self._invocations = invocations
        self._results = results

    @classmethod
    def build(
        cls,
        events: Sequence[Event],
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> "CorrelationIndex":
        """Index every invocation and result of the log.

        Args:
            events: The full event log.
            logger: Logger for data-quality warnings.

        Returns:
            The populated index.

        Raises:
            EventOrderError: If indices do not match positions.

        """
        log = logger or get_logger(__name__)
        check_event_order(events)

        invocations: dict[str, InvocationRecord] = {}
        results: dict[str, ResultEvent] = {}

        for event in events:
            if isinstance(event, AgentTurnEvent):
                for invocation in event.invocations:
                    previous = invocations.get(invocation.correlation_id)
                    if previous is not None:
                        log.warning(
                            "duplicate_invocation_id",
                            correlation_id=invocation.correlation_id,
                            first_index=previous.owner_index,
                            index=event.index,
                        )
                    invocations[invocation.correlation_id] = InvocationRecord(
                        invocation=invocation, owner_index=event.index
                    )
            elif isinstance(event, ResultEvent):
                if event.correlation_id in results:
                    log.warning(
                        "duplicate_result_id",
                        correlation_id=event.correlation_id,
                        kept_index=results[event.correlation_id].index,
                        index=event.index,
                    )
                    continue
                if event.correlation_id not in invocations:
                    log.warning(
                        "orphan_result",
                        correlation_id=event.correlation_id,
                        producer=event.producer_name,
                        index=event.index,
                    )
                results[event.correlation_id] = event

        return cls(invocations, results)

    def invocation(self, correlation_id: str) -> InvocationRecord | None:
        """Return the invocation record for ``correlation_id``, if any."""
        return self._invocations.get(correlation_id)

    def result(self, correlation_id: str) -> ResultEvent | None:
        """Return the first result for ``correlation_id``, if any."""
        return self._results.get(correlation_id)

    def __contains__(self, correlation_id: object) -> bool:
        return correlation_id in self._invocations

    def __len__(self) -> int:
        return len(self._invocations)
