"""Generic delegation scanner shared by the research, critique and planning kinds.

For every delegating invocation of a kind, the scanner walks forward from
the delegating agent turn and folds events into an ActivityGroup:

- A result whose correlation id matches the delegation is the terminal
  signal. Its content becomes the final payload unless it is shorter than
  the kind's terminal threshold and fallback narrative was accumulated,
  in which case the narrative wins. Either way the group completes and
  the scan stops.
- Any other result is classified with the kind's artifact table. A
  classified result becomes an artifact and extends the span.
- An agent turn carrying a new delegation of the same kind stops the scan
  without being folded in.
- An agent turn with substantive text adds to the fallback narrative and
  extends the span.
- Everything else is skipped.

Without a terminal result the group ends at the last folded event with the
narrative (if any) as its payload.
"""

from collections.abc import Iterable, Sequence

import structlog

from agent_timeline.logging_config import get_logger
from agent_timeline.models.artifacts import ArtifactBuckets, FileRead
from agent_timeline.models.enums import ArtifactCategory
from agent_timeline.models.events import AgentTurnEvent, Event, Invocation, ResultEvent
from agent_timeline.models.groups import ActivityGroup
from agent_timeline.segmentation.classifiers import ClassificationContext
from agent_timeline.segmentation.correlation import CorrelationIndex
from agent_timeline.segmentation.profiles import KindProfile
from agent_timeline.segmentation.status import StatusTracker

__all__ = [
    "NARRATIVE_SEPARATOR",
    "group_delegations",
    "is_correlation_in_groups",
    "is_index_in_groups",
    "select_final_payload",
]

NARRATIVE_SEPARATOR = "\n\n"

_log = get_logger(__name__)


def select_final_payload(
    terminal_content: str | None,
    narrative: Sequence[str],
    min_terminal_length: int,
) -> str | None:
    """Choose between the terminal result and the fallback narrative.

    Precedence:
    1. A terminal result shorter than ``min_terminal_length`` yields to
       non-empty narrative.
    2. Any other non-blank terminal result is used as is.
    3. Narrative is used when there is no usable terminal result.

    Args:
        terminal_content: Content of the terminal result, None if not seen.
        narrative: Accumulated narrative fragments.
        min_terminal_length: Stub threshold of the kind.

    Returns:
        The payload, or None when neither source has content.

    """
    fallback = NARRATIVE_SEPARATOR.join(narrative) if narrative else None
    if terminal_content is None or not terminal_content.strip():
        return fallback
    if len(terminal_content) < min_terminal_length and fallback:
        return fallback
    return terminal_content


class _ArtifactCollector:
    """Append-only buckets for one scan."""

    def __init__(self) -> None:
        self._buckets: dict[ArtifactCategory, list] = {c: [] for c in ArtifactCategory}

    @property
    def file_reads(self) -> list[FileRead]:
        return self._buckets[ArtifactCategory.file_reads]

    def add(self, category: ArtifactCategory, value: object) -> None:
        self._buckets[category].append(value)

    def freeze(self) -> ArtifactBuckets:
        return ArtifactBuckets(
            **{category.value: tuple(items) for category, items in self._buckets.items()}
        )


def _scan_delegation(
    events: Sequence[Event],
    start_index: int,
    delegation: Invocation,
    profile: KindProfile,
    index: CorrelationIndex,
    claimed: set[int],
    log: structlog.stdlib.BoundLogger,
) -> ActivityGroup:
    """Fold the events following one delegation into a group."""
    tracker = StatusTracker()
    collector = _ArtifactCollector()
    narrative: list[str] = []
    owned: list[int] = [] if start_index in claimed else [start_index]
    end_index = start_index
    terminal_content: str | None = None
    terminal_seen = False

    for event in events[start_index + 1 :]:
        position = event.index
        if position in claimed:
            continue

        if isinstance(event, ResultEvent):
            if event.correlation_id == delegation.correlation_id:
                terminal_seen = True
                terminal_content = event.content
                end_index = position
                owned.append(position)
                tracker.terminal_observed()
                break

            context = ClassificationContext(
                index=index,
                start_index=start_index,
                file_reads=tuple(collector.file_reads),
                logger=log,
            )
            classification = profile.classifier.classify(event, context)
            if classification is not None:
                collector.add(classification.category, classification.value)
                end_index = position
                owned.append(position)
                tracker.artifact_classified()
            continue

        if isinstance(event, AgentTurnEvent):
            if profile.delegations(event):
                log.debug(
                    "scan_stopped_at_new_delegation",
                    kind=profile.kind.value,
                    correlation_id=delegation.correlation_id,
                    index=position,
                )
                break
            if profile.is_substantive(event.content):
                narrative.append(event.content)
                end_index = position
                owned.append(position)

    payload = select_final_payload(
        terminal_content if terminal_seen else None,
        narrative,
        profile.min_terminal_length,
    )

    if terminal_seen and narrative and payload != terminal_content:
        log.debug(
            "terminal_result_replaced_by_narrative",
            kind=profile.kind.value,
            correlation_id=delegation.correlation_id,
            terminal_length=len(terminal_content or ""),
        )

    return ActivityGroup(
        kind=profile.kind,
        task_description=str(delegation.arguments.get("description") or ""),
        delegation_correlation_id=delegation.correlation_id,
        start_index=start_index,
        end_index=end_index,
        status=tracker.status,
        artifacts=collector.freeze(),
        final_payload=payload,
        narrative=tuple(narrative),
        event_indices=tuple(owned),
    )


def group_delegations(
    events: Sequence[Event],
    profile: KindProfile,
    index: CorrelationIndex | None = None,
    logger: structlog.stdlib.BoundLogger | None = None,
) -> list[ActivityGroup]:
    """Build one group per delegating invocation of ``profile.kind``.

    Groups are returned in the order their delegating invocations appear.
    Several delegations in one agent turn share a start index; the first
    one owns the turn and every later sibling skips indices an earlier
    group of the same kind already owns.

    Args:
        events: The full event log.
        profile: Kind configuration.
        index: Prebuilt correlation index. Built from ``events`` when omitted.
        logger: Logger for diagnostics.

    Returns:
        The groups of this kind.

    Raises:
        EventOrderError: If indices do not match positions.

    """
    log = logger or _log
    if index is None:
        index = CorrelationIndex.build(events, logger=log)

    groups: list[ActivityGroup] = []
    claimed: set[int] = set()

    for event in events:
        if not isinstance(event, AgentTurnEvent):
            continue
        for delegation in profile.delegations(event):
            group = _scan_delegation(
                events, event.index, delegation, profile, index, claimed, log
            )
            claimed.update(group.event_indices)
            groups.append(group)

    log.debug(
        "delegations_grouped",
        kind=profile.kind.value,
        groups=len(groups),
        completed=sum(1 for g in groups if g.is_completed),
    )
    return groups


def is_index_in_groups(position: int, groups: Iterable[ActivityGroup]) -> bool:
    """Return True if ``position`` lies within any group's span."""
    return any(group.spans(position) for group in groups)


def is_correlation_in_groups(correlation_id: str, groups: Iterable[ActivityGroup]) -> bool:
    """Return True if a file read or file operation of any group carries the id."""
    return any(
        any(read.correlation_id == correlation_id for read in group.artifacts.file_reads)
        or any(op.correlation_id == correlation_id for op in group.artifacts.file_operations)
        for group in groups
    )
