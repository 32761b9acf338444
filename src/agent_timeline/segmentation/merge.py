"""Timeline merge: kind aggregates plus individually classified residual events.

Every index covered by a group span of any kind is processed. Each kind
with at least one group contributes one aggregate activity (planning also
contributes one mini activity per planning step). Every other agent turn
and result becomes its own activity, classified by tool name. A single
event that cannot be classified degrades to ``unclassified``; the merge
never fails on one bad event.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import structlog
from pydantic import ValidationError

from agent_timeline.logging_config import get_logger
from agent_timeline.models.enums import ActivityStatus, ActivityType, GroupKind
from agent_timeline.models.events import (
    AgentTurnEvent,
    Event,
    HumanEvent,
    Invocation,
    ResultEvent,
)
from agent_timeline.models.groups import ActivityGroup
from agent_timeline.models.timeline import (
    ActivityPayload,
    EventPayload,
    GroupPayload,
    PlanningStepPayload,
    TimelineActivity,
)
from agent_timeline.segmentation.classifiers import parse_json_object
from agent_timeline.segmentation.correlation import CorrelationIndex
from agent_timeline.segmentation.profiles import KindProfile, default_profiles

__all__ = [
    "activity_type_from_tool",
    "extract_file_name",
    "merge_timeline",
    "processed_indices",
]

TODO_TOOLS = frozenset({"write_todos", "TodoWrite"})
FILE_TOOLS = frozenset({"Write", "Edit", "MultiEdit", "write_file", "edit_file"})
CREATE_TOOLS = frozenset({"Write", "write_file"})
FILE_UPDATE_TOOLS = frozenset({"file_update_notification", "collaborative_file_update"})
SEARCH_PROVIDERS = {
    "tavily_search": "Tavily",
    "internet_search": "Tavily",
    "exa_search": "Exa",
}

PLANNING_STEPS = (
    ("topic_analysis", "topic-analysis", "Topic Analysis"),
    ("scope_estimation", "scope-estimation", "Scope Estimation"),
    ("plan_optimization", "plan-optimization", "Plan Optimization"),
)

# Sort ranks for entries sharing a source index
_RANK_AGGREGATE = 0
_RANK_MINI = 1
_RANK_RESIDUAL = 2

_DEGRADABLE_ERRORS = (ValueError, TypeError, KeyError, AttributeError, ValidationError)

_log = get_logger(__name__)


@dataclass(frozen=True)
class _Draft:
    sort_key: tuple[int, int, int, int]
    id: str
    kind: ActivityType
    title: str
    status: ActivityStatus
    payload: ActivityPayload
    is_mini: bool = False

    @property
    def source_index(self) -> int:
        return self.sort_key[0]


def extract_file_name(args: Mapping[str, Any]) -> str:
    """Return the file an invocation targets, or ``Unknown file``."""
    for key in ("file_path", "fileName", "file_name"):
        if args.get(key):
            return str(args[key])
    return "Unknown file"


def activity_type_from_tool(tool_name: str, args: Mapping[str, Any] | None = None) -> ActivityType:
    """Map a tool name (and delegation arguments) to a generic activity type."""
    name = tool_name.lower()
    subagent = (args or {}).get("subagent_type")

    if "research" in name or subagent == "research-agent":
        return ActivityType.research
    if "critique" in name or subagent == "critique-agent":
        return ActivityType.critique
    if "todo" in name or "task" in name:
        return ActivityType.todo
    if "write" in name or "create" in name:
        return ActivityType.file_write
    if "edit" in name or "modify" in name:
        return ActivityType.file_edit
    if "update" in name or "collaborat" in name:
        return ActivityType.file_update
    if "search" in name:
        return ActivityType.search_result
    return ActivityType.tool_call


def processed_indices(groups_by_kind: Mapping[GroupKind, Sequence[ActivityGroup]]) -> set[int]:
    """Union of every group's inclusive span across all kinds."""
    processed: set[int] = set()
    for groups in groups_by_kind.values():
        for group in groups:
            processed.update(range(group.start_index, group.end_index + 1))
    return processed


def _invocation_status(result: ResultEvent | None) -> ActivityStatus:
    if result is None:
        return ActivityStatus.in_progress
    if result.is_error:
        return ActivityStatus.error
    return ActivityStatus.completed


def _search_payload(content: str) -> dict[str, Any] | None:
    payload = parse_json_object(content)
    if payload is None or not isinstance(payload.get("results"), list):
        return None
    return payload


def _search_details(payload: dict[str, Any]) -> dict[str, Any]:
    return {
        "query": payload.get("query") or "",
        "results": payload["results"],
        "response_time": payload.get("response_time"),
    }


def _aggregate_drafts(
    groups_by_kind: Mapping[GroupKind, Sequence[ActivityGroup]],
    profiles: Mapping[GroupKind, KindProfile],
) -> list[_Draft]:
    drafts: list[_Draft] = []
    for kind, profile in profiles.items():
        groups = tuple(groups_by_kind.get(kind, ()))
        if not groups:
            continue
        first_index = min(group.start_index for group in groups)
        drafts.append(
            _Draft(
                sort_key=(first_index, _RANK_AGGREGATE, profile.timeline_offset, 0),
                id=profile.activity_id,
                kind=profile.activity_type,
                title=profile.title,
                status=ActivityStatus(groups[0].status.value),
                payload=GroupPayload(kind=kind, groups=groups),
            )
        )

        if kind != GroupKind.planning:
            continue
        for position, group in enumerate(groups):
            for tool_name, slug, title in PLANNING_STEPS:
                steps = [
                    step
                    for step in group.artifacts.planning_results
                    if step.tool_name == tool_name and step.result is not None
                ]
                if not steps:
                    continue
                step = steps[-1]
                drafts.append(
                    _Draft(
                        sort_key=(step.index, _RANK_MINI, profile.timeline_offset, 0),
                        id=f"planner-{position}-{slug}",
                        kind=profile.activity_type,
                        title=title,
                        status=ActivityStatus.completed,
                        payload=PlanningStepPayload(group_position=position, step=step),
                        is_mini=True,
                    )
                )
    return drafts


def _invocation_draft(
    event: AgentTurnEvent,
    position: int,
    invocation: Invocation,
    index: CorrelationIndex,
) -> _Draft:
    args = invocation.arguments
    result = index.result(invocation.correlation_id)
    status = _invocation_status(result)
    sort_key = (event.index, _RANK_RESIDUAL, 0, position)
    name = invocation.name

    def draft(activity_id: str, kind: ActivityType, title: str, **details: Any) -> _Draft:
        return _Draft(
            sort_key=sort_key,
            id=activity_id,
            kind=kind,
            title=title,
            status=status,
            payload=EventPayload(
                event=event, invocation=invocation, result=result, details=details
            ),
        )

    if name in TODO_TOOLS and isinstance(args.get("todos"), list):
        return draft(
            f"todo-{event.index}-{position}",
            ActivityType.todo,
            "Task Progress",
            todos=args["todos"],
        )

    if name in FILE_TOOLS:
        file_name = extract_file_name(args)
        verb = "Created" if name in CREATE_TOOLS else "Modified"
        return draft(
            f"file-{event.index}-{position}",
            activity_type_from_tool(name, args),
            f"{verb}: {file_name}",
            file_name=file_name,
        )

    if name in FILE_UPDATE_TOOLS:
        file_name = args.get("file_name") or args.get("fileName") or "Unknown file"
        return draft(
            f"file-update-{event.index}-{position}",
            ActivityType.file_update,
            f"File Update: {file_name}",
            file_name=file_name,
            change_type=args.get("change_type") or args.get("changeType") or "modified",
        )

    if name in SEARCH_PROVIDERS and result is not None and not result.is_error:
        payload = _search_payload(result.content)
        if payload is not None:
            details = _search_details(payload)
            return draft(
                f"search-{event.index}-{position}",
                ActivityType.search_result,
                f"{SEARCH_PROVIDERS[name]} Search: {details['query'] or 'Unknown query'}",
                **details,
            )

    return draft(f"tool-{event.index}-{position}", ActivityType.tool_call, name)


def _result_draft(event: ResultEvent, index: CorrelationIndex) -> _Draft:
    record = index.invocation(event.correlation_id)
    producer = event.producer_name or (record.invocation.name if record else "")
    sort_key = (event.index, _RANK_RESIDUAL, 0, 0)

    if producer in SEARCH_PROVIDERS and not event.is_error:
        payload = _search_payload(event.content)
        if payload is not None:
            details = _search_details(payload)
            return _Draft(
                sort_key=sort_key,
                id=f"search-{event.index}",
                kind=ActivityType.search_result,
                title=f"{SEARCH_PROVIDERS[producer]} Search: {details['query'] or 'Unknown query'}",
                status=ActivityStatus.completed,
                payload=EventPayload(
                    event=event,
                    invocation=record.invocation if record else None,
                    result=event,
                    details=details,
                ),
            )

    return _unclassified_draft(event, title=producer or "Tool result")


def _unclassified_draft(event: AgentTurnEvent | ResultEvent, title: str | None = None) -> _Draft:
    if isinstance(event, ResultEvent):
        activity_id = f"result-{event.index}"
        status = ActivityStatus.error if event.is_error else ActivityStatus.completed
        default_title = event.producer_name or "Tool result"
    else:
        activity_id = f"message-{event.index}"
        status = ActivityStatus.completed
        default_title = "Agent message"
    return _Draft(
        sort_key=(event.index, _RANK_RESIDUAL, 0, 0),
        id=activity_id,
        kind=ActivityType.unclassified,
        title=title or default_title,
        status=status,
        payload=EventPayload(event=event),
    )


def merge_timeline(
    events: Sequence[Event],
    groups_by_kind: Mapping[GroupKind, Sequence[ActivityGroup]],
    profiles: Mapping[GroupKind, KindProfile] | None = None,
    index: CorrelationIndex | None = None,
    logger: structlog.stdlib.BoundLogger | None = None,
) -> list[TimelineActivity]:
    """Combine kind aggregates and residual events into one ordered timeline.

    Args:
        events: The full event log.
        groups_by_kind: Groups produced by the per-kind groupers.
        profiles: Kind profiles providing ids, titles and tie-break offsets.
        index: Prebuilt correlation index. Built from ``events`` when omitted.
        logger: Logger for degraded events.

    Returns:
        Activities ordered by source index; aggregates sort before the
        residual activity that follows them, and ``order`` is the final
        position.

    Raises:
        EventOrderError: If indices do not match positions.

    """
    log = logger or _log
    profiles = profiles or default_profiles()
    if index is None:
        index = CorrelationIndex.build(events, logger=log)

    processed = processed_indices(groups_by_kind)
    drafts = _aggregate_drafts(groups_by_kind, profiles)
    represented: set[str] = set()

    for event in events:
        if event.index in processed or isinstance(event, HumanEvent):
            continue

        try:
            if isinstance(event, AgentTurnEvent):
                if event.invocations:
                    event_drafts = [
                        _invocation_draft(event, position, invocation, index)
                        for position, invocation in enumerate(event.invocations)
                    ]
                    represented.update(inv.correlation_id for inv in event.invocations)
                else:
                    event_drafts = [_unclassified_draft(event)]
            else:
                folded = index.result(event.correlation_id)
                if (
                    event.correlation_id in represented
                    and folded is not None
                    and folded.index == event.index
                ):
                    continue
                event_drafts = [_result_draft(event, index)]
        except _DEGRADABLE_ERRORS as e:
            log.warning(
                "residual_event_degraded",
                index=event.index,
                event_type=event.type,
                error=str(e),
            )
            event_drafts = [_unclassified_draft(event)]

        drafts.extend(event_drafts)

    drafts.sort(key=lambda d: d.sort_key)
    return [
        TimelineActivity(
            id=draft.id,
            order=order,
            source_index=draft.source_index,
            kind=draft.kind,
            title=draft.title,
            status=draft.status,
            payload=draft.payload,
            is_mini=draft.is_mini,
        )
        for order, draft in enumerate(drafts)
    ]
