"""Output formatting utilities for CLI.

This module provides functions for formatting timelines, groups and
validation summaries as text or JSON.
"""

import json
from collections.abc import Mapping, Sequence

from agent_timeline.models.enums import GroupKind
from agent_timeline.models.groups import ActivityGroup
from agent_timeline.models.timeline import TimelineActivity

__all__ = [
    "format_groups",
    "format_timeline",
    "truncate",
]

_STATUS_MARKERS = {
    "pending": "[ ]",
    "in_progress": "[~]",
    "completed": "[x]",
    "error": "[!]",
}


def truncate(text: str, limit: int = 60) -> str:
    """Collapse whitespace and cut ``text`` to ``limit`` characters."""
    flat = " ".join(text.split())
    return flat if len(flat) <= limit else flat[: limit - 3] + "..."


def format_timeline(activities: Sequence[TimelineActivity], json_output: bool = False) -> str:
    """Format the merged timeline.

    Args:
        activities: Ordered timeline activities.
        json_output: Whether to format as JSON.

    Returns:
        Formatted string output.

    """
    if json_output:
        return json.dumps(
            [activity.model_dump(mode="json") for activity in activities], indent=2
        )

    lines = ["", "=" * 60, "Timeline", "=" * 60]
    if not activities:
        lines.append("  (no activities)")

    for activity in activities:
        marker = _STATUS_MARKERS[activity.status.value]
        indent = "    " if activity.is_mini else "  "
        lines.append(
            f"{indent}{marker} #{activity.source_index:<4} "
            f"{activity.kind.value:<14} {truncate(activity.title)}"
        )

    lines.append("")
    lines.append("-" * 60)
    lines.append(f"  Total activities: {len(activities)}")
    return "\n".join(lines)


def _group_lines(group: ActivityGroup) -> list[str]:
    artifacts = group.artifacts
    lines = [
        f"  {_STATUS_MARKERS[group.status.value]} {truncate(group.task_description)}",
        f"      Span: {group.start_index}-{group.end_index}",
        f"      Status: {group.status.value}",
    ]
    counts = [
        ("Search batches", len(artifacts.search_results)),
        ("File reads", len(artifacts.file_reads)),
        ("File operations", len(artifacts.file_operations)),
        ("Critique outputs", len(artifacts.critique_outputs)),
        ("Planning results", len(artifacts.planning_results)),
    ]
    for label, count in counts:
        if count:
            lines.append(f"      {label}: {count}")
    if group.final_payload:
        lines.append(f"      Payload: {truncate(group.final_payload)}")
    return lines


def format_groups(
    groups: Mapping[GroupKind, Sequence[ActivityGroup]], json_output: bool = False
) -> str:
    """Format activity groups per kind.

    Args:
        groups: Groups keyed by kind.
        json_output: Whether to format as JSON.

    Returns:
        Formatted string output.

    """
    if json_output:
        return json.dumps(
            {
                kind.value: [group.model_dump(mode="json") for group in items]
                for kind, items in groups.items()
            },
            indent=2,
        )

    lines = [""]
    for kind, items in groups.items():
        lines.append("=" * 60)
        lines.append(f"{kind.value.capitalize()} groups ({len(items)})")
        lines.append("=" * 60)
        for group in items:
            lines.extend(_group_lines(group))
        lines.append("")
    return "\n".join(lines)
