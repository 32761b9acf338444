"""Recognize agent turns that merely echo a sub-agent's report.

The engine never drops events. These helpers exist for renderers that
want to hide echoed sub-agent reports from the conversation view.
"""

import re
from collections.abc import Iterable

from agent_timeline.models.events import AgentTurnEvent, Event, ResultEvent
from agent_timeline.segmentation.classifiers import PLANNING_TOOLS

__all__ = ["filter_subagent_responses", "is_subagent_response"]

SUBAGENT_RESPONSE_PATTERNS = (
    re.compile(r"^RESEARCH FINDINGS:", re.MULTILINE),
    re.compile(r"^CRITIQUE OF REPORT:", re.MULTILINE),
    re.compile(r"^CODE ANALYSIS:", re.MULTILINE),
    re.compile(r"^BUG FIX ANALYSIS:", re.MULTILINE),
    re.compile(r"^CODE GENERATION:", re.MULTILINE),
)

SUBAGENT_NAMES = (
    "research-agent",
    "critique-agent",
    "code-analyzer",
    "bug-fixer",
    "code-generator",
)

_NAME_PREFIXES = tuple(
    re.compile(rf"^{name.replace('-', '[ -]', 1)}[:\s].*", re.IGNORECASE | re.MULTILINE)
    for name in SUBAGENT_NAMES
)


def is_subagent_response(event: Event) -> bool:
    """Return True if ``event`` is an agent turn echoing a sub-agent report.

    Planning tool results are never treated as echoes.
    """
    if isinstance(event, ResultEvent) and event.producer_name in PLANNING_TOOLS:
        return False
    if not isinstance(event, AgentTurnEvent):
        return False

    content = event.content
    if any(pattern.search(content) for pattern in SUBAGENT_RESPONSE_PATTERNS):
        return True
    return any(pattern.search(content) for pattern in _NAME_PREFIXES)


def filter_subagent_responses(events: Iterable[Event]) -> list[Event]:
    """Return ``events`` without echoed sub-agent reports.

    The result keeps original indices, so it is meant for display only and
    must not be fed back into the engine.
    """
    return [event for event in events if not is_subagent_response(event)]
