"""Convert chat-message records into engine events.

Chat transcripts store human, ai and tool messages. AI messages carry
``tool_calls`` and tool messages answer them through ``tool_call_id``.
Content is either a string or a list of content blocks, of which only
text blocks are kept.
"""

from collections.abc import Sequence
from typing import Any

from agent_timeline.ingest.exceptions import EventLogError
from agent_timeline.models.events import (
    AgentTurnEvent,
    Event,
    HumanEvent,
    Invocation,
    ResultEvent,
)

__all__ = ["MESSAGE_TYPES", "events_from_messages", "message_text"]

MESSAGE_TYPES = frozenset({"human", "ai", "tool"})


def message_text(content: Any) -> str:
    """Return the text of a message's content, joining text blocks with newlines."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "\n".join(
            str(block.get("text", ""))
            for block in content
            if isinstance(block, dict) and block.get("type") == "text"
        )
    return ""


def _invocations(message: dict[str, Any], position: int) -> tuple[Invocation, ...]:
    calls = message.get("tool_calls") or []
    if not isinstance(calls, list):
        raise EventLogError(f"Message {position}: tool_calls must be a list")
    invocations = []
    for call_position, call in enumerate(calls):
        if not isinstance(call, dict) or not call.get("name"):
            raise EventLogError(
                f"Message {position}: tool call {call_position} has no name"
            )
        args = call.get("args") or {}
        if not isinstance(args, dict):
            raise EventLogError(
                f"Message {position}: arguments of tool call '{call['name']}' must be a mapping"
            )
        invocations.append(
            Invocation(
                correlation_id=str(call.get("id") or f"call-{position}-{call_position}"),
                name=str(call["name"]),
                arguments=args,
            )
        )
    return tuple(invocations)


def events_from_messages(messages: Sequence[dict[str, Any]]) -> list[Event]:
    """Convert chat messages to events, indexed by position.

    Args:
        messages: Records with ``type`` human, ai or tool.

    Returns:
        One event per message.

    Raises:
        EventLogError: If a message has an unknown type or malformed tool calls.

    """
    events: list[Event] = []
    for position, message in enumerate(messages):
        kind = message.get("type")
        if kind == "human":
            events.append(
                HumanEvent(index=position, content=message_text(message.get("content")))
            )
        elif kind == "ai":
            events.append(
                AgentTurnEvent(
                    index=position,
                    content=message_text(message.get("content")),
                    invocations=_invocations(message, position),
                )
            )
        elif kind == "tool":
            events.append(
                ResultEvent(
                    index=position,
                    correlation_id=str(message.get("tool_call_id") or ""),
                    producer_name=str(message.get("name") or ""),
                    content=message_text(message.get("content")),
                    is_error=message.get("status") == "error",
                )
            )
        else:
            raise EventLogError(f"Message {position}: unknown message type {kind!r}")
    return events
