"""Event models for agent-timeline.

This module defines the typed representation of one conversational log
entry. Events form a tagged union on the ``type`` field and are produced
wholesale by an external conversation-log provider.
"""

from typing import Annotated, Any, Literal

from pydantic import Field, TypeAdapter, ValidationError

from agent_timeline.models.base import FrozenSchema
from agent_timeline.models.exceptions import ModelValidationError

__all__ = [
    "AgentTurnEvent",
    "Event",
    "EventAdapter",
    "EventListAdapter",
    "HumanEvent",
    "Invocation",
    "ResultEvent",
    "parse_events",
]


class Invocation(FrozenSchema):
    """A tool or sub-task invocation carried by an agent turn.

    Attributes:
        correlation_id: Identifier shared with the eventual result.
        name: Name of the invoked tool.
        arguments: Arguments passed to the tool.

    """

    correlation_id: str
    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class HumanEvent(FrozenSchema):
    """A human turn."""

    type: Literal["human"] = "human"
    index: int = Field(ge=0)
    content: str = ""


class AgentTurnEvent(FrozenSchema):
    """An agent turn with optional text and zero or more invocations."""

    type: Literal["agent_turn"] = "agent_turn"
    index: int = Field(ge=0)
    content: str = ""
    invocations: tuple[Invocation, ...] = ()


class ResultEvent(FrozenSchema):
    """The outcome of exactly one invocation.

    Attributes:
        index: Position of the event in the log.
        correlation_id: Identifier of the invocation this resolves.
        producer_name: Name of the tool that produced the result.
        content: Raw result payload, usually text or a JSON document.
        is_error: Whether the tool reported a failure.

    """

    type: Literal["result"] = "result"
    index: int = Field(ge=0)
    correlation_id: str
    producer_name: str = ""
    content: str = ""
    is_error: bool = False


Event = Annotated[
    HumanEvent | AgentTurnEvent | ResultEvent,
    Field(discriminator="type"),
]

EventAdapter: TypeAdapter[Event] = TypeAdapter(Event)
EventListAdapter: TypeAdapter[list[Event]] = TypeAdapter(list[Event])


def parse_events(records: list[dict[str, Any]]) -> list[Event]:
    """Validate raw dictionaries into events.

    Args:
        records: Event dictionaries tagged by ``type``.

    Returns:
        The validated events in input order.

    Raises:
        ModelValidationError: If any record is not a valid event.

    """
    try:
        return EventListAdapter.validate_python(records)
    except ValidationError as e:
        raise ModelValidationError(f"Invalid event record: {e}") from e
