"""Load an event log from disk.

Supported formats are a JSON array, JSON lines and YAML. Records are
either engine events (``type`` human, agent_turn or result) or chat
messages (``type`` human, ai or tool). A log is read as chat messages
when any record uses the ``ai`` or ``tool`` type.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from agent_timeline.ingest.exceptions import EventLogError
from agent_timeline.ingest.messages import events_from_messages
from agent_timeline.logging_config import get_logger
from agent_timeline.models.events import Event, parse_events
from agent_timeline.models.exceptions import ModelValidationError

__all__ = ["load_event_log", "parse_event_records"]

logger = get_logger(__name__)

_CHAT_ONLY_TYPES = frozenset({"ai", "tool"})


def _read_records(path: Path) -> list[Any]:
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")

    try:
        if suffix == ".jsonl":
            return [json.loads(line) for line in text.splitlines() if line.strip()]
        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (ValueError, yaml.YAMLError) as e:
        raise EventLogError(f"Failed to parse event log {path}: {e}") from e

    # Wrapped logs: {"messages": [...]} or {"events": [...]}
    if isinstance(data, dict):
        data = data.get("events", data.get("messages"))
    if not isinstance(data, list):
        raise EventLogError(f"Event log {path} must contain a list of records")
    return data


def parse_event_records(records: list[Any]) -> list[Event]:
    """Turn raw records into events, detecting chat-message logs.

    Records without an ``index`` get their position.

    Raises:
        EventLogError: If a record is not a mapping or is invalid.

    """
    for position, record in enumerate(records):
        if not isinstance(record, dict):
            raise EventLogError(
                f"Record {position} must be a mapping, got {type(record).__name__}"
            )

    if any(record.get("type") in _CHAT_ONLY_TYPES for record in records):
        return events_from_messages(records)

    try:
        return parse_events(
            [
                record if "index" in record else {**record, "index": position}
                for position, record in enumerate(records)
            ]
        )
    except ModelValidationError as e:
        raise EventLogError(str(e)) from e


def load_event_log(path: Path | str) -> list[Event]:
    """Load and validate an event log file.

    Args:
        path: Path to a .json, .jsonl, .yaml or .yml file.

    Returns:
        The events in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        EventLogError: If the file cannot be parsed or holds invalid records.

    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Event log not found: {path}")

    try:
        records = _read_records(path)
    except OSError as e:
        raise EventLogError(f"Failed to read event log {path}: {e}") from e

    events = parse_event_records(records)
    logger.debug("event_log_loaded", path=str(path), events=len(events))
    return events
