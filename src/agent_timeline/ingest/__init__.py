"""Event log ingestion: files and chat-message transcripts to engine events."""

from agent_timeline.ingest.exceptions import EventLogError
from agent_timeline.ingest.loader import load_event_log, parse_event_records
from agent_timeline.ingest.messages import events_from_messages, message_text

__all__ = [
    "EventLogError",
    "events_from_messages",
    "load_event_log",
    "message_text",
    "parse_event_records",
]
