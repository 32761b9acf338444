"""Default values for agent-timeline settings.

Thresholds mirror the behavior of the conversation UI the engine feeds:
agent text longer than MIN_NARRATIVE_LENGTH counts as narrative, and a
terminal result shorter than MIN_TERMINAL_LENGTH is treated as a stub
when narrative is available.
"""

__all__ = [
    "DEFAULT_ACKNOWLEDGEMENT_PREFIXES",
    "DEFAULT_DELEGATION_TOOL_NAMES",
    "DEFAULT_MIN_NARRATIVE_LENGTH",
    "DEFAULT_MIN_TERMINAL_LENGTH",
    "MIN_LENGTH_FLOOR",
    "MAX_LENGTH_CEILING",
]

DEFAULT_MIN_NARRATIVE_LENGTH = 100
DEFAULT_MIN_TERMINAL_LENGTH = 200
DEFAULT_ACKNOWLEDGEMENT_PREFIXES = ("I have completed",)
DEFAULT_DELEGATION_TOOL_NAMES = ("task",)

MIN_LENGTH_FLOOR = 0
MAX_LENGTH_CEILING = 100_000
