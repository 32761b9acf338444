"""CLI argument parser configuration.

This module provides the argument parser for the agent-timeline CLI.
"""

import argparse

from agent_timeline import __version__
from agent_timeline.models.enums import GroupKind

__all__ = ["create_parser"]


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser.

    Returns:
        An ArgumentParser configured with all CLI options.

    """
    parser = argparse.ArgumentParser(
        prog="agent-timeline",
        description=(
            "Agent Timeline - Segment a multi-agent conversation log into "
            "delegated sub-task groups and an ordered activity timeline."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Render the merged timeline of a log
  agent-timeline thread.json

  # List the critique groups only, as JSON
  agent-timeline thread.json --groups --kind critique --json

  # Check that a log is well-formed before rendering it
  agent-timeline thread.jsonl --validate --verbose

  # Use custom thresholds per kind
  agent-timeline thread.yaml --profiles profiles.yaml
""",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "log",
        type=str,
        metavar="LOG",
        help="Event log file (.json, .jsonl, .yaml or .yml)",
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--groups",
        action="store_true",
        help="List activity groups instead of the merged timeline",
    )
    mode.add_argument(
        "--validate",
        action="store_true",
        help="Validate the log without segmenting it",
    )

    parser.add_argument(
        "--kind",
        type=str,
        choices=[kind.value for kind in GroupKind],
        help="Restrict --groups output to one delegation kind",
    )

    parser.add_argument(
        "--profiles",
        type=str,
        metavar="FILE",
        help="YAML file with per-kind threshold overrides",
    )

    parser.add_argument(
        "--hide-subagent-responses",
        action="store_true",
        help="Omit agent turns that only echo a sub-agent report",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output results as JSON instead of formatted text",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging on stderr",
    )

    return parser
