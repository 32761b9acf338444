"""CLI package for agent-timeline.

This package provides the command-line interface for segmenting event logs.
It implements the Command pattern for the different operations (render
timeline, list groups, validate log).
"""

from agent_timeline.cli.commands import (
    BaseCommand,
    CommandResult,
    ListGroupsCommand,
    RenderTimelineCommand,
    ValidateLogCommand,
)
from agent_timeline.cli.exceptions import CLIError, CommandError
from agent_timeline.cli.formatters import format_groups, format_timeline
from agent_timeline.cli.main import CommandDispatcher, main
from agent_timeline.cli.parser import create_parser
from agent_timeline.cli.validators import validate_args

__all__ = [
    "BaseCommand",
    "CLIError",
    "CommandDispatcher",
    "CommandError",
    "CommandResult",
    "create_parser",
    "format_groups",
    "format_timeline",
    "ListGroupsCommand",
    "main",
    "RenderTimelineCommand",
    "validate_args",
    "ValidateLogCommand",
]
