"""CLI command implementations.

This module exports the command classes for the CLI.
"""

from agent_timeline.cli.commands.base import BaseCommand, CommandResult, build_engine
from agent_timeline.cli.commands.groups import ListGroupsCommand
from agent_timeline.cli.commands.timeline import RenderTimelineCommand
from agent_timeline.cli.commands.validate import ValidateLogCommand

__all__ = [
    "BaseCommand",
    "build_engine",
    "CommandResult",
    "ListGroupsCommand",
    "RenderTimelineCommand",
    "ValidateLogCommand",
]
