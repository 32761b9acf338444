"""CLI main entry point.

This module provides the main entry point for the agent-timeline CLI.
"""

import argparse
import sys
import traceback

from agent_timeline.cli.commands import (
    ListGroupsCommand,
    RenderTimelineCommand,
    ValidateLogCommand,
)
from agent_timeline.cli.exceptions import CommandError
from agent_timeline.cli.parser import create_parser
from agent_timeline.cli.validators import validate_args
from agent_timeline.config.settings import get_settings
from agent_timeline.logging_config import configure_logging, get_logger

__all__ = ["main", "CommandDispatcher"]

logger = get_logger(__name__)


class CommandDispatcher:
    """Dispatches CLI commands to appropriate handlers.

    Attributes:
        _timeline_cmd: Command handler for rendering the merged timeline.
        _groups_cmd: Command handler for listing groups.
        _validate_cmd: Command handler for validating logs.

    """

    def __init__(self) -> None:
        """Initialize the command dispatcher with all command handlers."""
        self._timeline_cmd = RenderTimelineCommand()
        self._groups_cmd = ListGroupsCommand()
        self._validate_cmd = ValidateLogCommand()

    def dispatch(self, args: argparse.Namespace) -> int:
        """Dispatch to the appropriate command based on arguments.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code (0 for success, non-zero for errors).

        """
        if getattr(args, "validate", False):
            command = self._validate_cmd
        elif getattr(args, "groups", False):
            command = self._groups_cmd
        else:
            command = self._timeline_cmd

        logger.debug("command_dispatched", command=command.name)
        result = command.execute(args)
        if result.output:
            print(result.output)
        return result.exit_code


def main(argv: list[str] | None = None) -> int:
    """Run the CLI application.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).

    """
    parser = create_parser()
    args = parser.parse_args(argv)

    _setup_logging(getattr(args, "verbose", False))

    error = validate_args(args)
    if error:
        print(error, file=sys.stderr)
        return 1

    try:
        dispatcher = CommandDispatcher()
        return dispatcher.dispatch(args)

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 130

    except CommandError as e:
        logger.error("command_failed", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except Exception as e:
        logger.exception("fatal_error", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        if getattr(args, "verbose", False):
            traceback.print_exc()
        return 1


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI.

    The AGENT_TIMELINE_LOG_* settings apply, and --verbose forces debug output.

    Args:
        verbose: Whether to enable debug-level logging to stderr.

    """
    settings = get_settings().logging
    configure_logging(
        verbose=verbose or settings.verbose,
        json_output=settings.json_output,
    )


if __name__ == "__main__":
    sys.exit(main())
