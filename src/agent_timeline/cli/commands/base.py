"""Base command class for CLI commands.

This module defines the abstract base class for CLI commands
following the Command pattern.
"""

from abc import ABC, abstractmethod
from argparse import Namespace

from agent_timeline.cli.exceptions import CommandError
from agent_timeline.config.exceptions import ConfigurationError
from agent_timeline.config.loader import load_profile_overrides
from agent_timeline.models.base import BaseSchema
from agent_timeline.segmentation.engine import TimelineEngine

__all__ = ["BaseCommand", "CommandResult", "build_engine"]


class CommandResult(BaseSchema):
    """Result of a command execution.

    Attributes:
        exit_code: Exit code for the CLI (0 for success).
        output: Text to print on stdout.
        message: Optional message to display.

    """

    exit_code: int
    output: str = ""
    message: str | None = None


def build_engine(args: Namespace) -> TimelineEngine:
    """Create an engine, applying the --profiles overrides file if given."""
    profiles_path = getattr(args, "profiles", None)
    try:
        overrides = load_profile_overrides(profiles_path) if profiles_path else None
    except ConfigurationError as e:
        raise CommandError(f"invalid profiles file {profiles_path}: {e}") from e
    return TimelineEngine(overrides=overrides)


class BaseCommand(ABC):
    """Abstract base class for CLI commands.

    All CLI commands should inherit from this class and implement
    the execute method.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the command name for logging and display."""
        pass

    @abstractmethod
    def execute(self, args: Namespace) -> CommandResult:
        """Execute the command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            CommandResult with exit code and output.

        """
        pass
