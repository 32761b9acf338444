"""Validate log command implementation.

This module implements the command for validating event logs.
"""

from argparse import Namespace
from collections import Counter
from collections.abc import Mapping
from pathlib import Path

from agent_timeline.cli.commands.base import BaseCommand, CommandResult, build_engine
from agent_timeline.ingest import EventLogError, load_event_log
from agent_timeline.models.enums import GroupKind
from agent_timeline.models.events import AgentTurnEvent
from agent_timeline.segmentation.correlation import CorrelationIndex
from agent_timeline.segmentation.exceptions import EventOrderError
from agent_timeline.segmentation.profiles import KindProfile, default_profiles

__all__ = ["ValidateLogCommand"]


class ValidateLogCommand(BaseCommand):
    """Command to validate an event log."""

    @property
    def name(self) -> str:
        """Get the command name."""
        return "validate-log"

    def execute(self, args: Namespace) -> CommandResult:
        """Execute the validate command.

        Args:
            args: Parsed arguments with the log path.

        Returns:
            CommandResult with validation status.

        """
        success, output = self.validate_log(
            log_path=Path(args.log),
            verbose=getattr(args, "verbose", False),
            profiles=build_engine(args).profiles,
        )
        return CommandResult(
            exit_code=0 if success else 1,
            output=output,
            message="Validation successful" if success else "Validation failed",
        )

    def validate_log(
        self,
        log_path: Path,
        verbose: bool = False,
        profiles: Mapping[GroupKind, KindProfile] | None = None,
    ) -> tuple[bool, str]:
        """Validate a log file without segmenting it.

        Args:
            log_path: Path to the event log.
            verbose: Whether to include a summary of its contents.
            profiles: Kind profiles used to count delegations. Defaults to
                default_profiles().

        Returns:
            Whether the log is valid, and the text to print.

        """
        try:
            events = load_event_log(log_path)
            index = CorrelationIndex.build(events)
        except (EventLogError, EventOrderError) as e:
            return False, f"Validation failed: {e}"

        lines: list[str] = []
        if verbose:
            by_type = Counter(event.type for event in events)
            lines.append(f"Events: {len(events)}")
            for event_type, count in sorted(by_type.items()):
                lines.append(f"  {event_type}: {count}")
            lines.append(f"Invocations: {len(index)}")
            lines.append("Delegations:")
            for kind, profile in (profiles or default_profiles()).items():
                count = sum(
                    len(profile.delegations(event))
                    for event in events
                    if isinstance(event, AgentTurnEvent)
                )
                lines.append(f"  {kind.value}: {count}")
            lines.append("")

        lines.append(f"Validation successful: {log_path}")
        return True, "\n".join(lines)
