"""List groups command implementation."""

from argparse import Namespace

from agent_timeline.cli.commands.base import BaseCommand, CommandResult, build_engine
from agent_timeline.cli.formatters import format_groups
from agent_timeline.ingest import load_event_log
from agent_timeline.models.enums import GroupKind

__all__ = ["ListGroupsCommand"]


class ListGroupsCommand(BaseCommand):
    """Command to print the activity groups of a log."""

    @property
    def name(self) -> str:
        """Get the command name."""
        return "list-groups"

    def execute(self, args: Namespace) -> CommandResult:
        """Execute the groups command.

        Args:
            args: Parsed arguments with the log path and optional kind.

        Returns:
            CommandResult with the formatted groups.

        """
        events = load_event_log(args.log)
        engine = build_engine(args)

        kind = getattr(args, "kind", None)
        if kind:
            selected = GroupKind(kind)
            groups = {selected: tuple(engine.group(events, selected))}
        else:
            groups = engine.group_all(events)

        return CommandResult(
            exit_code=0,
            output=format_groups(groups, json_output=getattr(args, "json_output", False)),
        )
