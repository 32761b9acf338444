"""Render timeline command implementation."""

from argparse import Namespace

from agent_timeline.cli.commands.base import BaseCommand, CommandResult, build_engine
from agent_timeline.cli.formatters import format_timeline
from agent_timeline.ingest import load_event_log
from agent_timeline.logging_config import get_logger
from agent_timeline.models.enums import ActivityType
from agent_timeline.models.timeline import EventPayload, TimelineActivity
from agent_timeline.segmentation.filters import is_subagent_response

__all__ = ["RenderTimelineCommand"]

logger = get_logger(__name__)


def _is_echoed_message(activity: TimelineActivity) -> bool:
    # Invocation activities keep their own content even when the turn echoes a report
    return (
        activity.kind == ActivityType.unclassified
        and isinstance(activity.payload, EventPayload)
        and activity.payload.invocation is None
        and is_subagent_response(activity.payload.event)
    )


class RenderTimelineCommand(BaseCommand):
    """Command to segment a log and print the merged timeline."""

    @property
    def name(self) -> str:
        """Get the command name."""
        return "render-timeline"

    def execute(self, args: Namespace) -> CommandResult:
        """Execute the render command.

        Args:
            args: Parsed arguments with the log path and output options.

        Returns:
            CommandResult with the formatted timeline.

        """
        events = load_event_log(args.log)
        result = build_engine(args).segment(events)

        activities = list(result.activities)
        if getattr(args, "hide_subagent_responses", False):
            activities = [
                activity
                for activity in activities
                if not _is_echoed_message(activity)
            ]
            logger.debug(
                "subagent_responses_hidden",
                hidden=len(result.activities) - len(activities),
            )

        return CommandResult(
            exit_code=0,
            output=format_timeline(activities, json_output=getattr(args, "json_output", False)),
        )
