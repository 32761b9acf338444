"""Segmentation engine facade.

TimelineEngine wires the correlation index, the per-kind groupers and the
timeline merge together. Every call recomputes everything from the full
event log; nothing is cached between calls.
"""

from collections.abc import Mapping, Sequence

import structlog

from agent_timeline.config.loader import ProfileOverride
from agent_timeline.config.settings import Settings, get_settings
from agent_timeline.logging_config import get_logger
from agent_timeline.models.base import FrozenSchema
from agent_timeline.models.enums import GroupKind
from agent_timeline.models.events import Event
from agent_timeline.models.groups import ActivityGroup
from agent_timeline.models.timeline import TimelineActivity
from agent_timeline.segmentation.correlation import CorrelationIndex
from agent_timeline.segmentation.grouper import group_delegations
from agent_timeline.segmentation.merge import merge_timeline
from agent_timeline.segmentation.profiles import KindProfile, build_profiles

__all__ = ["SegmentationResult", "TimelineEngine"]


class SegmentationResult(FrozenSchema):
    """Everything the renderer needs for one event log.

    Attributes:
        groups: Groups of every kind, keyed by kind (empty tuples included).
        activities: The merged, ordered timeline.

    """

    groups: dict[GroupKind, tuple[ActivityGroup, ...]]
    activities: tuple[TimelineActivity, ...]

    def activity(self, activity_id: str) -> TimelineActivity | None:
        """Look up an activity by its anchor id."""
        return next((a for a in self.activities if a.id == activity_id), None)


class TimelineEngine:
    """Pure function object from an event log to groups and a timeline.

    Attributes:
        profiles: Kind profiles in research, critique, planning order.

    """

    def __init__(
        self,
        settings: Settings | None = None,
        profiles: Mapping[GroupKind, KindProfile] | None = None,
        overrides: Mapping[GroupKind, ProfileOverride] | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            settings: Settings to derive profiles from. Defaults to get_settings().
            profiles: Explicit profiles. Takes precedence over settings.
            overrides: Per-kind overrides applied on top of settings.
            logger: Logger for diagnostics. Defaults to the module logger.

        """
        if profiles is None:
            settings = settings or get_settings()
            profiles = build_profiles(settings.grouper, overrides)
        self.profiles: dict[GroupKind, KindProfile] = dict(profiles)
        self._logger = logger or get_logger(__name__)

    def group(
        self,
        events: Sequence[Event],
        kind: GroupKind,
        index: CorrelationIndex | None = None,
    ) -> list[ActivityGroup]:
        """Run the grouper of one kind.

        Raises:
            EventOrderError: If indices do not match positions.

        """
        return group_delegations(
            events, self.profiles[kind], index=index, logger=self._logger
        )

    def group_all(
        self,
        events: Sequence[Event],
        index: CorrelationIndex | None = None,
    ) -> dict[GroupKind, tuple[ActivityGroup, ...]]:
        """Run every kind's grouper over the same log."""
        if index is None:
            index = CorrelationIndex.build(events, logger=self._logger)
        return {
            kind: tuple(self.group(events, kind, index=index)) for kind in self.profiles
        }

    def segment(self, events: Sequence[Event]) -> SegmentationResult:
        """Group every kind and merge the timeline.

        Args:
            events: The full event log, indices equal to positions.

        Returns:
            Groups per kind and the merged timeline.

        Raises:
            EventOrderError: If indices do not match positions.

        """
        index = CorrelationIndex.build(events, logger=self._logger)
        groups = self.group_all(events, index=index)
        activities = merge_timeline(
            events, groups, profiles=self.profiles, index=index, logger=self._logger
        )
        self._logger.debug(
            "log_segmented",
            events=len(events),
            groups={kind.value: len(items) for kind, items in groups.items()},
            activities=len(activities),
        )
        return SegmentationResult(groups=groups, activities=tuple(activities))
