"""Per-kind grouper configuration.

The three delegation kinds share one scanner. A KindProfile supplies what
differs between them: how to recognize a delegation, which artifact table
to classify results with, and the narrative thresholds.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace

from agent_timeline.config.defaults import (
    DEFAULT_ACKNOWLEDGEMENT_PREFIXES,
    DEFAULT_DELEGATION_TOOL_NAMES,
    DEFAULT_MIN_NARRATIVE_LENGTH,
    DEFAULT_MIN_TERMINAL_LENGTH,
)
from agent_timeline.config.loader import ProfileOverride
from agent_timeline.config.settings import GrouperSettings
from agent_timeline.models.enums import ActivityType, GroupKind
from agent_timeline.models.events import AgentTurnEvent, Invocation
from agent_timeline.segmentation.classifiers import (
    CRITIQUE_RULES,
    PLANNING_RULES,
    RESEARCH_RULES,
    ArtifactClassifier,
)

__all__ = [
    "DelegationMatcher",
    "KindProfile",
    "build_profiles",
    "default_profiles",
]


@dataclass(frozen=True)
class DelegationMatcher:
    """Recognizes an invocation that delegates to one sub-agent type.

    Both ``subagent_type`` and ``subagentType`` argument spellings are
    accepted; a non-empty ``description`` is required.
    """

    subagent_type: str
    tool_names: frozenset[str] = frozenset(DEFAULT_DELEGATION_TOOL_NAMES)

    def __call__(self, invocation: Invocation) -> bool:
        if invocation.name not in self.tool_names:
            return False
        args = invocation.arguments
        declared = args.get("subagent_type", args.get("subagentType"))
        return declared == self.subagent_type and bool(args.get("description"))


@dataclass(frozen=True)
class KindProfile:
    """Everything the generic scanner needs to know about one kind.

    Attributes:
        kind: Delegation kind.
        matcher: Recognizes delegating invocations.
        classifier: Artifact classification table.
        activity_id: Anchor id of the kind's aggregate timeline entry.
        activity_type: Activity type of that entry.
        title: Display title of that entry.
        timeline_offset: Tie-break rank among aggregates starting at the
            same index.
        min_narrative_length: Agent text must be longer than this to be
            kept as fallback narrative.
        min_terminal_length: Terminal results shorter than this yield to
            fallback narrative.
        acknowledgement_prefixes: Boilerplate prefixes never kept as narrative.

    """

    kind: GroupKind
    matcher: DelegationMatcher
    classifier: ArtifactClassifier = field(compare=False)
    activity_id: str
    activity_type: ActivityType
    title: str
    timeline_offset: int
    min_narrative_length: int = DEFAULT_MIN_NARRATIVE_LENGTH
    min_terminal_length: int = DEFAULT_MIN_TERMINAL_LENGTH
    acknowledgement_prefixes: tuple[str, ...] = DEFAULT_ACKNOWLEDGEMENT_PREFIXES

    def delegations(self, event: AgentTurnEvent) -> list[Invocation]:
        """Return the delegating invocations of ``event`` in order."""
        return [inv for inv in event.invocations if self.matcher(inv)]

    def is_substantive(self, text: str) -> bool:
        """Whether agent text is long enough and not boilerplate."""
        if len(text) <= self.min_narrative_length:
            return False
        return not any(text.startswith(prefix) for prefix in self.acknowledgement_prefixes)


def default_profiles(
    tool_names: Iterable[str] = DEFAULT_DELEGATION_TOOL_NAMES,
) -> dict[GroupKind, KindProfile]:
    """Build the research, critique and planning profiles with default thresholds."""
    names = frozenset(tool_names)
    return {
        GroupKind.research: KindProfile(
            kind=GroupKind.research,
            matcher=DelegationMatcher("research-agent", names),
            classifier=ArtifactClassifier(RESEARCH_RULES),
            activity_id="research-agents",
            activity_type=ActivityType.research,
            title="Research Agents",
            timeline_offset=0,
        ),
        GroupKind.critique: KindProfile(
            kind=GroupKind.critique,
            matcher=DelegationMatcher("critique-agent", names),
            classifier=ArtifactClassifier(CRITIQUE_RULES),
            activity_id="critique-agents",
            activity_type=ActivityType.critique,
            title="Critique Agents",
            timeline_offset=1,
        ),
        GroupKind.planning: KindProfile(
            kind=GroupKind.planning,
            matcher=DelegationMatcher("planner-agent", names),
            classifier=ArtifactClassifier(PLANNING_RULES),
            activity_id="planner-agents",
            activity_type=ActivityType.planning,
            title="Planning Agents",
            timeline_offset=2,
        ),
    }


def build_profiles(
    settings: GrouperSettings | None = None,
    overrides: Mapping[GroupKind, ProfileOverride] | None = None,
) -> dict[GroupKind, KindProfile]:
    """Build all kind profiles from settings, then apply per-kind overrides.

    Args:
        settings: Shared grouper settings. Defaults are used when omitted.
        overrides: Per-kind overrides, typically from load_profile_overrides().

    Returns:
        Profiles keyed by kind, in research, critique, planning order.

    """
    settings = settings or GrouperSettings()
    profiles = {
        kind: replace(
            profile,
            min_narrative_length=settings.min_narrative_length,
            min_terminal_length=settings.min_terminal_length,
            acknowledgement_prefixes=tuple(settings.acknowledgement_prefixes),
        )
        for kind, profile in default_profiles(settings.delegation_tool_names).items()
    }

    for kind, override in (overrides or {}).items():
        profile = profiles[kind]
        changes = {
            name: value
            for name, value in override.model_dump(exclude_none=True).items()
            if name != "subagent_type"
        }
        if "acknowledgement_prefixes" in changes:
            changes["acknowledgement_prefixes"] = tuple(changes["acknowledgement_prefixes"])
        if override.subagent_type is not None:
            changes["matcher"] = replace(profile.matcher, subagent_type=override.subagent_type)
        profiles[kind] = replace(profile, **changes)

    return profiles
