"""Conversation event segmentation engine.

Leaf-first: correlation index, artifact classifiers and status inference,
the generic per-kind grouper configured by kind profiles, the timeline
merge, and the TimelineEngine facade.
"""

from agent_timeline.segmentation.classifiers import (
    ArtifactClassifier,
    ArtifactRule,
    Classification,
    ClassificationContext,
)
from agent_timeline.segmentation.correlation import (
    CorrelationIndex,
    InvocationRecord,
    check_event_order,
)
from agent_timeline.segmentation.engine import SegmentationResult, TimelineEngine
from agent_timeline.segmentation.exceptions import EventOrderError, SegmentationError
from agent_timeline.segmentation.filters import (
    filter_subagent_responses,
    is_subagent_response,
)
from agent_timeline.segmentation.grouper import (
    group_delegations,
    is_correlation_in_groups,
    is_index_in_groups,
    select_final_payload,
)
from agent_timeline.segmentation.merge import merge_timeline, processed_indices
from agent_timeline.segmentation.profiles import (
    DelegationMatcher,
    KindProfile,
    build_profiles,
    default_profiles,
)
from agent_timeline.segmentation.status import StatusTracker, infer_status

__all__ = [
    "ArtifactClassifier",
    "ArtifactRule",
    "build_profiles",
    "check_event_order",
    "Classification",
    "ClassificationContext",
    "CorrelationIndex",
    "default_profiles",
    "DelegationMatcher",
    "EventOrderError",
    "filter_subagent_responses",
    "group_delegations",
    "infer_status",
    "InvocationRecord",
    "is_correlation_in_groups",
    "is_index_in_groups",
    "is_subagent_response",
    "KindProfile",
    "merge_timeline",
    "processed_indices",
    "SegmentationError",
    "SegmentationResult",
    "select_final_payload",
    "StatusTracker",
    "TimelineEngine",
]
