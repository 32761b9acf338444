"""Unit tests for group status inference."""

import pytest

from agent_timeline.models.enums import GroupStatus
from agent_timeline.segmentation.status import StatusTracker, infer_status


class TestInferStatus:
    """Tests for infer_status."""

    @pytest.mark.parametrize(
        ("artifacts", "terminal", "expected"),
        [
            (0, False, GroupStatus.pending),
            (3, False, GroupStatus.in_progress),
            (0, True, GroupStatus.completed),
            (2, True, GroupStatus.completed),
        ],
    )
    def test_inferred_status(
        self, artifacts: int, terminal: bool, expected: GroupStatus
    ) -> None:
        """Test the status derived from scan observations."""
        assert infer_status(artifacts, terminal) == expected


class TestStatusTracker:
    """Tests for StatusTracker."""

    def test_starts_pending(self) -> None:
        """Test that a new tracker is pending."""
        tracker = StatusTracker()
        assert tracker.status == GroupStatus.pending
        assert tracker.history == [GroupStatus.pending]

    def test_history_records_transitions_once(self) -> None:
        """Test that repeated artifacts do not duplicate history entries."""
        tracker = StatusTracker()
        tracker.artifact_classified()
        tracker.artifact_classified()
        tracker.terminal_observed()

        assert tracker.history == [
            GroupStatus.pending,
            GroupStatus.in_progress,
            GroupStatus.completed,
        ]

    def test_never_regresses(self) -> None:
        """Test that an artifact after the terminal keeps the group completed."""
        tracker = StatusTracker()
        tracker.terminal_observed()

        assert tracker.artifact_classified() == GroupStatus.completed
        ranks = [status.rank for status in tracker.history]
        assert ranks == sorted(ranks)
