"""Unit tests for the correlation index."""

import pytest
import structlog
from builders import LogBuilder, invocation
from structlog.testing import capture_logs

from agent_timeline.models.events import HumanEvent, ResultEvent
from agent_timeline.segmentation.correlation import CorrelationIndex, check_event_order
from agent_timeline.segmentation.exceptions import EventOrderError


class TestCheckEventOrder:
    """Tests for check_event_order."""

    def test_accepts_positional_indices(self, log: LogBuilder) -> None:
        """Test that a well-formed log passes."""
        log.human()
        log.turn("thinking")
        check_event_order(log.events)

    def test_rejects_gap(self) -> None:
        """Test that a skipped index is a precondition failure."""
        events = [HumanEvent(index=0), HumanEvent(index=2)]

        with pytest.raises(EventOrderError) as exc_info:
            check_event_order(events)

        assert exc_info.value.position == 1
        assert exc_info.value.index == 2

    def test_rejects_reordering(self) -> None:
        """Test that out-of-order indices are rejected."""
        events = [HumanEvent(index=1), HumanEvent(index=0)]
        with pytest.raises(EventOrderError, match="position 0 has index 1"):
            check_event_order(events)

    def test_empty_log_is_valid(self) -> None:
        """Test that an empty log passes."""
        check_event_order([])


class TestCorrelationIndex:
    """Tests for CorrelationIndex.build and lookups."""

    def test_links_invocation_and_result(self, log: LogBuilder) -> None:
        """Test that invocations and results are found by correlation id."""
        log.turn("", invocation("c1", "ls", path="/"))
        log.result("c1", "a.txt", producer="ls")

        index = CorrelationIndex.build(log.events)

        record = index.invocation("c1")
        assert record is not None
        assert record.owner_index == 0
        assert record.invocation.arguments == {"path": "/"}
        assert index.result("c1").index == 1
        assert "c1" in index
        assert len(index) == 1

    def test_unknown_ids(self, log: LogBuilder) -> None:
        """Test that lookups for unknown ids return None."""
        log.human()
        index = CorrelationIndex.build(log.events)

        assert index.invocation("missing") is None
        assert index.result("missing") is None
        assert "missing" not in index

    def test_duplicate_invocation_last_write_wins(self, log: LogBuilder) -> None:
        """Test that a reused invocation id keeps the later one and warns."""
        log.turn("", invocation("dup", "ls", path="/first"))
        log.turn("", invocation("dup", "ls", path="/second"))

        with capture_logs() as logs:
            index = CorrelationIndex.build(log.events, logger=structlog.get_logger())

        assert index.invocation("dup").owner_index == 1
        assert index.invocation("dup").invocation.arguments["path"] == "/second"
        warnings = [e for e in logs if e["event"] == "duplicate_invocation_id"]
        assert len(warnings) == 1
        assert warnings[0]["log_level"] == "warning"
        assert warnings[0]["first_index"] == 0

    def test_duplicate_result_first_match_wins(self, log: LogBuilder) -> None:
        """Test that a second result for the same id is ignored with a warning."""
        log.turn("", invocation("c1", "ls"))
        log.result("c1", "first")
        log.result("c1", "second")

        with capture_logs() as logs:
            index = CorrelationIndex.build(log.events, logger=structlog.get_logger())

        assert index.result("c1").content == "first"
        assert [e["event"] for e in logs] == ["duplicate_result_id"]

    def test_orphan_result_is_indexed_and_logged(self, log: LogBuilder) -> None:
        """Test that a result without an invocation is kept and warned about."""
        log.result("ghost", "nobody asked")

        with capture_logs() as logs:
            index = CorrelationIndex.build(log.events, logger=structlog.get_logger())

        assert isinstance(index.result("ghost"), ResultEvent)
        assert logs[0]["event"] == "orphan_result"
        assert logs[0]["correlation_id"] == "ghost"

    def test_build_checks_order(self) -> None:
        """Test that build surfaces index violations."""
        with pytest.raises(EventOrderError):
            CorrelationIndex.build([HumanEvent(index=3)])
