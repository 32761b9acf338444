"""Unit tests for the timeline merge."""

import json

import pytest
import structlog
from builders import (
    LONG_ANSWER,
    LogBuilder,
    delegation,
    invocation,
    tavily_payload,
)
from structlog.testing import capture_logs

from agent_timeline.models.enums import ActivityStatus, ActivityType, GroupKind
from agent_timeline.models.timeline import EventPayload, GroupPayload, PlanningStepPayload
from agent_timeline.segmentation import merge
from agent_timeline.segmentation.grouper import group_delegations
from agent_timeline.segmentation.merge import (
    activity_type_from_tool,
    extract_file_name,
    merge_timeline,
    processed_indices,
)
from agent_timeline.segmentation.profiles import KindProfile


def _group_all(events, profiles: dict[GroupKind, KindProfile]):
    return {kind: group_delegations(events, profile) for kind, profile in profiles.items()}


class TestHelpers:
    """Tests for the merge helper functions."""

    def test_extract_file_name(self) -> None:
        """Test the file name argument fallbacks."""
        assert extract_file_name({"file_path": "/a.md"}) == "/a.md"
        assert extract_file_name({"fileName": "b.md"}) == "b.md"
        assert extract_file_name({"file_name": "c.md"}) == "c.md"
        assert extract_file_name({}) == "Unknown file"

    @pytest.mark.parametrize(
        ("tool", "expected"),
        [
            ("write_todos", ActivityType.todo),
            ("Write", ActivityType.file_write),
            ("MultiEdit", ActivityType.file_edit),
            ("collaborative_file_update", ActivityType.file_update),
            ("tavily_search", ActivityType.search_result),
            ("ls", ActivityType.tool_call),
        ],
    )
    def test_activity_type_from_tool(self, tool: str, expected: ActivityType) -> None:
        """Test the generic tool name mapping."""
        assert activity_type_from_tool(tool) == expected

    def test_activity_type_from_delegation_arguments(self) -> None:
        """Test that delegation arguments take precedence over the tool name."""
        assert (
            activity_type_from_tool("task", {"subagent_type": "critique-agent"})
            == ActivityType.critique
        )

    def test_processed_indices_inclusive(
        self, log: LogBuilder, research_profile: KindProfile
    ) -> None:
        """Test that spans are merged inclusively across kinds."""
        log.human()
        log.delegate("A")
        log.result("x", "unrelated", producer="ls")
        log.result("A", LONG_ANSWER)

        groups = {GroupKind.research: group_delegations(log.events, research_profile)}

        assert processed_indices(groups) == {1, 2, 3}
        assert processed_indices({}) == set()


class TestMergeTimeline:
    """Tests for merge_timeline."""

    def _mixed_log(self, log: LogBuilder) -> LogBuilder:
        log.human()
        log.turn("", invocation("t1", "write_todos", todos=[{"content": "Plan", "status": "pending"}]))
        log.result("t1", "Updated todo list", producer="write_todos")
        log.delegate("X")
        log.result("s1", tavily_payload(), producer="tavily_search")
        log.result("X", LONG_ANSWER)
        log.turn("", invocation("w1", "Write", file_path="/report.md", content="# Report"))
        log.result("w1", "File written", producer="Write")
        log.turn("", invocation("q1", "tavily_search", query="battery recycling"))
        log.result("q1", tavily_payload(), producer="tavily_search")
        log.turn("Here is the final report.")
        log.turn("", invocation("u1", "custom_tool"))
        return log

    def test_orders_aggregates_and_residuals(
        self, log: LogBuilder, profiles: dict[GroupKind, KindProfile]
    ) -> None:
        """Test ids, order and classification of a mixed log."""
        events = self._mixed_log(log).events

        activities = merge_timeline(events, _group_all(events, profiles), profiles)

        assert [a.id for a in activities] == [
            "todo-1-0",
            "research-agents",
            "file-6-0",
            "search-8-0",
            "message-10",
            "tool-11-0",
        ]
        assert [a.order for a in activities] == list(range(6))
        assert [a.source_index for a in activities] == [1, 3, 6, 8, 10, 11]

    def test_residual_classification(
        self, log: LogBuilder, profiles: dict[GroupKind, KindProfile]
    ) -> None:
        """Test titles, kinds and statuses of residual activities."""
        events = self._mixed_log(log).events
        activities = {
            a.id: a for a in merge_timeline(events, _group_all(events, profiles), profiles)
        }

        todo = activities["todo-1-0"]
        assert todo.kind == ActivityType.todo
        assert todo.title == "Task Progress"
        assert todo.status == ActivityStatus.completed
        assert todo.payload.details["todos"][0]["content"] == "Plan"

        written = activities["file-6-0"]
        assert written.kind == ActivityType.file_write
        assert written.title == "Created: /report.md"
        assert written.payload.result.content == "File written"

        search = activities["search-8-0"]
        assert search.kind == ActivityType.search_result
        assert search.title == "Tavily Search: battery recycling"
        assert len(search.payload.details["results"]) == 2

        assert activities["message-10"].kind == ActivityType.unclassified
        assert activities["tool-11-0"].status == ActivityStatus.in_progress
        assert activities["tool-11-0"].title == "custom_tool"

    def test_aggregate_payload(
        self, log: LogBuilder, profiles: dict[GroupKind, KindProfile]
    ) -> None:
        """Test that the aggregate carries every group and the first status."""
        log.delegate("A")
        log.delegate("B", description="Second topic")
        log.result("B", LONG_ANSWER)

        activities = merge_timeline(log.events, _group_all(log.events, profiles), profiles)

        [aggregate] = activities
        assert aggregate.id == "research-agents"
        assert aggregate.title == "Research Agents"
        assert aggregate.kind == ActivityType.research
        assert isinstance(aggregate.payload, GroupPayload)
        assert len(aggregate.payload.groups) == 2
        assert aggregate.status == ActivityStatus.pending

    def test_kind_offsets_break_ties(
        self, log: LogBuilder, profiles: dict[GroupKind, KindProfile]
    ) -> None:
        """Test that aggregates starting together sort research, critique, planning."""
        log.turn(
            "",
            delegation("P", "planner-agent", "Plan"),
            delegation("C", "critique-agent", "Critique"),
            delegation("R", "research-agent", "Research"),
        )
        log.result("R", LONG_ANSWER)
        log.turn("", invocation("l1", "ls"))

        activities = merge_timeline(log.events, _group_all(log.events, profiles), profiles)

        assert [a.id for a in activities] == [
            "research-agents",
            "critique-agents",
            "planner-agents",
            "tool-2-0",
        ]

    def test_planning_mini_activities(
        self, log: LogBuilder, profiles: dict[GroupKind, KindProfile]
    ) -> None:
        """Test that planning steps surface as mini activities after the aggregate."""
        log.delegate("P", subagent_type="planner-agent", description="Plan research")
        log.turn("", invocation("t1", "topic_analysis"))
        log.result("t1", '{"subtopics": ["cost"]}', producer="topic_analysis")
        log.turn("", invocation("o1", "plan_optimization"))
        log.result("o1", "unparsable", producer="plan_optimization")
        log.turn("", invocation("s1", "scope_estimation"))
        log.result("s1", '{"estimate": "medium"}', producer="scope_estimation")
        log.result("P", LONG_ANSWER)

        activities = merge_timeline(log.events, _group_all(log.events, profiles), profiles)

        assert [a.id for a in activities] == [
            "planner-agents",
            "planner-0-topic-analysis",
            "planner-0-scope-estimation",
        ]
        mini = activities[1]
        assert mini.is_mini
        assert mini.title == "Topic Analysis"
        assert isinstance(mini.payload, PlanningStepPayload)
        assert mini.payload.step.result == {"subtopics": ["cost"]}

    def test_error_result_marks_invocation(self, log: LogBuilder) -> None:
        """Test that a failed tool result gives the invocation an error status."""
        log.turn("", invocation("e1", "ls", path="/missing"))
        log.result("e1", "No such directory", producer="ls", is_error=True)

        [activity] = merge_timeline(log.events, {})

        assert activity.id == "tool-0-0"
        assert activity.status == ActivityStatus.error

    def test_orphan_search_result(self, log: LogBuilder) -> None:
        """Test that a search result without a represented invocation is its own entry."""
        log.result("lost", tavily_payload("orphaned query"), producer="tavily_search")
        log.result("bad", json.dumps({"query": "q", "results": "none"}), producer="exa_search")
        log.result("other", "text", producer="ls", is_error=True)

        activities = merge_timeline(log.events, {})

        assert [a.id for a in activities] == ["search-0", "result-1", "result-2"]
        assert activities[0].title == "Tavily Search: orphaned query"
        assert activities[1].kind == ActivityType.unclassified
        assert activities[2].status == ActivityStatus.error

    def test_duplicate_result_id_not_dropped(self, log: LogBuilder) -> None:
        """Test that a second result for an answered invocation gets its own entry."""
        log.human()
        log.turn("", invocation("w1", "Write", file_path="/report.md", content="# Report"))
        log.result("w1", "first", producer="Write")
        log.result("w1", "second write outcome", producer="Write", is_error=True)

        activities = merge_timeline(log.events, {})

        assert [a.id for a in activities] == ["file-1-0", "result-3"]
        assert activities[0].payload.result.index == 2
        assert activities[1].kind == ActivityType.unclassified
        assert activities[1].status == ActivityStatus.error
        assert activities[1].payload.event.content == "second write outcome"

    def test_humans_not_emitted(self, log: LogBuilder) -> None:
        """Test that human turns are not timeline activities."""
        log.human()
        log.turn("Sure, starting now.")

        assert [a.id for a in merge_timeline(log.events, {})] == ["message-1"]

    def test_no_event_dropped(
        self, log: LogBuilder, profiles: dict[GroupKind, KindProfile]
    ) -> None:
        """Test that every unprocessed agent turn and unfolded result is emitted."""
        events = self._mixed_log(log).events
        groups = _group_all(events, profiles)

        activities = merge_timeline(events, groups, profiles)

        emitted = {a.source_index for a in activities}
        folded = {
            a.payload.result.index
            for a in activities
            if isinstance(a.payload, EventPayload)
            and a.payload.invocation is not None
            and a.payload.result is not None
        }
        processed = processed_indices(groups)
        for event in events:
            if event.index in processed or event.type == "human":
                continue
            if event.index in folded:
                continue
            assert event.index in emitted

    def test_degrades_single_bad_event(
        self, log: LogBuilder, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that a classification failure degrades to unclassified and continues."""
        log.turn("", invocation("c1", "ls"))
        log.turn("", invocation("c2", "ls"))

        calls = {"count": 0}
        real_draft = merge._invocation_draft

        def flaky(event, position, inv, index):
            calls["count"] += 1
            if calls["count"] == 1:
                raise ValueError("bad arguments")
            return real_draft(event, position, inv, index)

        monkeypatch.setattr(merge, "_invocation_draft", flaky)

        with capture_logs() as logs:
            activities = merge_timeline(log.events, {}, logger=structlog.get_logger())

        assert [a.id for a in activities] == ["message-0", "tool-1-0"]
        assert activities[0].kind == ActivityType.unclassified
        assert logs[0]["event"] == "residual_event_degraded"
        assert logs[0]["index"] == 0

    def test_idempotent(
        self, log: LogBuilder, profiles: dict[GroupKind, KindProfile]
    ) -> None:
        """Test that merging the same input twice gives the same timeline."""
        events = self._mixed_log(log).events
        groups = _group_all(events, profiles)

        assert merge_timeline(events, groups, profiles) == merge_timeline(
            events, groups, profiles
        )
