"""Artifact classifiers for the per-kind groupers.

Each kind owns an ordered table of ArtifactRule entries. A rule matches a
result when the result's producer name is accepted by the rule and the
rule's extractor can build an artifact from the payload. The first
matching rule wins; a result matching no rule is not an artifact for that
kind. Adding a recognized tool is one more table entry.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

import structlog

from agent_timeline.logging_config import get_logger
from agent_timeline.models.artifacts import (
    Artifact,
    CritiqueToolOutput,
    FileOperation,
    FileRead,
    PlanningToolResult,
    SearchResultBatch,
    StructuredFinding,
)
from agent_timeline.models.enums import ArtifactCategory, FindingCategory
from agent_timeline.models.events import ResultEvent
from agent_timeline.segmentation.correlation import CorrelationIndex, InvocationRecord

__all__ = [
    "ArtifactClassifier",
    "ArtifactRule",
    "Classification",
    "ClassificationContext",
    "CRITIQUE_FINDING_RULES",
    "CRITIQUE_RULES",
    "FindingRule",
    "PLANNING_RULES",
    "RESEARCH_RULES",
    "extract_exa_results",
    "extract_search_results",
    "extract_tavily_results",
    "parse_json_object",
]

READ_TOOLS = frozenset({"Read", "read_file", "ReadFile"})
FILE_OPERATION_TOOLS = frozenset(
    {"Write", "Edit", "MultiEdit", "ls", "write_file", "edit_file"}
)
CRITIQUE_TOOLS = frozenset(
    {"fact_check", "evaluate_structure", "analyze_completeness", "save_critique"}
)
PLANNING_TOOLS = frozenset({"topic_analysis", "scope_estimation", "plan_optimization"})

CRITIQUE_PATH_PATTERN = re.compile(r"/research/critiques/[^\s\"']+")

_EXA_MARKERS = ("text", "summary", "snippet", "highlights")


@dataclass(frozen=True)
class ClassificationContext:
    """What a classifier may consult besides the result itself.

    Attributes:
        index: Correlation index of the whole log.
        start_index: Start of the group being scanned.
        file_reads: File reads collected so far by this group.
        logger: Logger for malformed payloads.

    """

    index: CorrelationIndex
    start_index: int
    file_reads: Sequence[FileRead] = ()
    logger: structlog.stdlib.BoundLogger = field(
        default_factory=lambda: get_logger(__name__)
    )

    def invocation_before(self, result: ResultEvent, floor: int = 0) -> InvocationRecord | None:
        """Return the result's invocation if it was issued in [floor, result.index)."""
        record = self.index.invocation(result.correlation_id)
        if record is None or not floor <= record.owner_index < result.index:
            return None
        return record


@dataclass(frozen=True)
class Classification:
    """Outcome of a successful classification."""

    category: ArtifactCategory
    value: Artifact


Extractor = Callable[[ResultEvent, ClassificationContext], Artifact | None]


@dataclass(frozen=True)
class ArtifactRule:
    """One row of a classification table.

    Attributes:
        category: Bucket the artifact is routed to.
        extractor: Builds the artifact, or returns None when the payload
            does not have the expected shape.
        producers: Accepted producer names. None accepts any producer.

    """

    category: ArtifactCategory
    extractor: Extractor
    producers: frozenset[str] | None = None

    def accepts(self, producer_name: str) -> bool:
        return self.producers is None or producer_name in self.producers


class ArtifactClassifier:
    """Ordered table of artifact rules for one kind."""

    def __init__(self, rules: Sequence[ArtifactRule]) -> None:
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[ArtifactRule, ...]:
        return self._rules

    def classify(
        self, result: ResultEvent, context: ClassificationContext
    ) -> Classification | None:
        """Return the first rule's artifact for ``result``, or None."""
        for rule in self._rules:
            if not rule.accepts(result.producer_name):
                continue
            value = rule.extractor(result, context)
            if value is not None:
                return Classification(category=rule.category, value=value)
        return None


def parse_json_object(content: str) -> dict[str, Any] | None:
    """Parse ``content`` as a JSON object, returning None on any failure."""
    try:
        parsed = json.loads(content)
    except (TypeError, ValueError):
        return None
    return parsed if isinstance(parsed, dict) else None


def _response_time(payload: dict[str, Any]) -> float | None:
    value = payload.get("response_time")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _first_result(payload: dict[str, Any]) -> dict[str, Any] | None:
    results = payload.get("results")
    if not isinstance(results, list) or not results:
        return None
    first = results[0]
    if not isinstance(first, dict) or not first.get("url"):
        return None
    return first


def extract_tavily_results(content: str, index: int = 0) -> SearchResultBatch | None:
    """Build a Tavily batch when results carry ``url`` and ``content``."""
    payload = parse_json_object(content)
    if payload is None:
        return None
    first = _first_result(payload)
    if first is None or "content" not in first:
        return None
    return SearchResultBatch(
        index=index,
        query=str(payload.get("query") or ""),
        results=tuple(r for r in payload["results"] if isinstance(r, dict)),
        response_time=_response_time(payload),
        search_type="tavily",
    )


def extract_exa_results(content: str, index: int = 0) -> SearchResultBatch | None:
    """Build an Exa batch when results carry Exa-specific fields."""
    payload = parse_json_object(content)
    if payload is None:
        return None
    first = _first_result(payload)
    if first is None or not any(marker in first for marker in _EXA_MARKERS):
        return None
    results = tuple(
        {
            "url": r.get("url"),
            "title": r.get("title"),
            "summary": r.get("summary"),
            "snippet": r.get("snippet"),
            "full_text": r.get("text") or r.get("fullText"),
            "author": r.get("author"),
            "published_date": r.get("publishedDate"),
            "highlights": r.get("highlights"),
        }
        for r in payload["results"]
        if isinstance(r, dict)
    )
    return SearchResultBatch(
        index=index,
        query=str(payload.get("query") or ""),
        results=results,
        response_time=_response_time(payload),
        search_type="exa",
    )


def extract_search_results(content: str, index: int = 0) -> SearchResultBatch | None:
    """Try Tavily first, then Exa."""
    return extract_tavily_results(content, index) or extract_exa_results(content, index)


# Research


def _tavily_rule(result: ResultEvent, _context: ClassificationContext) -> Artifact | None:
    return extract_tavily_results(result.content, result.index)


def _exa_rule(result: ResultEvent, _context: ClassificationContext) -> Artifact | None:
    return extract_exa_results(result.content, result.index)


RESEARCH_RULES: tuple[ArtifactRule, ...] = (
    ArtifactRule(ArtifactCategory.search_results, _tavily_rule),
    ArtifactRule(ArtifactCategory.search_results, _exa_rule),
)


# Critique


@dataclass(frozen=True)
class FindingRule:
    """Maps a critique tool output document to a finding category.

    A document matches when it was produced by ``producer`` or its path
    contains ``path_marker``.
    """

    category: FindingCategory
    producer: str
    path_marker: str

    def matches(self, producer_name: str, path: str) -> bool:
        return producer_name == self.producer or self.path_marker in path


CRITIQUE_FINDING_RULES: tuple[FindingRule, ...] = (
    FindingRule(FindingCategory.fact_check, "fact_check", "/fact_checks/"),
    FindingRule(
        FindingCategory.structure_evaluation,
        "evaluate_structure",
        "structure_evaluation.json",
    ),
    FindingRule(
        FindingCategory.completeness_analysis,
        "analyze_completeness",
        "completeness_analysis.json",
    ),
    FindingRule(FindingCategory.save_critique, "save_critique", "_critique.json"),
)


def _file_read_rule(result: ResultEvent, context: ClassificationContext) -> Artifact | None:
    record = context.invocation_before(result, floor=context.start_index)
    if record is None:
        return None
    args = record.invocation.arguments
    path = args.get("file_path") or args.get("filePath") or "unknown"
    return FileRead(
        index=result.index,
        path=str(path),
        content=result.content,
        correlation_id=result.correlation_id,
    )


def _file_operation_rule(
    result: ResultEvent, context: ClassificationContext
) -> Artifact | None:
    record = context.invocation_before(result)
    if record is None:
        return None
    return FileOperation(
        index=result.index,
        correlation_id=result.correlation_id,
        tool_name=result.producer_name,
        arguments=dict(record.invocation.arguments),
        result=None if result.is_error else result.content,
        error=result.content if result.is_error else None,
    )


def _critique_tool_rule(
    result: ResultEvent, context: ClassificationContext
) -> Artifact | None:
    documents: list[StructuredFinding] = []
    for match in CRITIQUE_PATH_PATTERN.findall(result.content):
        path = match.rstrip(".,;:)")
        file_read = next((fr for fr in context.file_reads if fr.path == path), None)
        if file_read is None:
            continue
        try:
            data = json.loads(file_read.content)
        except ValueError:
            context.logger.warning(
                "malformed_structured_payload",
                producer=result.producer_name,
                path=path,
                index=result.index,
            )
            continue
        category = next(
            (
                rule.category
                for rule in CRITIQUE_FINDING_RULES
                if rule.matches(result.producer_name, path)
            ),
            None,
        )
        if category is not None:
            documents.append(StructuredFinding(category=category, path=path, data=data))

    return CritiqueToolOutput(
        index=result.index,
        tool_name=result.producer_name,
        correlation_id=result.correlation_id,
        documents=tuple(documents),
    )


CRITIQUE_RULES: tuple[ArtifactRule, ...] = (
    ArtifactRule(ArtifactCategory.file_reads, _file_read_rule, READ_TOOLS),
    ArtifactRule(
        ArtifactCategory.file_operations, _file_operation_rule, FILE_OPERATION_TOOLS
    ),
    ArtifactRule(ArtifactCategory.critique_outputs, _critique_tool_rule, CRITIQUE_TOOLS),
)


# Planning


def _planning_tool_rule(
    result: ResultEvent, context: ClassificationContext
) -> Artifact | None:
    parsed = parse_json_object(result.content)
    if parsed is None:
        context.logger.warning(
            "malformed_structured_payload",
            producer=result.producer_name,
            index=result.index,
        )
    record = context.index.invocation(result.correlation_id)
    return PlanningToolResult(
        index=result.index,
        tool_name=result.producer_name,
        correlation_id=result.correlation_id,
        arguments=dict(record.invocation.arguments) if record else {},
        result=parsed,
    )


PLANNING_RULES: tuple[ArtifactRule, ...] = (
    ArtifactRule(ArtifactCategory.planning_results, _planning_tool_rule, PLANNING_TOOLS),
)
