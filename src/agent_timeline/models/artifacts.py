"""Artifact models collected while scanning a delegated sub-task.

Artifacts are kind-specific typed records. Each one remembers the index
of the result event it was built from.
"""

from typing import Any, Literal

from pydantic import Field

from agent_timeline.models.base import FrozenSchema
from agent_timeline.models.enums import ArtifactCategory, FindingCategory

__all__ = [
    "Artifact",
    "ArtifactBuckets",
    "CritiqueToolOutput",
    "FileOperation",
    "FileRead",
    "PlanningToolResult",
    "SearchResultBatch",
    "StructuredFinding",
]


class SearchResultBatch(FrozenSchema):
    """One search call's results (Tavily or Exa shaped)."""

    index: int
    query: str = ""
    results: tuple[dict[str, Any], ...] = ()
    response_time: float | None = None
    search_type: Literal["tavily", "exa"]


class FileRead(FrozenSchema):
    """A file read performed inside a sub-task."""

    index: int
    path: str
    content: str = ""
    correlation_id: str = ""


class FileOperation(FrozenSchema):
    """A file write, edit or listing performed inside a sub-task.

    Attributes:
        index: Index of the result event.
        correlation_id: Identifier linking invocation and result.
        tool_name: Name of the tool that ran.
        arguments: Arguments of the originating invocation.
        result: Result text when the tool succeeded.
        error: Result text when the tool failed.

    """

    index: int
    correlation_id: str = ""
    tool_name: str
    arguments: dict[str, Any] = Field(default_factory=dict)
    result: str | None = None
    error: str | None = None


class StructuredFinding(FrozenSchema):
    """A JSON document written by a critique tool and read back."""

    category: FindingCategory
    path: str
    data: Any = None


class CritiqueToolOutput(FrozenSchema):
    """Result of a critique tool with the documents it could be resolved to."""

    index: int
    tool_name: str
    correlation_id: str = ""
    documents: tuple[StructuredFinding, ...] = ()


class PlanningToolResult(FrozenSchema):
    """Result of a planning tool.

    ``result`` holds the parsed JSON object, or None when the payload was
    not a JSON object.
    """

    index: int
    tool_name: str
    correlation_id: str = ""
    arguments: dict[str, Any] = Field(default_factory=dict)
    result: dict[str, Any] | None = None


Artifact = (
    SearchResultBatch | FileRead | FileOperation | CritiqueToolOutput | PlanningToolResult
)


class ArtifactBuckets(FrozenSchema):
    """Typed artifact collections of one group.

    Each kind fills only the buckets its classification table routes to.
    """

    search_results: tuple[SearchResultBatch, ...] = ()
    file_reads: tuple[FileRead, ...] = ()
    file_operations: tuple[FileOperation, ...] = ()
    critique_outputs: tuple[CritiqueToolOutput, ...] = ()
    planning_results: tuple[PlanningToolResult, ...] = ()

    def bucket(self, category: ArtifactCategory) -> tuple[Artifact, ...]:
        """Return the artifacts routed to ``category``."""
        return getattr(self, category.value)

    def count(self) -> int:
        """Total number of artifacts across all buckets."""
        return sum(len(self.bucket(category)) for category in ArtifactCategory)

    def findings(self, category: FindingCategory) -> list[Any]:
        """Return the JSON documents of one finding category, in scan order."""
        return [
            document.data
            for output in self.critique_outputs
            for document in output.documents
            if document.category == category
        ]

    def latest_planning_result(self, tool_name: str) -> dict[str, Any] | None:
        """Return the last parsed result of a planning tool, if any."""
        latest: dict[str, Any] | None = None
        for item in self.planning_results:
            if item.tool_name == tool_name and item.result is not None:
                latest = item.result
        return latest
