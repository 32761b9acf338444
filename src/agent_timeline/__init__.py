"""agent-timeline: segment a multi-agent conversation log into a timeline.

The engine takes a flat, chronologically ordered event log (human turns,
agent turns carrying tool invocations, and tool results) and rebuilds the
delegated sub-agent structure: research, critique and planning groups plus
a residual list of individually classified activities.
"""

from agent_timeline.segmentation.engine import SegmentationResult, TimelineEngine

__version__ = "0.3.0"

__all__ = ["SegmentationResult", "TimelineEngine", "__version__"]
