"""Segment registry: maps a configured ``type`` tag to its segment class."""

from __future__ import annotations

from chud.segments.base import BaseSegment
from chud.segments.context import ContextSegment
from chud.segments.directory import DirectorySegment
from chud.segments.git import GitSegment
from chud.segments.pace import PaceSegment
from chud.segments.pr import PrSegment
from chud.segments.thoughts import ThoughtsSegment
from chud.segments.time import TimeSegment
from chud.segments.usage import UsageSegment
from chud.types.config import SegmentSpec

SEGMENTS: dict[str, type[BaseSegment]] = {
    cls.type: cls
    for cls in (
        DirectorySegment,
        GitSegment,
        PrSegment,
        UsageSegment,
        PaceSegment,
        ContextSegment,
        TimeSegment,
        ThoughtsSegment,
    )
}


def create_segment(spec: SegmentSpec) -> BaseSegment:
    """Instantiate the segment for *spec*. Raises KeyError for unknown types."""
    if spec.type not in SEGMENTS:
        available = ", ".join(sorted(SEGMENTS))
        raise KeyError(f"Unknown segment type: {spec.type!r}. Available: {available}")
    return SEGMENTS[spec.type](spec)


def list_segment_types() -> list[str]:
    """Return all registered segment type tags."""
    return sorted(SEGMENTS)
