"""Status line segments."""

from chud.segments.base import BaseSegment
from chud.segments.context import ContextSegment
from chud.segments.directory import DirectorySegment
from chud.segments.git import GitSegment
from chud.segments.pace import PaceSegment
from chud.segments.pr import PrSegment
from chud.segments.registry import SEGMENTS, create_segment, list_segment_types
from chud.segments.thoughts import ThoughtsSegment
from chud.segments.time import TimeSegment
from chud.segments.usage import UsageSegment

__all__ = [
    "BaseSegment",
    "ContextSegment",
    "DirectorySegment",
    "GitSegment",
    "PaceSegment",
    "PrSegment",
    "SEGMENTS",
    "ThoughtsSegment",
    "TimeSegment",
    "UsageSegment",
    "create_segment",
    "list_segment_types",
]
