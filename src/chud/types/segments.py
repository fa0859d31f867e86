"""Segment output types."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SegmentOutput:
    """Rendered segment: text plus its colors.

    An empty ``text`` means the segment is omitted from the line.
    """

    text: str
    fg: str
    bg: str
    allow_wrap: bool = False  # Permit line breaks inside this segment's text

    @property
    def is_empty(self) -> bool:
        return not self.text
