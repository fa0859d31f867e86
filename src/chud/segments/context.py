"""Context segment: context-window usage as a 5-tick gauge and percentage."""

from __future__ import annotations

import math

from chud.core.data import DataAccess
from chud.segments.base import BaseSegment
from chud.types.context import SessionContext
from chud.types.segments import SegmentOutput

FILLED = "\u25aa"  # ▪
EMPTY = "\u25ab"  # ▫
TICKS = 5


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def gauge(percentage: float) -> str:
    """``▪▪▫▫▫`` for 40%. Each tick covers 20 points, rounded half up."""
    filled = min(max(_round_half_up(percentage / 20), 0), TICKS)
    return FILLED * filled + EMPTY * (TICKS - filled)


class ContextSegment(BaseSegment):
    type = "context"

    def render(self, ctx: SessionContext, data: DataAccess) -> SegmentOutput:
        window = ctx.context_window
        if window is None:
            return self._empty()

        # Start of session: nothing used yet
        used = window.used_percentage if window.used_percentage is not None else 0.0
        remaining = window.remaining_percentage if window.remaining_percentage is not None else 100.0
        mode = self.option("mode", "used")

        if mode == "used":
            label = f"{_round_half_up(used)}% used"
        elif mode == "remaining":
            label = f"{_round_half_up(remaining)}% left"
        elif mode == "both":
            label = f"{_round_half_up(used)}% / {_round_half_up(remaining)}%"
        else:
            return self._empty()

        parts: list[str] = []
        if self.option("icon", False):
            parts.append(gauge(remaining if mode == "remaining" else used))
        parts.append(label)
        return self._output(parts)
