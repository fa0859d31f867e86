"""Time segment: wall-clock time of the render."""

from __future__ import annotations

from datetime import datetime

from chud.core.data import DataAccess
from chud.segments.base import BaseSegment
from chud.types.context import SessionContext
from chud.types.segments import SegmentOutput

ICON = "\u25d4"  # ◔


def format_time(now: datetime, *, twelve_hour: bool, seconds: bool) -> str:
    if twelve_hour:
        period = "pm" if now.hour >= 12 else "am"
        hour = now.hour % 12 or 12
        body = f"{hour}:{now.minute:02d}:{now.second:02d}" if seconds else f"{hour}:{now.minute:02d}"
        return body + period
    return now.strftime("%H:%M:%S" if seconds else "%H:%M")


class TimeSegment(BaseSegment):
    type = "time"

    def render(self, ctx: SessionContext, data: DataAccess) -> SegmentOutput:
        now = data.clock().astimezone()
        parts: list[str] = []
        if self.option("icon", False):
            parts.append(ICON)
        parts.append(format_time(
            now,
            twelve_hour=self.option("format", "12h") == "12h",
            seconds=bool(self.option("seconds", False)),
        ))
        return self._output(parts)
