"""Pace segment: EWMA-smoothed spend rate in $/hr."""

from __future__ import annotations

import asyncio
from datetime import timedelta

from chud.core.data import DataAccess
from chud.segments.base import BaseSegment
from chud.types.config import SegmentSpec
from chud.types.context import SessionContext
from chud.types.segments import SegmentOutput
from chud.types.usage import PaceResult
from chud.usage.pace import DEFAULT_HALF_LIFE, PaceAggregator

ICON = "\u25b3"  # △

PERIOD_SUFFIX = {"hourly": "/hr"}


class PaceSegment(BaseSegment):
    type = "pace"
    prefetch = True

    def __init__(self, spec: SegmentSpec) -> None:
        super().__init__(spec)
        self._result: PaceResult | None = None

    @property
    def result(self) -> PaceResult | None:
        return self._result

    @property
    def half_life(self) -> timedelta:
        minutes = self.option("half_life_minutes")
        if isinstance(minutes, (int, float)) and minutes > 0:
            return timedelta(minutes=minutes)
        return DEFAULT_HALF_LIFE

    async def update_cache(self, ctx: SessionContext, data: DataAccess) -> None:
        aggregator = PaceAggregator(data.events, half_life=self.half_life, clock=data.clock)
        self._result = await asyncio.to_thread(aggregator.aggregate)

    def render(self, ctx: SessionContext, data: DataAccess) -> SegmentOutput:
        pace = self._result.pace if self._result else 0.0
        suffix = PERIOD_SUFFIX.get(str(self.option("period", "hourly")), "/hr")
        parts: list[str] = []
        if self.option("icon", False):
            parts.append(ICON)
        parts.append(f"${pace:.2f}{suffix}")
        return self._output(parts)
