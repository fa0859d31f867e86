"""Usage segment: today's spend across Claude Code and Codex."""

from __future__ import annotations

import asyncio
import logging

from chud.core.data import DataAccess
from chud.segments.base import BaseSegment
from chud.types.config import SegmentSpec
from chud.types.context import SessionContext
from chud.types.segments import SegmentOutput
from chud.types.usage import DailyUsage
from chud.usage.daily import today_string

logger = logging.getLogger(__name__)

ICON = "\u03a3"  # Σ  daily sum


def format_tokens(tokens: int) -> str:
    """1234 -> 1.2K, 3400000 -> 3.4M."""
    if tokens >= 1_000_000:
        return f"{tokens / 1_000_000:.1f}M"
    if tokens >= 1_000:
        return f"{tokens / 1_000:.1f}K"
    return str(tokens)


class UsageSegment(BaseSegment):
    type = "usage"
    prefetch = True

    def __init__(self, spec: SegmentSpec) -> None:
        super().__init__(spec)
        self._usage: DailyUsage | None = None

    @property
    def usage(self) -> DailyUsage | None:
        return self._usage

    async def update_cache(self, ctx: SessionContext, data: DataAccess) -> None:
        """Load local and Codex totals for today in parallel and combine them."""
        now = data.clock()
        local_task = asyncio.to_thread(data.local_usage_today, now)
        if data.codex is not None and self.spec.extra.get("include_codex", True):
            local, codex = await asyncio.gather(local_task, data.codex.today(today_string(now)))
        else:
            local, codex = await local_task, DailyUsage()
        self._usage = local + codex
        logger.debug("Today: local $%.4f, codex $%.4f", local.cost, codex.cost)

    def render(self, ctx: SessionContext, data: DataAccess) -> SegmentOutput:
        usage = self._usage or DailyUsage()
        parts: list[str] = []
        if self.option("icon", False):
            parts.append(ICON)
        if self.option("cost", True):
            parts.append(f"${usage.cost:.2f}")
        if self.option("tokens", False):
            parts.append(format_tokens(usage.total_tokens))
        if period := self.option("period", "today"):
            parts.append(str(period))
        return self._output(parts)
