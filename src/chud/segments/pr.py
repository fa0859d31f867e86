"""PR segment: the pull request open for the current branch."""

from __future__ import annotations

from chud.core.cache import TTLCache
from chud.core.data import DataAccess
from chud.segments.base import BaseSegment
from chud.sources.pr import PrInfo
from chud.types.config import SegmentSpec
from chud.types.context import SessionContext
from chud.types.segments import SegmentOutput

PR_CACHE_TTL = 30.0

ICON = "\u2191\u21b0"  # ↑↰
DEFAULT_FALLBACK = "no pr"


class PrSegment(BaseSegment):
    """Always visible when enabled: shows a fallback label when no PR is open."""

    type = "pr"

    def __init__(self, spec: SegmentSpec, *, cache: TTLCache[PrInfo] | None = None) -> None:
        super().__init__(spec)
        self._cache: TTLCache[PrInfo] = cache or TTLCache(PR_CACHE_TTL, name="pr")

    def render(self, ctx: SessionContext, data: DataAccess) -> SegmentOutput:
        pr = self._cache.get(ctx.cwd, lambda: data.pr_info(ctx.cwd))

        parts: list[str] = []
        if self.option("icon", False):
            parts.append(ICON)

        if pr is None or not pr.is_open:
            parts.append(str(self.option("fallback", DEFAULT_FALLBACK)))
        elif self.option("number", True):
            parts.append(f"#{pr.number}")
        return self._output(parts)
