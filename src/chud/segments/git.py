"""Git segment: branch, dirty flag, ahead/behind counts."""

from __future__ import annotations

from chud.core.cache import TTLCache
from chud.core.data import DataAccess
from chud.segments.base import BaseSegment
from chud.types.config import SegmentSpec
from chud.types.context import GitState, SessionContext
from chud.types.segments import SegmentOutput

GIT_CACHE_TTL = 2.0

ICON = "\u2387"  # ⎇  alternative key symbol (branch)
DIRTY = "\u2717"  # ✗
AHEAD = "\u2191"  # ↑
BEHIND = "\u2193"  # ↓


class GitSegment(BaseSegment):
    type = "git"

    def __init__(self, spec: SegmentSpec, *, cache: TTLCache[GitState] | None = None) -> None:
        super().__init__(spec)
        self._cache: TTLCache[GitState] = cache or TTLCache(GIT_CACHE_TTL, name="git")

    def _git_state(self, ctx: SessionContext, data: DataAccess) -> GitState | None:
        # A snapshot supplied by the caller wins over querying git ourselves
        if ctx.git is not None and ctx.git.branch:
            return ctx.git
        return self._cache.get(ctx.cwd, lambda: data.git_info(ctx.cwd))

    def render(self, ctx: SessionContext, data: DataAccess) -> SegmentOutput:
        git = self._git_state(ctx, data)
        if git is None or not git.branch:
            return self._empty()

        parts: list[str] = []
        if self.option("icon", False):
            parts.append(ICON)
        if self.option("branch", True):
            parts.append(git.branch)
        if self.option("status", True) and git.dirty:
            parts.append(DIRTY)
        if self.option("ahead", True) and git.ahead > 0:
            parts.append(f"{AHEAD}{git.ahead}")
        if self.option("behind", True) and git.behind > 0:
            parts.append(f"{BEHIND}{git.behind}")
        return self._output(parts)
