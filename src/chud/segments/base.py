"""Base segment class with shared logic."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar

from chud.core.data import DataAccess
from chud.types.config import SegmentSpec
from chud.types.context import SessionContext
from chud.types.segments import SegmentOutput

logger = logging.getLogger(__name__)


class BaseSegment(ABC):
    """Base class for all segments.

    Subclasses implement :meth:`render`. Segments backed by slow data set
    ``prefetch = True`` and override :meth:`update_cache`, which the pipeline
    awaits once, concurrently with every other segment, before rendering.
    """

    type: ClassVar[str]
    prefetch: ClassVar[bool] = False

    def __init__(self, spec: SegmentSpec) -> None:
        self.spec = spec

    @abstractmethod
    def render(self, ctx: SessionContext, data: DataAccess) -> SegmentOutput:
        ...

    async def update_cache(self, ctx: SessionContext, data: DataAccess) -> None:
        """Fetch slow data ahead of :meth:`render`. No-op by default."""

    def safe_render(self, ctx: SessionContext, data: DataAccess) -> SegmentOutput:
        """Render, collapsing any failure into an empty segment."""
        try:
            return self.render(ctx, data)
        except Exception:
            logger.exception("Segment '%s' failed to render", self.type)
            return self._empty()

    def option(self, name: str, default: object = None) -> object:
        return self.spec.option(name, default)

    def _output(self, parts: list[str], *, allow_wrap: bool = False) -> SegmentOutput:
        return SegmentOutput(
            text=" ".join(p for p in parts if p),
            fg=self.spec.colors.fg,
            bg=self.spec.colors.bg,
            allow_wrap=allow_wrap,
        )

    def _empty(self) -> SegmentOutput:
        return SegmentOutput(text="", fg=self.spec.colors.fg, bg=self.spec.colors.bg)
