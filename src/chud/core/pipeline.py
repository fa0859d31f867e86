"""Render pipeline: config -> segments -> prefetch -> render -> one line.

Phase 1 awaits every segment's ``update_cache()`` concurrently. Phase 2
renders the segments synchronously in configured order and hands the outputs
to the renderer exactly once.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from chud.core.data import DataAccess
from chud.renderer import render_line
from chud.segments.base import BaseSegment
from chud.segments.registry import create_segment
from chud.types.config import Config
from chud.types.context import SessionContext
from chud.types.segments import SegmentOutput

logger = logging.getLogger(__name__)

SESSION_CLEANUP_CHANCE = 0.01


def build_segments(config: Config) -> list[BaseSegment]:
    """Instantiate configured segments in order, skipping unknown types."""
    segments: list[BaseSegment] = []
    for spec in config.segments:
        try:
            segments.append(create_segment(spec))
        except KeyError as exc:
            logger.warning("Skipping segment: %s", exc)
    return segments


async def prefetch(
    segments: Sequence[BaseSegment], ctx: SessionContext, data: DataAccess,
) -> None:
    """Run every prefetching segment's update step concurrently.

    A failing update is logged and leaves that segment with no data; it never
    cancels the others.
    """
    pending = [s for s in segments if s.prefetch]
    if not pending:
        return
    results = await asyncio.gather(
        *(s.update_cache(ctx, data) for s in pending),
        return_exceptions=True,
    )
    for segment, result in zip(pending, results):
        if isinstance(result, Exception):
            logger.warning("Segment '%s' prefetch failed: %s", segment.type, result)


def render_segments(
    segments: Sequence[BaseSegment], ctx: SessionContext, data: DataAccess,
) -> list[SegmentOutput]:
    return [s.safe_render(ctx, data) for s in segments]


def _maybe_cleanup_sessions(data: DataAccess) -> None:
    if data.sessions is None or data.rng.random() >= SESSION_CLEANUP_CHANCE:
        return
    try:
        data.sessions.cleanup_old_sessions()
    except OSError as exc:
        logger.warning("Session cleanup failed: %s", exc)


async def run(config: Config, ctx: SessionContext, data: DataAccess) -> str:
    """Produce the styled status line for *ctx*."""
    segments = build_segments(config)
    await prefetch(segments, ctx, data)
    outputs = render_segments(segments, ctx, data)
    _maybe_cleanup_sessions(data)
    line = render_line(outputs, config.theme)
    logger.debug("Rendered %d of %d segments", sum(1 for o in outputs if not o.is_empty), len(outputs))
    return line


def render_statusline(config: Config, ctx: SessionContext, data: DataAccess) -> str:
    """Synchronous wrapper around :func:`run`."""
    return asyncio.run(run(config, ctx, data))
