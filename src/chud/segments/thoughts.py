"""Thoughts segment: a short piece of commentary about the session.

Each render picks one of three content families by weighted random choice:

* ``contextual`` - a reaction to the time of day, git state or today's spend
* ``pool`` - an entry from the static (or user-supplied) thought pool
* ``quote`` - a quote fetched from the web during prefetch

The text shown last time is kept in a small state file and is not picked
again on the next render. The quote fetch may fail or time out freely; the
pool is always available.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from chud.core.data import DataAccess
from chud.segments.base import BaseSegment
from chud.types.config import SegmentSpec
from chud.types.context import SessionContext
from chud.types.segments import SegmentOutput

logger = logging.getLogger(__name__)

ICON = "\U0001f4ad"  # 💭

DEFAULT_THOUGHTS: tuple[str, ...] = (
    "Let's build something cool",
    "Coffee first, code later",
    "One bug at a time",
    "Keep it simple",
    "Ship it!",
    "This could be cleaner...",
    "Time to refactor?",
    "Documentation? What's that?",
    "Works on my machine",
    "TODO: fix this properly",
)

DEFAULT_WEIGHTS: dict[str, float] = {"contextual": 0.5, "pool": 0.3, "quote": 0.2}

HIGH_SPEND = 10.0
LOW_SPEND = 1.0
CLEAN_SLATE_CHANCE = 0.3


def contextual_thought(
    ctx: SessionContext, now: datetime, spend_today: float | None, roll: float,
) -> str | None:
    """A reaction to the current situation, or None when nothing stands out.

    *roll* is a uniform [0, 1) number deciding whether a clean tree is
    remarked upon.
    """
    hour = now.hour
    if hour >= 22:
        return "Late night coding?"
    if hour < 6:
        return "Early bird!"

    if ctx.git is not None:
        if ctx.git.dirty:
            return "Hmm, lots of changes..."
        if roll < CLEAN_SLATE_CHANCE:
            return "Clean slate!"
        if ctx.git.ahead > 0:
            return "Ready to push!"

    if spend_today is not None:
        if spend_today > HIGH_SPEND:
            return "Burning through tokens..."
        if spend_today < LOW_SPEND:
            return "Just getting started"
    return None


class ThoughtsSegment(BaseSegment):
    type = "thoughts"
    prefetch = True

    def __init__(self, spec: SegmentSpec) -> None:
        super().__init__(spec)
        self._quote: str | None = None
        self._spend_today: float | None = None

    @property
    def use_api_quotes(self) -> bool:
        return bool(self.spec.extra.get("use_api_quotes", False))

    @property
    def pool(self) -> tuple[str, ...]:
        custom = self.spec.extra.get("custom_thoughts")
        if isinstance(custom, list) and custom:
            return tuple(str(t) for t in custom)
        return DEFAULT_THOUGHTS

    @property
    def weights(self) -> dict[str, float]:
        weights = dict(DEFAULT_WEIGHTS)
        override = self.spec.extra.get("weights")
        if isinstance(override, dict):
            for family, value in override.items():
                if family in weights and isinstance(value, (int, float)) and value >= 0:
                    weights[family] = float(value)
        return weights

    async def update_cache(self, ctx: SessionContext, data: DataAccess) -> None:
        async def spend() -> float:
            usage = await asyncio.to_thread(data.local_usage_today)
            return usage.cost

        if self.use_api_quotes and data.quotes is not None:
            self._spend_today, self._quote = await asyncio.gather(spend(), data.quotes.current())
        else:
            self._spend_today = await spend()

    def choose(self, ctx: SessionContext, data: DataAccess, last: str | None) -> str:
        """Pick the next thought, never returning *last* when an alternative exists."""
        rng = data.rng
        now = data.clock().astimezone()
        candidates: dict[str, list[str]] = {}

        reaction = contextual_thought(ctx, now, self._spend_today, rng.random())
        if reaction and reaction != last:
            candidates["contextual"] = [reaction]
        if self._quote and self._quote != last:
            candidates["quote"] = [self._quote]
        pool = [t for t in self.pool if t != last] or list(self.pool)
        candidates["pool"] = pool

        weights = self.weights
        families = list(candidates)
        family_weights = [weights.get(f, 0.0) for f in families]
        if sum(family_weights) <= 0:
            family = "pool"
        else:
            family = rng.choices(families, weights=family_weights, k=1)[0]
        logger.debug("Thought family %s from %s", family, families)
        return rng.choice(candidates[family])

    def render(self, ctx: SessionContext, data: DataAccess) -> SegmentOutput:
        state = data.thoughts_state.load() if data.thoughts_state is not None else {}
        last = state.get("last_value")
        thought = self.choose(ctx, data, last if isinstance(last, str) else None)

        if data.thoughts_state is not None:
            data.thoughts_state.save({
                "last_value": thought,
                "last_update": data.clock().isoformat(),
            })

        parts: list[str] = []
        if self.option("icon", False):
            parts.append(ICON)
        parts.append(f'"{thought}"' if self.option("quotes", False) else thought)
        return self._output(parts, allow_wrap=True)
