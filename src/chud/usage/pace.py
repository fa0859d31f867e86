"""Spend aggregation and EWMA pace ($/hr) calculation.

Each cost is weighted by ``2 ** (-age / half_life)``: 1.0 now, 0.5 one
half-life ago, 0.25 two half-lives ago. The weighted sum is divided by the
integral of that kernel from 0 to infinity, ``half_life / ln 2``, which turns a
sum of dollars into dollars per unit time. A steady spend of R $/hr therefore
reads as R regardless of the half-life.

The lookback window only bounds how much history is scanned. It is kept at
six half-lives (2**-6, about 1.6% of the weight is dropped) and never less than
an hour.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from chud.types.usage import PaceResult
from chud.usage.events import CostEventSource
from chud.usage.pricing import event_cost

logger = logging.getLogger(__name__)

DEFAULT_HALF_LIFE = timedelta(minutes=7)
MIN_LOOKBACK = timedelta(hours=1)
LOOKBACK_HALF_LIVES = 6


@dataclass(frozen=True, slots=True)
class CostSample:
    """A positive cost at a point in time, input to the smoother."""

    timestamp: datetime
    cost: float


def lookback_window(half_life: timedelta) -> timedelta:
    return max(half_life * LOOKBACK_HALF_LIVES, MIN_LOOKBACK)


def effective_window_hours(half_life: timedelta) -> float:
    """Integral of the decay kernel, in hours."""
    return (half_life.total_seconds() / math.log(2)) / 3600.0


def decay_weight(age: timedelta, half_life: timedelta) -> float:
    # Future-dated samples (clock skew) count as "now"
    age_s = max(age.total_seconds(), 0.0)
    return 2.0 ** (-age_s / half_life.total_seconds())


def weighted_cost_sum(
    samples: Iterable[CostSample], now: datetime, half_life: timedelta,
) -> float:
    return sum(s.cost * decay_weight(now - s.timestamp, half_life) for s in samples)


def ewma_pace(samples: Iterable[CostSample], now: datetime, half_life: timedelta) -> float:
    """Smoothed spend rate in dollars per hour."""
    if half_life.total_seconds() <= 0:
        raise ValueError("half_life must be positive")
    return weighted_cost_sum(samples, now, half_life) / effective_window_hours(half_life)


class PaceAggregator:
    """Aggregates cost events from a source into a PaceResult."""

    def __init__(
        self,
        source: CostEventSource,
        *,
        half_life: timedelta = DEFAULT_HALF_LIFE,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        if half_life.total_seconds() <= 0:
            raise ValueError("half_life must be positive")
        self._source = source
        self._half_life = half_life
        self._clock = clock

    @property
    def half_life(self) -> timedelta:
        return self._half_life

    def aggregate(self, now: datetime | None = None) -> PaceResult:
        now = now or self._clock()
        cutoff = now - lookback_window(self._half_life)

        samples: list[CostSample] = []
        total_cost = 0.0
        input_tokens = output_tokens = cache_tokens = 0
        count = 0
        earliest: datetime | None = None

        for event in self._source.events_since(cutoff):
            if event.timestamp <= cutoff:
                continue
            cost = event_cost(event)
            total_cost += cost
            input_tokens += event.input_tokens
            output_tokens += event.output_tokens
            cache_tokens += event.cache_tokens
            count += 1
            if earliest is None or event.timestamp < earliest:
                earliest = event.timestamp
            if cost > 0:
                samples.append(CostSample(timestamp=event.timestamp, cost=cost))

        if count == 0:
            return PaceResult()

        active_minutes = max((now - earliest).total_seconds(), 0.0) / 60.0 if earliest else 0.0
        pace = ewma_pace(samples, now, self._half_life)
        logger.debug(
            "Aggregated %d events: $%.4f total, $%.4f/hr pace", count, total_cost, pace,
        )
        return PaceResult(
            total_cost=total_cost,
            pace=pace,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            cache_tokens=cache_tokens,
            event_count=count,
            active_minutes=active_minutes,
        )
