"""Usage and cost types."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class ModelPricing:
    """Per-model rates in dollars per million tokens."""

    input: float
    output: float
    cache_write_5m: float
    cache_write_1h: float
    cache_read: float


@dataclass(frozen=True, slots=True)
class CostEvent:
    """One API call's token usage, as recorded in a session transcript."""

    timestamp: datetime
    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    cache_write_5m_tokens: int = 0
    cache_write_1h_tokens: int = 0
    cache_read_tokens: int = 0

    @property
    def cache_tokens(self) -> int:
        return self.cache_write_5m_tokens + self.cache_write_1h_tokens + self.cache_read_tokens


@dataclass(frozen=True, slots=True)
class PaceResult:
    """Aggregated spend over the lookback window.

    ``pace`` is the EWMA-smoothed spend rate in dollars per hour.
    """

    total_cost: float = 0.0
    pace: float = 0.0
    input_tokens: int = 0
    output_tokens: int = 0
    cache_tokens: int = 0
    event_count: int = 0
    active_minutes: float = 0.0


@dataclass(frozen=True, slots=True)
class DailyUsage:
    """Cost and token totals for one calendar day."""

    cost: float = 0.0
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def __add__(self, other: DailyUsage) -> DailyUsage:
        return DailyUsage(
            cost=self.cost + other.cost,
            input_tokens=self.input_tokens + other.input_tokens,
            output_tokens=self.output_tokens + other.output_tokens,
        )
