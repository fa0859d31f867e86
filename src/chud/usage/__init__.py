"""Usage tracking: pricing, cost events, daily totals and EWMA pace."""

from chud.usage.billing import CodexUsageSource
from chud.usage.daily import daily_usage
from chud.usage.events import CostEventSource, StaticEventSource, TranscriptEventSource
from chud.usage.pace import PaceAggregator, ewma_pace
from chud.usage.pricing import PRICING, event_cost

__all__ = [
    "CodexUsageSource",
    "CostEventSource",
    "PRICING",
    "PaceAggregator",
    "StaticEventSource",
    "TranscriptEventSource",
    "daily_usage",
    "event_cost",
    "ewma_pace",
]
