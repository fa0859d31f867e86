"""Today's spend from local transcripts."""

from __future__ import annotations

from datetime import datetime

from chud.types.usage import DailyUsage
from chud.usage.events import CostEventSource
from chud.usage.pricing import event_cost


def local_midnight(now: datetime) -> datetime:
    """Start of the local calendar day containing *now* (aware datetime)."""
    local = now.astimezone()
    return local.replace(hour=0, minute=0, second=0, microsecond=0)


def today_string(now: datetime | None = None) -> str:
    """Local date as YYYY-MM-DD."""
    return (now or datetime.now().astimezone()).astimezone().strftime("%Y-%m-%d")


def daily_usage(source: CostEventSource, now: datetime) -> DailyUsage:
    """Sum cost and tokens of every event since local midnight."""
    start = local_midnight(now)
    cost = 0.0
    input_tokens = output_tokens = 0
    for event in source.events_since(start):
        cost += event_cost(event)
        input_tokens += event.input_tokens
        output_tokens += event.output_tokens
    return DailyUsage(cost=cost, input_tokens=input_tokens, output_tokens=output_tokens)
