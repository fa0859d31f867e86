"""Model pricing table and per-event cost calculation."""

from __future__ import annotations

import logging

from chud.types.usage import CostEvent, ModelPricing

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Pricing catalogue (dollars per million tokens)
# Cache writes: 5m = 1.25x input, 1h = 2x input; cache reads = 0.1x input
# ---------------------------------------------------------------------------

_OPUS_4_5 = ModelPricing(input=5.0, output=25.0, cache_write_5m=6.25, cache_write_1h=10.0, cache_read=0.5)
_SONNET = ModelPricing(input=3.0, output=15.0, cache_write_5m=3.75, cache_write_1h=6.0, cache_read=0.3)
_HAIKU_4_5 = ModelPricing(input=1.0, output=5.0, cache_write_5m=1.25, cache_write_1h=2.0, cache_read=0.1)
_HAIKU_3_5 = ModelPricing(input=0.8, output=4.0, cache_write_5m=1.0, cache_write_1h=1.6, cache_read=0.08)

PRICING: dict[str, ModelPricing] = {
    # -- Opus 4.5 ----------------------------------------------------------
    "claude-opus-4-5-20251101": _OPUS_4_5,
    "claude-opus-4-5": _OPUS_4_5,
    # -- Sonnet 4.5 --------------------------------------------------------
    "claude-sonnet-4-5-20250929": _SONNET,
    "claude-sonnet-4-5": _SONNET,
    # -- Haiku 4.5 ---------------------------------------------------------
    "claude-haiku-4-5-20251001": _HAIKU_4_5,
    "claude-haiku-4-5": _HAIKU_4_5,
    # -- Legacy 3.5 --------------------------------------------------------
    "claude-3-5-sonnet-20241022": _SONNET,
    "claude-3-5-haiku-20241022": _HAIKU_3_5,
}

PER_MTOK = 1_000_000

# Unknown models are reported once per process rather than once per event.
_warned_models: set[str] = set()


def get_pricing(model: str) -> ModelPricing | None:
    """Return the rates for *model*, or None if it is not in the table."""
    return PRICING.get(model)


def event_cost(event: CostEvent) -> float:
    """Dollar cost of one event. Unknown models cost 0 and log a warning."""
    pricing = get_pricing(event.model)
    if pricing is None:
        if event.model not in _warned_models:
            _warned_models.add(event.model)
            logger.warning("Unknown model for pricing: %s", event.model)
        return 0.0

    return (
        event.input_tokens * pricing.input
        + event.output_tokens * pricing.output
        + event.cache_write_5m_tokens * pricing.cache_write_5m
        + event.cache_write_1h_tokens * pricing.cache_write_1h
        + event.cache_read_tokens * pricing.cache_read
    ) / PER_MTOK
