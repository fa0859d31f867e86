"""Tests for chud.usage.pricing."""

from __future__ import annotations

import pytest

from chud.usage.pricing import PRICING, event_cost, get_pricing
from tests.conftest import make_event


class TestPricing:
    def test_known_models(self):
        assert get_pricing("claude-sonnet-4-5").input == 3.0
        assert get_pricing("claude-opus-4-5").output == 25.0
        assert get_pricing("claude-haiku-4-5-20251001").cache_read == 0.1

    def test_unknown_model(self):
        assert get_pricing("not-a-model") is None

    def test_cache_write_multipliers(self):
        for pricing in PRICING.values():
            assert pricing.cache_write_5m == pytest.approx(pricing.input * 1.25)
            assert pricing.cache_write_1h == pytest.approx(pricing.input * 2)
            assert pricing.cache_read == pytest.approx(pricing.input * 0.1)


class TestEventCost:
    def test_input_and_output(self):
        assert event_cost(make_event()) == pytest.approx(0.033)

    def test_cache_components(self):
        event = make_event(
            input_tokens=0, output_tokens=0,
            cache_5m=1_000_000, cache_1h=1_000_000, cache_read=1_000_000,
        )
        assert event_cost(event) == pytest.approx(3.75 + 6.0 + 0.3)

    def test_unknown_model_costs_nothing(self, caplog):
        with caplog.at_level("WARNING", logger="chud.usage.pricing"):
            assert event_cost(make_event(model="mystery-model-x")) == 0.0
        assert "mystery-model-x" in caplog.text
