"""Tests for chud.usage.pace (EWMA spend pace)."""

from __future__ import annotations

import math
from datetime import timedelta
from pathlib import Path

import pytest

from chud.types.usage import PaceResult
from chud.usage.events import StaticEventSource, TranscriptEventSource
from chud.usage.pace import (
    DEFAULT_HALF_LIFE,
    CostSample,
    PaceAggregator,
    decay_weight,
    effective_window_hours,
    ewma_pace,
    lookback_window,
    weighted_cost_sum,
)
from tests.conftest import NOW, make_event

H = timedelta(minutes=7)


def _aggregate(events, half_life: timedelta = H) -> PaceResult:
    return PaceAggregator(StaticEventSource(events), half_life=half_life, clock=lambda: NOW).aggregate()


class TestDecay:
    def test_weight_now_is_one(self):
        assert decay_weight(timedelta(0), H) == 1.0

    def test_weight_halves_each_half_life(self):
        assert decay_weight(H, H) == pytest.approx(0.5)
        assert decay_weight(H * 2, H) == pytest.approx(0.25)

    def test_future_event_counts_as_now(self):
        assert decay_weight(timedelta(minutes=-5), H) == 1.0

    def test_weighted_sum_at_one_half_life(self):
        samples = [CostSample(timestamp=NOW - H, cost=2.0)]
        assert weighted_cost_sum(samples, NOW, H) == pytest.approx(1.0)

    def test_effective_window(self):
        assert effective_window_hours(H) == pytest.approx((7 / 60) / math.log(2))


class TestLookback:
    def test_six_half_lives(self):
        assert lookback_window(timedelta(minutes=30)) == timedelta(hours=3)

    def test_never_less_than_an_hour(self):
        assert lookback_window(H) == timedelta(hours=1)


class TestEwmaPace:
    def test_single_event_now(self):
        pace = ewma_pace([CostSample(timestamp=NOW, cost=1.0)], NOW, H)
        assert pace == pytest.approx(1.0 / effective_window_hours(H))

    def test_empty(self):
        assert ewma_pace([], NOW, H) == 0.0

    def test_rejects_non_positive_half_life(self):
        with pytest.raises(ValueError):
            ewma_pace([], NOW, timedelta(0))


class TestPaceAggregator:
    def test_two_sonnet_events(self):
        result = _aggregate([make_event(), make_event()])
        assert result.total_cost == pytest.approx(0.066)
        assert result.pace == pytest.approx(0.392, abs=0.001)
        assert result.event_count == 2
        assert result.input_tokens == 2000
        assert result.output_tokens == 4000

    def test_no_events(self):
        assert _aggregate([]) == PaceResult()

    def test_events_outside_lookback_ignored(self):
        result = _aggregate([make_event(timedelta(hours=2))])
        assert result.event_count == 0
        assert result.total_cost == 0.0

    def test_linear_over_disjoint_sets(self):
        a = [make_event(timedelta(minutes=1)), make_event(timedelta(minutes=20))]
        b = [make_event(timedelta(minutes=5), output_tokens=500)]
        both = _aggregate(a + b)
        assert both.total_cost == pytest.approx(_aggregate(a).total_cost + _aggregate(b).total_cost)
        assert both.pace == pytest.approx(_aggregate(a).pace + _aggregate(b).pace)

    def test_unknown_model_counted_at_zero(self):
        result = _aggregate([make_event(model="gpt-imaginary")])
        assert result.event_count == 1
        assert result.total_cost == 0.0
        assert result.pace == 0.0

    def test_cache_tokens_totalled(self):
        result = _aggregate([make_event(cache_5m=10, cache_1h=20, cache_read=30)])
        assert result.cache_tokens == 60

    def test_active_minutes_from_earliest_event(self):
        result = _aggregate([make_event(timedelta(minutes=30)), make_event()])
        assert result.active_minutes == pytest.approx(30.0)

    def test_default_half_life(self):
        assert PaceAggregator(StaticEventSource([])).half_life == DEFAULT_HALF_LIFE

    def test_missing_log_directory(self, tmp_path: Path):
        source = TranscriptEventSource(tmp_path / "does-not-exist")
        result = PaceAggregator(source, half_life=H, clock=lambda: NOW).aggregate()
        assert result == PaceResult()
