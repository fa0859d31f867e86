"""Tests for the thoughts segment."""

from __future__ import annotations

from datetime import datetime

import pytest

from chud.core.data import DataAccess
from chud.segments.thoughts import DEFAULT_THOUGHTS, ThoughtsSegment, contextual_thought
from chud.types.context import GitState, SessionContext
from tests.conftest import make_spec

CTX = SessionContext(cwd="/repo")
NOON = datetime(2026, 3, 14, 12, 0)

ONLY_POOL = {"contextual": 0, "quote": 0, "pool": 1}
ONLY_QUOTE = {"contextual": 0, "quote": 1, "pool": 0}


class FakeQuotes:
    def __init__(self, quote: str | None) -> None:
        self.quote = quote

    async def current(self) -> str | None:
        return self.quote


class TestContextualThought:
    def test_time_of_day(self):
        assert contextual_thought(CTX, datetime(2026, 3, 14, 23, 0), None, 0.9) == "Late night coding?"
        assert contextual_thought(CTX, datetime(2026, 3, 14, 5, 0), None, 0.9) == "Early bird!"

    def test_git_state(self):
        dirty = SessionContext(cwd="/repo", git=GitState(branch="main", dirty=True))
        ahead = SessionContext(cwd="/repo", git=GitState(branch="main", ahead=3))
        assert contextual_thought(dirty, NOON, None, 0.9) == "Hmm, lots of changes..."
        assert contextual_thought(ahead, NOON, None, 0.1) == "Clean slate!"
        assert contextual_thought(ahead, NOON, None, 0.9) == "Ready to push!"

    def test_spend(self):
        assert contextual_thought(CTX, NOON, 25.0, 0.9) == "Burning through tokens..."
        assert contextual_thought(CTX, NOON, 0.2, 0.9) == "Just getting started"
        assert contextual_thought(CTX, NOON, 5.0, 0.9) is None
        assert contextual_thought(CTX, NOON, None, 0.9) is None


class TestThoughtsSegment:
    def test_default_pool(self):
        assert len(DEFAULT_THOUGHTS) == 10
        assert DEFAULT_THOUGHTS[-1] == "TODO: fix this properly"

    def test_picks_from_pool(self, data: DataAccess):
        segment = ThoughtsSegment(make_spec("thoughts", extra={"weights": ONLY_POOL}))
        out = segment.render(CTX, data)
        assert out.text in DEFAULT_THOUGHTS
        assert out.allow_wrap is True

    def test_never_repeats_last(self, data: DataAccess):
        extra = {"weights": ONLY_POOL, "custom_thoughts": ["alpha", "beta"]}
        segment = ThoughtsSegment(make_spec("thoughts", extra=extra))
        seen = [segment.render(CTX, data).text for _ in range(6)]
        assert all(a != b for a, b in zip(seen, seen[1:]))
        assert set(seen) == {"alpha", "beta"}

    def test_single_entry_pool_may_repeat(self, data: DataAccess):
        extra = {"weights": ONLY_POOL, "custom_thoughts": ["only"]}
        segment = ThoughtsSegment(make_spec("thoughts", extra=extra))
        assert segment.render(CTX, data).text == "only"
        assert segment.render(CTX, data).text == "only"

    def test_state_persisted(self, data: DataAccess):
        extra = {"weights": ONLY_POOL, "custom_thoughts": ["alpha"]}
        ThoughtsSegment(make_spec("thoughts", extra=extra)).render(CTX, data)
        state = data.thoughts_state.load()
        assert state["last_value"] == "alpha"
        assert state["last_update"].startswith("2026-03-14")

    def test_quotes_and_icon(self, data: DataAccess):
        extra = {"weights": ONLY_POOL, "custom_thoughts": ["Ship it"]}
        segment = ThoughtsSegment(make_spec("thoughts", extra=extra, icon=True, quotes=True))
        assert segment.render(CTX, data).text == '💭 "Ship it"'

    @pytest.mark.asyncio
    async def test_api_quote(self, data: DataAccess):
        data.quotes = FakeQuotes("Simplicity is prerequisite. - Dijkstra")
        segment = ThoughtsSegment(make_spec("thoughts", extra={"use_api_quotes": True, "weights": ONLY_QUOTE}))
        await segment.update_cache(CTX, data)
        assert segment.render(CTX, data).text == "Simplicity is prerequisite. - Dijkstra"

    @pytest.mark.asyncio
    async def test_failed_quote_falls_back_to_pool(self, data: DataAccess):
        data.quotes = FakeQuotes(None)
        extra = {"use_api_quotes": True, "weights": ONLY_QUOTE, "custom_thoughts": ["fallback"]}
        segment = ThoughtsSegment(make_spec("thoughts", extra=extra))
        await segment.update_cache(CTX, data)
        assert segment.render(CTX, data).text == "fallback"

    @pytest.mark.asyncio
    async def test_quotes_not_fetched_when_disabled(self, data: DataAccess):
        data.quotes = FakeQuotes("never shown")
        segment = ThoughtsSegment(make_spec("thoughts", extra={"weights": ONLY_QUOTE}))
        await segment.update_cache(CTX, data)
        assert segment.render(CTX, data).text != "never shown"

    def test_invalid_weights_ignored(self):
        segment = ThoughtsSegment(make_spec("thoughts", extra={"weights": {"pool": -1, "bogus": 3}}))
        assert segment.weights == {"contextual": 0.5, "pool": 0.3, "quote": 0.2}
