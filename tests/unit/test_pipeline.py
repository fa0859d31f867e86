"""Tests for chud.core.pipeline."""

from __future__ import annotations

import re

import pytest

from chud.core.config import build_config
from chud.core.data import DataAccess
from chud.core.pipeline import build_segments, prefetch, render_segments, render_statusline, run
from chud.segments.base import BaseSegment
from chud.types.context import SessionContext
from tests.conftest import make_spec

ANSI = re.compile(r"\x1b\[[0-9;]*m")
CTX = SessionContext(cwd="/home/u/projects/demo")


def _config(*types: str, color_mode: str = "text"):
    return build_config({
        "segments": [{"type": t} for t in types],
        "theme": {"color_mode": color_mode},
    })


class SlowFailing(BaseSegment):
    type = "slow-failing"
    prefetch = True

    async def update_cache(self, ctx, data):
        raise ConnectionError("offline")

    def render(self, ctx, data):
        return self._output(["still here"])


class Recording(BaseSegment):
    type = "recording"
    prefetch = True

    def __init__(self, spec):
        super().__init__(spec)
        self.updated = False

    async def update_cache(self, ctx, data):
        self.updated = True

    def render(self, ctx, data):
        return self._output(["ok" if self.updated else "stale"])


class FakeSessions:
    def __init__(self) -> None:
        self.cleanups = 0

    def cleanup_old_sessions(self, days: int = 7) -> int:
        self.cleanups += 1
        return 0


class FixedRandom:
    def __init__(self, value: float) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


class TestBuildSegments:
    def test_configured_order(self):
        segments = build_segments(_config("time", "directory", "pr"))
        assert [s.type for s in segments] == ["time", "directory", "pr"]

    def test_unknown_type_skipped(self, caplog):
        with caplog.at_level("WARNING", logger="chud.core.pipeline"):
            segments = build_segments(_config("weather", "time"))
        assert [s.type for s in segments] == ["time"]
        assert "weather" in caplog.text


class TestPrefetch:
    @pytest.mark.asyncio
    async def test_failure_isolated(self, data: DataAccess):
        failing = SlowFailing(make_spec("slow-failing"))
        recording = Recording(make_spec("recording"))
        await prefetch([failing, recording], CTX, data)
        outputs = render_segments([failing, recording], CTX, data)
        assert [o.text for o in outputs] == ["still here", "ok"]

    @pytest.mark.asyncio
    async def test_nothing_to_prefetch(self, data: DataAccess):
        await prefetch(build_segments(_config("time")), CTX, data)


class TestRun:
    @pytest.mark.asyncio
    async def test_text_line(self, data: DataAccess):
        line = await run(_config("directory", "git", "pr"), CTX, data)
        # git is empty outside a repository and is dropped from the line
        assert ANSI.sub("", line) == "demo │ no pr"

    @pytest.mark.asyncio
    async def test_session_cleanup_is_occasional(self, data: DataAccess):
        sessions = FakeSessions()
        data.sessions = sessions
        data.rng = FixedRandom(0.5)
        await run(_config("time"), CTX, data)
        assert sessions.cleanups == 0

        data.rng = FixedRandom(0.001)
        await run(_config("time"), CTX, data)
        assert sessions.cleanups == 1

    def test_render_statusline_sync(self, data: DataAccess):
        line = render_statusline(_config("directory", color_mode="background"), CTX, data)
        assert "demo" in line
        assert "\x1b[" in line
