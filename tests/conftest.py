"""Shared fixtures: frozen clock, cost event builders and a fake DataAccess."""

from __future__ import annotations

import random
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from chud.core.data import DataAccess
from chud.core.state import StateStore
from chud.sources.pr import PrInfo
from chud.sources.sessions import SessionRootStore
from chud.types.config import SegmentColors, SegmentSpec
from chud.types.context import GitState
from chud.types.usage import CostEvent
from chud.usage.events import StaticEventSource

NOW = datetime(2026, 3, 14, 15, 0, 0, tzinfo=UTC)


class FakeClock:
    """A monotonic-style clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CallCounter:
    """Wraps a return value and counts how often it was produced."""

    def __init__(self, value=None, exc: Exception | None = None) -> None:
        self.value = value
        self.exc = exc
        self.calls: list[tuple] = []

    def __call__(self, *args):
        self.calls.append(args)
        if self.exc is not None:
            raise self.exc
        return self.value


def make_event(
    age: timedelta = timedelta(0),
    *,
    model: str = "claude-sonnet-4-5",
    input_tokens: int = 1000,
    output_tokens: int = 2000,
    cache_5m: int = 0,
    cache_1h: int = 0,
    cache_read: int = 0,
    now: datetime = NOW,
) -> CostEvent:
    return CostEvent(
        timestamp=now - age,
        model=model,
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        cache_write_5m_tokens=cache_5m,
        cache_write_1h_tokens=cache_1h,
        cache_read_tokens=cache_read,
    )


def make_spec(seg_type: str, extra: dict | None = None, **display) -> SegmentSpec:
    return SegmentSpec(
        type=seg_type,
        colors=SegmentColors(fg="#ffffff", bg="#336699"),
        display=display,
        extra=extra or {},
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def data(tmp_path: Path) -> DataAccess:
    """DataAccess with no real git, gh, network or transcript access."""
    return DataAccess(
        events=StaticEventSource([]),
        git_info=CallCounter(None),
        git_root=CallCounter(None),
        pr_info=CallCounter(None),
        codex=None,
        quotes=None,
        sessions=SessionRootStore(tmp_path / "sessions.json"),
        thoughts_state=StateStore(tmp_path / "thoughts.json"),
        clock=lambda: NOW,
        rng=random.Random(1234),
    )


@pytest.fixture
def git_state() -> GitState:
    return GitState(branch="main", dirty=True, ahead=2, behind=1)


@pytest.fixture
def open_pr() -> PrInfo:
    return PrInfo(number=42, url="https://github.com/acme/demo/pull/42", state="OPEN")
