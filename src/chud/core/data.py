"""DataAccess: the external capabilities segments are allowed to use.

Segments never shell out or touch files directly; they go through this object
so tests can swap any capability for a fake.
"""

from __future__ import annotations

import random
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from chud.core.cache import TTLCache
from chud.core.config import cache_dir, projects_dir
from chud.core.state import StateStore
from chud.sources.git import get_git_info, get_git_root
from chud.sources.pr import PrInfo, get_pr_info
from chud.sources.quotes import QuoteSource
from chud.sources.sessions import SessionRootStore
from chud.types.context import GitState
from chud.types.usage import DailyUsage
from chud.usage.billing import CodexUsageSource
from chud.usage.daily import daily_usage, today_string
from chud.usage.events import CostEventSource, StaticEventSource, TranscriptEventSource

DAILY_USAGE_TTL = 60.0


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class DataAccess:
    """Bundle of data providers shared by one render."""

    events: CostEventSource = field(default_factory=lambda: StaticEventSource([]))
    git_info: Callable[[str], GitState | None] = get_git_info
    git_root: Callable[[str], str | None] = get_git_root
    pr_info: Callable[[str], PrInfo | None] = get_pr_info
    codex: CodexUsageSource | None = None
    quotes: QuoteSource | None = None
    sessions: SessionRootStore | None = None
    thoughts_state: StateStore | None = None
    clock: Callable[[], datetime] = _utcnow
    rng: random.Random = field(default_factory=random.Random)
    _daily: TTLCache[DailyUsage] = field(
        default_factory=lambda: TTLCache(DAILY_USAGE_TTL, name="daily-usage"),
    )
    _daily_lock: threading.Lock = field(default_factory=threading.Lock)

    @classmethod
    def from_environment(cls, base_dir: Path | None = None, logs_dir: Path | None = None) -> DataAccess:
        """Wire the real sources under the cache and transcript directories."""
        base = base_dir or cache_dir()
        return cls(
            events=TranscriptEventSource(logs_dir or projects_dir()),
            codex=CodexUsageSource(base / "codex-usage.json"),
            quotes=QuoteSource(base / "quote.json"),
            sessions=SessionRootStore(base / "sessions.json"),
            thoughts_state=StateStore(base / "thoughts.json"),
        )

    def local_usage_today(self, now: datetime | None = None) -> DailyUsage:
        """Today's transcript totals, computed once per date within this process."""
        now = now or self.clock()
        # Segments call this from worker threads during prefetch.
        with self._daily_lock:
            usage = self._daily.get(today_string(now), lambda: daily_usage(self.events, now))
        return usage or DailyUsage()
