"""Cost event source: Claude Code JSONL transcripts."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from chud.types.usage import CostEvent

logger = logging.getLogger(__name__)


@runtime_checkable
class CostEventSource(Protocol):
    """Anything that can yield cost events newer than a cutoff."""

    def events_since(self, cutoff: datetime) -> Iterable[CostEvent]:
        ...


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    ts = datetime.fromisoformat(value)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts


def parse_entry(entry: Any) -> CostEvent | None:
    """Turn one transcript line into a CostEvent, or None if it carries no usage."""
    if not isinstance(entry, dict):
        return None
    message = entry.get("message")
    if not isinstance(message, dict):
        return None
    usage = message.get("usage")
    model = message.get("model")
    if not isinstance(usage, dict) or not model:
        return None
    raw_ts = entry.get("timestamp")
    if not isinstance(raw_ts, str):
        return None

    cache_5m = 0
    cache_1h = 0
    creation = usage.get("cache_creation")
    if isinstance(creation, dict):
        cache_5m = int(creation.get("ephemeral_5m_input_tokens") or 0)
        cache_1h = int(creation.get("ephemeral_1h_input_tokens") or 0)
    else:
        # Older transcripts only report a flat count, billed at the 5m rate
        cache_5m = int(usage.get("cache_creation_input_tokens") or 0)

    return CostEvent(
        timestamp=parse_timestamp(raw_ts),
        model=str(model),
        input_tokens=int(usage.get("input_tokens") or 0),
        output_tokens=int(usage.get("output_tokens") or 0),
        cache_write_5m_tokens=cache_5m,
        cache_write_1h_tokens=cache_1h,
        cache_read_tokens=int(usage.get("cache_read_input_tokens") or 0),
    )


class TranscriptEventSource:
    """Reads ``<root>/<project>/*.jsonl`` transcripts.

    Only files modified after the cutoff are opened. A missing root directory
    (fresh install) yields nothing.
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    def _recent_files(self, cutoff: datetime) -> list[Path]:
        if not self._root.is_dir():
            return []
        cutoff_ts = cutoff.timestamp()
        files: list[Path] = []
        for project in self._root.iterdir():
            if not project.is_dir():
                continue
            for path in project.glob("*.jsonl"):
                try:
                    if path.stat().st_mtime > cutoff_ts:
                        files.append(path)
                except OSError:
                    continue
        return files

    def events_since(self, cutoff: datetime) -> Iterator[CostEvent]:
        for path in self._recent_files(cutoff):
            try:
                with open(path, encoding="utf-8") as f:
                    for line in f:
                        line = line.strip()
                        if not line:
                            continue
                        try:
                            event = parse_entry(json.loads(line))
                        except (ValueError, TypeError) as exc:
                            logger.debug("Skipping bad transcript line in %s: %s", path, exc)
                            continue
                        if event is not None and event.timestamp > cutoff:
                            yield event
            except OSError as exc:
                logger.warning("Cannot read transcript %s: %s", path, exc)


class StaticEventSource:
    """An in-memory event list, filtered by cutoff like the real source."""

    def __init__(self, events: Iterable[CostEvent]) -> None:
        self._events = list(events)

    def events_since(self, cutoff: datetime) -> Iterator[CostEvent]:
        return (e for e in self._events if e.timestamp > cutoff)
