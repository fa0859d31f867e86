"""Single-slot TTL caches for slow external lookups.

Each consumer owns one cache object holding one entry. Asking for a different
key than the one stored forces a refetch even if the entry has not expired.
A producer failure is stored as a ``None`` payload so a broken source is not
hammered again until the TTL runs out.
"""

from __future__ import annotations

import json
import logging
import os
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[T]):
    """A cached payload and when it was fetched."""

    key: str
    payload: T | None
    fetched_at: float


class TTLCache(Generic[T]):
    """In-memory single-slot cache with a time-to-live.

    Lives for one process; pass ``clock`` to control time in tests.
    """

    def __init__(
        self,
        ttl_seconds: float,
        *,
        name: str = "cache",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._name = name
        self._clock = clock
        self._entry: CacheEntry[T] | None = None

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def entry(self) -> CacheEntry[T] | None:
        return self._entry

    def is_fresh(self, key: str) -> bool:
        """Whether the slot holds *key* and has not expired."""
        entry = self._entry
        if entry is None or entry.key != key:
            return False
        return (self._clock() - entry.fetched_at) < self._ttl

    def get(self, key: str, producer: Callable[[], T | None]) -> T | None:
        """Return the cached payload for *key*, calling *producer* on a miss."""
        if self.is_fresh(key):
            return self._entry.payload  # type: ignore[union-attr]

        try:
            payload = producer()
        except Exception as exc:
            logger.warning("%s: producer failed for %r: %s", self._name, key, exc)
            payload = None
        self.store(key, payload)
        return payload

    async def get_async(
        self, key: str, producer: Callable[[], Awaitable[T | None]],
    ) -> T | None:
        """Async variant of :meth:`get` for coroutine producers."""
        if self.is_fresh(key):
            return self._entry.payload  # type: ignore[union-attr]

        try:
            payload = await producer()
        except Exception as exc:
            logger.warning("%s: producer failed for %r: %s", self._name, key, exc)
            payload = None
        self.store(key, payload)
        return payload

    def store(self, key: str, payload: T | None) -> None:
        """Overwrite the slot with a fresh entry."""
        self._entry = CacheEntry(key=key, payload=payload, fetched_at=self._clock())

    def invalidate(self) -> None:
        self._entry = None


class PersistentTTLCache(TTLCache[T]):
    """A TTL cache whose slot is mirrored to a small JSON file.

    Every status line render is a fresh process, so data that is slow to fetch
    (minutes-scale TTLs) has to survive between invocations. The payload must be
    JSON-serializable; ``encode``/``decode`` convert to and from that form.
    """

    def __init__(
        self,
        path: Path,
        ttl_seconds: float,
        *,
        name: str = "cache",
        clock: Callable[[], float] = time.time,
        encode: Callable[[T], Any] | None = None,
        decode: Callable[[Any], T] | None = None,
    ) -> None:
        super().__init__(ttl_seconds, name=name, clock=clock)
        self._path = path
        self._encode = encode or (lambda v: v)
        self._decode = decode or (lambda v: v)
        self._entry = self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> CacheEntry[T] | None:
        if not self._path.exists():
            return None
        try:
            raw = json.loads(self._path.read_text())
            payload = raw.get("payload")
            return CacheEntry(
                key=str(raw["key"]),
                payload=self._decode(payload) if payload is not None else None,
                fetched_at=float(raw["fetched_at"]),
            )
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as exc:
            logger.warning("%s: ignoring unreadable cache file %s: %s", self._name, self._path, exc)
            return None

    def store(self, key: str, payload: T | None) -> None:
        super().store(key, payload)
        entry = self._entry
        record = {
            "key": key,
            "payload": self._encode(payload) if payload is not None else None,
            "fetched_at": entry.fetched_at if entry else self._clock(),
        }
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp.write_text(json.dumps(record))
            os.replace(tmp, self._path)
        except OSError as exc:
            logger.warning("%s: could not write cache file %s: %s", self._name, self._path, exc)
