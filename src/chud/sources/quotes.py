"""Quote-of-the-moment fetch for the thoughts segment."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from chud.core.cache import PersistentTTLCache
from chud.errors import SourceError

logger = logging.getLogger(__name__)

QUOTE_URL = "https://zenquotes.io/api/random"
QUOTE_TIMEOUT = 2.0
QUOTE_CACHE_TTL = 10 * 60.0
MAX_QUOTE_LENGTH = 80


def parse_quote(data: Any) -> str:
    """Extract ``"quote" - author`` from a zenquotes-style payload."""
    if isinstance(data, list) and data:
        data = data[0]
    if not isinstance(data, dict):
        raise SourceError("quotes", "unexpected payload shape")
    text = data.get("q") or data.get("quote")
    author = data.get("a") or data.get("author")
    if not isinstance(text, str) or not text.strip():
        raise SourceError("quotes", "payload has no quote text")
    text = text.strip()
    if len(text) > MAX_QUOTE_LENGTH:
        raise SourceError("quotes", "quote too long for a status line")
    return f"{text} - {author.strip()}" if isinstance(author, str) and author.strip() else text


async def fetch_quote(url: str = QUOTE_URL, *, timeout_sec: float = QUOTE_TIMEOUT) -> str:
    """Fetch one quote. Raises SourceError on network or payload failure."""
    import httpx

    try:
        async with httpx.AsyncClient(
            follow_redirects=True,
            timeout=timeout_sec,
            headers={"User-Agent": "chud/0.3"},
        ) as client:
            resp = await client.get(url)
            resp.raise_for_status()
            payload = resp.json()
    except (httpx.HTTPError, ValueError) as exc:
        raise SourceError("quotes", str(exc)) from exc
    return parse_quote(payload)


class QuoteSource:
    """A quote behind a persisted TTL cache. Failures read as None."""

    def __init__(
        self,
        cache_path: Path,
        *,
        url: str = QUOTE_URL,
        timeout_sec: float = QUOTE_TIMEOUT,
        ttl_seconds: float = QUOTE_CACHE_TTL,
    ) -> None:
        self._url = url
        self._timeout = timeout_sec
        self._cache: PersistentTTLCache[str] = PersistentTTLCache(
            cache_path, ttl_seconds, name="quotes",
        )

    async def current(self) -> str | None:
        return await self._cache.get_async(
            self._url, lambda: fetch_quote(self._url, timeout_sec=self._timeout),
        )
