"""Secondary billing tool: Codex CLI usage via ``@ccusage/codex``.

The tool is slow (it may download itself through ``bunx``), so every call is
raced against a short timeout and its result is kept in a persisted 5 minute
cache. A failure or timeout is cached too and reads as zero usage.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from chud.core.cache import PersistentTTLCache
from chud.errors import SourceError
from chud.types.usage import DailyUsage

logger = logging.getLogger(__name__)

CODEX_CACHE_TTL = 5 * 60.0
CODEX_TIMEOUT = 5.0
CODEX_COMMAND: tuple[str, ...] = ("bunx", "@ccusage/codex@latest", "daily", "--json")


def system_timezone() -> str:
    """Best-effort IANA timezone name, defaulting to UTC."""
    if tz := os.environ.get("TZ"):
        return tz.lstrip(":")
    try:
        target = os.path.realpath("/etc/localtime")
    except OSError:
        return "UTC"
    marker = "zoneinfo/"
    if marker in target:
        return target.split(marker, 1)[1]
    return "UTC"


def parse_codex_output(output: str) -> DailyUsage:
    """Read the ``totals`` block of ``ccusage-codex daily --json``."""
    try:
        data = json.loads(output)
    except ValueError as exc:
        raise SourceError("codex", f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise SourceError("codex", "expected a JSON object")
    totals = data.get("totals") or {}
    if not isinstance(totals, dict):
        raise SourceError("codex", "'totals' is not an object")
    try:
        return DailyUsage(
            cost=float(totals.get("costUSD") or 0.0),
            input_tokens=int(totals.get("inputTokens") or 0),
            output_tokens=int(totals.get("outputTokens") or 0),
        )
    except (TypeError, ValueError) as exc:
        raise SourceError("codex", f"bad totals: {exc}") from exc


async def run_codex_daily(
    today: str,
    timezone: str,
    *,
    command: Sequence[str] = CODEX_COMMAND,
    timeout_sec: float = CODEX_TIMEOUT,
) -> DailyUsage:
    """Run the Codex usage tool for *today*. Raises SourceError on any failure."""
    args = [*command, "--since", today, "--timezone", timezone]
    logger.debug("Running %s", " ".join(args))
    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise SourceError("codex", f"failed to start: {exc}") from exc

    try:
        stdout_bytes, _ = await asyncio.wait_for(proc.communicate(), timeout=timeout_sec)
    except TimeoutError:
        try:
            proc.kill()
            await proc.wait()
        except ProcessLookupError:
            pass
        raise SourceError("codex", f"timed out after {timeout_sec}s") from None

    if proc.returncode != 0:
        raise SourceError("codex", f"exited with status {proc.returncode}")
    return parse_codex_output(stdout_bytes.decode("utf-8", errors="replace"))


def _encode(usage: DailyUsage) -> dict[str, Any]:
    return {"cost": usage.cost, "input_tokens": usage.input_tokens, "output_tokens": usage.output_tokens}


def _decode(raw: Any) -> DailyUsage:
    if not isinstance(raw, dict):
        raise ValueError(f"expected an object, got {type(raw).__name__}")
    return DailyUsage(
        cost=float(raw.get("cost", 0.0)),
        input_tokens=int(raw.get("input_tokens", 0)),
        output_tokens=int(raw.get("output_tokens", 0)),
    )


class CodexUsageSource:
    """Today's Codex usage behind a persisted TTL cache keyed on the date."""

    def __init__(
        self,
        cache_path: Path,
        *,
        command: Sequence[str] = CODEX_COMMAND,
        timeout_sec: float = CODEX_TIMEOUT,
        ttl_seconds: float = CODEX_CACHE_TTL,
    ) -> None:
        self._command = tuple(command)
        self._timeout = timeout_sec
        self._cache: PersistentTTLCache[DailyUsage] = PersistentTTLCache(
            cache_path, ttl_seconds, name="codex", encode=_encode, decode=_decode,
        )

    @property
    def cache(self) -> PersistentTTLCache[DailyUsage]:
        return self._cache

    async def today(self, today: str, timezone: str | None = None) -> DailyUsage:
        tz = timezone or system_timezone()

        async def produce() -> DailyUsage:
            return await run_codex_daily(
                today, tz, command=self._command, timeout_sec=self._timeout,
            )

        usage = await self._cache.get_async(today, produce)
        return usage or DailyUsage()
