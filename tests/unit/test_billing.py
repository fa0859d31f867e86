"""Tests for chud.usage.billing (Codex usage via ccusage-codex)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from chud.errors import SourceError
from chud.types.usage import DailyUsage
from chud.usage.billing import (
    CodexUsageSource,
    parse_codex_output,
    run_codex_daily,
    system_timezone,
)

TOTALS = {"totals": {"costUSD": 1.25, "inputTokens": 1000, "outputTokens": 500}}


def _echo_command(payload: str) -> tuple[str, ...]:
    # Extra arguments land in $0, $1... and are ignored by the script
    return ("sh", "-c", f"printf '%s' '{payload}'")


class TestParseCodexOutput:
    def test_totals(self):
        usage = parse_codex_output(json.dumps(TOTALS))
        assert usage == DailyUsage(cost=1.25, input_tokens=1000, output_tokens=500)

    def test_missing_totals_is_zero(self):
        assert parse_codex_output("{}") == DailyUsage()

    def test_invalid_json(self):
        with pytest.raises(SourceError) as exc_info:
            parse_codex_output("nope")
        assert exc_info.value.source == "codex"

    def test_non_object(self):
        with pytest.raises(SourceError):
            parse_codex_output("[1, 2]")


class TestRunCodexDaily:
    @pytest.mark.asyncio
    async def test_success(self):
        usage = await run_codex_daily("2026-03-14", "UTC", command=_echo_command(json.dumps(TOTALS)))
        assert usage.cost == 1.25

    @pytest.mark.asyncio
    async def test_non_zero_exit(self):
        with pytest.raises(SourceError, match="status 3"):
            await run_codex_daily("2026-03-14", "UTC", command=("sh", "-c", "exit 3"))

    @pytest.mark.asyncio
    async def test_timeout(self):
        with pytest.raises(SourceError, match="timed out"):
            await run_codex_daily(
                "2026-03-14", "UTC", command=("sh", "-c", "sleep 5"), timeout_sec=0.2,
            )

    @pytest.mark.asyncio
    async def test_missing_binary(self):
        with pytest.raises(SourceError, match="failed to start"):
            await run_codex_daily("2026-03-14", "UTC", command=("chud-no-such-binary-xyz",))


class TestCodexUsageSource:
    @pytest.mark.asyncio
    async def test_failure_reads_as_zero_and_is_cached(self, tmp_path: Path):
        marker = tmp_path / "runs"
        command = ("sh", "-c", f"echo run >> {marker}; exit 1")
        source = CodexUsageSource(tmp_path / "codex.json", command=command)
        assert await source.today("2026-03-14", "UTC") == DailyUsage()
        assert await source.today("2026-03-14", "UTC") == DailyUsage()
        assert marker.read_text().count("run") == 1

    @pytest.mark.asyncio
    async def test_result_persisted(self, tmp_path: Path):
        cache_path = tmp_path / "codex.json"
        source = CodexUsageSource(cache_path, command=_echo_command(json.dumps(TOTALS)))
        assert (await source.today("2026-03-14", "UTC")).cost == 1.25

        offline = CodexUsageSource(cache_path, command=("sh", "-c", "exit 1"))
        assert (await offline.today("2026-03-14", "UTC")).cost == 1.25

    @pytest.mark.asyncio
    async def test_new_day_refetches(self, tmp_path: Path):
        cache_path = tmp_path / "codex.json"
        source = CodexUsageSource(cache_path, command=_echo_command(json.dumps(TOTALS)))
        await source.today("2026-03-14", "UTC")
        failing = CodexUsageSource(cache_path, command=("sh", "-c", "exit 1"))
        assert await failing.today("2026-03-15", "UTC") == DailyUsage()

    @pytest.mark.asyncio
    async def test_cache_file_with_wrong_payload_shape(self, tmp_path: Path):
        cache_path = tmp_path / "codex.json"
        cache_path.write_text(json.dumps({"key": "2026-03-14", "payload": "oops", "fetched_at": 1}))
        source = CodexUsageSource(cache_path, command=_echo_command(json.dumps(TOTALS)))
        assert (await source.today("2026-03-14", "UTC")).cost == 1.25


class TestSystemTimezone:
    def test_tz_env(self, monkeypatch):
        monkeypatch.setenv("TZ", ":Europe/Berlin")
        assert system_timezone() == "Europe/Berlin"

    def test_fallback_is_string(self, monkeypatch):
        monkeypatch.delenv("TZ", raising=False)
        assert isinstance(system_timezone(), str)
