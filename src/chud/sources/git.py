"""Git queries via the ``git`` CLI (blocking, bounded by a subprocess timeout)."""

from __future__ import annotations

import logging
import subprocess

from chud.errors import SourceError
from chud.types.context import GitState

logger = logging.getLogger(__name__)

GIT_TIMEOUT = 2.0


def _git(args: list[str], cwd: str, *, timeout_sec: float = GIT_TIMEOUT) -> str:
    """Run ``git <args>`` and return stdout. Raises SourceError on failure."""
    try:
        proc = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout_sec,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        raise SourceError("git", str(exc)) from exc
    if proc.returncode != 0:
        raise SourceError("git", f"'git {' '.join(args)}' exited {proc.returncode}")
    return proc.stdout


def get_git_root(cwd: str) -> str | None:
    """Top-level directory of the repository containing *cwd*, or None."""
    try:
        root = _git(["rev-parse", "--show-toplevel"], cwd).strip()
    except SourceError:
        return None
    return root or None


def parse_ahead_behind(output: str) -> tuple[int, int]:
    """Parse ``git rev-list --left-right --count`` output."""
    parts = output.split()
    try:
        ahead = int(parts[0]) if parts else 0
        behind = int(parts[1]) if len(parts) > 1 else 0
    except ValueError:
        return 0, 0
    return ahead, behind


def get_git_info(cwd: str) -> GitState | None:
    """Branch, dirty flag and upstream divergence, or None outside a repo."""
    try:
        _git(["rev-parse", "--git-dir"], cwd)
        branch = _git(["rev-parse", "--abbrev-ref", "HEAD"], cwd).strip()
        status = _git(["status", "--porcelain"], cwd)
    except SourceError as exc:
        logger.debug("No git info for %s: %s", cwd, exc)
        return None

    ahead = behind = 0
    try:
        counts = _git(["rev-list", "--left-right", "--count", "HEAD...@{upstream}"], cwd)
        ahead, behind = parse_ahead_behind(counts)
    except SourceError:
        pass  # No upstream branch

    return GitState(
        branch=branch or None,
        dirty=bool(status.strip()),
        ahead=ahead,
        behind=behind,
    )
