"""Pull request lookup via the GitHub CLI (``gh pr view``)."""

from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass

from chud.errors import SourceError

logger = logging.getLogger(__name__)

GH_TIMEOUT = 5.0


@dataclass(frozen=True, slots=True)
class PrInfo:
    """The pull request associated with the current branch."""

    number: int
    url: str
    state: str  # "OPEN", "CLOSED", "MERGED"

    @property
    def is_open(self) -> bool:
        return self.state.upper() == "OPEN"


def parse_pr_json(output: str) -> PrInfo | None:
    """Parse ``gh pr view --json number,url,state``. Raises SourceError if malformed."""
    output = output.strip()
    if not output:
        return None
    try:
        data = json.loads(output)
    except ValueError as exc:
        raise SourceError("gh", f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise SourceError("gh", "expected a JSON object")

    number, url, state = data.get("number"), data.get("url"), data.get("state")
    if not isinstance(number, int) or not isinstance(url, str) or not isinstance(state, str):
        raise SourceError("gh", f"unexpected payload: {data!r}")
    return PrInfo(number=number, url=url, state=state)


def get_pr_info(cwd: str, *, timeout_sec: float = GH_TIMEOUT) -> PrInfo | None:
    """PR for the branch checked out in *cwd*.

    Returns None when there is no PR, ``gh`` is missing or not authenticated, or
    the output cannot be parsed.
    """
    try:
        proc = subprocess.run(
            ["gh", "pr", "view", "--json", "number,url,state"],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout_sec,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        logger.debug("gh unavailable: %s", exc)
        return None
    if proc.returncode != 0:
        return None
    try:
        return parse_pr_json(proc.stdout)
    except SourceError as exc:
        logger.warning("%s", exc)
        return None
