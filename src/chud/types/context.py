"""Session context types: the per-render input snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class GitState:
    """Source-control snapshot for a working directory."""

    branch: str | None = None
    dirty: bool = False
    ahead: int = 0
    behind: int = 0


@dataclass(frozen=True, slots=True)
class ContextWindow:
    """Context-window utilization reported by the assistant."""

    used_percentage: float | None = None
    remaining_percentage: float | None = None


@dataclass(frozen=True, slots=True)
class SessionContext:
    """Everything a segment may read while rendering. Immutable per render."""

    cwd: str
    git: GitState | None = None
    context_window: ContextWindow | None = None
    session_id: str | None = None
    model: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any], *, default_cwd: str) -> SessionContext:
        """Build a context from the JSON payload piped in by Claude Code.

        Claude Code puts the session id at the top level; older payloads nest it
        under ``session``. Both are accepted.
        """
        if not isinstance(payload, dict):
            raise TypeError(f"Session payload must be an object, got {type(payload).__name__}")

        workspace = payload.get("workspace") or {}
        cwd = payload.get("cwd") or workspace.get("current_dir") or default_cwd

        git = None
        raw_git = payload.get("git")
        if isinstance(raw_git, dict):
            git = GitState(
                branch=raw_git.get("branch"),
                dirty=bool(raw_git.get("isDirty", raw_git.get("dirty", False))),
                ahead=int(raw_git.get("ahead") or 0),
                behind=int(raw_git.get("behind") or 0),
            )

        window = None
        raw_window = payload.get("context_window")
        if isinstance(raw_window, dict):
            window = ContextWindow(
                used_percentage=_as_float(raw_window.get("used_percentage")),
                remaining_percentage=_as_float(raw_window.get("remaining_percentage")),
            )

        session = payload.get("session") or {}
        session_id = payload.get("session_id") or session.get("id")

        model = payload.get("model")
        if isinstance(model, dict):
            model = model.get("id")
        if model is None:
            model = session.get("model")

        return cls(
            cwd=str(cwd),
            git=git,
            context_window=window,
            session_id=session_id,
            model=model,
        )


def _as_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
