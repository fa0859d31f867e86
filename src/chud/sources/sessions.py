"""Per-session record of where each session started."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path

from chud.core.state import StateStore

logger = logging.getLogger(__name__)

SESSION_RETENTION_DAYS = 7


class SessionRootStore:
    """Remembers, per session id, whether the session began at the repo root.

    The first render of a session records its starting directory; later
    renders answer from that record even after the user has ``cd``-ed away.
    """

    def __init__(self, path: Path, *, clock: Callable[[], float] = time.time) -> None:
        self._store = StateStore(path)
        self._clock = clock

    def was_root_at_start(self, session_id: str, cwd: str, git_root: str) -> bool:
        sessions = self._store.load()
        now = self._clock()
        record = sessions.get(session_id)

        if isinstance(record, dict) and "is_root_at_start" in record:
            record["last_seen_at"] = now
            self._store.save(sessions)
            return bool(record["is_root_at_start"])

        is_root = cwd == git_root
        sessions[session_id] = {
            "initial_cwd": cwd,
            "is_root_at_start": is_root,
            "first_seen_at": now,
            "last_seen_at": now,
        }
        self._store.save(sessions)
        return is_root

    def cleanup_old_sessions(self, days: int = SESSION_RETENTION_DAYS) -> int:
        """Drop sessions not seen for *days*. Returns how many were removed."""
        sessions = self._store.load()
        cutoff = self._clock() - days * 24 * 60 * 60
        keep = {
            sid: rec for sid, rec in sessions.items()
            if isinstance(rec, dict) and float(rec.get("last_seen_at", 0)) >= cutoff
        }
        removed = len(sessions) - len(keep)
        if removed:
            self._store.save(keep)
            logger.debug("Removed %d stale session records", removed)
        return removed
