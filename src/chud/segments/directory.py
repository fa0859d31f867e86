"""Directory segment: the working directory, optionally relative to the repo."""

from __future__ import annotations

import os
from pathlib import Path

from chud.core.data import DataAccess
from chud.segments.base import BaseSegment
from chud.types.context import SessionContext
from chud.types.segments import SegmentOutput

ICON = "\u203a"  # ›  single right angle quote
ROOT_WARNING = "\u2717 session not started in project root"


def dir_name(path: str) -> str:
    return path.rstrip("/").rsplit("/", 1)[-1] or path


def abbreviate_home(path: str, home: str | None = None) -> str:
    """Replace a leading home directory with ``~``."""
    home = (home or str(Path.home())).rstrip("/")
    if home and (path == home or path.startswith(home + "/")):
        return "~" + path[len(home):]
    return path


def relative_to_root(cwd: str, root: str | None, *, with_parent: bool) -> str:
    """``project/sub/dir`` (or ``parent/project/sub/dir``) for a cwd inside *root*."""
    if not root or not (cwd == root or cwd.startswith(root.rstrip("/") + "/")):
        return dir_name(cwd)
    project = os.path.basename(root.rstrip("/"))
    rest = cwd[len(root.rstrip("/")):]
    if with_parent:
        parts = [p for p in root.split("/") if p]
        parent = parts[-2] if len(parts) >= 2 else ""
        if parent:
            return f"{parent}/{project}{rest}"
    return f"{project}{rest}"


class DirectorySegment(BaseSegment):
    type = "directory"

    def render(self, ctx: SessionContext, data: DataAccess) -> SegmentOutput:
        cwd = ctx.cwd
        mode = self.option("path_mode", "name")
        root_warning = bool(self.option("root_warning", False))

        git_root: str | None = None
        if mode in ("project", "parent") or root_warning:
            git_root = data.git_root(cwd)

        if mode == "full":
            text = abbreviate_home(cwd)
        elif mode == "project":
            text = relative_to_root(cwd, git_root, with_parent=False)
        elif mode == "parent":
            text = relative_to_root(cwd, git_root, with_parent=True)
        else:
            text = dir_name(cwd)

        parts = [ICON if self.option("icon", False) else "", text]
        if root_warning and git_root and self._outside_root(ctx, data, git_root):
            parts.append(ROOT_WARNING)
        return self._output(parts)

    @staticmethod
    def _outside_root(ctx: SessionContext, data: DataAccess, git_root: str) -> bool:
        if ctx.session_id and data.sessions is not None:
            return not data.sessions.was_root_at_start(ctx.session_id, ctx.cwd, git_root)
        return ctx.cwd != git_root
