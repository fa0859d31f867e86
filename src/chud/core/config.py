"""Configuration loading (defaults, TOML, env vars)."""

from __future__ import annotations

import copy
import logging
import os
import re
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from chud.errors import ConfigError
from chud.types.config import ColorMode, Config, SegmentColors, SegmentSpec, SeparatorStyle, ThemeSpec

# Load .env from current directory (and parents), won't override existing env vars
load_dotenv()

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")

# Dark palette, used for any segment that does not set its own colors.
SEGMENT_COLORS: dict[str, dict[str, str]] = {
    "directory": {"fg": "#ff6666", "bg": "#ec4899"},
    "git": {"fg": "#ffbd55", "bg": "#f97316"},
    "pr": {"fg": "#ffff66", "bg": "#10b981"},
    "usage": {"fg": "#9de24f", "bg": "#3b82f6"},
    "pace": {"fg": "#87cefa", "bg": "#9333ea"},
    "context": {"fg": "#a5b4fc", "bg": "#6366f1"},
    "time": {"fg": "#c084fc", "bg": "#9333ea"},
    "thoughts": {"fg": "#9ca3af", "bg": "#6b7280"},
}
FALLBACK_COLORS = {"fg": "#d8dee9", "bg": "#2e3440"}

DEFAULT_CONFIG: dict[str, Any] = {
    "segments": [
        {"type": "directory", "display": {"icon": True, "path_mode": "parent", "root_warning": False}},
        {
            "type": "git",
            "display": {"icon": True, "branch": True, "status": True, "ahead": True, "behind": True},
        },
        {"type": "pr", "display": {"icon": True, "number": True}},
        {"type": "usage", "display": {"icon": True, "cost": True, "tokens": False, "period": "today"}},
        {"type": "pace", "display": {"icon": True, "period": "hourly", "half_life_minutes": 7}},
        {"type": "context", "display": {"icon": True, "mode": "used"}},
        {"type": "time", "display": {"icon": True, "format": "12h", "seconds": False}},
        {"type": "thoughts", "display": {"icon": True, "quotes": False}, "use_api_quotes": True},
    ],
    "theme": {
        "powerline": True,
        "separator_style": "angled",
        "color_mode": "text",
    },
}


def cache_dir() -> Path:
    """Directory for cross-invocation caches and state records."""
    if override := os.environ.get("CHUD_CACHE_DIR"):
        return Path(override).expanduser()
    return Path.home() / ".cache" / "chud"


def projects_dir() -> Path:
    """Root of the Claude Code transcript logs."""
    if override := os.environ.get("CHUD_PROJECTS_DIR"):
        return Path(override).expanduser()
    return Path.home() / ".claude" / "projects"


def load_env_config() -> dict[str, Any]:
    """Load configuration from environment variables."""
    config: dict[str, Any] = {}

    if path := os.environ.get("CHUD_CONFIG"):
        config["config_path"] = path
    if level := os.environ.get("CHUD_LOG_LEVEL"):
        config["log_level"] = level
    if d := os.environ.get("CHUD_CACHE_DIR"):
        config["cache_dir"] = d
    if d := os.environ.get("CHUD_PROJECTS_DIR"):
        config["projects_dir"] = d

    return config


def find_config_file(cwd: str | None = None) -> Path | None:
    """Locate the TOML config: $CHUD_CONFIG, ./.chud/config.toml, ~/.chud/config.toml."""
    if explicit := os.environ.get("CHUD_CONFIG"):
        path = Path(explicit).expanduser()
        return path if path.exists() else None

    search_dirs = []
    if cwd:
        search_dirs.append(Path(cwd))
    search_dirs.append(Path.cwd())

    for d in search_dirs:
        toml_path = d / ".chud" / "config.toml"
        if toml_path.exists():
            return toml_path

    home_path = Path.home() / ".chud" / "config.toml"
    if home_path.exists():
        return home_path
    return None


def load_toml_config(cwd: str | None = None) -> dict[str, Any]:
    """Load the raw TOML config, or an empty dict if there is none."""
    path = find_config_file(cwd)
    if path is None:
        return {}
    try:
        import tomllib
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Failed to read config %s: %s", path, exc)
        return {}


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge *override* into a copy of *base*. Lists replace wholesale."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)
        elif value is not None:
            result[key] = copy.deepcopy(value)
    return result


def _check_color(value: Any, where: str) -> str:
    if not isinstance(value, str) or not _HEX_COLOR.match(value):
        raise ConfigError(f"{where} must be a #rrggbb color, got {value!r}")
    return value.lower()


def _build_segment(raw: Any, index: int) -> SegmentSpec:
    if not isinstance(raw, dict):
        raise ConfigError(f"segments[{index}] must be a table")
    seg_type = raw.get("type")
    if not isinstance(seg_type, str) or not seg_type:
        raise ConfigError(f"segments[{index}].type is required")

    defaults = SEGMENT_COLORS.get(seg_type, FALLBACK_COLORS)
    colors = raw.get("colors") or {}
    if not isinstance(colors, dict):
        raise ConfigError(f"segments[{index}].colors must be a table")
    fg = _check_color(colors.get("fg", defaults["fg"]), f"segments[{index}].colors.fg")
    bg = _check_color(colors.get("bg", defaults["bg"]), f"segments[{index}].colors.bg")

    display = raw.get("display") or {}
    if not isinstance(display, dict):
        raise ConfigError(f"segments[{index}].display must be a table")

    extra = {k: v for k, v in raw.items() if k not in ("type", "colors", "display")}
    return SegmentSpec(
        type=seg_type,
        colors=SegmentColors(fg=fg, bg=bg),
        display=dict(display),
        extra=extra,
    )


def _build_theme(raw: dict[str, Any]) -> ThemeSpec:
    try:
        style = SeparatorStyle(raw.get("separator_style", "angled"))
        mode = ColorMode(raw.get("color_mode", "text"))
    except ValueError as exc:
        raise ConfigError(f"theme: {exc}") from exc
    powerline = raw.get("powerline", True)
    if not isinstance(powerline, bool):
        raise ConfigError(f"theme.powerline must be true or false, got {powerline!r}")
    return ThemeSpec(
        powerline=powerline,
        separator_style=style,
        color_mode=mode,
    )


def build_config(raw: dict[str, Any]) -> Config:
    """Convert a raw mapping (defaults merged with user TOML) into a Config."""
    segments = raw.get("segments")
    if not isinstance(segments, list) or not segments:
        raise ConfigError("at least one segment must be configured")
    theme = raw.get("theme") or {}
    if not isinstance(theme, dict):
        raise ConfigError("theme must be a table")
    return Config(
        segments=tuple(_build_segment(s, i) for i, s in enumerate(segments)),
        theme=_build_theme(theme),
    )


def default_config() -> Config:
    return build_config(DEFAULT_CONFIG)


def load_config(cwd: str | None = None) -> Config:
    """Resolve the effective Config. Falls back to defaults on any error."""
    user = load_toml_config(cwd)
    if not user:
        return default_config()
    try:
        return build_config(deep_merge(DEFAULT_CONFIG, user))
    except ConfigError as exc:
        logger.warning("Invalid config, falling back to defaults: %s", exc)
        return default_config()
