"""Configuration types for chud."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SeparatorStyle(Enum):
    """Powerline separator glyph families."""

    ANGLED = "angled"
    THIN = "thin"
    ROUNDED = "rounded"
    FLAME = "flame"
    SLANT = "slant"
    BACKSLANT = "backslant"


class ColorMode(Enum):
    """How segment colors are applied to the line."""

    BACKGROUND = "background"  # Filled background, powerline capable
    TEXT = "text"  # Foreground only, pipe-separated


@dataclass(frozen=True, slots=True)
class SegmentColors:
    """Foreground/background pair as ``#rrggbb`` strings."""

    fg: str
    bg: str


@dataclass(frozen=True, slots=True)
class SegmentSpec:
    """One entry of the configured segment list."""

    type: str
    colors: SegmentColors
    display: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)  # Segment-specific top-level keys

    def option(self, name: str, default: Any = None) -> Any:
        """Look up a display option, falling back to *default*."""
        return self.display.get(name, default)


@dataclass(frozen=True, slots=True)
class ThemeSpec:
    """Line-wide styling options."""

    powerline: bool = True
    separator_style: SeparatorStyle = SeparatorStyle.ANGLED
    color_mode: ColorMode = ColorMode.TEXT


@dataclass(frozen=True, slots=True)
class Config:
    """A fully resolved chud configuration."""

    segments: tuple[SegmentSpec, ...]
    theme: ThemeSpec = field(default_factory=ThemeSpec)
