"""Nerd Font powerline separator glyphs."""

from __future__ import annotations

from dataclasses import dataclass

from chud.types.config import SeparatorStyle


@dataclass(frozen=True, slots=True)
class Separators:
    right: str
    left: str


SEPARATORS: dict[SeparatorStyle, Separators] = {
    SeparatorStyle.ANGLED: Separators(right="\uE0B0", left="\uE0B2"),
    SeparatorStyle.THIN: Separators(right="\uE0B1", left="\uE0B3"),
    SeparatorStyle.ROUNDED: Separators(right="\uE0B4", left="\uE0B6"),
    SeparatorStyle.FLAME: Separators(right="\uE0C0", left="\uE0C2"),
    SeparatorStyle.SLANT: Separators(right="\uE0BC", left="\uE0BA"),
    SeparatorStyle.BACKSLANT: Separators(right="\uE0B8", left="\uE0BE"),
}

TEXT_DIVIDER = "\u2502"  # box drawings light vertical


def get_separators(style: SeparatorStyle) -> Separators:
    return SEPARATORS[style]
