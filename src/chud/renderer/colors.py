"""Hex color helpers."""

from __future__ import annotations


def parse_hex(color: str) -> tuple[int, int, int]:
    """``#rrggbb`` -> ``(r, g, b)``. Raises ValueError on anything else."""
    value = color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Invalid hex color: {color!r}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def to_hex(rgb: tuple[int, int, int]) -> str:
    r, g, b = (min(max(int(c), 0), 255) for c in rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


def darken(color: str, amount: float) -> str:
    """Scale every channel of *color* down by *amount* (0.0 - 1.0).

    Channels are truncated, so no channel ever grows and ``darken(c, 0) == c``.
    """
    amount = min(max(amount, 0.0), 1.0)
    r, g, b = parse_hex(color)
    return to_hex((int(r * (1 - amount)), int(g * (1 - amount)), int(b * (1 - amount))))
