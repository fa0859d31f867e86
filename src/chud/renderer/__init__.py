"""Status line rendering."""

from chud.renderer.colors import darken, parse_hex, to_hex
from chud.renderer.powerline import render_line
from chud.renderer.separators import SEPARATORS, Separators, get_separators

__all__ = [
    "SEPARATORS",
    "Separators",
    "darken",
    "get_separators",
    "parse_hex",
    "render_line",
    "to_hex",
]
