"""Line assembly: turns ordered segment outputs into one ANSI-styled string.

The line is built from *units*. A unit is one segment's styled text (plus,
in powerline mode, the separator glyph that follows it) or, in text mode, a
divider. Units are joined by ordinary spaces, which are the only places a
terminal may wrap the line. Spaces inside a unit are non-breaking unless the
segment allows wrapping.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.color import ColorSystem
from rich.style import Style

from chud.renderer.colors import darken
from chud.renderer.separators import TEXT_DIVIDER, get_separators
from chud.types.config import ColorMode, ThemeSpec
from chud.types.segments import SegmentOutput

NBSP = "\u00a0"
SEPARATOR_DARKEN = 0.1

_DIVIDER_STYLE = Style(dim=True)


def _paint(text: str, style: Style) -> str:
    return style.render(text, color_system=ColorSystem.TRUECOLOR)


def _unit_text(output: SegmentOutput) -> str:
    return output.text if output.allow_wrap else output.text.replace(" ", NBSP)


def _render_text_mode(outputs: Sequence[SegmentOutput]) -> str:
    units: list[str] = []
    divider = _paint(TEXT_DIVIDER, _DIVIDER_STYLE)
    for i, output in enumerate(outputs):
        if i:
            units.append(divider)
        units.append(_paint(_unit_text(output), Style(color=output.fg)))
    return " ".join(units)


def _render_background_mode(outputs: Sequence[SegmentOutput], theme: ThemeSpec) -> str:
    glyph = get_separators(theme.separator_style).right
    pieces: list[str] = []
    for i, output in enumerate(outputs):
        following = outputs[i + 1] if i + 1 < len(outputs) else None
        body = f"{NBSP}{_unit_text(output)}{NBSP}"
        unit = _paint(body, Style(color=output.fg, bgcolor=output.bg))

        if theme.powerline:
            sep_fg = darken(output.bg, SEPARATOR_DARKEN)
            if following is not None:
                unit += _paint(glyph, Style(color=sep_fg, bgcolor=following.bg))
            else:
                unit += _paint(glyph, Style(color=sep_fg))

        if i:
            # Keep the powerline flow unbroken across the wrap point
            join_style = Style(bgcolor=output.bg) if theme.powerline else Style()
            pieces.append(_paint(" ", join_style))
        pieces.append(unit)
    return "".join(pieces)


def render_line(outputs: Sequence[SegmentOutput], theme: ThemeSpec) -> str:
    """Render the status line. Empty segments never appear in the result."""
    visible = [o for o in outputs if not o.is_empty]
    if not visible:
        return ""
    if theme.color_mode is ColorMode.TEXT:
        return _render_text_mode(visible)
    return _render_background_mode(visible, theme)
