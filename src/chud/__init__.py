"""chud -- color-coded status line for Claude Code sessions.

Usage:
    from chud import default_config, render_statusline
    from chud.core.data import DataAccess
    from chud.types import SessionContext

    ctx = SessionContext(cwd="/path/to/project")
    print(render_statusline(default_config(), ctx, DataAccess.from_environment()))
"""

from chud.core.config import default_config, load_config
from chud.core.pipeline import render_statusline, run
from chud.types.config import ColorMode, Config, SegmentSpec, SeparatorStyle, ThemeSpec
from chud.types.context import ContextWindow, GitState, SessionContext
from chud.types.segments import SegmentOutput
from chud.types.usage import CostEvent, PaceResult

__version__ = "0.3.0"

__all__ = [
    # Core API
    "render_statusline",
    "run",
    # Configuration
    "ColorMode",
    "Config",
    "SegmentSpec",
    "SeparatorStyle",
    "ThemeSpec",
    "default_config",
    "load_config",
    # Context and output types
    "ContextWindow",
    "GitState",
    "SegmentOutput",
    "SessionContext",
    # Usage types
    "CostEvent",
    "PaceResult",
]
