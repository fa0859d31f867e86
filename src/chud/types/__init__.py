"""Type definitions for chud."""

from chud.types.config import (
    ColorMode,
    Config,
    SegmentColors,
    SegmentSpec,
    SeparatorStyle,
    ThemeSpec,
)
from chud.types.context import ContextWindow, GitState, SessionContext
from chud.types.segments import SegmentOutput
from chud.types.usage import CostEvent, DailyUsage, ModelPricing, PaceResult

__all__ = [
    "ColorMode",
    "Config",
    "ContextWindow",
    "CostEvent",
    "DailyUsage",
    "GitState",
    "ModelPricing",
    "PaceResult",
    "SegmentColors",
    "SegmentOutput",
    "SegmentSpec",
    "SeparatorStyle",
    "SessionContext",
    "ThemeSpec",
]
