"""Exception types for chud."""

from __future__ import annotations


class ChudError(Exception):
    """Base class for chud errors."""


class ConfigError(ChudError):
    """Raised when a configuration cannot be turned into a Config."""


class SourceError(ChudError):
    """Raised by an external data source that failed or returned garbage.

    Sources raise this internally; it is always caught at the call site and
    turned into an empty or fallback value.
    """

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source
