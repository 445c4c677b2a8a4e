"""
Exception taxonomy for chart construction and rendering.

Library code raises these; only the gallery layer catches them and turns
them into user-facing messages.
"""

from typing import Iterable, Optional


class PlotpipeError(Exception):
    """Base class for every error raised by plotpipe."""


class ChartSpecError(PlotpipeError, ValueError):
    """A chart specification cannot be turned into a figure."""


class EncodingError(ChartSpecError):
    """A visual encoding (x, y, color, symbol, ...) cannot be resolved."""

    def __init__(self, message: str, encoding: Optional[str] = None,
                 available: Optional[Iterable[str]] = None):
        self.encoding = encoding
        self.available = list(available) if available is not None else None
        if self.available is not None:
            message = f"{message} (available columns: {', '.join(self.available)})"
        super().__init__(message)


class SubplotError(ChartSpecError):
    """Charts cannot be arranged into the requested subplot grid."""


class RenderHookError(PlotpipeError, ValueError):
    """A post-render callback is not a usable JavaScript function."""
