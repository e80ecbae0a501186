from __future__ import annotations
from typing import Iterable


class FilterEngineError(Exception):
    """Base class for every failure raised by the filter engine."""


class DecodeError(FilterEngineError, ValueError):
    """Input bytes are empty, truncated or not a supported raster image."""


class UnknownFilterError(FilterEngineError, ValueError):
    """The requested filter name is not one of the known filters."""

    def __init__(self, name: str, valid_names: Iterable[str] = ()):
        self.name = name
        self.valid_names = list(valid_names)
        message = f"Unknown filter {name!r}"
        if self.valid_names:
            message += f" (expected one of: {', '.join(self.valid_names)})"
        super().__init__(message)


class EncodeError(FilterEngineError, RuntimeError):
    """A pixel buffer could not be serialised (its shape breaks the buffer invariant)."""
