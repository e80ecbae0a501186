"""
In-process image filter engine: encoded image bytes + filter name → PNG bytes.
"""

from .exceptions import DecodeError, EncodeError, FilterEngineError, UnknownFilterError
from .models import FilterKind, FilterSettings, PixelBuffer
from .pipeline.apply_filter import apply_filter, filter_buffer

__all__ = [
    "apply_filter",
    "filter_buffer",
    "FilterKind",
    "FilterSettings",
    "PixelBuffer",
    "FilterEngineError",
    "DecodeError",
    "EncodeError",
    "UnknownFilterError",
]

__version__ = "1.0.0"
