from .pixel_buffer import PixelBuffer
from .filter_kind import FilterKind
from .filter_settings import FilterSettings

__all__ = ["PixelBuffer", "FilterKind", "FilterSettings"]
