from __future__ import annotations
from typing import Callable, Dict
import logging

from ..exceptions import EncodeError
from ..models.filter_kind import FilterKind
from ..models.filter_settings import FilterSettings
from ..models.pixel_buffer import PixelBuffer
from .color_filter_service import ColorFilterService
from .spatial_filter_service import SpatialFilterService

logger = logging.getLogger(__name__)

Kernel = Callable[[PixelBuffer], PixelBuffer]


class FilterService:
    """
    Business logic layer that maps a FilterKind onto its kernel.
    Delegates the pixel math to the colour and spatial services.
    """

    def __init__(self, settings: FilterSettings | None = None):
        self.settings = settings or FilterSettings.from_env()
        self.color_service = ColorFilterService(self.settings)
        self.spatial_service = SpatialFilterService(self.settings)

        self._kernels: Dict[FilterKind, Kernel] = {
            FilterKind.GRAYSCALE: self.color_service.grayscale,
            FilterKind.BLUR: self.spatial_service.blur,
            FilterKind.HUE_ROTATE: self.color_service.hue_rotate,
            FilterKind.INVERT: self.color_service.invert,
            FilterKind.SEPIA: self.color_service.sepia,
            FilterKind.PIXELATE: self.spatial_service.pixelate,
            FilterKind.EMBOSS: self.spatial_service.emboss,
            FilterKind.SHARPEN: self.spatial_service.sharpen,
            FilterKind.POSTERIZE: self.color_service.posterize,
        }
        missing = set(FilterKind) - set(self._kernels)
        if missing:
            raise RuntimeError(f"No kernel registered for: {sorted(k.value for k in missing)}")

    def resolve(self, name: str) -> FilterKind:
        """Exact, case-sensitive lookup; raises UnknownFilterError."""
        return FilterKind.from_name(name)

    def apply(self, buffer: PixelBuffer, kind: FilterKind) -> PixelBuffer:
        """
        Args:
            buffer (PixelBuffer): Decoded source image; never modified.
            kind (FilterKind): Which kernel to run.

        Returns:
            (PixelBuffer): A new buffer with the same width and height.
        """
        if not buffer.is_consistent():
            raise EncodeError(
                f"Pixel buffer does not match its declared size {buffer.width}x{buffer.height}"
            )

        result = self._kernels[kind](buffer)
        logger.debug(f"Applied {kind.value} to {buffer.width}x{buffer.height} image")
        return result
