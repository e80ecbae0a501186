from __future__ import annotations
import numpy as np

from ..models.filter_settings import FilterSettings
from ..models.pixel_buffer import PixelBuffer
from ..repositories.color_repository import ColorRepository


class ColorFilterService:
    """
    Per-pixel filters.  Each method returns a **new** PixelBuffer and
    leaves the alpha channel exactly as it was.
    """

    SEPIA_MATRIX = np.array([
        [0.393, 0.769, 0.189],
        [0.349, 0.686, 0.168],
        [0.272, 0.534, 0.131],
    ], dtype=np.float64)

    def __init__(self, settings: FilterSettings | None = None):
        self.settings = settings or FilterSettings.from_env()
        self.color_repo = ColorRepository()

    @staticmethod
    def _with_rgb(buffer: PixelBuffer, rgb: np.ndarray) -> PixelBuffer:
        out = buffer.pixels.copy()
        out[..., :3] = rgb
        return buffer.with_pixels(out)

    def grayscale(self, buffer: PixelBuffer) -> PixelBuffer:
        luma = self.color_repo.luminance(buffer.rgb)
        return self._with_rgb(buffer, luma[..., None])

    def invert(self, buffer: PixelBuffer) -> PixelBuffer:
        return self._with_rgb(buffer, 255 - buffer.rgb)

    def sepia(self, buffer: PixelBuffer) -> PixelBuffer:
        toned = buffer.rgb.astype(np.float64) @ self.SEPIA_MATRIX.T
        # clamp, then truncate toward zero
        return self._with_rgb(buffer, np.clip(toned, 0.0, 255.0).astype(np.uint8))

    def hue_rotate(self, buffer: PixelBuffer) -> PixelBuffer:
        rotated = self.color_repo.rotate_hue(buffer.rgb, self.settings.hue_rotate_degrees)
        return self._with_rgb(buffer, rotated)

    def posterize(self, buffer: PixelBuffer) -> PixelBuffer:
        """
        Floor each channel into one of ``levels`` buckets and replace it with
        that bucket's evenly spaced level (4 levels → {0, 85, 170, 255}).
        """
        table = self.settings.posterize_table()
        return self._with_rgb(buffer, table[buffer.rgb])
