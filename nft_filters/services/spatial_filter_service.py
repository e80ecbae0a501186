from __future__ import annotations
import numpy as np

from ..models.filter_settings import FilterSettings
from ..models.pixel_buffer import PixelBuffer
from ..repositories.color_repository import ColorRepository
from ..repositories.convolution_repository import ConvolutionRepository


class SpatialFilterService:
    """
    Neighbourhood filters (blur / sharpen / emboss / pixelate).

    • Every pass reads the caller's buffer and writes a separate array,
      so no output pixel is ever computed from an already-filtered neighbour.
    • Only R, G, B are filtered; alpha is copied through.
    """

    SHARPEN_KERNEL = np.array([
        [ 0.0, -1.0,  0.0],
        [-1.0,  5.0, -1.0],
        [ 0.0, -1.0,  0.0],
    ])

    # top-left negative / bottom-right positive; sums to 0 so flat areas land on the offset
    EMBOSS_KERNEL = np.array([
        [-2.0, -1.0, 0.0],
        [-1.0,  0.0, 1.0],
        [ 0.0,  1.0, 2.0],
    ])

    def __init__(self, settings: FilterSettings | None = None):
        self.settings = settings or FilterSettings.from_env()
        self.conv_repo = ConvolutionRepository()
        self.color_repo = ColorRepository()

    @staticmethod
    def _to_u8(values: np.ndarray) -> np.ndarray:
        return np.clip(np.rint(values), 0, 255).astype(np.uint8)

    @staticmethod
    def _with_rgb(buffer: PixelBuffer, rgb: np.ndarray) -> PixelBuffer:
        out = buffer.pixels.copy()
        out[..., :3] = rgb
        return buffer.with_pixels(out)

    # --------------------------------------------------------------
    def blur(self, buffer: PixelBuffer) -> PixelBuffer:
        blurred = self.conv_repo.gaussian(
            buffer.rgb, radius=self.settings.blur_radius, sigma=self.settings.blur_sigma
        )
        return self._with_rgb(buffer, self._to_u8(blurred))

    def sharpen(self, buffer: PixelBuffer) -> PixelBuffer:
        sharpened = self.conv_repo.correlate(buffer.rgb, self.SHARPEN_KERNEL)
        return self._with_rgb(buffer, self._to_u8(sharpened))

    def emboss(self, buffer: PixelBuffer) -> PixelBuffer:
        """
        Directional difference plus a mid-gray offset, optionally
        desaturated to the luma of the embossed colours.
        """
        relief = self.conv_repo.correlate(buffer.rgb, self.EMBOSS_KERNEL)
        embossed = self._to_u8(relief + self.settings.emboss_offset)
        if self.settings.emboss_grayscale:
            embossed = self.color_repo.luminance(embossed)[..., None]
        return self._with_rgb(buffer, embossed)

    def pixelate(self, buffer: PixelBuffer) -> PixelBuffer:
        """
        Replace each block x block tile with its mean colour.  Tiles on the
        right/bottom edges are clipped and average only the pixels they hold.
        """
        height, width = buffer.height, buffer.width
        if height == 0 or width == 0:
            return buffer.with_pixels(buffer.pixels.copy())

        block = self.settings.pixelate_block
        row_starts = np.arange(0, height, block)
        col_starts = np.arange(0, width, block)
        row_sizes = np.diff(np.append(row_starts, height))
        col_sizes = np.diff(np.append(col_starts, width))

        rgb = buffer.rgb.astype(np.float64)
        sums = np.add.reduceat(np.add.reduceat(rgb, row_starts, axis=0), col_starts, axis=1)
        counts = np.outer(row_sizes, col_sizes)[..., None]
        means = self._to_u8(sums / counts)

        tiled = np.repeat(np.repeat(means, row_sizes, axis=0), col_sizes, axis=1)
        return self._with_rgb(buffer, tiled)
