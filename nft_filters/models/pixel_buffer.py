from __future__ import annotations
from dataclasses import dataclass
import numpy as np


@dataclass
class PixelBuffer:
    """
    Simple data object: decoded RGBA pixels plus declared dimensions.
    No codec logic outside the repositories.
    """
    width: int
    height: int
    pixels: np.ndarray  # Shape (H, W, 4), dtype uint8, RGBA order, row-major top-to-bottom.
    source_format: str | None = None  # Format detected by the decoder (e.g. "JPEG").

    @property
    def rgb(self) -> np.ndarray:
        return self.pixels[..., :3]

    @property
    def alpha(self) -> np.ndarray:
        return self.pixels[..., 3]

    def is_consistent(self) -> bool:
        """True when ``pixels`` really holds ``width * height`` RGBA uint8 quadruples."""
        arr = self.pixels
        return (
            isinstance(arr, np.ndarray)
            and arr.dtype == np.uint8
            and arr.ndim == 3
            and arr.shape == (self.height, self.width, 4)
        )

    def with_pixels(self, new_pixels: np.ndarray) -> PixelBuffer:
        """Return a new buffer of the same dimensions owning *new_pixels*."""
        return PixelBuffer(
            width=self.width,
            height=self.height,
            pixels=new_pixels,
            source_format=self.source_format,
        )
