from __future__ import annotations
from dataclasses import dataclass
import os

import numpy as np
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class FilterSettings:
    """
    Value-object holding the tunable constants of the filter kernels.
    Defaults give a soft blur, a quarter-turn hue shift and four
    posterize levels ({0, 85, 170, 255}).
    """
    blur_radius:        int = 5      # Gaussian kernel is 2r+1 wide
    blur_sigma:         float = 2.5
    hue_rotate_degrees: float = 90.0
    posterize_levels:   int = 4
    pixelate_block:     int = 8
    emboss_offset:      float = 128.0
    emboss_grayscale:   bool = True

    def __post_init__(self):
        if self.blur_radius < 0:
            raise ValueError(f"blur_radius must be >= 0, got {self.blur_radius}")
        if self.blur_sigma <= 0:
            raise ValueError(f"blur_sigma must be > 0, got {self.blur_sigma}")
        if not 2 <= self.posterize_levels <= 256:
            raise ValueError(f"posterize_levels must be in [2, 256], got {self.posterize_levels}")
        if self.pixelate_block < 1:
            raise ValueError(f"pixelate_block must be >= 1, got {self.pixelate_block}")

    def posterize_table(self) -> np.ndarray:
        """
        256-entry lookup: floor bucket ``v * (N-1) // 255``, then the bucket's
        level ``round(i * 255 / (N-1))``.  Always yields exactly N levels.
        """
        spans = self.posterize_levels - 1
        buckets = np.arange(256, dtype=np.int64) * spans // 255
        levels = (buckets * 255 * 2 + spans) // (2 * spans)  # integer round-half-up
        return levels.astype(np.uint8)

    def posterize_palette(self) -> set[int]:
        """Every value Posterize can emit for a channel."""
        return {int(v) for v in self.posterize_table()}

    @classmethod
    def from_env(cls) -> FilterSettings:
        """Create settings from environment variables, falling back to the defaults."""
        defaults = cls()
        return cls(
            blur_radius=int(os.getenv("BLUR_RADIUS", defaults.blur_radius)),
            blur_sigma=float(os.getenv("BLUR_SIGMA", defaults.blur_sigma)),
            hue_rotate_degrees=float(os.getenv("HUE_ROTATE_DEGREES", defaults.hue_rotate_degrees)),
            posterize_levels=int(os.getenv("POSTERIZE_LEVELS", defaults.posterize_levels)),
            pixelate_block=int(os.getenv("PIXELATE_BLOCK_SIZE", defaults.pixelate_block)),
            emboss_offset=float(os.getenv("EMBOSS_OFFSET", defaults.emboss_offset)),
            emboss_grayscale=_env_bool("EMBOSS_GRAYSCALE", defaults.emboss_grayscale),
        )
