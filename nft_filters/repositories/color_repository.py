from __future__ import annotations
import numpy as np
import cv2


class ColorRepository:
    """
    Pure colour-space math on (…, 3) RGB arrays.

    • HSL uses hue in degrees [0, 360), saturation and lightness in [0, 1].
    • Conversions are vectorised; no per-pixel Python loops.
    """

    @staticmethod
    def luminance(rgb_u8: np.ndarray) -> np.ndarray:
        """BT.601 luma of an (H, W, 3) uint8 RGB array, returned as (H, W) uint8."""
        if rgb_u8.size == 0:
            return np.zeros(rgb_u8.shape[:2], dtype=np.uint8)
        return cv2.cvtColor(np.ascontiguousarray(rgb_u8), cv2.COLOR_RGB2GRAY)

    @staticmethod
    def rgb_to_hsl(rgb_u8: np.ndarray) -> np.ndarray:
        """
        Args:
            rgb_u8 (np.ndarray): uint8 RGB values, any leading shape.

        Returns:
            (np.ndarray): float64 array of the same shape holding (h, s, l).
        """
        rgb = rgb_u8.astype(np.float64) / 255.0
        r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]

        c_max = rgb.max(axis=-1)
        c_min = rgb.min(axis=-1)
        delta = c_max - c_min
        lightness = (c_max + c_min) / 2.0

        chromatic = delta > 0
        safe_delta = np.where(chromatic, delta, 1.0)

        denom = 1.0 - np.abs(2.0 * lightness - 1.0)
        saturation = np.where(chromatic & (denom > 0), delta / np.where(denom > 0, denom, 1.0), 0.0)

        # Hue sector depends on which channel holds the maximum.
        hue = np.zeros_like(c_max)
        r_max = chromatic & (c_max == r)
        g_max = chromatic & (c_max == g) & ~r_max
        b_max = chromatic & ~r_max & ~g_max
        hue = np.where(r_max, np.mod((g - b) / safe_delta, 6.0), hue)
        hue = np.where(g_max, (b - r) / safe_delta + 2.0, hue)
        hue = np.where(b_max, (r - g) / safe_delta + 4.0, hue)
        hue = np.mod(hue * 60.0, 360.0)

        return np.stack([hue, np.clip(saturation, 0.0, 1.0), lightness], axis=-1)

    @staticmethod
    def hsl_to_rgb(hsl: np.ndarray) -> np.ndarray:
        """Inverse of :meth:`rgb_to_hsl`; returns rounded uint8 RGB."""
        hue = np.mod(hsl[..., 0], 360.0)
        saturation = np.clip(hsl[..., 1], 0.0, 1.0)
        lightness = np.clip(hsl[..., 2], 0.0, 1.0)

        chroma = (1.0 - np.abs(2.0 * lightness - 1.0)) * saturation
        sector = hue / 60.0
        x = chroma * (1.0 - np.abs(np.mod(sector, 2.0) - 1.0))
        m = lightness - chroma / 2.0

        idx = np.floor(sector).astype(np.int64) % 6
        zeros = np.zeros_like(chroma)
        # (r, g, b) before adding m, per 60° sector
        choices_r = [chroma, x, zeros, zeros, x, chroma]
        choices_g = [x, chroma, chroma, x, zeros, zeros]
        choices_b = [zeros, zeros, x, chroma, chroma, x]
        r = np.choose(idx, choices_r) + m
        g = np.choose(idx, choices_g) + m
        b = np.choose(idx, choices_b) + m

        rgb = np.stack([r, g, b], axis=-1) * 255.0
        return np.clip(np.rint(rgb), 0, 255).astype(np.uint8)

    def rotate_hue(self, rgb_u8: np.ndarray, degrees: float) -> np.ndarray:
        """Shift hue by *degrees* (wrapping modulo 360); saturation and lightness kept."""
        hsl = self.rgb_to_hsl(rgb_u8)
        hsl[..., 0] = np.mod(hsl[..., 0] + degrees, 360.0)
        return self.hsl_to_rgb(hsl)
