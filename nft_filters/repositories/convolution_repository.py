from __future__ import annotations
import numpy as np
import cv2


class ConvolutionRepository:
    """
    Neighbourhood sums over (H, W, C) float arrays.

    • Always reads from an untouched, edge-padded copy of the source and
      accumulates into a fresh destination array.
    • Out-of-bounds taps replicate the nearest edge pixel.
    """

    @staticmethod
    def _pad_edges(src: np.ndarray, pad_y: int, pad_x: int) -> np.ndarray:
        return np.pad(src, ((pad_y, pad_y), (pad_x, pad_x), (0, 0)), mode="edge")

    def correlate(self, src: np.ndarray, kernel: np.ndarray) -> np.ndarray:
        """
        Weighted neighbourhood sum of *src* with an odd-sized 2-D *kernel*
        (kernel[0, 0] weights the top-left neighbour).

        Returns:
            (np.ndarray): float64 array shaped like *src*; values are not clamped.
        """
        kernel = np.asarray(kernel, dtype=np.float64)
        k_h, k_w = kernel.shape
        if k_h % 2 == 0 or k_w % 2 == 0:
            raise ValueError(f"Kernel must have odd dimensions, got {kernel.shape}")

        src = np.asarray(src, dtype=np.float64)
        height, width = src.shape[:2]
        dst = np.zeros_like(src, dtype=np.float64)
        if height == 0 or width == 0:
            return dst

        padded = self._pad_edges(src, k_h // 2, k_w // 2)
        for ky in range(k_h):
            for kx in range(k_w):
                weight = kernel[ky, kx]
                if weight == 0.0:
                    continue
                dst += weight * padded[ky:ky + height, kx:kx + width]
        return dst

    def gaussian(self, src: np.ndarray, radius: int, sigma: float) -> np.ndarray:
        """
        Separable Gaussian blur with a (2r+1)-tap normalised kernel.
        """
        src = np.asarray(src, dtype=np.float64)
        if radius <= 0:
            return src.copy()

        taps = cv2.getGaussianKernel(2 * radius + 1, sigma, cv2.CV_64F).ravel()
        taps = taps / taps.sum()

        horizontal = self.correlate(src, taps.reshape(1, -1))
        return self.correlate(horizontal, taps.reshape(-1, 1))
