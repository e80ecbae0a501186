from io import BytesIO

import numpy as np
import pytest
from PIL import Image as PILImage

from nft_filters.models.filter_settings import FilterSettings
from nft_filters.models.pixel_buffer import PixelBuffer


def encode_array(pixels: np.ndarray, fmt: str = "PNG", **save_kwargs) -> bytes:
    """Encode a uint8 array (H,W), (H,W,3) or (H,W,4) with Pillow."""
    out = BytesIO()
    PILImage.fromarray(pixels).save(out, format=fmt, **save_kwargs)
    return out.getvalue()


def decode_array(data: bytes) -> np.ndarray:
    with PILImage.open(BytesIO(data)) as img:
        assert img.format == "PNG"
        return np.array(img.convert("RGBA"))


def make_buffer(pixels: np.ndarray) -> PixelBuffer:
    height, width = pixels.shape[:2]
    return PixelBuffer(width=width, height=height, pixels=pixels)


@pytest.fixture
def settings() -> FilterSettings:
    """Defaults, independent of whatever .env the developer has."""
    return FilterSettings()


@pytest.fixture
def gradient_rgba() -> np.ndarray:
    """20x13 image with distinct colours and varying alpha."""
    h, w = 13, 20
    ys, xs = np.mgrid[0:h, 0:w]
    pixels = np.zeros((h, w, 4), dtype=np.uint8)
    pixels[..., 0] = (xs * 255 // (w - 1)).astype(np.uint8)
    pixels[..., 1] = (ys * 255 // (h - 1)).astype(np.uint8)
    pixels[..., 2] = ((xs + ys) * 7 % 256).astype(np.uint8)
    pixels[..., 3] = (200 + (xs % 5) * 10).astype(np.uint8)
    return pixels


@pytest.fixture
def random_rgba() -> np.ndarray:
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(17, 23, 4), dtype=np.uint8)


@pytest.fixture
def checkerboard_rgba() -> np.ndarray:
    """Alternating pure black / pure white pixels, fully opaque."""
    h, w = 9, 9
    ys, xs = np.mgrid[0:h, 0:w]
    white = ((xs + ys) % 2 == 0)
    pixels = np.zeros((h, w, 4), dtype=np.uint8)
    pixels[white, :3] = 255
    pixels[..., 3] = 255
    return pixels


@pytest.fixture
def png_2x2() -> bytes:
    pixels = np.array([
        [[255, 0, 0, 255], [0, 255, 0, 255]],
        [[0, 0, 255, 255], [255, 255, 255, 128]],
    ], dtype=np.uint8)
    return encode_array(pixels)


@pytest.fixture
def png_1x1() -> bytes:
    return encode_array(np.array([[[10, 100, 200, 255]]], dtype=np.uint8))
