from __future__ import annotations
from io import BytesIO
from pathlib import Path
from typing import Iterable, Iterator, Union
import logging
import os

import numpy as np
from PIL import Image as PILImage, UnidentifiedImageError
from dotenv import load_dotenv

from ..exceptions import DecodeError, EncodeError
from ..models.pixel_buffer import PixelBuffer

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_FORMATS = "PNG,JPEG,GIF,BMP,WEBP,TIFF,ICO"
DEFAULT_EXTS = ".png,.jpg,.jpeg,.gif,.bmp,.webp,.tif,.tiff"

# Decompression-bomb guard; Pillow's own limit stays untouched unless configured
if os.getenv("MAX_IMAGE_PIXELS"):
    PILImage.MAX_IMAGE_PIXELS = int(os.getenv("MAX_IMAGE_PIXELS"))


class ImageRepository:
    """
    Handles the codec and file I/O for PixelBuffer entities.
    Pillow never leaks past this class.
    """
    def __init__(self):
        PILImage.init()
        # only formats this Pillow build can actually open
        self.ALLOWED_FORMATS = tuple(
            fmt.strip().upper()
            for fmt in os.getenv("ALLOWED_IMAGE_FORMATS", DEFAULT_FORMATS).split(",")
            if fmt.strip().upper() in PILImage.OPEN
        )
        self.VALID_EXTS = {
            ext.strip().lower()
            for ext in os.getenv("ALLOWED_IMAGE_EXTENSIONS", DEFAULT_EXTS).split(",")
            if ext.strip()
        }

    # ─── Codec ─────────────────────────────────────────────────────────
    @staticmethod
    def _to_8bit(pil_img: PILImage.Image) -> PILImage.Image:
        """
        Rescale high-bit-depth single-channel images to 8-bit "L".

        • I;16* and I are read as 16-bit samples (0..65535 → 0..255).
        • F is read as intensity in [0, 1].
        Other modes are returned unchanged for Pillow to convert.
        """
        mode = pil_img.mode
        if mode.startswith("I;16") or mode == "I":
            samples = np.array(pil_img).astype(np.int64)
            scaled = np.clip(samples, 0, 65535) >> 8
        elif mode == "F":
            samples = np.array(pil_img).astype(np.float64)
            scaled = np.rint(np.clip(np.nan_to_num(samples), 0.0, 1.0) * 255.0)
        else:
            return pil_img
        return PILImage.fromarray(scaled.astype(np.uint8))

    def decode(self, data: bytes) -> PixelBuffer:
        """
        Detect the format from the byte signature and decode to RGBA.

        Images without alpha are expanded with full opacity; palette,
        grayscale and CMYK images are normalised to RGBA.
        """
        if not data:
            raise DecodeError("Image data is empty")

        try:
            with PILImage.open(BytesIO(bytes(data)), formats=self.ALLOWED_FORMATS) as pil_img:
                source_format = pil_img.format
                pil_img.load()  # force full decode so truncation surfaces here
                rgba = self._to_8bit(pil_img).convert("RGBA")
        except UnidentifiedImageError as err:
            raise DecodeError("Not a recognised image format") from err
        except PILImage.DecompressionBombError as err:
            raise DecodeError(f"Image is too large to decode: {err}") from err
        except (OSError, EOFError, ValueError, SyntaxError) as err:
            raise DecodeError(f"Corrupt or truncated image: {err}") from err

        width, height = rgba.size
        if width == 0 or height == 0:
            raise DecodeError(f"Image has zero size ({width}x{height})")

        pixels = np.array(rgba, dtype=np.uint8)
        logger.debug(f"Decoded {source_format} image {width}x{height}")
        return PixelBuffer(width=width, height=height, pixels=pixels, source_format=source_format)

    @staticmethod
    def encode(buffer: PixelBuffer) -> bytes:
        """Serialise *buffer* as an RGBA8 PNG stream."""
        if not buffer.is_consistent():
            shape = getattr(buffer.pixels, "shape", None)
            raise EncodeError(
                f"Pixel array {shape} does not match declared size {buffer.width}x{buffer.height}x4 uint8"
            )
        if buffer.width == 0 or buffer.height == 0:
            raise EncodeError(f"Cannot encode an empty {buffer.width}x{buffer.height} image")

        pixels = buffer.pixels
        if not pixels.flags['C_CONTIGUOUS']:
            pixels = np.ascontiguousarray(pixels)

        out = BytesIO()
        PILImage.fromarray(pixels).save(out, format="PNG")
        data = out.getvalue()
        logger.debug(f"Encoded {buffer.width}x{buffer.height} PNG ({len(data)} bytes)")
        return data

    # ─── Files ─────────────────────────────────────────────────────────
    def load(self, path: Union[str, Path]) -> PixelBuffer:
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Image not found: {path}")
        return self.decode(path.read_bytes())

    @staticmethod
    def save_bytes(data: bytes, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    def iter_dir(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Path]:
        """
        Yield image file paths one at a time, sorted for a stable order.
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise NotADirectoryError(folder)

        allowed = {e.lower() for e in (exts or self.VALID_EXTS)}
        pattern = "**/*" if recursive else "*"

        for p in sorted(folder.glob(pattern)):
            if not p.is_file():
                continue
            if p.suffix.lower() not in allowed:
                logger.debug(f"Skipping due to extension: {p}")
                continue
            yield p
