"""
Filter pipeline
Decode → filter → encode for one fully-buffered image.
This is the only entry point hosts (HTTP, CLI) need.
"""

import logging

from ..models.filter_kind import FilterKind
from ..models.pixel_buffer import PixelBuffer
from ..services.filter_service import FilterService
from ..services.image_service import ImageService

logger = logging.getLogger(__name__)


def filter_buffer(
    buffer: PixelBuffer,
    kind: FilterKind,
    *,
    filter_service: FilterService = FilterService(),
) -> PixelBuffer:
    """Run one kernel on an already decoded buffer."""
    return filter_service.apply(buffer, kind)


def apply_filter(
    image_bytes: bytes,
    filter_name: str,
    *,
    image_service: ImageService = ImageService(),
    filter_service: FilterService = FilterService(),
) -> bytes:
    """
    Apply the named filter to an encoded image and return PNG bytes.

    The filter name is resolved before any decoding work so a bad name
    fails fast regardless of the image.

    Args:
        image_bytes: Raw bytes of a PNG/JPEG/... file
        filter_name: One of FilterKind's values, matched exactly
        image_service: Service for decoding/encoding
        filter_service: Service holding the kernels

    Returns:
        bytes: RGBA8 PNG stream with the same dimensions as the input

    Raises:
        UnknownFilterError: filter_name is not a known filter
        DecodeError: image_bytes is empty, truncated or unrecognised
        EncodeError: the filtered buffer broke the size invariant
    """
    kind = filter_service.resolve(filter_name)
    source = image_service.decode(image_bytes)
    filtered = filter_buffer(source, kind, filter_service=filter_service)
    encoded = image_service.encode(filtered)

    logger.info(
        f"{kind.value}: {source.width}x{source.height} {source.source_format} "
        f"→ PNG ({len(encoded)} bytes)"
    )
    return encoded
