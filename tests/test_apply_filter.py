"""End-to-end tests for the filter dispatcher and the apply_filter pipeline."""

import numpy as np
import pytest

from conftest import decode_array, encode_array, make_buffer
from nft_filters import (
    DecodeError,
    EncodeError,
    FilterEngineError,
    FilterKind,
    PixelBuffer,
    UnknownFilterError,
    apply_filter,
    filter_buffer,
)
from nft_filters.services.filter_service import FilterService

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def test_filter_kind_names_match_wire_names():
    assert FilterKind.names() == [
        "grayscale", "blur", "huerotate", "invert", "sepia",
        "pixelate", "emboss", "sharpen", "posterize",
    ]
    assert FilterKind.HUE_ROTATE.label == "Hue Rotate"
    assert FilterKind.INVERT.label == "Invert Colors"


@pytest.mark.parametrize("name", ["Sepia", "SEPIA", " sepia", "oilpaint", "", "hue_rotate"])
def test_from_name_is_exact(name):
    with pytest.raises(UnknownFilterError) as excinfo:
        FilterKind.from_name(name)
    assert excinfo.value.name == name
    assert "sepia" in excinfo.value.valid_names


def test_from_name_rejects_non_strings():
    with pytest.raises(UnknownFilterError):
        FilterKind.from_name(None)


def test_dispatcher_covers_every_kind(settings, gradient_rgba):
    service = FilterService(settings)
    buffer = make_buffer(gradient_rgba)
    for kind in FilterKind:
        result = service.apply(buffer, kind)
        assert isinstance(result, PixelBuffer)
        assert result.is_consistent()
        assert (result.width, result.height) == (buffer.width, buffer.height)


def test_dispatcher_rejects_inconsistent_buffer(settings, gradient_rgba):
    service = FilterService(settings)
    bad = PixelBuffer(width=1, height=1, pixels=gradient_rgba)
    with pytest.raises(EncodeError):
        service.apply(bad, FilterKind.INVERT)


def test_filter_buffer_uses_default_service(gradient_rgba):
    result = filter_buffer(make_buffer(gradient_rgba), FilterKind.INVERT)
    np.testing.assert_array_equal(result.rgb, 255 - gradient_rgba[..., :3])


@pytest.mark.parametrize("name", FilterKind.names())
def test_apply_filter_returns_png_of_same_size(name, gradient_rgba):
    data = apply_filter(encode_array(gradient_rgba), name)

    assert data.startswith(PNG_SIGNATURE)
    assert decode_array(data).shape == gradient_rgba.shape


def test_apply_filter_empty_bytes_is_decode_error():
    with pytest.raises(DecodeError):
        apply_filter(b"", "sepia")


def test_apply_filter_garbage_is_decode_error():
    with pytest.raises(DecodeError):
        apply_filter(b"just some text, not pixels", "blur")


def test_apply_filter_unknown_name(png_2x2):
    with pytest.raises(UnknownFilterError):
        apply_filter(png_2x2, "oilpaint")


def test_errors_share_a_base_class(png_2x2):
    with pytest.raises(FilterEngineError):
        apply_filter(png_2x2, "oilpaint")
    with pytest.raises(FilterEngineError):
        apply_filter(b"", "invert")


def test_apply_filter_invert_single_pixel(png_1x1):
    data = apply_filter(png_1x1, "invert")
    pixels = decode_array(data)

    assert pixels.shape == (1, 1, 4)
    assert tuple(pixels[0, 0]) == (245, 155, 55, 255)


def test_apply_filter_invert_twice_round_trips(random_rgba):
    once = apply_filter(encode_array(random_rgba), "invert")
    twice = apply_filter(once, "invert")
    np.testing.assert_array_equal(decode_array(twice), random_rgba)


def test_apply_filter_is_deterministic(gradient_rgba):
    data = encode_array(gradient_rgba)
    assert apply_filter(data, "emboss") == apply_filter(data, "emboss")


def test_apply_filter_accepts_jpeg_input():
    rgb = np.full((10, 14, 3), 60, dtype=np.uint8)
    data = apply_filter(encode_array(rgb, fmt="JPEG"), "grayscale")
    pixels = decode_array(data)
    assert pixels.shape == (10, 14, 4)
    assert np.all(pixels[..., 3] == 255)


def test_apply_filter_blur_uniform_image():
    pixels = np.zeros((9, 9, 4), dtype=np.uint8)
    pixels[...] = (12, 34, 56, 255)
    out = decode_array(apply_filter(encode_array(pixels), "blur"))
    np.testing.assert_array_equal(out, pixels)
