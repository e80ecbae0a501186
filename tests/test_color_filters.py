"""Tests for the per-pixel filters: grayscale, invert, sepia, hue rotate, posterize."""

import numpy as np
import pytest

from conftest import make_buffer
from nft_filters.models.filter_settings import FilterSettings
from nft_filters.services.color_filter_service import ColorFilterService


@pytest.fixture
def service(settings) -> ColorFilterService:
    return ColorFilterService(settings)


def test_invert_twice_is_identity(service, random_rgba):
    buffer = make_buffer(random_rgba.copy())
    twice = service.invert(service.invert(buffer))
    np.testing.assert_array_equal(twice.pixels, random_rgba)


def test_invert_complements_rgb_only(service, gradient_rgba):
    inverted = service.invert(make_buffer(gradient_rgba))
    np.testing.assert_array_equal(inverted.rgb, 255 - gradient_rgba[..., :3])
    np.testing.assert_array_equal(inverted.alpha, gradient_rgba[..., 3])


def test_filters_do_not_touch_input(service, gradient_rgba):
    original = gradient_rgba.copy()
    buffer = make_buffer(gradient_rgba)
    for kernel in (service.grayscale, service.invert, service.sepia,
                   service.hue_rotate, service.posterize):
        result = kernel(buffer)
        assert result.pixels is not buffer.pixels
        assert (result.width, result.height) == (buffer.width, buffer.height)
    np.testing.assert_array_equal(gradient_rgba, original)


def test_grayscale_sets_equal_channels(service, random_rgba):
    gray = service.grayscale(make_buffer(random_rgba))
    assert np.all(gray.pixels[..., 0] == gray.pixels[..., 1])
    assert np.all(gray.pixels[..., 1] == gray.pixels[..., 2])
    np.testing.assert_array_equal(gray.alpha, random_rgba[..., 3])


def test_grayscale_is_a_fixpoint(service, random_rgba):
    once = service.grayscale(make_buffer(random_rgba))
    twice = service.grayscale(once)
    np.testing.assert_array_equal(once.pixels, twice.pixels)


def test_sepia_known_pixel(service):
    pixels = np.array([[[100, 50, 20, 255]]], dtype=np.uint8)
    toned = service.sepia(make_buffer(pixels)).pixels[0, 0]
    # 0.393*100 + 0.769*50 + 0.189*20 = 81.53 ...
    assert tuple(toned) == (81, 72, 56, 255)


def test_sepia_clamps_white(service):
    white = np.full((2, 2, 4), 255, dtype=np.uint8)
    toned = service.sepia(make_buffer(white)).pixels
    assert np.all(toned[..., :3] == [255, 255, 238])


def test_sepia_stays_in_range_on_checkerboard(service, checkerboard_rgba):
    toned = service.sepia(make_buffer(checkerboard_rgba)).pixels.astype(int)
    assert toned.min() >= 0 and toned.max() <= 255


def test_hue_rotate_default_quarter_turn(service):
    pixels = np.array([[[255, 0, 0, 90]]], dtype=np.uint8)
    rotated = service.hue_rotate(make_buffer(pixels)).pixels[0, 0]
    assert tuple(rotated) == (128, 255, 0, 90)


def test_hue_rotate_uses_configured_angle():
    service = ColorFilterService(FilterSettings(hue_rotate_degrees=240))
    pixels = np.array([[[255, 0, 0, 255]]], dtype=np.uint8)
    rotated = service.hue_rotate(make_buffer(pixels)).pixels[0, 0]
    assert tuple(rotated) == (0, 0, 255, 255)


def test_posterize_values_belong_to_levels(service, settings, random_rgba):
    levels = settings.posterize_palette()
    assert levels == {0, 85, 170, 255}

    posterized = service.posterize(make_buffer(random_rgba))
    assert set(np.unique(posterized.rgb)).issubset(levels)
    np.testing.assert_array_equal(posterized.alpha, random_rgba[..., 3])


def test_posterize_floors_into_buckets(service):
    row = np.array([[[84, 85, 169, 255], [170, 254, 255, 255]]], dtype=np.uint8)
    out = service.posterize(make_buffer(row)).pixels
    assert out[0, 0, :3].tolist() == [0, 85, 85]
    assert out[0, 1, :3].tolist() == [170, 170, 255]


def test_posterize_other_level_count(random_rgba):
    settings = FilterSettings(posterize_levels=6)
    service = ColorFilterService(settings)
    out = service.posterize(make_buffer(random_rgba))
    assert set(np.unique(out.rgb)).issubset({0, 51, 102, 153, 204, 255})
