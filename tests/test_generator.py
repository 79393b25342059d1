"""Tests for QR encoding and bitmap rasterisation."""

import numpy as np
import pytest

from qrgen.config import QRConfig
from qrgen.errors import QRGenerationError
from qrgen.generator import QUIET_ZONE, QRBitmap, encode_matrix, generate_bitmap, rasterize

CHECKER = [
    [True, False, False],
    [False, True, False],
    [False, False, True],
]


def test_rasterize_scales_and_centres():
    pixels, ppm = rasterize(CHECKER, 11)
    assert ppm == 3
    assert pixels.shape == (11, 11)
    # 11 - 9 = 2 spare pixels -> offset 1
    assert not pixels[0].any()
    assert not pixels[:, 0].any()
    assert pixels[1:4, 1:4].all()
    assert not pixels[1:4, 4:7].any()
    assert pixels[7:10, 7:10].all()
    assert not pixels[10].any()


def test_rasterize_negative_size_is_pixels_per_module():
    pixels, ppm = rasterize(CHECKER, -4)
    assert ppm == 4
    assert pixels.shape == (12, 12)
    assert pixels[0:4, 0:4].all()
    assert not pixels[0:4, 4:8].any()


def test_rasterize_never_smaller_than_modules():
    pixels, ppm = rasterize(CHECKER, 2)
    assert ppm == 1
    assert pixels.shape == (3, 3)
    assert np.array_equal(pixels, np.array(CHECKER))


def test_rasterize_is_read_only():
    pixels, _ = rasterize(CHECKER, 6)
    with pytest.raises(ValueError):
        pixels[0, 0] = False


def test_encode_matrix_includes_quiet_zone():
    matrix, version = encode_matrix("https://example.com")
    n = len(matrix)
    assert n == version * 4 + 17 + 2 * QUIET_ZONE
    assert not any(matrix[0])
    assert not any(row[0] for row in matrix)
    # top-left finder corner sits just inside the quiet zone
    assert matrix[QUIET_ZONE][QUIET_ZONE]


def test_encode_matrix_overflow():
    with pytest.raises(QRGenerationError):
        encode_matrix("x" * 5000)


def test_generate_bitmap_default_size():
    bitmap = generate_bitmap(QRConfig(url="https://tryhackme.com", size=256))
    assert (bitmap.width, bitmap.height) == (256, 256)
    assert bitmap.modules == bitmap.version * 4 + 17 + 2 * QUIET_ZONE
    assert bitmap.pixels_per_module == 256 // bitmap.modules

    offset = (256 - bitmap.modules * bitmap.pixels_per_module) // 2
    finder = offset + QUIET_ZONE * bitmap.pixels_per_module
    assert not bitmap.pixels[0, 0]
    assert bitmap.pixels[finder, finder]
    assert not bitmap.pixels[finder - 1, finder - 1]


def test_generate_bitmap_tiny_size_grows():
    bitmap = generate_bitmap(QRConfig(url="hi", size=5))
    assert bitmap.width == bitmap.modules
    assert bitmap.pixels_per_module == 1


def test_black_pixels_row_major():
    pixels, ppm = rasterize(CHECKER, 3)
    bitmap = QRBitmap(pixels=pixels, version=1, modules=3, pixels_per_module=ppm)
    assert list(bitmap.black_pixels()) == [(0, 0), (1, 1), (2, 2)]


def test_to_image():
    pixels, ppm = rasterize(CHECKER, 6)
    bitmap = QRBitmap(pixels=pixels, version=1, modules=3, pixels_per_module=ppm)
    img = bitmap.to_image()
    assert img.mode == "RGB"
    assert img.size == (6, 6)
    assert img.getpixel((0, 0)) == (0, 0, 0)
    assert img.getpixel((2, 0)) == (255, 255, 255)
    assert bitmap.to_image("L").getpixel((5, 5)) == 0
