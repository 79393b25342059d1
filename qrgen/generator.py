"""QR bitmap generation: encode a URL with the qrcode library and rasterise it to pixels."""

from dataclasses import dataclass
from typing import Iterator

import numpy as np
import qrcode
import qrcode.constants
from qrcode.exceptions import DataOverflowError
from PIL import Image

from qrgen.config import QRConfig
from qrgen.errors import QRGenerationError
from qrgen.logging import audit, get_logger, trace

log = get_logger("generator")

QUIET_ZONE = 4  # modules of white border on every side


@dataclass(frozen=True)
class QRBitmap:
    """Rasterised QR symbol. ``pixels[y, x]`` is True for black."""

    pixels: np.ndarray
    version: int
    modules: int  # symbol edge in modules, quiet zone included
    pixels_per_module: int

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def black_pixels(self) -> Iterator[tuple[int, int]]:
        """Yield (x, y) for every black pixel, row by row."""
        ys, xs = np.nonzero(self.pixels)
        for y, x in zip(ys.tolist(), xs.tolist()):
            yield x, y

    def to_image(self, mode: str = "RGB") -> Image.Image:
        """Black-on-white Pillow image in the requested mode."""
        gray = np.where(self.pixels, 0, 255).astype(np.uint8)
        img = Image.fromarray(gray)
        return img if mode == "L" else img.convert(mode)


def encode_matrix(url: str) -> tuple[list[list[bool]], int]:
    """Encode ``url`` at ECC level H; return the module matrix (with quiet zone) and version."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=1,
        border=QUIET_ZONE,
    )
    qr.add_data(url)
    try:
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as e:
        raise QRGenerationError(f"cannot encode {len(url)} characters as a QR code: {e}") from e
    return qr.get_matrix(), qr.version


def rasterize(matrix: list[list[bool]], size: int) -> tuple[np.ndarray, int]:
    """Scale a module matrix to pixels.

    A positive ``size`` is the image edge: modules get ``size // n`` pixels
    each and the symbol is centred, the remainder left white. The image
    never shrinks below one pixel per module. A negative ``size`` is the
    pixel count per module.
    """
    modules = np.asarray(matrix, dtype=bool)
    n = modules.shape[0]
    if size < 0:
        size = -size * n
    size = max(size, n)
    ppm = size // n
    offset = (size - n * ppm) // 2

    block = np.repeat(np.repeat(modules, ppm, axis=0), ppm, axis=1)
    canvas = np.zeros((size, size), dtype=bool)
    canvas[offset:offset + n * ppm, offset:offset + n * ppm] = block
    canvas.flags.writeable = False
    return canvas, ppm


@trace
def generate_bitmap(config: QRConfig) -> QRBitmap:
    """Build the QR bitmap for ``config.url`` at ``config.size`` pixels."""
    matrix, version = encode_matrix(config.url)
    pixels, ppm = rasterize(matrix, config.size)
    bitmap = QRBitmap(pixels=pixels, version=version, modules=len(matrix), pixels_per_module=ppm)
    audit("qr.bitmap_generated", logger=log,
          url=config.url[:80], version=version,
          modules=f"{bitmap.modules}x{bitmap.modules}",
          image_px=f"{bitmap.width}x{bitmap.height}", ppm=ppm)
    return bitmap
