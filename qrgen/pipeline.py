"""End-to-end generation: validate, encode, render, write."""

from pathlib import Path

from qrgen.config import QRConfig
from qrgen.errors import OutputWriteError
from qrgen.generator import generate_bitmap
from qrgen.logging import audit, get_logger, trace
from qrgen.renderers import get_renderer

log = get_logger("pipeline")


@trace
def generate_qr(config: QRConfig) -> QRConfig:
    """Generate the QR code described by ``config`` and write it to disk.

    Returns the normalised config that was actually used (default size
    applied, extra params copied).

    Raises:
        ConfigError: empty URL or unknown format.
        QRGenerationError: the URL does not fit in a QR code.
        OutputWriteError: the output file could not be written.
    """
    config = config.validate()
    renderer = get_renderer(config.format)
    bitmap = generate_bitmap(config)

    parent = Path(config.output_path).parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputWriteError(f"cannot create output directory {parent}: {e}") from e

    path = renderer.render(bitmap, config)
    audit("qr.generated", logger=log, url=config.url[:80],
          format=config.format.value, path=str(path))
    return config
