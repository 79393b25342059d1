"""Output backends: write a QRBitmap as PNG, JPEG, SVG or CSS box-shadow art."""

from pathlib import Path

from qrgen.config import OutputFormat, QRConfig
from qrgen.errors import OutputWriteError, UnsupportedFormatError
from qrgen.generator import QRBitmap
from qrgen.logging import audit, get_logger, trace

log = get_logger("renderers")

DEFAULT_JPEG_QUALITY = 90
DEFAULT_PIXEL_SIZE = 1

SVG_HEADER = (
    '<?xml version="1.0" encoding="UTF-8" standalone="no"?>\n'
    '<svg width="{w}" height="{h}" viewBox="0 0 {w} {h}" xmlns="http://www.w3.org/2000/svg">\n'
    '<rect width="100%" height="100%" fill="white"/>\n'
)
SVG_PIXEL = '<rect x="{x}" y="{y}" width="1" height="1" fill="black"/>\n'

CSS_HEAD = """.qr-code {
    width: 1px;
    height: 1px;
    position: relative;
    background: white;
    box-shadow: """

CSS_LAYOUT = """
.qr-container {{
    display: flex;
    justify-content: center;
    align-items: center;
    min-height: 100vh;
    background: white;
    padding: 20px;
}}

.qr-code {{
    transform: scale({scale});
    margin: {margin}px;
}}
"""

CSS_EXAMPLE_HTML = """
<!-- Example usage -->
<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>CSS QR Code</title>
    <style>
        /* Paste the CSS above here */
    </style>
</head>
<body>
    <div class="qr-container">
        <div class="qr-code"></div>
    </div>
</body>
</html>
"""


class Renderer:
    """Base renderer. Subclasses set ``format`` and implement ``encode``."""

    format: OutputFormat

    def encode(self, bitmap: QRBitmap, config: QRConfig, path: Path):
        raise NotImplementedError

    def render(self, bitmap: QRBitmap, config: QRConfig) -> Path:
        path = Path(config.output_path)
        try:
            self.encode(bitmap, config, path)
        except OSError as e:
            raise OutputWriteError(f"cannot write {self.format.value.upper()} file {path}: {e}") from e
        audit("render.written", logger=log, format=self.format.value, path=str(path),
              image_px=f"{bitmap.width}x{bitmap.height}", bytes=path.stat().st_size)
        return path


class PNGRenderer(Renderer):
    format = OutputFormat.PNG

    def encode(self, bitmap, config, path):
        # PNG is lossless; a "quality" param is accepted but has no effect
        if "quality" in (config.extra_params or {}):
            log.debug("png ignores quality=%s", config.extra_params["quality"])
        bitmap.to_image("L").save(path, format="PNG", optimize=True, compress_level=9)


class JPEGRenderer(Renderer):
    format = OutputFormat.JPEG

    def encode(self, bitmap, config, path):
        quality = min(max(config.int_param("quality", DEFAULT_JPEG_QUALITY), 1), 100)
        bitmap.to_image("RGB").save(path, format="JPEG", quality=quality)


class SVGRenderer(Renderer):
    """One 1x1 <rect> per black pixel on a white background."""

    format = OutputFormat.SVG

    def encode(self, bitmap, config, path):
        parts = [SVG_HEADER.format(w=bitmap.width, h=bitmap.height)]
        parts.extend(SVG_PIXEL.format(x=x, y=y) for x, y in bitmap.black_pixels())
        parts.append("</svg>\n")
        path.write_text("".join(parts), encoding="utf-8")


class CSSRenderer(Renderer):
    """Draws the code as box-shadows of a single 1px element.

    Params: ``pixel-size`` (shadow spacing and spread, default 1) and
    ``include-html=true`` to append a usage page.
    """

    format = OutputFormat.CSS

    def encode(self, bitmap, config, path):
        path.write_text(render_css(bitmap, config), encoding="utf-8")


def render_css(bitmap: QRBitmap, config: QRConfig) -> str:
    p = config.int_param("pixel-size", DEFAULT_PIXEL_SIZE)
    shadows = [f"{x * p}px {y * p}px 0 {p // 2}px black" for x, y in bitmap.black_pixels()]

    out = [CSS_HEAD, ",\n    ".join(shadows), ";\n}\n", CSS_LAYOUT.format(scale=p, margin=bitmap.width * p // 2)]
    if config.flag_param("include-html"):
        out.append(CSS_EXAMPLE_HTML)
    return "".join(out)


RENDERERS: dict[OutputFormat, Renderer] = {
    r.format: r for r in (PNGRenderer(), JPEGRenderer(), SVGRenderer(), CSSRenderer())
}


def get_renderer(fmt: OutputFormat) -> Renderer:
    try:
        return RENDERERS[fmt]
    except (KeyError, TypeError):
        raise UnsupportedFormatError(f"unsupported format: {fmt!r}") from None


@trace
def render(bitmap: QRBitmap, config: QRConfig) -> Path:
    """Write ``bitmap`` to ``config.output_path`` in ``config.format``."""
    return get_renderer(config.format).render(bitmap, config)
