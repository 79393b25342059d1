"""Run configuration: output formats, QRConfig and per-format tuning parameters."""

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path

from qrgen.errors import ConfigError, InvalidURLError, UnsupportedFormatError
from qrgen.logging import get_logger

log = get_logger("config")

DEFAULT_URL = "https://tryhackme.com"
DEFAULT_SIZE = 256
DEFAULT_OUTPUT = "new_qr.jpg"


class OutputFormat(Enum):
    PNG = "png"
    JPEG = "jpeg"
    SVG = "svg"
    CSS = "css"


EXTENSION_FORMATS = {
    "jpg": OutputFormat.JPEG,
    "jpeg": OutputFormat.JPEG,
    "png": OutputFormat.PNG,
    "svg": OutputFormat.SVG,
    "css": OutputFormat.CSS,
}


def format_from_path(path: str | Path) -> OutputFormat:
    """Pick the output format from a file extension, falling back to JPEG."""
    ext = Path(path).suffix.lstrip(".").lower()
    fmt = EXTENSION_FORMATS.get(ext)
    if fmt is None:
        log.debug("unknown extension %r for %s, using JPEG", ext, path)
        return OutputFormat.JPEG
    return fmt


def parse_extra_params(items: list[str] | None) -> dict[str, str]:
    """Parse ``key=value`` strings into a dict. Later keys win."""
    params: dict[str, str] = {}
    for item in items or []:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigError(f"expected key=value, got {item!r}")
        params[key] = value.strip()
    return params


@dataclass
class QRConfig:
    """Everything needed to produce one QR output file.

    ``size`` is the image edge in pixels; a negative value means
    ``abs(size)`` pixels per module instead. ``extra_params`` carries
    renderer tuning such as ``quality``, ``pixel-size`` and ``include-html``.
    """

    url: str
    size: int = DEFAULT_SIZE
    output_path: str = DEFAULT_OUTPUT
    format: OutputFormat = OutputFormat.JPEG
    extra_params: dict[str, str] | None = field(default_factory=dict)

    @classmethod
    def for_output(cls, url: str, output_path: str, size: int = DEFAULT_SIZE,
                   extra_params: dict[str, str] | None = None) -> "QRConfig":
        """Build a config whose format is derived from ``output_path``."""
        return cls(
            url=url,
            size=size,
            output_path=output_path,
            format=format_from_path(output_path),
            extra_params=dict(extra_params or {}),
        )

    def validate(self) -> "QRConfig":
        """Return a normalised copy, or raise ConfigError."""
        if not self.url or not self.url.strip():
            raise InvalidURLError("URL is required")
        if not isinstance(self.format, OutputFormat):
            raise UnsupportedFormatError(f"unsupported format: {self.format!r}")
        return replace(
            self,
            size=self.size or DEFAULT_SIZE,
            extra_params=dict(self.extra_params or {}),
        )

    def int_param(self, name: str, default: int) -> int:
        """Read an integer tuning parameter; unparsable values keep ``default``."""
        raw = (self.extra_params or {}).get(name)
        if raw is None:
            return default
        try:
            return int(raw.strip())
        except ValueError:
            log.warning("ignoring %s=%r: not an integer, using %d", name, raw, default)
            return default

    def flag_param(self, name: str) -> bool:
        return (self.extra_params or {}).get(name, "").strip().lower() == "true"

    def summary(self) -> str:
        lines = [
            f"  URL:    {self.url}",
            f"  Size:   {self.size}",
            f"  Output: {self.output_path}",
            f"  Format: {self.format.value if isinstance(self.format, OutputFormat) else self.format}",
        ]
        if self.extra_params:
            params = " ".join(f"{k}={v}" for k, v in sorted(self.extra_params.items()))
            lines.append(f"  Params: {params}")
        return "\n".join(lines)
