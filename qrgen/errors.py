"""Exception hierarchy for qrgen."""


class QRGenError(Exception):
    """Base class for every error raised by qrgen."""


class ConfigError(QRGenError, ValueError):
    """The supplied configuration cannot be used."""


class InvalidURLError(ConfigError):
    pass


class UnsupportedFormatError(ConfigError):
    pass


class QRGenerationError(QRGenError):
    """The QR encoder rejected the payload (e.g. too long for version 40)."""


class OutputWriteError(QRGenError, OSError):
    """Writing the rendered file failed."""
