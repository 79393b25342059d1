"""qrgen CLI: turn a URL into a QR code file (PNG, JPEG, SVG or CSS)."""

import argparse
import sys

from qrgen.config import (
    DEFAULT_OUTPUT,
    DEFAULT_SIZE,
    DEFAULT_URL,
    QRConfig,
    parse_extra_params,
)
from qrgen.errors import ConfigError, QRGenError
from qrgen.logging import audit, get_logger, setup_logging

log = get_logger("cli")


def _key_value(s: str) -> str:
    try:
        parse_extra_params([s])
    except ConfigError as e:
        raise argparse.ArgumentTypeError(str(e)) from None
    return s


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="qrgen", description="Generate a QR code from a URL")
    parser.add_argument("-url", "--url", default=DEFAULT_URL, help="URL to encode")
    parser.add_argument("-size", "--size", type=int, default=DEFAULT_SIZE,
                        help="Image size in pixels (negative: pixels per module)")
    parser.add_argument("-o", "--output", default=DEFAULT_OUTPUT,
                        help="Output file; extension selects format: jpg, png, svg, css")
    parser.add_argument("-p", "--param", action="append", type=_key_value, default=[], metavar="KEY=VALUE",
                        help="Renderer parameter, repeatable (quality, pixel-size, include-html)")

    # Logging
    parser.add_argument("-V", "--verbose", action="store_true", help="Enable DEBUG-level logging")
    parser.add_argument("--log-file", default=None, help="Also write JSON logs to this file")
    parser.add_argument("--json-logs", action="store_true", help="JSON logs on the console")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(level="DEBUG" if args.verbose else None, log_file=args.log_file, json_format=args.json_logs)
    audit("cli.start", logger=log, url=args.url, size=args.size, output=args.output)

    from qrgen.pipeline import generate_qr

    config = QRConfig.for_output(
        url=args.url,
        output_path=args.output,
        size=args.size,
        extra_params=parse_extra_params(args.param),
    )

    status = 0
    try:
        config = generate_qr(config)
    except QRGenError as e:
        log.error("generation failed: %s", e)
        status = 1

    print("QR Generator")
    print("> Configuration")
    print(config.summary())

    audit("cli.done", logger=log, status=status)
    return status


if __name__ == "__main__":
    sys.exit(main())
