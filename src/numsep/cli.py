"""Command-line front-end: format text arguments, files or standard streams."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence
from typing import IO

from . import DEFAULT_BUFFER_SIZE
from . import Encoder
from . import FormatConfig
from . import ScanError
from . import SinkError
from . import StreamFormatter
from ._log import configure_logging
from ._log import get_logger

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="numsep",
        description="Add thousands separators to numbers in text.",
    )
    parser.add_argument(
        "text",
        nargs="*",
        help="Text to format; each argument is printed on its own line.",
    )
    parser.add_argument(
        "-i",
        "--input",
        help="Read from this file instead of standard input.",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Write to this file instead of standard output.",
    )
    parser.add_argument(
        "--delimiters",
        action="store_true",
        help="Treat brackets and quotes as number boundaries.",
    )
    parser.add_argument(
        "--buffer-size",
        type=int,
        default=DEFAULT_BUFFER_SIZE,
        help="Read size in bytes.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g., DEBUG, INFO, WARNING).",
    )
    return parser


def _format_args(
    texts: Sequence[str], config: FormatConfig, out: IO[bytes]
) -> None:
    formatter = StreamFormatter(config)
    for text in texts:
        # argv undecodable bytes come back as they were given
        formatter.write(os.fsencode(text))
        formatter.flush()
        formatter.write(b"\n")
        formatter.drain_into(out)
        formatter.reset()


def _emit(
    args: argparse.Namespace, config: FormatConfig, src: IO[bytes] | None
) -> None:
    out_fp = open(args.output, "wb") if args.output else None
    out = out_fp if out_fp is not None else sys.stdout.buffer
    try:
        if args.text:
            _format_args(args.text, config, out)
        else:
            Encoder(out, config).encode(
                src if src is not None else sys.stdin.buffer
            )
        out.flush()
    finally:
        if out_fp is not None:
            out_fp.close()


def _run(args: argparse.Namespace, config: FormatConfig) -> None:
    # --output is only truncated once the input is open
    if args.input:
        with open(args.input, "rb") as src:
            _emit(args, config, src)
    else:
        _emit(args, config, None)


def main(argv: Sequence[str] | None = None) -> int:
    """Runs the CLI and returns the process exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.input and args.text:
        parser.error("--input cannot be combined with text arguments")

    configure_logging(level=args.log_level)

    try:
        config = FormatConfig(
            delimiters=args.delimiters, buffer_size=args.buffer_size
        )
    except (TypeError, ValueError) as e:
        parser.error(str(e))

    try:
        _run(args, config)
    except (OSError, ScanError, SinkError) as e:
        logger.error("formatting failed: %s", e)
        logger.debug("formatting failed", exc_info=True)
        print(f"numsep: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
