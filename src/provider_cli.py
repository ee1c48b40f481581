"""Console output provider entry point.

Reads a configuration line and then data envelopes from stdin and writes
formatted output to stdout. Status lines go to stderr.
"""

import argparse
import logging
import os
import sys

from models.config import Variant
from models.handshake import HandshakeResponse
from services.formatter import EnvelopeFormatter
from services.input_driver import InputDriver, RunStatus
from services.log_service import configure_logging
from services.output_sink import ConsoleSink

logger = logging.getLogger(__name__)

LOG_LEVELS = ["debug", "info", "warning", "error"]


def handshake(stream=None) -> None:
    """Write the one-line handshake reply."""
    stream = stream if stream is not None else sys.stdout
    stream.write(HandshakeResponse().model_dump_json() + "\n")
    stream.flush()


def run(variant: Variant, stdin=None, stdout=None) -> int:
    """Process stdin until end of input. Returns the exit code."""
    stdin = stdin if stdin is not None else sys.stdin
    driver = InputDriver(EnvelopeFormatter(variant=variant), ConsoleSink(stdout))

    try:
        result = driver.run(stdin)
    except Exception as e:
        logger.error(f"Error: {e}")
        raise

    if result.status == RunStatus.INVALID_CONFIG:
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Console Output Provider")
    parser.add_argument(
        "command",
        nargs="?",
        choices=["run", "handshake"],
        default="run",
        help="run: process stdin (default); handshake: print plugin handshake",
    )
    parser.add_argument(
        "--variant",
        choices=[v.value for v in Variant],
        default=os.environ.get("PROVIDER_VARIANT", Variant.FULL.value).lower(),
        help="Output format set (default: full, env: PROVIDER_VARIANT)",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=os.environ.get("LOG_LEVEL", "info").lower(),
        help="Log level (default: info, env: LOG_LEVEL)",
    )
    parser.add_argument(
        "--log-dir",
        default=os.environ.get("LOG_DIR"),
        help="Also write a rotating log file to this directory (env: LOG_DIR)",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse arguments, rejecting bad values taken from the environment.

    argparse only checks choices for values given on the command line, so
    defaults read from PROVIDER_VARIANT and LOG_LEVEL are checked here.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.variant not in [v.value for v in Variant]:
        parser.error(
            f"invalid variant {args.variant!r} "
            f"(choose from {', '.join(v.value for v in Variant)})"
        )
    if args.log_level not in LOG_LEVELS:
        parser.error(
            f"invalid log level {args.log_level!r} (choose from {', '.join(LOG_LEVELS)})"
        )
    return args


def main(argv: list[str] | None = None) -> int:
    """Run the console output provider."""
    args = parse_args(argv)

    if args.command == "handshake":
        handshake()
        return 0

    configure_logging(
        level=getattr(logging, args.log_level.upper()),
        log_dir=args.log_dir,
    )

    return run(Variant(args.variant))


if __name__ == "__main__":
    sys.exit(main())
