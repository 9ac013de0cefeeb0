"""Command-line interface for url-splitter."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from time import perf_counter
from typing import List, Optional

from . import __version__
from .config import build_options, load_config, resolve_config_path
from .ingest import InputError, open_input, open_output
from .logging_config import LogContext, configure_logging, get_logger
from .models import SplitOptions, SplitStats
from .splitter import split_urls
from .utils import normalize_io_path, parse_delimiter

logger = get_logger(__name__)

DESCRIPTION = """\
Accepts a newline separated list of URLs and emits a CSV of component parts.

When no input is provided, or input is "-", URLs are read from stdin.
Output is sent to stdout unless -o/--output is given.
"""

EPILOG = """\
Output columns, after the input column(s):
  scheme        method for locating the resource, e.g. "https"
  host          where to find the authority, e.g. "my.example.com" or "[::1]"
  port          explicit port number, if any
  path          location within the authority, e.g. "/path/to/resource"
  query         parameters after "?", e.g. "foo=bar"
  fragment      anchor after "#", e.g. "some-heading"
  userinfo      credentials before "@" in the authority, e.g. "user"
  hostname      the host, when it is a registered name rather than an IP
  domain        name before the public suffix, e.g. "example"
  subdomain     labels before the domain, e.g. "my"
  suffix        public suffix, e.g. "com" or "co.uk"
  registration  domain and suffix combined, e.g. "example.com"
  error         why the URL could not be parsed; other components are then empty

Exit status is 0 even when some URLs fail to parse, and 1 when the input
cannot be read, the output cannot be written, or the options are invalid.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="url-splitter",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", nargs="?", help='Input file, or "-" for stdin (default)')
    parser.add_argument("-o", "--output", help="Write output to this file instead of stdout")
    parser.add_argument(
        "-n",
        "--no-headers",
        dest="headers",
        action="store_const",
        const=False,
        default=None,
        help="Do not emit a header row; in CSV mode the input has no header row either",
    )
    parser.add_argument(
        "-d",
        "--delimiter",
        help=r"Field delimiter for reading CSV input and writing output: one character, or \t (default: ,)",
    )
    parser.add_argument(
        "-q",
        "--quote",
        "--csv",
        dest="csv_input",
        action="store_const",
        const=True,
        default=None,
        help="Treat the input as CSV, with quoted fields, instead of one URL per line",
    )
    parser.add_argument(
        "-c",
        "--column",
        help="URL column in CSV input, as a 0-based index or a header name (default: 0)",
    )
    parser.add_argument(
        "--no-public-suffix",
        dest="public_suffix",
        action="store_const",
        const=False,
        default=None,
        help="Leave the domain, subdomain, suffix and registration columns empty",
    )
    parser.add_argument("--config", type=Path, help="YAML file with default options")
    parser.add_argument("--summary", action="store_true", help="Print a run summary to stderr")
    parser.add_argument(
        "--log-level",
        type=str,
        help="Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    parser.add_argument(
        "--log-format",
        choices=("json", "console"),
        help="Log output format",
    )
    parser.add_argument(
        "--correlation-id",
        type=str,
        help="Correlation identifier to include with log records",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level, log_format=args.log_format)

    with LogContext(args.correlation_id) as correlation_id:
        context_extra = {"correlation_id": correlation_id}
        logger.info("url-splitter starting", extra={"input": args.input or "-", **context_extra})

        try:
            options = _options_from_args(args)
        except (ValueError, OSError) as exc:
            logger.error("Invalid configuration", extra={"error": str(exc), **context_extra})
            print(f"ERROR: invalid configuration: {exc}", file=sys.stderr)
            return 1

        input_path = normalize_io_path(args.input)
        output_path = normalize_io_path(args.output)

        start = perf_counter()
        try:
            with open_input(input_path) as source, open_output(output_path) as sink:
                stats = split_urls(source, sink, options)
                sink.flush()
        except InputError as exc:
            logger.error("Input failure", extra={"input": str(input_path or "-"), "error": str(exc), **context_extra})
            print(f"ERROR: error parsing URLs: {exc}", file=sys.stderr)
            return 1
        except OSError as exc:
            logger.exception("I/O failure", extra={"output": str(output_path or "-"), **context_extra})
            print(f"ERROR: error writing output: {exc}", file=sys.stderr)
            return 1
        duration = perf_counter() - start

        if args.summary:
            _print_summary(
                input_path=input_path,
                output_path=output_path,
                options=options,
                stats=stats,
                duration=duration,
            )

        logger.debug("url-splitter exiting", extra={"exit_code": 0, "duration_seconds": duration, **context_extra})
    return 0


def _options_from_args(args: argparse.Namespace) -> SplitOptions:
    config_path = resolve_config_path(args.config)
    file_values = load_config(config_path) if config_path is not None else {}
    overrides = {
        "delimiter": parse_delimiter(args.delimiter) if args.delimiter is not None else None,
        "headers": args.headers,
        "csv_input": args.csv_input,
        "column": args.column,
        "public_suffix": args.public_suffix,
    }
    return build_options(file_values, overrides)


def _print_summary(
    *,
    input_path: Optional[Path],
    output_path: Optional[Path],
    options: SplitOptions,
    stats: SplitStats,
    duration: float,
) -> None:
    summary_items = [
        ("Input", str(input_path) if input_path else "<stdin>"),
        ("Output", str(output_path) if output_path else "<stdout>"),
        ("Input format", "csv" if options.csv_input else "lines"),
        ("Rows read", str(stats.rows_read)),
        ("Rows written", str(stats.rows_written)),
        ("Parse errors", str(stats.parse_errors)),
        ("Duration (s)", f"{duration:.2f}"),
    ]
    width = max(len(label) for label, _ in summary_items)
    print("\nurl-splitter summary", file=sys.stderr)
    print("=" * (width + 25), file=sys.stderr)
    for label, value in summary_items:
        print(f"{label:<{width}} : {value}", file=sys.stderr)


if __name__ == "__main__":
    raise SystemExit(main())
