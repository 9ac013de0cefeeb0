"""End-to-end URL splitting pipeline."""

from __future__ import annotations

from typing import Optional, TextIO

from .exporter import Components, RowWriter
from .ingest import read_input
from .logging_config import get_logger
from .models import SplitOptions, SplitStats
from .url_parser import UrlParseError, parse_url


logger = get_logger(__name__)


def split_urls(source: TextIO, sink: TextIO, options: Optional[SplitOptions] = None) -> SplitStats:
    """Read URLs from ``source`` and write one CSV row per input row to ``sink``.

    Parse failures are recorded in the row's ``error`` column and counted;
    they never stop the run. Input and output errors propagate.
    """

    opts = options or SplitOptions()
    stats = SplitStats()
    columns, records = read_input(source, opts)
    writer = RowWriter(sink, delimiter=opts.delimiter)

    if opts.headers:
        writer.write_header(columns)

    for record in records:
        stats.rows_read += 1
        components: Components
        try:
            components = parse_url(record.url, public_suffix=opts.public_suffix)
        except UrlParseError as exc:
            stats.parse_errors += 1
            logger.debug(
                "URL parse failure",
                extra={"line_number": record.line_number, "url": record.url, "error": exc.reason},
            )
            components = exc
        writer.write(record.fields, components)

    stats.rows_written = writer.rows_written
    logger.info(
        "URL splitting completed",
        extra={
            "rows_read": stats.rows_read,
            "rows_written": stats.rows_written,
            "parse_errors": stats.parse_errors,
        },
    )
    return stats
