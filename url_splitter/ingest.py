"""Input and output stream helpers for url-splitter."""

from __future__ import annotations

import csv
import io
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, TextIO, Tuple

from . import constants
from .logging_config import get_logger
from .models import ColumnSelector, InputRecord, SplitOptions


logger = get_logger(__name__)


class InputError(Exception):
    """Raised when input cannot be opened, decoded or mapped to a URL column."""


@contextmanager
def open_input(path: Optional[Path]) -> Iterator[TextIO]:
    """Yield a text handle for ``path``, or stdin when ``path`` is ``None``."""

    if path is None:
        logger.debug("Reading from stdin")
        if isinstance(sys.stdin, io.TextIOWrapper):
            # Match file input: UTF-8, and line endings inside quoted fields left intact.
            sys.stdin.reconfigure(encoding="utf-8", newline="")
        yield sys.stdin
        return
    try:
        handle = path.open("r", encoding="utf-8", newline="")
    except OSError as exc:
        raise InputError(f"failed to open {path}: {exc.strerror or exc}") from exc
    logger.debug("Reading from file", extra={"path": str(path)})
    with handle:
        yield handle


@contextmanager
def open_output(path: Optional[Path]) -> Iterator[TextIO]:
    """Yield a text handle for ``path``, or stdout when ``path`` is ``None``.

    ``OSError`` from creating the file propagates to the caller.
    """

    if path is None:
        yield sys.stdout
        return
    logger.debug("Writing to file", extra={"path": str(path)})
    with path.open("w", encoding="utf-8", newline="") as handle:
        yield handle


def resolve_column(selector: ColumnSelector, header: Optional[Sequence[str]]) -> int:
    """Return the 0-based index of the URL column.

    ``selector`` is an index, a string of digits, or a column name. Names
    match exactly first, then ignoring case and surrounding whitespace.
    """

    if isinstance(selector, int):
        if selector < 0:
            raise InputError(f"column index must not be negative: {selector}")
        return selector
    text = selector.strip()
    if text.isascii() and text.isdigit():
        return int(text)
    if header is None:
        raise InputError(f"column name '{text}' requires an input header row")
    if text in header:
        return list(header).index(text)
    folded = [name.strip().lower() for name in header]
    if text.lower() in folded:
        return folded.index(text.lower())
    raise InputError(f"column '{text}' not found in header: {', '.join(header)}")


def read_input(handle: TextIO, options: SplitOptions) -> Tuple[Tuple[str, ...], Iterator[InputRecord]]:
    """Return the input column names and an iterator over input records.

    In line mode every line is one single-column record named ``url``. In
    CSV mode the first row is the header when ``options.headers`` is set;
    without a header the column names are empty.
    """

    if not options.csv_input:
        return (constants.URL_COLUMN_NAME,), _read_lines(handle)

    reader = csv.reader(handle, delimiter=options.delimiter)
    header: Optional[List[str]] = None
    if options.headers:
        header = _next_row(reader)
        if header is None:
            logger.warning("Input is empty; no header row found")
            return (), iter(())
    column = resolve_column(options.column, header)
    if header is not None and column >= len(header):
        raise InputError(f"column index {column} is out of range for a header with {len(header)} columns")
    logger.debug(
        "Resolved URL column",
        extra={"column_index": column, "column_name": header[column] if header else None},
    )
    return tuple(header or ()), _read_csv_rows(reader, column, width=len(header) if header else None)


def _read_lines(handle: TextIO) -> Iterator[InputRecord]:
    try:
        for number, line in enumerate(handle, start=1):
            text = line.rstrip("\r\n")
            yield InputRecord(line_number=number, fields=(text,), url=text)
    except UnicodeDecodeError as exc:
        raise InputError(f"input is not valid UTF-8: {exc}") from exc


def _read_csv_rows(reader, column: int, *, width: Optional[int]) -> Iterator[InputRecord]:
    while True:
        row = _next_row(reader)
        if row is None:
            return
        if width is None:
            # Without a header, the first row fixes the width of the input columns.
            width = max(len(row), column + 1)
        if len(row) < width:
            row = row + [""] * (width - len(row))
        elif len(row) > width:
            logger.warning(
                "Row has more fields than the header",
                extra={"line_number": reader.line_num, "fields": len(row), "expected": width},
            )
        url = row[column] if column < len(row) else ""
        yield InputRecord(line_number=reader.line_num, fields=tuple(row), url=url)


def _next_row(reader) -> Optional[List[str]]:
    try:
        return next(reader)
    except StopIteration:
        return None
    except csv.Error as exc:
        raise InputError(f"malformed CSV near line {reader.line_num}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise InputError(f"input is not valid UTF-8: {exc}") from exc
