"""CSV output for parsed URLs."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Any, List, Sequence, TextIO, Tuple, Union

from .constants import COMPONENT_COLUMNS, DEFAULT_DELIMITER
from .logging_config import get_logger
from .models import ParsedUrl
from .url_parser import UrlParseError


logger = get_logger(__name__)

Components = Union[ParsedUrl, UrlParseError]


def header_row(input_columns: Sequence[str]) -> List[str]:
    """Input column names followed by the component column names."""

    return [*input_columns, *COMPONENT_COLUMNS]


def _as_field(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def component_fields(components: Components) -> Tuple[str, ...]:
    """Return the component values in ``COMPONENT_COLUMNS`` order.

    A parse error yields empty component fields and the error message in the
    ``error`` column.
    """

    if isinstance(components, UrlParseError):
        return ("",) * (len(COMPONENT_COLUMNS) - 1) + (components.reason,)
    return tuple(_as_field(getattr(components, column, None)) for column in COMPONENT_COLUMNS[:-1]) + ("",)


def build_row(fields: Sequence[str], components: Components) -> List[str]:
    return [*fields, *component_fields(components)]


class RowWriter:
    """Write rows as CSV with minimal quoting.

    Fields containing the delimiter, a double quote or a line break are
    quoted, and embedded quotes are doubled.
    """

    def __init__(self, handle: TextIO, *, delimiter: str = DEFAULT_DELIMITER) -> None:
        self._writer = csv.writer(
            handle,
            delimiter=delimiter,
            quotechar='"',
            doublequote=True,
            quoting=csv.QUOTE_MINIMAL,
            lineterminator="\n",
        )
        self.rows_written = 0

    def write_header(self, input_columns: Sequence[str]) -> None:
        logger.debug("Writing header row", extra={"input_columns": list(input_columns)})
        self._writer.writerow(header_row(input_columns))

    def write(self, fields: Sequence[str], components: Components) -> None:
        self._writer.writerow(build_row(fields, components))
        self.rows_written += 1


def emit(fields: Sequence[str], components: Components, *, delimiter: str = DEFAULT_DELIMITER) -> str:
    """Render a single output row as one CSV line (terminator included)."""

    buffer = StringIO()
    RowWriter(buffer, delimiter=delimiter).write(fields, components)
    return buffer.getvalue()
