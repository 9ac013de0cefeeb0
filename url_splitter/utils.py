"""Utility helpers for url-splitter."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

STDIO_MARKER = "-"


def parse_delimiter(value: str) -> str:
    """Validate a delimiter argument.

    Accepts a single ASCII character, or the literal two-character escape
    ``\\t`` for a tab.
    """

    if value == r"\t":
        return "\t"
    if len(value) != 1:
        raise ValueError(f"Could not convert '{value}' to a single ASCII character.")
    if not value.isascii():
        raise ValueError(f"Could not convert '{value}' to ASCII delimiter.")
    if value in {'"', "\r", "\n"}:
        raise ValueError(f"Delimiter {value!r} conflicts with CSV quoting or line breaks.")
    return value


def normalize_io_path(value: Optional[Union[str, Path]]) -> Optional[Path]:
    """Return ``None`` for the standard streams (missing, empty or ``-``)."""

    if value is None:
        return None
    text = str(value)
    if text in {"", STDIO_MARKER}:
        return None
    return Path(text)
