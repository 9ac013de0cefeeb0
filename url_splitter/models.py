"""Core data models for url-splitter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Union

from . import constants


@dataclass(frozen=True, slots=True)
class DomainParts:
    """Public-suffix breakdown of a registered host name."""

    domain: Optional[str]
    subdomain: Optional[str]
    suffix: Optional[str]
    registration: Optional[str]


@dataclass(frozen=True, slots=True)
class ParsedUrl:
    """Components of one input URL.

    Every field is derived from ``raw``; absent components are ``None``.
    ``hostname`` is only set when ``host`` is a registered name rather than
    an IP literal, and the public-suffix fields are only set alongside it.
    """

    raw: str
    scheme: str
    userinfo: Optional[str]
    host: Optional[str]
    port: Optional[int]
    path: str
    query: Optional[str]
    fragment: Optional[str]
    hostname: Optional[str] = None
    domain: Optional[str] = None
    subdomain: Optional[str] = None
    suffix: Optional[str] = None
    registration: Optional[str] = None


@dataclass(frozen=True, slots=True)
class InputRecord:
    """One input row: its original fields plus the URL selected from them."""

    line_number: int
    fields: Sequence[str]
    url: str


ColumnSelector = Union[int, str]


@dataclass(slots=True)
class SplitOptions:
    delimiter: str = constants.DEFAULT_DELIMITER
    headers: bool = True
    csv_input: bool = False
    column: ColumnSelector = 0
    public_suffix: bool = True


@dataclass(slots=True)
class SplitStats:
    """Counters for a single run."""

    rows_read: int = 0
    rows_written: int = 0
    parse_errors: int = 0
