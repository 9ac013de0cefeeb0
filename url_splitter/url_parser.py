"""Split a URL string into its RFC 3986 components.

``urllib.parse.urlsplit`` does the splitting. It is lenient and accepts
almost any string, so the checks below reject what the generic URI syntax
does not allow: relative references, whitespace and control characters,
backslashes, malformed hosts and ports.
"""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlsplit

from . import constants
from .domain_utils import is_ip_address, is_ipv6_address, split_hostname
from .logging_config import get_logger
from .models import ParsedUrl


logger = get_logger(__name__)

_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):")
_REG_NAME_RE = re.compile(r"^(?:[A-Za-z0-9\-._~!$&'()*+,;=]|%[0-9A-Fa-f]{2}|[^\x00-\x7f])*$")


class UrlParseError(ValueError):
    """Raised when a string is not a syntactically valid absolute URL."""

    def __init__(self, raw: str, reason: str) -> None:
        super().__init__(reason)
        self.raw = raw
        self.reason = reason


def _has_forbidden_characters(text: str) -> bool:
    return any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in text)


def parse_url(raw: str, *, public_suffix: bool = True) -> ParsedUrl:
    """Parse ``raw`` into a :class:`ParsedUrl`.

    Surrounding whitespace is ignored. Raises :class:`UrlParseError` when
    the remaining text is not an absolute URL.
    """

    text = raw.strip()
    if not text:
        raise UrlParseError(raw, "empty URL")
    if _has_forbidden_characters(text):
        raise UrlParseError(raw, "URL contains whitespace or control characters")
    if "\\" in text:
        raise UrlParseError(raw, "URL contains a backslash")

    match = _SCHEME_RE.match(text)
    if match is None:
        raise UrlParseError(raw, "relative URL without a scheme")

    try:
        parts = urlsplit(text)
    except ValueError as exc:
        raise UrlParseError(raw, f"invalid URL: {exc}") from exc
    if not parts.scheme:
        raise UrlParseError(raw, "relative URL without a scheme")

    has_authority = text[match.end():].startswith("//")
    userinfo: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None

    if has_authority:
        if "@" in parts.netloc:
            userinfo = parts.netloc.rpartition("@")[0]
        hostport = parts.netloc.rpartition("@")[2]
        port = _validated_port(raw, hostport)
        host = _validated_host(raw, parts.hostname, bracketed=hostport.startswith("["))

    if parts.scheme in constants.NETWORK_SCHEMES and not host:
        raise UrlParseError(raw, "empty host")

    hostname: Optional[str] = None
    domain = subdomain = suffix = registration = None
    if host and not is_ip_address(host):
        hostname = host
        if public_suffix:
            domain_parts = split_hostname(hostname)
            domain = domain_parts.domain
            subdomain = domain_parts.subdomain
            suffix = domain_parts.suffix
            registration = domain_parts.registration

    return ParsedUrl(
        raw=raw,
        scheme=parts.scheme,
        userinfo=userinfo,
        host=host,
        port=port,
        path=parts.path,
        query=parts.query or None,
        fragment=parts.fragment or None,
        hostname=hostname,
        domain=domain,
        subdomain=subdomain,
        suffix=suffix,
        registration=registration,
    )


def _validated_host(raw: str, host: Optional[str], *, bracketed: bool) -> Optional[str]:
    if not host:
        return None
    if bracketed or ":" in host:
        # Brackets, or a colon left once the port is split off, only occur in IP literals.
        if not is_ipv6_address(host):
            raise UrlParseError(raw, f"invalid IPv6 address: {host}")
        return f"[{host}]"
    if not _REG_NAME_RE.match(host):
        raise UrlParseError(raw, f"invalid host: {host}")
    return host


def _validated_port(raw: str, hostport: str) -> Optional[int]:
    if hostport.startswith("["):
        tail = hostport.partition("]")[2]
        if tail and not tail.startswith(":"):
            raise UrlParseError(raw, f"invalid port: {tail}")
        port_text = tail[1:]
    else:
        port_text = hostport.partition(":")[2]
    if not port_text:
        return None
    if not (port_text.isascii() and port_text.isdigit()):
        raise UrlParseError(raw, f"invalid port: {port_text}")
    port = int(port_text)
    if port > constants.MAX_PORT:
        raise UrlParseError(raw, f"invalid port: {port} is out of range 0-{constants.MAX_PORT}")
    return port
