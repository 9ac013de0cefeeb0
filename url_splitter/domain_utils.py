"""Host name helpers: IP literal detection and public-suffix splitting."""

from __future__ import annotations

import ipaddress
from typing import Optional

import tldextract

from .logging_config import get_logger
from .models import DomainParts


logger = get_logger(__name__)

_extractor: Optional[tldextract.TLDExtract] = None


def _get_extractor() -> tldextract.TLDExtract:
    # Bundled PSL snapshot only: no network fetch and no on-disk cache.
    global _extractor
    if _extractor is None:
        logger.debug("Loading public suffix list snapshot")
        _extractor = tldextract.TLDExtract(
            cache_dir=None,
            suffix_list_urls=(),
            fallback_to_snapshot=True,
            include_psl_private_domains=False,
        )
    return _extractor


def is_ip_address(host: str) -> bool:
    """Return True when ``host`` is an IPv4 or IPv6 literal (brackets allowed)."""

    candidate = host
    if candidate.startswith("[") and candidate.endswith("]"):
        candidate = candidate[1:-1]
    candidate = candidate.split("%", 1)[0]
    try:
        ipaddress.ip_address(candidate)
    except ValueError:
        return False
    return True


def is_ipv6_address(host: str) -> bool:
    """Return True only for IPv6 literals, the one kind allowed in brackets."""

    candidate = host.strip("[]").split("%", 1)[0]
    try:
        return isinstance(ipaddress.ip_address(candidate), ipaddress.IPv6Address)
    except ValueError:
        return False


def split_hostname(hostname: str) -> DomainParts:
    """Split a registered host name into domain, subdomain and public suffix.

    ``registration`` is ``domain.suffix`` when both are known, otherwise
    whichever of the two is present.
    """

    extracted = _get_extractor()(hostname)
    domain = extracted.domain or None
    subdomain = extracted.subdomain or None
    suffix = extracted.suffix or None
    registration = ".".join(part for part in (domain, suffix) if part) or None
    return DomainParts(domain=domain, subdomain=subdomain, suffix=suffix, registration=registration)
