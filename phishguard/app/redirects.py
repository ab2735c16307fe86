"""
redirects.py

Redirect analysis: does the URL land on the domain it claims to be?

Public function:
    resolve_redirect_safety(url: str, fetch: FetchResult = None) -> RedirectOutcome
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse
import logging

from ..fetcher import FetchResult, fetch_page
from .. import config

logger = logging.getLogger("redirects")


@dataclass(frozen=True)
class RedirectOutcome:
    safe: bool
    original_domain: Optional[str] = None
    final_domain: Optional[str] = None
    error: Optional[str] = None


def normalize_domain(url: str) -> str:
    """Hostname of `url` with one leading 'www.' removed."""
    host = urlparse(url).hostname or ""
    if host.startswith("www."):
        host = host[4:]
    return host


def domains_match(original_url: str, final_url: str) -> bool:
    if original_url == final_url:
        return True
    return normalize_domain(original_url) == normalize_domain(final_url)


def resolve_redirect_safety(url: str, fetch: Optional[FetchResult] = None) -> RedirectOutcome:
    """
    Follow redirects (capped at config.MAX_REDIRECTS hops) and compare the
    starting and final domains. Failures are reported as unsafe, never raised.
    """
    if fetch is None:
        fetch = fetch_page(url, max_redirects=config.MAX_REDIRECTS)

    if not fetch.fetched or not fetch.final_url:
        logger.warning("Redirect check failed for %s: %s", url, fetch.error)
        return RedirectOutcome(safe=False, error=fetch.error or "no final url")

    try:
        original = normalize_domain(url)
        final = normalize_domain(fetch.final_url)
    except ValueError as e:
        logger.warning("Redirect check could not parse %s -> %s: %s", url, fetch.final_url, e)
        return RedirectOutcome(safe=False, error=str(e))

    safe = domains_match(url, fetch.final_url)
    if not safe:
        logger.info("Redirect leaves domain: %s -> %s (%d hops)", original, final, fetch.redirects)
    return RedirectOutcome(safe=safe, original_domain=original, final_domain=final)
