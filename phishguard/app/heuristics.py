"""
heuristics.py

Lexical URL checks. Pure functions on the raw URL string, no I/O.

Public functions:
    check_url_length(url: str) -> bool
    check_domain_validity(url: str) -> bool

Example:
    >>> check_url_length("https://example.com")
    True
    >>> check_domain_validity("not a url")
    False
"""

import re

MAX_URL_LENGTH = 75

# optional scheme, label. segments, alphabetic TLD, optional port, optional path
DOMAIN_RE = re.compile(r'(https?://)?([a-zA-Z0-9-]+\.)+[a-zA-Z]{2,}(:\d+)?(/.*)?', re.ASCII)


def check_url_length(url: str) -> bool:
    """True if the URL is at most MAX_URL_LENGTH characters (no trimming)."""
    return len(url) <= MAX_URL_LENGTH


def check_domain_validity(url: str) -> bool:
    if not isinstance(url, str):
        return False
    # fullmatch: a trailing newline must not slip past the end anchor
    return DOMAIN_RE.fullmatch(url) is not None
