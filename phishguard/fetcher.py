# fetcher.py
"""
Page fetcher: a single bounded GET (redirect cap, timeout, size limit).

Primary function:
    fetch_page(url: str) -> FetchResult

Network problems never raise; they come back as a FetchResult with `error` set
so callers can degrade to a conservative signal.
"""

from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any
import codecs
import logging
import time

import requests

from . import config

logger = logging.getLogger("fetcher")


@dataclass(frozen=True)
class FetchResult:
    requested_url: str
    final_url: Optional[str] = None
    status: Optional[int] = None
    text: Optional[str] = None
    redirects: int = 0
    error: Optional[str] = None

    @property
    def fetched(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["fetched"] = self.fetched
        return d


def _read_body(r: requests.Response, max_bytes: int, deadline: float) -> Optional[bytes]:
    """
    Read the streamed body, or None once it grows past max_bytes.
    Raises requests.Timeout when `deadline` (time.monotonic) passes mid-read.
    """
    size = 0
    chunks = []
    for chunk in r.iter_content(1024):
        if time.monotonic() > deadline:
            raise requests.Timeout("total fetch time exceeded")
        if not chunk:
            continue
        size += len(chunk)
        if size > max_bytes:
            return None
        chunks.append(chunk)
    return b"".join(chunks)


def _decode(body: bytes, encoding: Optional[str]) -> str:
    # servers may announce a charset Python does not know
    try:
        codecs.lookup(encoding or "utf-8")
    except LookupError:
        logger.debug("unknown charset %r, decoding as utf-8", encoding)
        encoding = "utf-8"
    return body.decode(encoding or "utf-8", errors="replace")


def fetch_page(url: str,
               max_redirects: int = config.MAX_REDIRECTS,
               timeout: float = config.REQUEST_TIMEOUT,
               max_bytes: int = config.MAX_BYTES) -> FetchResult:
    """
    GET `url`, following at most `max_redirects` hops.
    `timeout` bounds every socket step and the body read as a whole.
    HTTP error statuses (>= 400) count as a failed fetch.
    """
    headers = {"User-Agent": config.USER_AGENT}
    deadline = time.monotonic() + timeout
    try:
        with requests.Session() as session:
            session.max_redirects = max_redirects
            with session.get(url, headers=headers, timeout=timeout, stream=True) as r:
                r.raise_for_status()
                body = _read_body(r, max_bytes, deadline)
                if body is None:
                    return FetchResult(url, final_url=r.url, status=r.status_code,
                                       redirects=len(r.history), error="response-too-large")
                text = _decode(body, r.encoding)
                return FetchResult(url, final_url=r.url, status=r.status_code, text=text,
                                   redirects=len(r.history))
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        logger.debug("fetch_page http error for %s: %s", url, e)
        return FetchResult(url, status=status, error=str(e))
    except (requests.RequestException, ValueError) as e:
        # ValueError covers malformed URLs rejected before any I/O
        logger.debug("fetch_page error for %s: %s", url, e)
        return FetchResult(url, error=str(e) or e.__class__.__name__)
