import pytest
import requests

from phishguard.fetcher import FetchResult


class FakeResponse:
    """Minimal stand-in for a streamed requests.Response."""

    def __init__(self, url, body=b"", status_code=200, history=(), encoding="utf-8"):
        self.url = url
        self.status_code = status_code
        self.history = list(history)
        self.encoding = encoding
        self._body = body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self._body), chunk_size):
            yield self._body[i:i + chunk_size]


def page(url, html="<html><body></body></html>", final_url=None, redirects=0):
    return FetchResult(url, final_url=final_url or url, status=200, text=html, redirects=redirects)


def failed(url, error="connection refused"):
    return FetchResult(url, error=error)


@pytest.fixture
def fake_response():
    return FakeResponse
