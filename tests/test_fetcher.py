import itertools
from unittest.mock import patch

import pytest
import requests

from phishguard.fetcher import fetch_page, FetchResult

URL = "https://example.com/"


def test_fetch_ok(fake_response):
    resp = fake_response(URL, body=b"<html>ok</html>")
    with patch.object(requests.Session, "get", return_value=resp) as get:
        res = fetch_page(URL, timeout=2, max_redirects=3)
    assert res.fetched
    assert res.text == "<html>ok</html>"
    assert res.final_url == URL
    assert res.status == 200
    assert res.redirects == 0
    assert get.call_args.kwargs["timeout"] == 2


def test_fetch_records_redirects(fake_response):
    resp = fake_response("https://other.example/landing", body=b"x", history=[object(), object()])
    with patch.object(requests.Session, "get", return_value=resp):
        res = fetch_page(URL)
    assert res.final_url == "https://other.example/landing"
    assert res.redirects == 2


def test_fetch_session_redirect_cap(fake_response):
    seen = {}

    def fake_get(self, url, **kwargs):
        seen["max_redirects"] = self.max_redirects
        return fake_response(url, body=b"x")

    with patch.object(requests.Session, "get", autospec=True, side_effect=fake_get):
        fetch_page(URL, max_redirects=5)
    assert seen["max_redirects"] == 5


@pytest.mark.parametrize("exc", [
    requests.TooManyRedirects("Exceeded 5 redirects."),
    requests.ConnectionError("refused"),
    requests.Timeout("timed out"),
    requests.exceptions.MissingSchema("no scheme"),
])
def test_fetch_network_errors_are_absorbed(exc):
    with patch.object(requests.Session, "get", side_effect=exc):
        res = fetch_page(URL)
    assert not res.fetched
    assert res.text is None
    assert res.error


def test_fetch_http_error_status(fake_response):
    with patch.object(requests.Session, "get", return_value=fake_response(URL, status_code=404)):
        res = fetch_page(URL)
    assert not res.fetched
    assert res.status == 404


def test_fetch_too_large(fake_response):
    with patch.object(requests.Session, "get", return_value=fake_response(URL, body=b"a" * 5000)):
        res = fetch_page(URL, max_bytes=2048)
    assert res.error == "response-too-large"
    assert res.text is None


def test_fetch_malformed_url_without_network():
    res = fetch_page("not a url")
    assert isinstance(res, FetchResult)
    assert not res.fetched


def test_to_dict_includes_fetched():
    d = FetchResult(URL, error="boom").to_dict()
    assert d["fetched"] is False
    assert d["error"] == "boom"


def test_fetch_unknown_charset_decodes_as_utf8(fake_response):
    resp = fake_response(URL, body="<p>café</p>".encode("utf-8"), encoding="x-bogus")
    with patch.object(requests.Session, "get", return_value=resp):
        res = fetch_page(URL)
    assert res.fetched
    assert res.text == "<p>café</p>"


def test_fetch_slow_body_hits_total_deadline(fake_response):
    # every clock read advances one second; deadline = start + 2
    clock = itertools.count(0.0, 1.0)
    resp = fake_response(URL, body=b"a" * (5 * 1024))
    with patch.object(requests.Session, "get", return_value=resp), \
            patch("phishguard.fetcher.time.monotonic", side_effect=lambda: next(clock)):
        res = fetch_page(URL, timeout=2)
    assert not res.fetched
    assert res.text is None
    assert "time exceeded" in res.error
