"""Tests for the httpx-backed fetch collaborator."""

from __future__ import annotations

import httpx
import pytest

from wiki_network.config import FetchConfig
from wiki_network.errors import FetchError
from wiki_network.fetch.fetcher import fetch_url, make_fetcher

URL = "https://en.wikipedia.org/wiki/Waffle"


def _transport(seen: list[httpx.Request]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="<title>Waffle - Wikipedia</title>")

    return httpx.MockTransport(handler)


def _failing_transport(seen: list[httpx.Request]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.MockTransport(handler)


def test_fetch_url_returns_body_and_sends_user_agent():
    """fetch_url should return the body and send the configured User-Agent"""
    seen: list[httpx.Request] = []

    result = fetch_url(URL, timeout=5, retries=0, user_agent="test-agent", trust_env=False,
                       transport=_transport(seen))

    assert result.text == "<title>Waffle - Wikipedia</title>"
    assert result.status_code == 200
    assert result.error is None
    assert seen[0].headers["User-Agent"] == "test-agent"


def test_fetch_url_reports_transport_error():
    """Transport errors should be reported in FetchResult.error"""
    seen: list[httpx.Request] = []

    result = fetch_url(URL, timeout=5, retries=0, user_agent="ua", trust_env=False,
                       transport=_failing_transport(seen))

    assert result.text is None
    assert result.status_code is None
    assert result.error.startswith("ConnectError")
    assert len(seen) == 1


def test_make_fetcher_returns_text():
    """Fetcher should return the response text"""
    fetch = make_fetcher(FetchConfig(trust_env=False), transport=_transport([]))

    assert fetch(URL) == "<title>Waffle - Wikipedia</title>"


def test_make_fetcher_raises_fetch_error_without_retrying():
    """Fetcher should raise FetchError after a single attempt by default"""
    seen: list[httpx.Request] = []
    fetch = make_fetcher(FetchConfig(trust_env=False), transport=_failing_transport(seen))

    with pytest.raises(FetchError) as excinfo:
        fetch(URL)

    assert excinfo.value.url == URL
    assert "ConnectError" in excinfo.value.message
    assert len(seen) == 1
