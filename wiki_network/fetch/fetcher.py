"""
HTTP page fetching.

fetch_url performs a blocking GET with httpx and reports the outcome as a
FetchResult. make_fetcher adapts it to the fetch collaborator contract used
by Page: a callable taking an address and returning the raw body, raising
FetchError on transport failure.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from typing import Callable

import httpx

from ..config import FetchConfig
from ..errors import FetchError

logger = logging.getLogger(__name__)

Fetch = Callable[[str], str]


@dataclass
class FetchResult:
    """Result of an HTTP fetch operation.

    Either text will be populated (success) or error will be populated (failure),
    but never both. status_code may be None for network-level failures.

    Attributes:
        url: The URL that was fetched
        status_code: HTTP status code, or None if request failed before getting response
        text: The response body text, or None on error
        error: Error message if fetch failed, None on success
    """
    url: str
    status_code: int | None
    text: str | None
    error: str | None


def fetch_url(
    url: str,
    timeout: float,
    retries: int,
    user_agent: str,
    trust_env: bool,
    transport: httpx.BaseTransport | None = None,
) -> FetchResult:
    """Fetch a URL using httpx.

    Uses a synchronous HTTP client that follows redirects and respects
    system proxy settings when trust_env is enabled.

    Args:
        url: The URL to fetch
        timeout: Request timeout in seconds
        retries: Number of retry attempts after initial failure
        user_agent: User-Agent header string
        trust_env: Whether to respect system proxy settings from environment
        transport: Optional httpx transport, used to stub the network in tests

    Returns:
        FetchResult with text on success or error message on failure
    """
    headers = {"User-Agent": user_agent}
    last_error: str | None = None

    for attempt in range(retries + 1):
        try:
            with httpx.Client(
                timeout=timeout,
                headers=headers,
                follow_redirects=True,
                trust_env=trust_env,
                transport=transport,
            ) as client:
                resp = client.get(url)
                return FetchResult(url=url, status_code=resp.status_code, text=resp.text, error=None)
        except httpx.HTTPError as exc:
            last_error = f"{type(exc).__name__}: {exc}"
            if attempt < retries:
                # Linear backoff: 0.5s, 1.0s, 1.5s...
                time.sleep(0.5 * (attempt + 1))

    return FetchResult(url=url, status_code=None, text=None, error=last_error)


def make_fetcher(
    cfg: FetchConfig | None = None,
    transport: httpx.BaseTransport | None = None,
) -> Fetch:
    """Build a fetch callable bound to the given settings."""
    cfg = cfg or FetchConfig()

    def fetch(url: str) -> str:
        logger.debug("Fetching %s", url)
        result = fetch_url(
            url,
            timeout=cfg.timeout_seconds,
            retries=cfg.retries,
            user_agent=cfg.user_agent,
            trust_env=cfg.trust_env,
            transport=transport,
        )
        if result.error is not None or result.text is None:
            raise FetchError(url, result.error or "empty response", result.status_code)
        return result.text

    return fetch
