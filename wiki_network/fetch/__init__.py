"""
Page fetching.

This package provides the HTTP transport that loads rendered article pages.
"""

from .fetcher import Fetch, FetchResult, fetch_url, make_fetcher

__all__ = [
    "Fetch",
    "FetchResult",
    "fetch_url",
    "make_fetcher",
]
