"""
Exception hierarchy for wiki-network.

Every failure the library can report is a subclass of WikiNetworkError so a
traversal over many pages can catch one bad page and keep going.
"""

from __future__ import annotations


class WikiNetworkError(Exception):
    """Base class for all wiki-network errors."""


class LocatorError(WikiNetworkError):
    """A locator could not be constructed."""


class InvalidHostError(LocatorError):
    """The parsed address points at a host outside the allow-list."""

    def __init__(self, invalid_url: str, host: str) -> None:
        self.invalid_url = invalid_url
        self.host = host
        super().__init__(f"'{invalid_url}' is not a valid wikipedia url")


class InvalidUrlError(LocatorError):
    """The input could not be parsed as an absolute URL."""

    def __init__(self, invalid_url: str, reason: str) -> None:
        self.invalid_url = invalid_url
        self.reason = reason
        super().__init__(f"'{invalid_url}' failed to be parsed as a url: '{reason}'")


class FetchError(WikiNetworkError):
    """Transport failure reported by the fetch collaborator."""

    def __init__(self, url: str, message: str, status_code: int | None = None) -> None:
        self.url = url
        self.message = message
        self.status_code = status_code
        super().__init__(f"failed to fetch {url}: {message}")


class TitleNotFoundError(WikiNetworkError):
    """The page body has no recognizable title."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"failed to find title of wikipedia page {url}")


class NodeNotFoundError(WikiNetworkError):
    """A graph handle does not refer to an existing node."""

    def __init__(self, handle: int) -> None:
        self.handle = handle
        super().__init__(f"node {handle} does not exist")
