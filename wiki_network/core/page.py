"""
Lazily-loaded article pages.

A Page starts with only a Locator. Its body is fetched on demand, the title
is derived from the body, and the body can be dropped again to reclaim
memory while the title is kept. The lifecycle is held as one explicit state
value so a title without a body ever having existed (other than one taken
from link text) cannot be represented by accident.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..config import ExtractConfig, HostConfig
from ..errors import TitleNotFoundError
from ..extract.extractor import PageExtractor, get_extractor, resolve_links
from ..fetch.fetcher import Fetch, make_fetcher
from .locator import Locator


@dataclass(frozen=True)
class Unloaded:
    pass


@dataclass(frozen=True)
class BodyLoaded:
    body: str


@dataclass(frozen=True)
class TitleLoaded:
    title: str
    body: str | None = None


PageState = Union[Unloaded, BodyLoaded, TitleLoaded]


class Page:
    """One encyclopedia article, optionally holding its title and body.

    Args:
        locator: Validated address of the article
        fetch: Callable returning the raw body for an address; defaults to
            an httpx fetcher with default settings
        extractor: Title/link extractor; defaults to the regex extractor
        hosts: Host allow-list used to validate discovered links
        extract_cfg: Extraction settings (archive marker, skip reporting)
    """

    def __init__(
        self,
        locator: Locator,
        fetch: Fetch | None = None,
        extractor: PageExtractor | None = None,
        hosts: HostConfig | None = None,
        extract_cfg: ExtractConfig | None = None,
    ) -> None:
        self.locator = locator
        self.state: PageState = Unloaded()
        self._fetch = fetch or make_fetcher()
        self._extract_cfg = extract_cfg or ExtractConfig()
        self._extractor = extractor or get_extractor(self._extract_cfg)
        self._hosts = hosts or HostConfig()

    @classmethod
    def with_title(cls, locator: Locator, title: str, **kwargs) -> Page:
        """Create a bodiless Page whose title is already known."""
        page = cls(locator, **kwargs)
        page.state = TitleLoaded(title=title)
        return page

    @classmethod
    def new_load_title(cls, locator: Locator, **kwargs) -> Page:
        """Create a Page and immediately load its title (fetching the body)."""
        page = cls(locator, **kwargs)
        page.load_title()
        return page

    def __repr__(self) -> str:
        return f"Page(url={self.url!r}, title={self.title!r}, loaded={self.has_body})"

    @property
    def url(self) -> str:
        return self.locator.address

    @property
    def title(self) -> str | None:
        if isinstance(self.state, TitleLoaded):
            return self.state.title
        return None

    @property
    def body(self) -> str | None:
        if isinstance(self.state, (BodyLoaded, TitleLoaded)):
            return self.state.body
        return None

    @property
    def has_body(self) -> bool:
        return self.body is not None

    def load_body(self) -> str:
        """Fetch the body unless it is already loaded, and return it.

        Transport failures from the fetch collaborator propagate unchanged.
        """
        body = self.body
        if body is not None:
            return body
        body = self._fetch(self.url)
        if isinstance(self.state, TitleLoaded):
            self.state = TitleLoaded(title=self.state.title, body=body)
        else:
            self.state = BodyLoaded(body=body)
        return body

    def unload_body(self) -> None:
        """Drop the body, keeping the title if one was derived."""
        if isinstance(self.state, TitleLoaded):
            self.state = TitleLoaded(title=self.state.title)
        else:
            self.state = Unloaded()

    def load_title(self) -> str:
        """Derive the title from the body, fetching the body if needed.

        Raises:
            TitleNotFoundError: the body has no recognizable title
        """
        if self.title is not None:
            return self.title
        return self._set_title_from(self.load_body())

    def try_load_title(self) -> None:
        """Derive the title only if the body is already loaded."""
        if self.title is not None:
            return
        body = self.body
        if body is not None:
            self._set_title_from(body)

    def _set_title_from(self, body: str) -> str:
        title = self._extractor.extract_title(body)
        if title is None:
            raise TitleNotFoundError(self.url)
        self.state = TitleLoaded(title=title, body=body)
        return title

    def get_title(self) -> str:
        return self.load_title()

    def try_get_title(self) -> str | None:
        self.try_load_title()
        return self.title

    def get_connections(self) -> list[Page]:
        """Return a new Page for every article this page links to.

        Fetches the body if it is not loaded. Each returned Page carries the
        link-text title and no body.
        """
        return self._connections_from(self.load_body())

    def try_get_connections(self) -> list[Page] | None:
        """Like get_connections, but returns None instead of fetching."""
        body = self.body
        if body is None:
            return None
        return self._connections_from(body)

    def _connections_from(self, body: str) -> list[Page]:
        resolution = resolve_links(body, self._extractor, self._hosts, self._extract_cfg)
        return [
            Page.with_title(
                locator,
                title,
                fetch=self._fetch,
                extractor=self._extractor,
                hosts=self._hosts,
                extract_cfg=self._extract_cfg,
            )
            for locator, title in resolution.links
        ]
