"""
Title and link extraction from rendered article markup.

Two interchangeable strategies implement the PageExtractor protocol:
1. regex: Lightweight pattern match over the raw markup (default)
2. bs4: BeautifulSoup structural parse, for when the markup drifts

resolve_links turns raw link candidates into validated Locators, dropping
archive citations and anything that fails host validation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import re
from typing import Protocol

from bs4 import BeautifulSoup

from ..config import ExtractConfig, HostConfig
from ..core.locator import Locator
from ..errors import LocatorError

logger = logging.getLogger(__name__)

_LINK_RE = re.compile(
    r'<a href="(/wiki/[a-zA-Z_()]+)"(?: class="[a-zA-Z_-]+")? title="([a-zA-Z ]+)"'
)


@dataclass(frozen=True)
class LinkCandidate:
    """A hyperlink found in a page body, before validation.

    Attributes:
        path: Article path, e.g. "/wiki/Waffle"
        title: Link-text title taken from the anchor's title attribute
        raw: The full matched anchor text
    """

    path: str
    title: str
    raw: str = ""


@dataclass
class LinkResolution:
    """Validated links plus counts of the candidates that were dropped."""

    links: list[tuple[Locator, str]] = field(default_factory=list)
    skipped_archive: int = 0
    skipped_invalid: int = 0


class PageExtractor(Protocol):
    def extract_title(self, body: str) -> str | None: ...

    def extract_links(self, body: str) -> list[LinkCandidate]: ...


class RegexExtractor:
    """Pattern-based extraction of the title and outbound article links."""

    def __init__(self, site_name: str = "Wikipedia") -> None:
        self.site_name = site_name
        self._title_re = re.compile(rf"([a-zA-Z ]+) - {re.escape(site_name)}")

    def extract_title(self, body: str) -> str | None:
        """Return the article name from the <title> line(s), or None."""
        title_lines = "".join(line for line in body.splitlines() if "<title>" in line)
        match = self._title_re.search(title_lines)
        if match is None:
            return None
        return match.group(1)

    def extract_links(self, body: str) -> list[LinkCandidate]:
        return [
            LinkCandidate(path=m.group(1), title=m.group(2), raw=m.group(0))
            for m in _LINK_RE.finditer(body)
        ]


class SoupExtractor:
    """Structural extraction using BeautifulSoup."""

    def __init__(self, site_name: str = "Wikipedia") -> None:
        self.site_name = site_name
        self._suffix = f" - {site_name}"

    def extract_title(self, body: str) -> str | None:
        soup = BeautifulSoup(body, "html.parser")
        if soup.title is None or soup.title.string is None:
            return None
        text = soup.title.string.strip()
        if not text.endswith(self._suffix):
            return None
        title = text[: -len(self._suffix)].strip()
        return title or None

    def extract_links(self, body: str) -> list[LinkCandidate]:
        soup = BeautifulSoup(body, "html.parser")
        candidates: list[LinkCandidate] = []
        for anchor in soup.find_all("a", href=True, title=True):
            href = anchor["href"]
            if not href.startswith("/wiki/"):
                continue
            candidates.append(LinkCandidate(path=href, title=anchor["title"], raw=str(anchor)))
        return candidates


def get_extractor(cfg: ExtractConfig | None = None) -> PageExtractor:
    """Build the extractor named by ``cfg.method``.

    Raises:
        ValueError: the method name is not recognized
    """
    cfg = cfg or ExtractConfig()
    if cfg.method == "regex":
        return RegexExtractor(cfg.site_name)
    if cfg.method == "bs4":
        return SoupExtractor(cfg.site_name)
    raise ValueError(f"Unknown extraction method: {cfg.method!r}")


def resolve_links(
    body: str,
    extractor: PageExtractor,
    hosts: HostConfig | None = None,
    cfg: ExtractConfig | None = None,
) -> LinkResolution:
    """Extract outbound links from a body and validate each one.

    Candidates mentioning the archive marker are citations, not articles,
    and are dropped. Candidates that fail locator validation are dropped
    too; one malformed link never blocks the others.
    """
    cfg = cfg or ExtractConfig()
    result = LinkResolution()

    for candidate in extractor.extract_links(body):
        if cfg.archive_marker in candidate.raw or cfg.archive_marker in candidate.title:
            result.skipped_archive += 1
            continue
        try:
            locator = Locator.from_path(candidate.path, hosts)
        except LocatorError:
            result.skipped_invalid += 1
            continue
        result.links.append((locator, candidate.title))

    if result.skipped_archive or result.skipped_invalid:
        logger.log(
            logging.INFO if cfg.report_skipped else logging.DEBUG,
            "Skipped %d archive link(s) and %d invalid link(s)",
            result.skipped_archive,
            result.skipped_invalid,
        )
    return result
