"""Shared fixtures: canned article markup and a fetch stub that counts calls."""

from __future__ import annotations

import logging

import pytest

from wiki_network.errors import FetchError


def article_html(title: str, links: list[tuple[str, str]], site: str = "Wikipedia") -> str:
    anchors = "\n".join(f'<p><a href="{path}" title="{text}">{text}</a></p>' for path, text in links)
    return (
        "<!DOCTYPE html>\n<html>\n<head>\n"
        f"<title>{title} - {site}</title>\n"
        "</head>\n<body>\n"
        f"{anchors}\n"
        "</body>\n</html>\n"
    )


WAFFLE_HTML = (
    "<!DOCTYPE html>\n<html>\n<head>\n"
    "<title>Waffle - Wikipedia</title>\n"
    "</head>\n<body>\n"
    '<p>A <a href="/wiki/Batter_(cooking)" title="Batter">batter</a> cooked in a '
    '<a href="/wiki/Waffle_iron" class="mw-redirect" title="Waffle iron">waffle iron</a>.</p>\n'
    '<p>Popular in <a href="/wiki/Belgium" title="Belgium">Belgium</a>.</p>\n'
    '<p><a href="/wiki/Wayback_Machine" title="Wayback Machine">Archived</a> copy.</p>\n'
    "</body>\n</html>\n"
)


class FakeFetch:
    """Serves canned bodies by address and records every call."""

    def __init__(self, pages: dict[str, str] | None = None, default: str | None = None) -> None:
        self.pages = pages or {}
        self.default = default
        self.calls: list[str] = []

    def __call__(self, url: str) -> str:
        self.calls.append(url)
        if url in self.pages:
            return self.pages[url]
        if self.default is not None:
            return self.default
        raise FetchError(url, "ConnectError: no route to host")


@pytest.fixture
def waffle_fetch() -> FakeFetch:
    return FakeFetch({"https://en.wikipedia.org/wiki/Waffle": WAFFLE_HTML})


@pytest.fixture(autouse=True)
def _restore_package_logger():
    # setup_logging replaces handlers and stops propagation to the root logger
    logger = logging.getLogger("wiki_network")
    saved = (logger.handlers[:], logger.propagate, logger.level)
    yield
    logger.handlers, logger.propagate, logger.level = saved[0], saved[1], saved[2]
