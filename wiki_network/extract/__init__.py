"""
Title and link extraction.

This package isolates markup parsing behind the PageExtractor protocol so
the pattern matcher can be swapped without touching Page or the graph.
"""

from .extractor import (
    LinkCandidate,
    LinkResolution,
    PageExtractor,
    RegexExtractor,
    SoupExtractor,
    get_extractor,
    resolve_links,
)

__all__ = [
    "LinkCandidate",
    "LinkResolution",
    "PageExtractor",
    "RegexExtractor",
    "SoupExtractor",
    "get_extractor",
    "resolve_links",
]
