"""
Core domain models.

Locators and the lazily-loaded Page entity.
"""

from .locator import Locator
from .page import BodyLoaded, Page, PageState, TitleLoaded, Unloaded

__all__ = [
    "Locator",
    "Page",
    "PageState",
    "Unloaded",
    "BodyLoaded",
    "TitleLoaded",
]
