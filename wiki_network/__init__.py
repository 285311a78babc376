"""
wiki-network - turn Wikipedia into a semantic network.

Pages are fetched lazily, their titles and outbound article links are
extracted from the rendered markup, and each link becomes a node in a
directed graph connected to the page it was found on.

Main entry point is the CLI via `wiki-network crawl` command.

Example:
    $ wiki-network crawl /wiki/Waffle --depth 1 -o waffle.json
"""

__all__ = [
    "__version__",
    "Locator",
    "Page",
    "WikipediaGraph",
    "load_config",
    "AppConfig",
]
__version__ = "0.1.0"

from .core import Locator, Page
from .config import AppConfig, load_config
from .graph import WikipediaGraph
