"""
Directed graph of article pages.

Nodes are Page objects stored on a networkx MultiDiGraph under integer
handles; an edge means "source page links to target page" and carries no
payload. Parallel edges are allowed.
"""

from __future__ import annotations

from itertools import count
import logging
from typing import Any, Iterator

import networkx as nx

from .config import GraphConfig
from .core.page import Page
from .errors import NodeNotFoundError, WikiNetworkError

logger = logging.getLogger(__name__)


class WikipediaGraph:
    """Semantic network grown one page expansion at a time.

    By default every discovered link becomes a new node, even when the same
    article is already in the graph. With ``GraphConfig.dedup`` enabled an
    address index is consulted first and the existing node is linked to
    instead.
    """

    def __init__(self, cfg: GraphConfig | None = None) -> None:
        self.cfg = cfg or GraphConfig()
        self.graph = nx.MultiDiGraph()
        self._handles = count()
        self._by_address: dict[str, int] = {}

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    def __contains__(self, handle: object) -> bool:
        return handle in self.graph

    @property
    def node_count(self) -> int:
        return self.graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self.graph.number_of_edges()

    def handles(self) -> Iterator[int]:
        return iter(self.graph.nodes)

    def page(self, handle: int) -> Page:
        """Return the page stored under a handle.

        Raises:
            NodeNotFoundError: the handle is not in this graph
        """
        if handle not in self.graph:
            raise NodeNotFoundError(handle)
        return self.graph.nodes[handle]["page"]

    def successors(self, handle: int) -> list[int]:
        """Handles linked from a node, one entry per edge."""
        if handle not in self.graph:
            raise NodeNotFoundError(handle)
        return [target for _, target in self.graph.out_edges(handle)]

    def find(self, address: str) -> int | None:
        """Handle of the first node added for an address, if any."""
        return self._by_address.get(address)

    def add_page(self, page: Page) -> int:
        """Insert a page as a new node with no edges and return its handle."""
        handle = next(self._handles)
        self.graph.add_node(handle, page=page)
        self._by_address.setdefault(page.url, handle)
        return handle

    def expand_page(self, handle: int) -> list[int]:
        """Fetch a node's outbound links and add them as nodes and edges.

        The node's title is resolved on a best-effort basis; a failure there
        does not stop the expansion. Failures while retrieving connections
        propagate to the caller.

        Returns:
            Handles of the link targets, in link order

        Raises:
            NodeNotFoundError: the handle is not in this graph
        """
        page = self.page(handle)

        try:
            page.load_title()
        except WikiNetworkError as exc:
            logger.debug("Title not resolved for %s: %s", page.url, exc)

        connections = page.get_connections()

        targets: list[int] = []
        for connection in connections:
            target = self._target_for(connection)
            if not self._add_edge(handle, target):
                continue
            targets.append(target)

        if self.cfg.unload_after_expand:
            page.unload_body()

        logger.debug("Expanded %s into %d link(s)", page.url, len(targets))
        return targets

    def _target_for(self, connection: Page) -> int:
        if self.cfg.dedup:
            existing = self._by_address.get(connection.url)
            if existing is not None:
                return existing
        return self.add_page(connection)

    def _add_edge(self, source: int, target: int) -> bool:
        # networkx would silently create missing endpoints
        if source not in self.graph or target not in self.graph:
            logger.warning("Skipping edge %s -> %s: endpoint missing", source, target)
            return False
        self.graph.add_edge(source, target)
        return True

    def to_dict(self) -> dict[str, Any]:
        """Node-link export suitable for JSON serialization."""
        nodes = [
            {"id": handle, "url": data["page"].url, "title": data["page"].title}
            for handle, data in self.graph.nodes(data=True)
        ]
        edges = [{"source": source, "target": target} for source, target in self.graph.edges()]
        return {"directed": True, "multigraph": True, "nodes": nodes, "edges": edges}
