"""Tests for graph expansion."""

from __future__ import annotations

import pytest

from conftest import WAFFLE_HTML, FakeFetch, article_html
from wiki_network.config import GraphConfig
from wiki_network.core.locator import Locator
from wiki_network.core.page import Page
from wiki_network.errors import FetchError, NodeNotFoundError
from wiki_network.graph import WikipediaGraph

WAFFLE = "https://en.wikipedia.org/wiki/Waffle"


def _graph_with_seed(fetch, cfg: GraphConfig | None = None) -> tuple[WikipediaGraph, int]:
    graph = WikipediaGraph(cfg)
    root = graph.add_page(Page(Locator.parse(WAFFLE), fetch=fetch))
    return graph, root


def test_add_page_creates_isolated_node(waffle_fetch):
    """add_page should insert a node without edges or fetches"""
    graph, root = _graph_with_seed(waffle_fetch)

    assert graph.node_count == 1
    assert graph.edge_count == 0
    assert graph.page(root).url == WAFFLE
    assert root in graph
    assert waffle_fetch.calls == []


def test_expand_page_adds_one_node_and_edge_per_link(waffle_fetch):
    """Expansion should add one node and one edge per valid link"""
    graph, root = _graph_with_seed(waffle_fetch)

    targets = graph.expand_page(root)

    assert len(targets) == 3
    assert graph.node_count == 4
    assert graph.edge_count == 3
    assert graph.successors(root) == targets
    titles = [graph.page(t).title for t in targets]
    assert titles == ["Batter", "Waffle iron", "Belgium"]
    assert graph.page(root).title == "Waffle"
    assert waffle_fetch.calls == [WAFFLE]


def test_expand_unknown_handle_raises_node_not_found(waffle_fetch):
    """Unknown handle should raise NodeNotFoundError"""
    graph, _ = _graph_with_seed(waffle_fetch)

    with pytest.raises(NodeNotFoundError) as excinfo:
        graph.expand_page(42)

    assert excinfo.value.handle == 42


def test_expand_tolerates_missing_title():
    """Expansion should proceed when the title cannot be derived"""
    body = WAFFLE_HTML.replace("<title>Waffle - Wikipedia</title>", "<title>Waffle</title>")
    graph, root = _graph_with_seed(FakeFetch(default=body))

    targets = graph.expand_page(root)

    assert len(targets) == 3
    assert graph.page(root).title is None


def test_expand_propagates_transport_failure():
    """Fetch failures during expansion should propagate and leave the graph unchanged"""
    graph, root = _graph_with_seed(FakeFetch())

    with pytest.raises(FetchError):
        graph.expand_page(root)

    assert graph.node_count == 1
    assert graph.edge_count == 0


def test_repeated_links_create_duplicate_nodes_by_default():
    """Without dedup every link should become a new node"""
    body = article_html("Waffle", [("/wiki/Syrup", "Syrup"), ("/wiki/Syrup", "Syrup")])
    graph, root = _graph_with_seed(FakeFetch(default=body))

    targets = graph.expand_page(root)

    assert len(set(targets)) == 2
    assert graph.node_count == 3


def test_dedup_links_existing_node():
    """With dedup links should reuse nodes already in the graph"""
    body = article_html(
        "Waffle",
        [("/wiki/Syrup", "Syrup"), ("/wiki/Syrup", "Syrup"), ("/wiki/Waffle", "Waffle")],
    )
    graph, root = _graph_with_seed(FakeFetch(default=body), GraphConfig(dedup=True))

    targets = graph.expand_page(root)

    syrup = graph.find("https://en.wikipedia.org/wiki/Syrup")
    assert targets == [syrup, syrup, root]
    assert graph.node_count == 2
    assert graph.edge_count == 3


def test_unload_after_expand_drops_body(waffle_fetch):
    """unload_after_expand should drop the body but keep the title"""
    graph, root = _graph_with_seed(waffle_fetch, GraphConfig(unload_after_expand=True))

    graph.expand_page(root)

    page = graph.page(root)
    assert page.body is None
    assert page.title == "Waffle"


def test_handles_stay_stable_across_expansions(waffle_fetch):
    """Handles should be stable and never reused"""
    graph, root = _graph_with_seed(waffle_fetch)
    first = graph.expand_page(root)

    second = graph.expand_page(root)

    assert set(first).isdisjoint(second)
    assert graph.page(first[0]).title == "Batter"
    assert sorted(graph.handles()) == list(range(7))


def test_to_dict_exports_nodes_and_edges(waffle_fetch):
    """Export should list nodes with url/title and every edge"""
    graph, root = _graph_with_seed(waffle_fetch)
    graph.expand_page(root)

    data = graph.to_dict()

    assert data["directed"] is True
    assert data["nodes"][0] == {"id": root, "url": WAFFLE, "title": "Waffle"}
    assert {"source": root, "target": 1} in data["edges"]
    assert len(data["edges"]) == 3
