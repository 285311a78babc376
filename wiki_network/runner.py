"""
Breadth-first crawl orchestration.

Starting from a seed locator, the crawl expands the seed page, then every
page discovered at the previous level, until the depth or page limit is
reached:
1. Build the graph and add the seed page
2. Expand pages level by level
3. Record statistics and optionally write the graph to JSON

Failed pages either abort the crawl (fail_fast) or are logged and skipped.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
import json
import logging
from pathlib import Path

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from .config import AppConfig
from .core.locator import Locator
from .core.page import Page
from .errors import WikiNetworkError
from .extract.extractor import get_extractor
from .fetch.fetcher import Fetch, make_fetcher
from .graph import WikipediaGraph
from .logging_utils import log_event


@dataclass
class CrawlStats:
    """Statistics collected during a crawl.

    Attributes:
        expanded: Pages whose links were inserted into the graph
        failed: Pages skipped because expansion raised
        nodes: Node count when the crawl finished
        edges: Edge count when the crawl finished
        errors: Address and message of every skipped page
    """
    expanded: int = 0
    failed: int = 0
    nodes: int = 0
    edges: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class CrawlResult:
    graph: WikipediaGraph
    root: int
    stats: CrawlStats


def crawl(
    seed: Locator,
    cfg: AppConfig,
    fetch: Fetch | None = None,
    logger: logging.Logger | None = None,
    graph: WikipediaGraph | None = None,
    show_progress: bool = False,
    console: Console | None = None,
) -> CrawlResult:
    """Grow a semantic network outward from a seed article.

    Args:
        seed: Locator of the first article
        cfg: Application configuration
        fetch: Fetch collaborator; defaults to an httpx fetcher built from cfg.fetch
        logger: Logger for crawl events (defaults to the package logger)
        graph: Existing graph to grow; a new one is created if None
        show_progress: Whether to display a progress bar
        console: Rich console for the progress bar

    Returns:
        CrawlResult with the graph, the seed's handle and statistics

    Raises:
        WikiNetworkError: a page failed and cfg.crawl.fail_fast is set
    """
    logger = logger or logging.getLogger("wiki_network")
    fetch = fetch or make_fetcher(cfg.fetch)
    graph = graph or WikipediaGraph(cfg.graph)
    seed_page = Page(
        seed,
        fetch=fetch,
        extractor=get_extractor(cfg.extract),
        hosts=cfg.hosts,
        extract_cfg=cfg.extract,
    )
    root = graph.add_page(seed_page)
    stats = CrawlStats()

    log_event(
        logger,
        "Crawl start",
        event="crawl_start",
        seed=seed.address,
        max_depth=cfg.crawl.max_depth,
        max_pages=cfg.crawl.max_pages,
    )

    queue: deque[tuple[int, int]] = deque([(root, 0)])
    seen: set[int] = {root}

    progress = Progress(
        SpinnerColumn(),
        TextColumn("{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
        disable=not show_progress,
    )
    with progress:
        task = progress.add_task("Expanding", total=cfg.crawl.max_pages)
        while queue and stats.expanded + stats.failed < cfg.crawl.max_pages:
            handle, depth = queue.popleft()
            if depth >= cfg.crawl.max_depth:
                continue
            page = graph.page(handle)
            try:
                targets = graph.expand_page(handle)
            except WikiNetworkError as exc:
                if cfg.crawl.fail_fast:
                    raise
                stats.failed += 1
                stats.errors.append((page.url, str(exc)))
                logger.warning("Skipping %s: %s", page.url, exc)
                progress.advance(task)
                continue

            stats.expanded += 1
            progress.advance(task)
            log_event(
                logger,
                f"Expanded {page.title or page.url}",
                event="page_expanded",
                url=page.url,
                depth=depth,
                links=len(targets),
            )
            for target in targets:
                if target in seen:
                    continue
                seen.add(target)
                queue.append((target, depth + 1))

    stats.nodes = graph.node_count
    stats.edges = graph.edge_count
    log_event(
        logger,
        "Crawl finished",
        event="crawl_finished",
        expanded=stats.expanded,
        failed=stats.failed,
        nodes=stats.nodes,
        edges=stats.edges,
    )
    return CrawlResult(graph=graph, root=root, stats=stats)


def write_graph(result: CrawlResult, path: Path) -> Path:
    """Write the crawl's graph as node-link JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = result.graph.to_dict()
    payload["root"] = result.root
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return path
