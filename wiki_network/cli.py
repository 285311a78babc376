"""
Command-line interface for wiki-network.

Uses Typer to expose single-page lookups (title, links) and the
breadth-first crawl that writes a JSON graph.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from .config import AppConfig, load_config
from .core.locator import Locator
from .core.page import Page
from .errors import WikiNetworkError
from .extract.extractor import get_extractor
from .fetch.fetcher import make_fetcher
from .logging_utils import crawl_log_path, setup_logging
from .runner import crawl as run_crawl
from .runner import write_graph

app = typer.Typer(add_completion=False)
console = Console()


def _parse_locator(target: str, cfg: AppConfig) -> Locator:
    if target.startswith(("http://", "https://")):
        return Locator.parse(target, cfg.hosts)
    return Locator.from_path(target, cfg.hosts)


def _load(config: Path | None, log_level: str | None) -> AppConfig:
    cfg = load_config(str(config) if config else None)
    if log_level:
        cfg.logging.level = log_level
    return cfg


def _page(target: str, cfg: AppConfig) -> Page:
    return Page(
        _parse_locator(target, cfg),
        fetch=make_fetcher(cfg.fetch),
        extractor=get_extractor(cfg.extract),
        hosts=cfg.hosts,
        extract_cfg=cfg.extract,
    )


def _fail(exc: WikiNetworkError) -> None:
    console.print(f"[red]Error:[/red] {exc}")
    raise typer.Exit(code=1)


@app.command()
def title(
    target: str = typer.Argument(..., help="Article path (/wiki/Waffle) or full URL."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
):
    """Print the title of an article."""
    cfg = _load(config, None)
    try:
        console.print(_page(target, cfg).get_title())
    except WikiNetworkError as exc:
        _fail(exc)


@app.command()
def links(
    target: str = typer.Argument(..., help="Article path (/wiki/Waffle) or full URL."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
):
    """Print every article an article links to."""
    cfg = _load(config, None)
    try:
        connections = _page(target, cfg).get_connections()
    except WikiNetworkError as exc:
        _fail(exc)
        return
    for connection in connections:
        console.print(f"{connection.title}\t{connection.url}")


@app.command()
def crawl(
    target: str = typer.Argument(..., help="Seed article path (/wiki/Waffle) or full URL."),
    output: Path = typer.Option(Path("graph.json"), "--output", "-o"),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    depth: int | None = typer.Option(None, "--depth", "-d", help="Link hops to expand."),
    max_pages: int | None = typer.Option(None, "--max-pages", help="Maximum pages to expand."),
    dedup: bool | None = typer.Option(
        None, "--dedup/--no-dedup", help="Reuse nodes for articles already in the graph."
    ),
    keep_going: bool = typer.Option(
        False, "--keep-going", help="Skip pages that fail instead of stopping."
    ),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Write a crawl log next to the output."
    ),
):
    """Crawl outward from a seed article and write the graph as JSON."""
    cfg = _load(config, log_level)
    if depth is not None:
        cfg.crawl.max_depth = depth
    if max_pages is not None:
        cfg.crawl.max_pages = max_pages
    if dedup is not None:
        cfg.graph.dedup = dedup
    if keep_going:
        cfg.crawl.fail_fast = False

    if log_file is not None:
        cfg.logging.file = log_file

    logger = setup_logging(cfg.logging, crawl_log_path(cfg.logging, output))
    try:
        seed = _parse_locator(target, cfg)
        result = run_crawl(seed, cfg, logger=logger, show_progress=progress, console=console)
    except WikiNetworkError as exc:
        _fail(exc)
        return

    path = write_graph(result, output)
    console.print(
        f"Graph written: {path} ({result.stats.nodes} nodes, {result.stats.edges} edges, "
        f"{result.stats.failed} failed)"
    )


if __name__ == "__main__":
    app()
