"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- HostConfig: Host allow-list used to validate article locators
- FetchConfig: HTTP fetching settings
- ExtractConfig: Title/link extraction settings
- GraphConfig: Graph growth policy
- CrawlConfig: Breadth-first crawl limits
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml


@dataclass
class HostConfig:
    """Hosts accepted when validating article locators.

    Attributes:
        allowed_hosts: Hosts a parsed address may point at
        canonical_host: Host prepended to bare article paths
        scheme: Scheme used when building an address from a path
    """

    allowed_hosts: list[str] = field(default_factory=lambda: ["en.wikipedia.org"])
    canonical_host: str = "en.wikipedia.org"
    scheme: str = "https"

    @property
    def origin(self) -> str:
        return f"{self.scheme}://{self.canonical_host}"


@dataclass
class FetchConfig:
    """Configuration for HTTP page fetching.

    Attributes:
        timeout_seconds: HTTP request timeout
        retries: Number of retry attempts for failed requests (0 disables retrying)
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string
    """

    timeout_seconds: float = 20.0
    retries: int = 0
    trust_env: bool = True
    user_agent: str = "wiki-network/0.1 (+https://en.wikipedia.org/wiki/Semantic_network)"


@dataclass
class ExtractConfig:
    """Configuration for title and link extraction.

    Attributes:
        method: Extraction strategy ("regex" or "bs4")
        site_name: Suffix following the article name inside <title>
        archive_marker: Links whose text contains this are archive citations
        report_skipped: Log skipped link counts at INFO instead of DEBUG
    """

    method: str = "regex"
    site_name: str = "Wikipedia"
    archive_marker: str = "Wayback Machine"
    report_skipped: bool = False


@dataclass
class GraphConfig:
    """Graph growth policy.

    Attributes:
        dedup: Reuse the existing node for an address already in the graph
        unload_after_expand: Drop the expanded page's body once its links are inserted
    """

    dedup: bool = False
    unload_after_expand: bool = False


@dataclass
class CrawlConfig:
    """Limits for the breadth-first crawl.

    Attributes:
        max_depth: Number of link hops to expand from the seed
        max_pages: Maximum number of pages to expand in one run
        fail_fast: Abort on the first failed page instead of skipping it
    """

    max_depth: int = 1
    max_pages: int = 50
    fail_fast: bool = True


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file, placed next to the graph output; when
            unset the file is named after the output (graph.json -> graph.crawl.jsonl)
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str | None = None


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    hosts: HostConfig = field(default_factory=HostConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    extract: ExtractConfig = field(default_factory=ExtractConfig)
    graph: GraphConfig = field(default_factory=GraphConfig)
    crawl: CrawlConfig = field(default_factory=CrawlConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "hosts": {
            "allowed_hosts": list(cfg.hosts.allowed_hosts),
            "canonical_host": cfg.hosts.canonical_host,
            "scheme": cfg.hosts.scheme,
        },
        "fetch": {
            "timeout_seconds": cfg.fetch.timeout_seconds,
            "retries": cfg.fetch.retries,
            "trust_env": cfg.fetch.trust_env,
            "user_agent": cfg.fetch.user_agent,
        },
        "extract": {
            "method": cfg.extract.method,
            "site_name": cfg.extract.site_name,
            "archive_marker": cfg.extract.archive_marker,
            "report_skipped": cfg.extract.report_skipped,
        },
        "graph": {
            "dedup": cfg.graph.dedup,
            "unload_after_expand": cfg.graph.unload_after_expand,
        },
        "crawl": {
            "max_depth": cfg.crawl.max_depth,
            "max_pages": cfg.crawl.max_pages,
            "fail_fast": cfg.crawl.fail_fast,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        hosts=HostConfig(**data["hosts"]),
        fetch=FetchConfig(**data["fetch"]),
        extract=ExtractConfig(**data["extract"]),
        graph=GraphConfig(**data["graph"]),
        crawl=CrawlConfig(**data["crawl"]),
        logging=LoggingConfig(**data["logging"]),
    )
