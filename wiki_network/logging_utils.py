"""
Logging setup for crawls.

Console output goes through rich; the optional log file sits next to the
graph a crawl writes, one JSON object per line by default, so a crawl's
events can be read back alongside the graph they produced.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.logging import RichHandler

from .config import LoggingConfig

_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def crawl_log_path(cfg: LoggingConfig, output: Path) -> Path:
    """Path of the log file for a crawl writing its graph to ``output``."""
    if cfg.filename:
        return output.parent / cfg.filename
    suffix = "jsonl" if cfg.format == "jsonl" else "log"
    return output.with_name(f"{output.stem}.crawl.{suffix}")


def setup_logging(cfg: LoggingConfig, log_path: Path | None = None) -> logging.Logger:
    """Configure the ``wiki_network`` logger.

    Args:
        cfg: Logging settings
        log_path: Destination of the log file; no file is written when None
            or when file logging is disabled
    """
    level = _level_from_string(cfg.level)
    logger = logging.getLogger("wiki_network")
    logger.setLevel(level)
    logger.handlers = []
    logger.propagate = False

    if cfg.console:
        console_handler = RichHandler(rich_tracebacks=True, show_time=False, show_level=True)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(console_handler)

    if cfg.file and log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            JsonlFormatter() if cfg.format == "jsonl" else logging.Formatter("%(asctime)s %(levelname)s %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


def log_event(logger: logging.Logger | None, message: str, **fields: Any) -> None:
    if logger is None:
        return
    logger.info(message, extra=fields)


class JsonlFormatter(logging.Formatter):
    """One JSON object per record; ``extra`` fields become top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update({k: v for k, v in record.__dict__.items() if k not in _RESERVED})
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _level_from_string(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)
