"""Logging for **wiki_crawl**.

Everything logs under the ``WikiCrawl`` logger. Modules take a child through
:func:`get_logger` (``WikiCrawl.crawler``, ``WikiCrawl.fetcher``,
``WikiCrawl.index``), so a single :func:`configure` call from the CLI sets the
level and destinations for the whole crawl::

    from wiki_crawl.logger import get_logger
    log = get_logger("crawler")
    log.info("Indexed %s", url)
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Optional, Union

ROOT_NAME: Final[str] = "WikiCrawl"
DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# rotation for --log-file
_MAX_BYTES: Final[int] = 5 * 1024 * 1024
_BACKUPS: Final[int] = 3


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Project logger, or its child ``WikiCrawl.<name>``."""
    return logging.getLogger(f"{ROOT_NAME}.{name}" if name else ROOT_NAME)


def configure(
    level: Union[int, str] = "INFO",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Route the project logger to stdout and, optionally, a rotating file.

    Calling it again replaces the previous handlers, so the CLI can
    reconfigure after import-time defaults.
    """
    root = get_logger()
    root.setLevel(level)
    for old in root.handlers:
        old.close()
    root.handlers.clear()
    root.propagate = False

    formatter = logging.Formatter(log_format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(str(log_file), maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8")
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    return root


logger: logging.Logger = configure()

__all__ = ["logger", "configure", "get_logger", "ROOT_NAME"]
