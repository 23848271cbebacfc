"""Logging setup for the scraper CLI.

Records go to stderr because stdout carries the JSON result. A file sink can
be added with ``log_file`` (or ``SCRAPER_LOG_FILE`` via the CLI).
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

# HTTP and browser libraries that log every request at INFO/DEBUG
NOISY_LOGGERS = ("httpx", "httpcore", "asyncio", "playwright")


def _build_handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    return handlers


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Install root handlers for a scrape run.

    Unknown level names fall back to INFO. Calling this again replaces the
    previous handlers, so the CLI can be invoked repeatedly in one process.

    Args:
        level: Level name such as ``DEBUG`` or ``warning``
        log_file: Path of an extra log file; parent directories are created
    """
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO

    logging.basicConfig(
        level=resolved,
        format=LOG_FORMAT,
        handlers=_build_handlers(log_file),
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
