"""
Process-wide diagnostic log.

The log is a plain text file, one line per record, CRLF line endings.
By default the previous session's log is discarded on startup.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    log_path: Path | str | None = None,
    level: int = logging.INFO,
    fresh: bool = True,
    console: bool = False,
) -> logging.FileHandler | None:
    """
    Configure the root logger.

    Args:
        log_path: File to append log lines to (None for no log file)
        level: Root logger level
        fresh: Delete an existing log file before opening it
        console: Also echo records to stderr

    Returns:
        The installed file handler, if any
    """
    handlers: list[logging.Handler] = []
    file_handler = None

    if log_path is not None:
        log_path = Path(log_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        if fresh:
            log_path.unlink(missing_ok=True)
        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        file_handler.terminator = "\r\n"
        handlers.append(file_handler)

    if console:
        handlers.append(logging.StreamHandler(sys.stderr))

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        handlers=handlers,
        force=True,
    )
    return file_handler
