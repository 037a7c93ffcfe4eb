"""Centralized logging configuration for gsmspec.

Usage in any module:
    from gsmspec.utils.logging import get_logger
    logger = get_logger(__name__)
    logger.info("Fetched %s", url)
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from ..config.settings import LOG_FILE

_CONFIGURED = False

ROOT_LOGGER = "gsmspec"


class SafeStreamHandler(logging.StreamHandler):
    """StreamHandler that survives consoles without a unicode encoding.

    Device names and spec cells carry characters like the prime sign or
    micro sign which some Windows code pages cannot encode.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            stream = self.stream
            encoding = getattr(stream, "encoding", None) or "utf-8"
            try:
                stream.write(msg + self.terminator)
            except UnicodeEncodeError:
                safe_msg = msg.encode(encoding, errors="backslashreplace").decode(
                    encoding, errors="backslashreplace"
                )
                stream.write(safe_msg + self.terminator)
            self.flush()
        except Exception:
            self.handleError(record)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
) -> None:
    """Configure the ``gsmspec`` logger (stderr console + file).

    Only the first call takes effect; use :func:`set_level` afterwards.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return
    _CONFIGURED = True

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)

    fmt = logging.Formatter(
        "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # stdout is reserved for JSON output of the CLI
    console = SafeStreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(fmt)
    root.addHandler(console)

    target = log_file or LOG_FILE
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(target, encoding="utf-8", delay=True)
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        root.addHandler(fh)
    except OSError:
        # read-only install location
        pass


def set_level(level: int) -> None:
    """Change the level of the ``gsmspec`` logger and its console handler."""
    setup_logging()
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)
    for handler in root.handlers:
        if isinstance(handler, SafeStreamHandler):
            handler.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger, configuring the ``gsmspec`` namespace on first use."""
    setup_logging()
    return logging.getLogger(name)
