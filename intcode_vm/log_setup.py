"""
Intcode VM — Logging Setup

Same pattern as the emulator tools: a rich console handler for the
interesting stuff and an optional plain file handler that captures
everything.

Library modules only call logging.getLogger(__name__); handlers are
attached here, once, by the CLI (or by a host script).
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "intcode_vm"

FILE_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    console_level: int = logging.WARNING,
    log_file: Optional[Union[str, Path]] = None,
    name: str = ROOT_LOGGER,
) -> logging.Logger:
    """Configure and return the package logger.

    log_file may be a file path or a directory; for a directory the
    file is named ``<name>_YYYYMMDD_HHMMSS.log``.
    Calling this twice replaces the handlers instead of stacking them.
    """
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    # ── File handler: captures everything (DEBUG+) ──
    if log_file is not None:
        log_path = Path(log_file)
        if log_path.is_dir():
            ts = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_path = log_path / f"{name}_{ts}.log"
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(fh)

    # ── Console handler: only important stuff (WARNING+ default) ──
    ch = RichHandler(
        level=console_level,
        console=Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    ch.setLevel(console_level)
    logger.addHandler(ch)

    logger.debug("Logger initialized: %s (console %s)",
                 name, logging.getLevelName(console_level))
    return logger
