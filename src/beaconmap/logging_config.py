"""
Logging setup for command line entry points.

Library modules only create module loggers; handlers are attached here, on
the `beaconmap` namespace logger.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: int = logging.WARNING, log_file: str | Path | None = None, *, debug: bool = False) -> None:
    if debug:
        level = logging.DEBUG

    logger = logging.getLogger("beaconmap")
    logger.setLevel(level)
    # Re-running (tests, repeated CLI calls in one process) must not stack handlers.
    for h in list(logger.handlers):
        h.close()
        logger.removeHandler(h)

    formatter = logging.Formatter(DEFAULT_FORMAT)
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
