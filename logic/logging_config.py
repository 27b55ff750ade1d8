"""
Logging configuration for the application.

``setup_logging`` configures the root logger with a console handler and an
optional file handler. It only acts once, so repeated app creation in
tests leaves the handlers alone.

Author: Venue Map team
Date: 2026-10-16
"""

import logging
from pathlib import Path
from typing import Optional


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    Args:
        level: Logging level name (e.g. "DEBUG", "INFO"). Case insensitive.
        logfile: Optional path of a file to also log to.
    """
    logger = logging.getLogger()
    if logger.handlers:
        return

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
