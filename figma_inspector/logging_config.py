"""Unified logging configuration for the figma inspector."""
from __future__ import annotations

import logging
import os
from pathlib import Path

# Log directory, configurable via LOG_DIR env var
LOG_DIR = Path(os.getenv("LOG_DIR", str(Path.cwd() / "logs")))

# Prevent duplicate handlers
_configured_loggers: set[str] = set()


def setup_logger(name: str, filename: str) -> logging.Logger:
    """Setup a logger with file and console handlers.

    Args:
        name: Logger name (e.g., 'figma_inspector')
        filename: Log file name (e.g., 'cli.log')

    Returns:
        Configured logger instance
    """
    if name in _configured_loggers:
        return logging.getLogger(name)

    LOG_DIR.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.propagate = False  # Prevent duplicate logs

    # File handler
    fh = logging.FileHandler(LOG_DIR / filename, encoding='utf-8')
    fh.setLevel(logging.INFO)
    fh.setFormatter(logging.Formatter(
        "%(asctime)s [%(name)s] [%(levelname)s] %(message)s"
    ))

    # Console handler (stderr, so stdout carries only the snippet)
    sh = logging.StreamHandler()
    sh.setLevel(logging.WARNING)
    sh.setFormatter(logging.Formatter(
        "%(asctime)s [%(name)s] %(message)s"
    ))

    logger.addHandler(fh)
    logger.addHandler(sh)

    _configured_loggers.add(name)
    return logger


def get_cli_logger() -> logging.Logger:
    """Logger for the command line entry point.

    Configures the package root so library loggers (figma_inspector.*)
    share the same handlers.
    """
    return setup_logger("figma_inspector", "cli.log")
