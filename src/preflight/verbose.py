"""Verbose logging configuration for debug output."""

from __future__ import annotations

import logging
import sys
from pathlib import Path


def setup_logger(
    debug_file: Path | None = None,
    verbose: bool = False,
    logger_name: str = "preflight",
) -> logging.Logger:
    """
    Configure and return a logger for debug output.

    Writes to debug_file when one is given, and to stderr if verbose=True.
    With neither, the logger is silenced so diagnostics never leak into the
    console report.

    Args:
        debug_file: Optional path to a debug log file
        verbose: If True, also log to stderr.
        logger_name: Name of the logger instance

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(logger_name)

    # Clear any existing handlers for this specific logger
    logger.handlers.clear()

    logger.disabled = False
    logger.propagate = False
    logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(message)s", datefmt="%Y-%m-%dT%H:%M:%S"
    )

    if debug_file is not None:
        debug_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(debug_file, mode="a")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if verbose:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(logging.DEBUG)
        stderr_handler.setFormatter(formatter)
        logger.addHandler(stderr_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger
