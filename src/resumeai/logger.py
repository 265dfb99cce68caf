"""
Logging setup for resumeai.

Provides a loguru configuration plus wrapper functions that add the [resume]
prefix. Modules import the wrappers from here rather than calling loguru
directly.
"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONTEXT_PREFIX = "[resume]"


def setup_logger(log_dir: Optional[Path] = None, console_level: str = "INFO") -> Optional[Path]:
    """
    Configure loguru sinks for a command line run.

    Args:
        log_dir: Directory for the session log file; console only when omitted
        console_level: Minimum level printed to stderr

    Returns:
        Path to the log file, or None when no file sink was added
    """
    logger.remove()
    logger.add(
        sys.stderr,
        format="{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>",
        level=console_level,
        colorize=True,
    )
    if log_dir is None:
        return None

    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / "resumeai.log"
    logger.add(
        log_file, format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}", level="DEBUG"
    )
    _log_debug(f"Command: {' '.join(sys.argv)}")
    return log_file


def _log_info(message: str) -> None:
    """Log info message with [resume] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [resume] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [resume] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [resume] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [resume] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
