"""
Configuration context logger.

Provides logging interface for the configuration context with automatic [config] prefix.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[config]"


def _log_info(message: str) -> None:
    """Log info message with [config] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [config] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_config_loaded(config_path: Path, link_count: int) -> None:
    """Log a successfully loaded config file."""
    _log_info(f"Loaded config from: {config_path}")
    _log_debug(f"  Links: {link_count}")
