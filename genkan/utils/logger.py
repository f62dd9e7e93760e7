"""
Generic logger setup utilities.

Provides reusable loguru configuration with provenance tracking.
Context-specific wrappers are defined in contexts/{context}/logger.py.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

# Default level colors for console output
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

CONSOLE_FORMAT = "<level>{level: <7}</level> | <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"


def setup_logger(
    context_name: str,
    log_dir: Optional[Path] = None,
    extra_provenance: dict = None,
    verbose: bool = False,
    level_colors: dict = {},
) -> Optional[Path]:
    """
    Configure loguru for a context with provenance tracking.

    Always logs to the console. When a log directory is given, a file sink
    capturing everything down to DEBUG is added and a provenance header
    (script, command, working directory, Python version) is written.

    Args:
        context_name: Context identifier (e.g., "build", "validate")
        log_dir: Directory for this logging session (None for console only)
        extra_provenance: Additional key-value pairs for provenance header
        verbose: Show DEBUG messages on the console
        level_colors: Override default level colors (e.g., {"INFO": "<cyan>"})

    Returns:
        Path to log file, or None when logging to console only

    Example:
        from genkan.utils.logger import setup_logger

        log_file = setup_logger(
            context_name="build",
            log_dir=Path("logs/build_20251114_123456"),
            extra_provenance={"Theme": "simple"},
        )
    """
    # Remove default logger
    logger.remove()

    # Apply level colors (defaults + overrides)
    colors = {**LEVEL_COLORS, **level_colors}
    for level_name, color in colors.items():
        logger.level(level_name, color=color)

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level="DEBUG" if verbose else "INFO",
        colorize=True,
    )

    if log_dir is None:
        return None

    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"
    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")

    log_provenance(extra_provenance)

    return log_file


def log_provenance(extra_context: dict = None) -> None:
    """
    Log execution provenance to the file sink.

    Logs standard context (script, command, working directory, Python version)
    plus any additional context provided. Written at DEBUG so the console stays quiet.

    Args:
        extra_context: Additional key-value pairs to log
    """
    logger.debug("=" * 80)
    logger.debug(f"Script: {sys.argv[0]}")
    logger.debug(f"Command: {' '.join(sys.argv)}")
    logger.debug(f"Working directory: {Path.cwd()}")
    logger.debug(f"Python: {sys.version.split()[0]}")

    if extra_context:
        for key, value in extra_context.items():
            logger.debug(f"{key}: {value}")

    logger.debug("=" * 80)
