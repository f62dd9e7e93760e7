"""
Assets context logger.

Provides logging interface for the assets context with automatic [assets] prefix.
All asset modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[assets]"


def _log_debug(message: str) -> None:
    """Log debug message with [assets] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_embedded(subject: str, kind: str, size_bytes: int) -> None:
    """Log a successfully embedded asset."""
    _log_debug(f"Embedded {subject} as {kind} ({size_bytes} bytes)")


def log_compressed(reference: str, original_size: int, final_size: int, target: int) -> None:
    """Log a raster that was downscaled before embedding."""
    _log_debug(
        f"Compressed {reference} from {original_size} to {final_size} bytes "
        f"(target size: {target}px)"
    )
