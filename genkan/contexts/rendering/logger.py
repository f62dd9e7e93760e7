"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Iterable, Optional

from loguru import logger

from genkan.utils.diagnostics import Diagnostic, Severity
from genkan.utils.logger import setup_logger as _setup_logger
from genkan.utils.timestamp import format_elapsed

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(
    log_dir: Optional[Path] = None, config_path: Optional[Path] = None, verbose: bool = False
) -> Optional[Path]:
    """
    Setup logger for a build.

    Configures loguru with provenance tracking and rendering-specific context.

    Args:
        log_dir: Directory for this build's log file (None for console only)
        config_path: Config file recorded in the provenance header
        verbose: Show debug output on the console

    Returns:
        Path to log file, or None

    Example:
        from genkan.contexts.rendering.logger import setup_rendering_logger, _log_info

        setup_rendering_logger(log_dir)
        _log_info("Starting build...")
    """
    return _setup_logger(
        context_name="build",
        log_dir=log_dir,
        extra_provenance={"Config": config_path},
        verbose=verbose,
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_generation_start(theme_name: str, theme_path: Path, output_path: Path) -> None:
    """Log start of generation with context."""
    _log_info(f"Using theme: {theme_name} ({theme_path})")
    _log_debug(f"  Output: {output_path}")


def log_diagnostics(diagnostics: Iterable[Diagnostic]) -> None:
    """Report recoverable problems collected during a run."""
    for diagnostic in diagnostics:
        if diagnostic.severity == Severity.ERROR:
            _log_error(f"Error: {diagnostic}")
        else:
            _log_warning(f"Warning: {diagnostic}")


def log_generation_result(result) -> None:
    """
    Log generation result with diagnostics.

    Args:
        result: GenerationResult from Generator.generate()
    """
    log_diagnostics(result.diagnostics)

    _log_success(f"Generated page at: {result.output_path}")
    _log_info(
        f"{result.assets_embedded} asset(s) embedded, {len(result.diagnostics)} warning(s) "
        f"({format_elapsed(result.elapsed_s)})"
    )
    if result.qr_generated:
        _log_debug("  QR code generated")
