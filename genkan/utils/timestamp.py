"""Timestamp formatting utilities."""

from datetime import datetime


def now() -> str:
    """Current local time formatted for directory names (e.g., 20251114_123456)."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def format_elapsed(seconds: float) -> str:
    """
    Format an elapsed duration compactly.

    Examples:
        format_elapsed(0.25)   # "250ms"
        format_elapsed(3.5)    # "3.50s"
    """
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    return f"{seconds:.2f}s"
