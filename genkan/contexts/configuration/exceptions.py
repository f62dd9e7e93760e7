"""Custom exceptions for the configuration context."""

from pathlib import Path
from typing import Optional


class ConfigLoadError(ValueError):
    """
    Raised when a config file cannot be read, parsed, or mapped onto the schema.

    Attributes:
        message: Error description
        config_path: Path of the offending file, if loaded from disk
        original_error: The underlying TOML or OmegaConf error
    """

    def __init__(
        self,
        message: str,
        config_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.config_path = config_path
        self.original_error = original_error

        parts = [message]

        if config_path:
            parts.append(f"\nConfig file: {config_path}")

        if original_error:
            parts.append(f"\nOriginal error: {original_error}")

        super().__init__("\n".join(parts))


class ConfigValidationError(ValueError):
    """Raised when a well-formed config violates a semantic rule (e.g., empty profile name)."""

    pass
