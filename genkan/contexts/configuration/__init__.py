"""
Configuration Context

Responsibilities:
- Defines the TOML schema for a link page (profile, theme, meta, links, ...)
- Loads and validates config files
- Resolves the typography cascade for each text role

Owns: Config schema, defaults, validation rules, typography resolution
Never: Touches assets or templates
"""

from genkan.contexts.configuration.config import (
    GenkanConfig,
    Link,
    load_config,
    parse_config,
    validate_config,
)
from genkan.contexts.configuration.exceptions import ConfigLoadError, ConfigValidationError
from genkan.contexts.configuration.typography import (
    ResolvedTypography,
    resolve_theme_typography,
    resolve_typography,
)

__all__ = [
    "GenkanConfig",
    "Link",
    "load_config",
    "parse_config",
    "validate_config",
    "ConfigLoadError",
    "ConfigValidationError",
    "ResolvedTypography",
    "resolve_theme_typography",
    "resolve_typography",
]
