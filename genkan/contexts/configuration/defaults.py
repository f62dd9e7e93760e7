"""
Default values for Genkan configuration.

Provides shared defaults used by:
- config.py (dataclass field defaults)
- typography.py (last step of the typography cascade)
- scaffold.py (the starter config.toml written by `genkan init`)
"""

from typing import Dict

DEFAULT_FONT_FAMILY = "system-ui, -apple-system, sans-serif"

# Built-in typography, used when neither the role nor [theme.typography.default] sets a value
BUILTIN_TYPOGRAPHY = {
    "size": "16px",
    "font": DEFAULT_FONT_FAMILY,
    "weight": "normal",
    "style": "normal",
    "color": "#000000",
}

# Per-role built-ins, consulted after [theme.typography.default] and before BUILTIN_TYPOGRAPHY.
# No colors here: the legacy [theme.light] colors fill that step of the cascade.
TYPOGRAPHY_ROLE_PRESETS: Dict[str, Dict[str, str]] = {
    "header": {"size": "2rem", "weight": "700"},
    "bio": {"size": "1.1rem"},
    "link_title": {"size": "1.1rem", "weight": "600"},
    "link_description": {"size": "0.9rem"},
}

# Light theme colors
DEFAULT_LIGHT_COLORS = {
    "primary_color": "#000000",
    "secondary_color": "#000000",
    "background_color": "#ffffff",
    "header_color": "#000000",
    "bio_color": "rgba(0, 0, 0, 0.7)",
    "link_title_color": "#000000",
    "link_description_color": "rgba(0, 0, 0, 0.6)",
}

DEFAULT_BUTTON_STYLE = "rounded"
DEFAULT_LINK_SPACING = "24px"

# Maximum pixel dimension per asset role
DEFAULT_IMAGE_SIZES = {
    "avatar_size": 512,
    "social_icon_size": 128,
    "link_icon_size": 128,
    "favicon_size": 64,
}

DEFAULT_MAX_WORKERS = 4

DARK_MODE_OPTIONS = ("auto", "light", "dark", "disable")
DEFAULT_DARK_MODE = "disable"

LINK_TYPES = ("block", "space")
DEFAULT_LINK_TYPE = "block"
