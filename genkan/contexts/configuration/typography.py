"""
Typography cascade resolution.

Each text role (header, bio, link title, link description, plus the page-wide
default) gets a fully resolved style by taking, per field, the first value
present along an ordered chain:

    size/font/weight/style:  role -> [theme.typography.default] -> role preset -> built-in
    color:                   role -> legacy light color -> default -> built-in
    color_dark:              role -> legacy dark color -> default -> (absent)

The dark color has no built-in fallback: leaving it absent means "do not
override the color in dark mode", so dark-mode overrides stay opt-in per theme.
"""

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from genkan.contexts.configuration.config import Theme, TypographyStyle
from genkan.contexts.configuration.defaults import BUILTIN_TYPOGRAPHY, TYPOGRAPHY_ROLE_PRESETS

# Role name -> attribute holding its legacy color in [theme.light] / [theme.dark]
TYPOGRAPHY_ROLES: Dict[str, Optional[str]] = {
    "default": None,
    "header": "header_color",
    "bio": "bio_color",
    "link_title": "link_title_color",
    "link_description": "link_description_color",
}


@dataclass
class ResolvedTypography:
    size: str
    font: str
    weight: str
    style: str
    color: str
    color_dark: Optional[str] = None


def first_present(*candidates: Optional[str]) -> Optional[str]:
    """First candidate that is not None."""
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


def resolve_typography(
    element: TypographyStyle,
    default: TypographyStyle,
    legacy_color: Optional[str] = None,
    legacy_color_dark: Optional[str] = None,
    preset: Optional[Mapping[str, str]] = None,
) -> ResolvedTypography:
    """
    Resolve one role's style through the cascade.

    Args:
        element: Role-specific overrides
        default: Global overrides from [theme.typography.default]
        legacy_color: Role color from [theme.light] (e.g., header_color)
        legacy_color_dark: Role color from [theme.dark]
        preset: Role built-ins (size/weight) tried after the global default

    Returns:
        ResolvedTypography with every field set except possibly color_dark

    Example:
        >>> resolve_typography(TypographyStyle(), TypographyStyle(color="#000000"), "#abc").color
        '#abc'
    """
    preset = preset or {}

    def pick(name: str) -> str:
        return first_present(
            getattr(element, name), getattr(default, name), preset.get(name), BUILTIN_TYPOGRAPHY[name]
        )

    return ResolvedTypography(
        size=pick("size"),
        font=pick("font"),
        weight=pick("weight"),
        style=pick("style"),
        color=first_present(
            element.color, legacy_color, default.color, BUILTIN_TYPOGRAPHY["color"]
        ),
        color_dark=first_present(element.color_dark, legacy_color_dark, default.color_dark),
    )


def resolve_theme_typography(theme: Theme) -> Dict[str, ResolvedTypography]:
    """
    Resolve every typography role of a theme.

    Legacy per-role colors come from [theme.light] and [theme.dark].

    Returns:
        Mapping of role name (default, header, bio, link_title, link_description)
        to its resolved style
    """
    typography = theme.typography
    resolved = {}

    for role, color_attribute in TYPOGRAPHY_ROLES.items():
        legacy_color = getattr(theme.light, color_attribute) if color_attribute else None
        legacy_color_dark = getattr(theme.dark, color_attribute) if color_attribute else None
        resolved[role] = resolve_typography(
            getattr(typography, role),
            typography.default,
            legacy_color=legacy_color,
            legacy_color_dark=legacy_color_dark,
            preset=TYPOGRAPHY_ROLE_PRESETS.get(role),
        )

    return resolved
