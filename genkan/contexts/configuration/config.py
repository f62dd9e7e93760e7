"""
Genkan configuration schema, loading and validation.

The schema is a tree of dataclasses. A TOML file is parsed with tomllib and
merged onto OmegaConf's structured view of the schema, which fills defaults,
coerces and type-checks values, and rejects unknown keys. Semantic rules that
the type system cannot express live in validate_config().

Example config.toml:

    [profile]
    name = "Your Name"
    bio = "Welcome to my link page!"

    [theme]
    name = "simple"

    [meta]
    title = "My Links"
    description = "All my important links"

    [[links]]
    title = "My Website"
    url = "https://example.com"
"""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from omegaconf import MISSING, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from genkan.contexts.configuration.defaults import (
    DARK_MODE_OPTIONS,
    DEFAULT_BUTTON_STYLE,
    DEFAULT_DARK_MODE,
    DEFAULT_FONT_FAMILY,
    DEFAULT_IMAGE_SIZES,
    DEFAULT_LIGHT_COLORS,
    DEFAULT_LINK_SPACING,
    DEFAULT_LINK_TYPE,
    DEFAULT_MAX_WORKERS,
    LINK_TYPES,
)
from genkan.contexts.configuration.exceptions import ConfigLoadError, ConfigValidationError
from genkan.contexts.configuration.logger import log_config_loaded
from genkan.utils.diagnostics import Diagnostic, warning

# =============================================================================
# Schema
# =============================================================================


@dataclass
class ProfileAssets:
    """Avatar and background for one color scheme."""

    avatar: str = ""
    background: Optional[str] = None
    background_image: Optional[str] = None


@dataclass
class SocialLink:
    icon: str = MISSING
    url: str = MISSING
    title: Optional[str] = None


@dataclass
class Profile:
    """
    Profile header shown at the top of the page.

    Attributes:
        name: Display name (required, non-empty)
        bio: Short text under the name
        social_links: Icon row under the bio
        light: Avatar/background for light mode
        dark: Avatar/background for dark mode (empty avatar reuses the light one)
    """

    name: str = MISSING
    bio: str = MISSING
    social_links: List[SocialLink] = field(default_factory=list)
    light: ProfileAssets = field(default_factory=ProfileAssets)
    dark: ProfileAssets = field(default_factory=ProfileAssets)


@dataclass
class TypographyStyle:
    """Per-role text style overrides. Every field is optional."""

    size: Optional[str] = None
    font: Optional[str] = None
    weight: Optional[str] = None
    style: Optional[str] = None
    color: Optional[str] = None
    color_dark: Optional[str] = None


@dataclass
class Typography:
    default: TypographyStyle = field(default_factory=TypographyStyle)
    header: TypographyStyle = field(default_factory=TypographyStyle)
    bio: TypographyStyle = field(default_factory=TypographyStyle)
    link_title: TypographyStyle = field(default_factory=TypographyStyle)
    link_description: TypographyStyle = field(default_factory=TypographyStyle)


@dataclass
class ThemeColors:
    """Light-mode colors. Each text color doubles as the legacy typography color."""

    primary_color: str = DEFAULT_LIGHT_COLORS["primary_color"]
    secondary_color: str = DEFAULT_LIGHT_COLORS["secondary_color"]
    background_color: str = DEFAULT_LIGHT_COLORS["background_color"]
    header_color: str = DEFAULT_LIGHT_COLORS["header_color"]
    bio_color: str = DEFAULT_LIGHT_COLORS["bio_color"]
    link_title_color: str = DEFAULT_LIGHT_COLORS["link_title_color"]
    link_description_color: str = DEFAULT_LIGHT_COLORS["link_description_color"]


@dataclass
class DarkThemeColors:
    """Dark-mode colors. Unset means the theme's own dark palette applies."""

    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    background_color: Optional[str] = None
    header_color: Optional[str] = None
    bio_color: Optional[str] = None
    link_title_color: Optional[str] = None
    link_description_color: Optional[str] = None


@dataclass
class Theme:
    name: str = MISSING
    button_style: str = DEFAULT_BUTTON_STYLE
    font_family: str = DEFAULT_FONT_FAMILY
    link_spacing: str = DEFAULT_LINK_SPACING
    typography: Typography = field(default_factory=Typography)
    light: ThemeColors = field(default_factory=ThemeColors)
    dark: DarkThemeColors = field(default_factory=DarkThemeColors)


@dataclass
class Meta:
    """
    Page metadata.

    Attributes:
        title: <title> and share title fallback
        description: <meta name="description">
        page_url: Public URL of the page; enables the share dialog and QR code
        favicon: URL, local path or data URI
        custom_css: Extra CSS appended after the theme stylesheet
        analytics: Raw snippet inserted before </body>
        show_footer: Show the "made with Genkan" footer
        share_title: Title used by the share dialog
    """

    title: str = MISSING
    description: str = MISSING
    page_url: Optional[str] = None
    favicon: Optional[str] = None
    custom_css: Optional[str] = None
    analytics: Optional[str] = None
    show_footer: bool = True
    share_title: Optional[str] = None


@dataclass
class Link:
    """
    One entry in the link list.

    A "block" link is a button (or a plain text block when url is omitted);
    a "space" link is vertical spacing of the given height.
    """

    title: Optional[str] = None
    url: Optional[str] = None
    icon: Optional[str] = None
    description: Optional[str] = None
    link_type: str = DEFAULT_LINK_TYPE
    height: Optional[str] = None

    def identifier(self, index: int) -> str:
        """Human-facing name for messages: the title, else the position."""
        return self.title if self.title else f"index {index}"


@dataclass
class DarkMode:
    mode: str = DEFAULT_DARK_MODE


@dataclass
class ImageSettings:
    avatar_size: int = DEFAULT_IMAGE_SIZES["avatar_size"]
    social_icon_size: int = DEFAULT_IMAGE_SIZES["social_icon_size"]
    link_icon_size: int = DEFAULT_IMAGE_SIZES["link_icon_size"]
    favicon_size: int = DEFAULT_IMAGE_SIZES["favicon_size"]


@dataclass
class BuildSettings:
    """Asset resolution workers (1 resolves assets one at a time)."""

    max_workers: int = DEFAULT_MAX_WORKERS


@dataclass
class GenkanConfig:
    profile: Profile = MISSING
    theme: Theme = MISSING
    meta: Meta = MISSING
    links: List[Link] = MISSING
    dark_mode: DarkMode = field(default_factory=DarkMode)
    image: ImageSettings = field(default_factory=ImageSettings)
    build: BuildSettings = field(default_factory=BuildSettings)


# =============================================================================
# Loading
# =============================================================================


def config_from_dict(data: Dict[str, Any], config_path: Optional[Path] = None) -> GenkanConfig:
    """
    Map a parsed TOML document onto the schema.

    Args:
        data: Raw nested dict (e.g., from tomllib)
        config_path: Source file, for error messages

    Returns:
        GenkanConfig with defaults filled in

    Raises:
        ConfigLoadError: On unknown keys, wrong types, or missing required keys
    """
    schema = OmegaConf.structured(GenkanConfig)
    try:
        merged = OmegaConf.merge(schema, data)
        return OmegaConf.to_object(merged)
    except OmegaConfBaseException as e:
        raise ConfigLoadError("Invalid configuration", config_path, original_error=e) from e


def parse_config(toml_text: str, config_path: Optional[Path] = None) -> GenkanConfig:
    """Parse TOML text into a GenkanConfig."""
    try:
        data = tomllib.loads(toml_text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigLoadError("Failed to parse TOML config", config_path, original_error=e) from e

    return config_from_dict(data, config_path)


def load_config(config_path: Path) -> GenkanConfig:
    """
    Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML configuration file

    Returns:
        GenkanConfig (not yet validated, see validate_config)

    Raises:
        ConfigLoadError: If the file cannot be read, parsed, or mapped onto the schema
    """
    config_path = Path(config_path)
    try:
        toml_text = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigLoadError("Failed to read config file", config_path, original_error=e) from e

    config = parse_config(toml_text, config_path)
    log_config_loaded(config_path, len(config.links))
    return config


# =============================================================================
# Validation
# =============================================================================


def validate_config(config: GenkanConfig) -> List[Diagnostic]:
    """
    Check semantic rules the schema cannot express.

    Checks that:
    - Profile name is not empty
    - At least one link is defined
    - Dark mode is auto, light, dark or disable (case-insensitive)
    - Link types are block or space, and block links have titles
    - Image sizes and worker count are positive

    Args:
        config: Loaded configuration

    Returns:
        Non-fatal warnings (e.g., a space link without a height)

    Raises:
        ConfigValidationError: On the first rule violated
    """
    diagnostics = []

    if not config.profile.name:
        raise ConfigValidationError("Profile name cannot be empty")

    if not config.links:
        raise ConfigValidationError("At least one link must be defined")

    if config.dark_mode.mode.lower() not in DARK_MODE_OPTIONS:
        raise ConfigValidationError(
            f"Invalid dark_mode.mode '{config.dark_mode.mode}'. "
            "Must be 'auto', 'light', 'dark', or 'disable'"
        )

    for idx, link in enumerate(config.links):
        link_type = link.link_type.lower()

        if link_type not in LINK_TYPES:
            raise ConfigValidationError(
                f"Invalid link_type '{link.link_type}' for link '{link.identifier(idx)}'. "
                "Must be 'block' or 'space'"
            )

        if link_type == "block" and not link.title:
            raise ConfigValidationError(
                f"Link title cannot be empty for block type (link at index {idx})"
            )

        if link_type == "space" and link.height is None:
            diagnostics.append(
                warning(
                    f"Space type link '{link.identifier(idx)}' has no height specified, using default"
                )
            )

    for name, size in vars(config.image).items():
        if size <= 0:
            raise ConfigValidationError(f"image.{name} must be a positive number of pixels, got {size}")

    if config.build.max_workers <= 0:
        raise ConfigValidationError(
            f"build.max_workers must be at least 1, got {config.build.max_workers}"
        )

    return diagnostics
