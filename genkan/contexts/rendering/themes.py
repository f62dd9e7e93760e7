"""
Theme lookup and template rendering.

A theme is a directory holding:
- template.html  (required) Jinja2 template for the page
- style.css      (required) Jinja2 template for the stylesheet
- script.js      (optional) copied verbatim into the page

Themes are looked up by name in, in order: $GENKAN_THEMES_PATH, ./themes,
../themes, and finally the themes bundled with the package.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from jinja2 import DictLoader, Environment, TemplateError, select_autoescape
from markupsafe import Markup

from genkan.contexts.assets.sources import is_image_reference
from genkan.contexts.assets.vector import is_inline_svg, strip_inline_marker
from genkan.contexts.rendering.exceptions import (
    ThemeFileError,
    ThemeNotFoundError,
    ThemeRenderError,
)
from genkan.contexts.rendering.logger import _log_debug

load_dotenv()

BUNDLED_THEMES_PATH = Path(__file__).resolve().parents[2] / "themes"

HTML_TEMPLATE = "template.html"
CSS_TEMPLATE = "style.css"
SCRIPT_FILE = "script.js"


def theme_search_roots(base_dir: Optional[Path] = None) -> List[Path]:
    """
    Directories searched for themes, highest priority first.

    Args:
        base_dir: Directory relative lookups start from (default: cwd)
    """
    base_dir = Path.cwd() if base_dir is None else Path(base_dir)

    roots = []
    env_root = os.getenv("GENKAN_THEMES_PATH")
    if env_root:
        roots.append(Path(env_root))
    roots.extend([base_dir / "themes", base_dir.parent / "themes", BUNDLED_THEMES_PATH])
    return roots


def find_theme_path(theme_name: str, search_roots: Optional[List[Path]] = None) -> Path:
    """
    Locate a theme directory by name.

    Args:
        theme_name: Name from [theme].name
        search_roots: Override the default search roots

    Returns:
        First existing <root>/<theme_name> directory

    Raises:
        ThemeNotFoundError: If no root contains the theme
    """
    if search_roots is None:
        search_roots = theme_search_roots()

    searched = []
    for root in search_roots:
        candidate = root / theme_name
        searched.append(candidate)
        if candidate.is_dir():
            _log_debug(f"Found theme '{theme_name}' at {candidate}")
            return candidate

    raise ThemeNotFoundError(theme_name, searched)


@dataclass
class ThemeSources:
    """Raw contents of a theme directory."""

    path: Path
    html: str
    css: str
    js: str = ""


def _read_theme_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ThemeFileError(path, original_error=e) from e


def load_theme(theme_path: Path) -> ThemeSources:
    """
    Read a theme directory.

    Raises:
        ThemeFileError: If template.html or style.css is missing or unreadable
    """
    theme_path = Path(theme_path)
    script_path = theme_path / SCRIPT_FILE

    return ThemeSources(
        path=theme_path,
        html=_read_theme_file(theme_path / HTML_TEMPLATE),
        css=_read_theme_file(theme_path / CSS_TEMPLATE),
        js=_read_theme_file(script_path) if script_path.is_file() else "",
    )


def inline_svg_filter(value: Any) -> Markup:
    """Emit a marker-prefixed icon as raw markup."""
    return Markup(strip_inline_marker(value))


def create_environment(sources: ThemeSources) -> Environment:
    """
    Build the Jinja2 environment for one theme.

    HTML templates are autoescaped; the stylesheet is not. Templates test for
    embedded SVG icons with `{% if icon is inline_svg %}` and print them with
    `{{ icon | inline_svg }}`. `{% if icon is image_reference %}` tells image
    sources apart from emoji or text icons.
    """
    env = Environment(
        loader=DictLoader({HTML_TEMPLATE: sources.html, CSS_TEMPLATE: sources.css}),
        autoescape=select_autoescape(enabled_extensions=("html",), default_for_string=False),
        keep_trailing_newline=True,
    )
    env.tests["inline_svg"] = is_inline_svg
    env.tests["image_reference"] = is_image_reference
    env.filters["inline_svg"] = inline_svg_filter
    return env


class ThemeRenderer:
    """
    Renders a theme's stylesheet and page template.

    Templates are compiled lazily and cached per renderer.
    """

    def __init__(self, sources: ThemeSources):
        self.sources = sources
        self.env = create_environment(sources)

    @classmethod
    def from_path(cls, theme_path: Path) -> "ThemeRenderer":
        return cls(load_theme(theme_path))

    @property
    def js(self) -> str:
        return self.sources.js

    def render(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render one theme template.

        Args:
            template_name: HTML_TEMPLATE or CSS_TEMPLATE
            context: Template variables

        Returns:
            Rendered text

        Raises:
            ThemeRenderError: On template syntax or rendering errors
        """
        try:
            template = self.env.get_template(template_name)
            return template.render(**context)
        except TemplateError as e:
            raise ThemeRenderError(
                f"Failed to render {template_name}",
                template_name=template_name,
                theme_path=self.sources.path,
                original_error=e,
            ) from e

    def render_css(self, context: Dict[str, Any]) -> str:
        return self.render(CSS_TEMPLATE, context)

    def render_html(self, context: Dict[str, Any]) -> str:
        return self.render(HTML_TEMPLATE, context)
