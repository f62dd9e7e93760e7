"""
Rendering Context

Responsibilities:
- Locates themes and renders their Jinja2 templates
- Orchestrates asset resolution, typography and QR generation into one page
- Writes the output file and reports collected diagnostics
- Scaffolds new projects

Owns: Template context, output file, run summary
Never: Fetches or transforms asset bytes directly (delegates to assets context)
"""

from genkan.contexts.rendering.exceptions import (
    OutputWriteError,
    ScaffoldError,
    ThemeFileError,
    ThemeNotFoundError,
    ThemeRenderError,
)
from genkan.contexts.rendering.generator import GenerationResult, Generator
from genkan.contexts.rendering.scaffold import init_project
from genkan.contexts.rendering.themes import ThemeRenderer, find_theme_path, load_theme

__all__ = [
    "GenerationResult",
    "Generator",
    "OutputWriteError",
    "ScaffoldError",
    "ThemeFileError",
    "ThemeNotFoundError",
    "ThemeRenderError",
    "ThemeRenderer",
    "find_theme_path",
    "init_project",
    "load_theme",
]
