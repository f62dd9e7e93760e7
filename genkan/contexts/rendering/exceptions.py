"""Custom exceptions for the rendering context."""

from pathlib import Path
from typing import List, Optional


class ThemeNotFoundError(FileNotFoundError):
    """
    Raised when no theme directory matches the configured theme name.

    Attributes:
        theme_name: Name from [theme].name
        searched: Directories that were checked, in order
    """

    def __init__(self, theme_name: str, searched: List[Path]):
        self.theme_name = theme_name
        self.searched = searched

        locations = "\n".join(f"  - {path}" for path in searched)
        super().__init__(
            f"Theme '{theme_name}' not found. Please ensure the theme directory exists "
            f"in the themes folder.\nSearched:\n{locations}"
        )


class ThemeFileError(FileNotFoundError):
    """Raised when a required theme file (template.html, style.css) is missing or unreadable."""

    def __init__(self, file_path: Path, original_error: Optional[Exception] = None):
        self.file_path = file_path
        self.original_error = original_error
        super().__init__(f"Failed to read theme file: {file_path}")


class ThemeRenderError(Exception):
    """
    Exception raised when a theme template fails to compile or render.

    Attributes:
        message: Error description
        template_name: Name of the template (e.g., 'style.css')
        theme_path: Directory of the theme
        original_error: The original Jinja2 error
    """

    def __init__(
        self,
        message: str,
        template_name: Optional[str] = None,
        theme_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_name = template_name
        self.theme_path = theme_path
        self.original_error = original_error

        # Build enhanced error message
        parts = [message]

        if template_name:
            parts.append(f"\nTemplate: {template_name}")
        if theme_path:
            parts.append(f"Theme: {theme_path}")

        if original_error:
            line = getattr(original_error, "lineno", None)
            location = f" (line {line})" if line else ""
            parts.append(f"\nOriginal error{location}: {original_error}")

        super().__init__("\n".join(parts))


class OutputWriteError(OSError):
    """Raised when the generated page cannot be written."""

    def __init__(self, output_path: Path, original_error: Optional[Exception] = None):
        self.output_path = output_path
        self.original_error = original_error
        detail = f": {original_error}" if original_error else ""
        super().__init__(f"Failed to write output file {output_path}{detail}")


class ScaffoldError(FileExistsError):
    """Raised when `genkan init` would overwrite an existing project."""

    pass
