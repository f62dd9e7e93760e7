"""Project scaffolding for `genkan init`."""

from pathlib import Path
from typing import List

from genkan.contexts.rendering.exceptions import ScaffoldError
from genkan.contexts.rendering.logger import _log_info

CONFIG_FILENAME = "config.toml"
PROJECT_DIRECTORIES = ("themes", "output")

STARTER_CONFIG = """\
[profile]
name = "Your Name"
bio = "Welcome to my link page!"

[profile.light]
# URL, local path or data URI
avatar = ""

[[profile.social_links]]
title = "GitHub"
icon = "🐙"
url = "https://github.com/yourname"

[theme]
name = "simple"
button_style = "rounded"

[theme.typography.default]
font = "-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif"

[theme.light]
primary_color = "#3b82f6"
background_color = "#ffffff"

[dark_mode]
mode = "auto"

[meta]
title = "My Links"
description = "All my important links in one place"
# favicon = "favicon.png"
show_footer = true

[[links]]
title = "My Website"
url = "https://example.com"
icon = "🌐"
description = "Check out my personal website"

[[links]]
link_type = "space"
height = "16px"

[[links]]
title = "Blog"
url = "https://blog.example.com"
icon = "📝"
"""


def init_project(project_dir: Path) -> List[Path]:
    """
    Create a starter project: config.toml, themes/ and output/.

    Args:
        project_dir: Directory to initialise (created if missing)

    Returns:
        Paths that were created

    Raises:
        ScaffoldError: If config.toml already exists
    """
    project_dir = Path(project_dir)
    config_path = project_dir / CONFIG_FILENAME

    if config_path.exists():
        raise ScaffoldError(f"{config_path} already exists")

    project_dir.mkdir(parents=True, exist_ok=True)
    config_path.write_text(STARTER_CONFIG, encoding="utf-8")
    created = [config_path]

    for name in PROJECT_DIRECTORIES:
        directory = project_dir / name
        if not directory.exists():
            directory.mkdir()
            created.append(directory)

    _log_info(f"Initialized project in {project_dir}")
    return created
