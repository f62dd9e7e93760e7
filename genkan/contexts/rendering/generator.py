"""
Page generation pipeline.

Turns a validated GenkanConfig and a theme into one self-contained HTML file:

1. Resolve every asset reference (avatars, social icons, link icons, favicon)
   into embeddable values, optionally on a bounded thread pool
2. Resolve typography roles through the cascade
3. Generate the share QR code when a page URL is configured
4. Render style.css, then template.html with the CSS and script inlined
5. Write the page, creating the output directory if needed

Structural problems (invalid config, missing theme, template errors, unwritable
output) raise. Problems with individual assets are collected as diagnostics
and reported once the run completes.
"""

import copy
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

from genkan.contexts.assets.exceptions import QRGenerationError
from genkan.contexts.assets.qr import generate_qr_code
from genkan.contexts.assets.resolver import (
    AssetResolution,
    EmbedKind,
    resolve_asset,
    resolve_favicon,
)
from genkan.contexts.configuration.config import (
    GenkanConfig,
    Link,
    Meta,
    Profile,
    validate_config,
)
from genkan.contexts.configuration.typography import ResolvedTypography, resolve_theme_typography
from genkan.contexts.rendering.exceptions import OutputWriteError
from genkan.contexts.rendering.logger import (
    _log_debug,
    log_generation_result,
    log_generation_start,
)
from genkan.contexts.rendering.themes import ThemeRenderer
from genkan.utils.diagnostics import Diagnostic, attribute, warning

EMBEDDED_KINDS = (EmbedKind.DATA_URI, EmbedKind.INLINE_SVG)


@dataclass
class AssetJob:
    """
    One asset reference to resolve and the field its result is written back to.

    Attributes:
        subject: Human-facing field name used in diagnostics
        owner: Object holding the field (a copy, never the loaded config)
        attribute: Field name on owner
        target_size: Maximum pixel dimension for rasters
        favicon: Resolve with favicon rules
        dropped_value: Written back when the asset is dropped
    """

    subject: str
    owner: Any
    attribute: str
    target_size: int
    favicon: bool = False
    dropped_value: Optional[str] = None

    @property
    def reference(self) -> Optional[str]:
        return getattr(self.owner, self.attribute)

    def resolve(self, session: Optional[requests.Session] = None) -> AssetResolution:
        if self.favicon:
            return resolve_favicon(self.reference, self.target_size, session=session)
        return resolve_asset(self.reference, self.target_size, session=session)

    def apply(self, resolution: AssetResolution) -> None:
        if resolution.kind == EmbedKind.EMPTY:
            return
        value = resolution.value if resolution.value is not None else self.dropped_value
        setattr(self.owner, self.attribute, value)


@dataclass
class PreparedPage:
    """
    Everything the templates need except the rendered CSS.

    Attributes:
        profile: Profile with embedded avatars and social icons
        links: Links with embedded icons
        meta: Meta with the embedded favicon
        typography: Resolved style per role (default, header, bio, ...)
        qr_code_data: PNG data URI, or None when no page URL or generation failed
        resolutions: Outcome of every asset job, in job order
        diagnostics: Recoverable problems met while preparing
    """

    profile: Profile
    links: List[Link]
    meta: Meta
    typography: Dict[str, ResolvedTypography]
    qr_code_data: Optional[str] = None
    resolutions: List[AssetResolution] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)


@dataclass
class GenerationResult:
    """
    Result of a successful generation.

    Attributes:
        output_path: Path of the written page
        diagnostics: Validation warnings and per-asset problems
        assets_embedded: Assets turned into data URIs or inline SVG
        assets_degraded: Assets kept as their original reference or dropped
        qr_generated: Whether a QR code was embedded
        elapsed_s: Wall-clock duration of the run
    """

    output_path: Path
    diagnostics: List[Diagnostic] = field(default_factory=list)
    assets_embedded: int = 0
    assets_degraded: int = 0
    qr_generated: bool = False
    elapsed_s: float = 0.0


def _link_subject(kind: str, link_title: Optional[str], index: int) -> str:
    if link_title:
        return f"{kind} '{link_title}' icon"
    return f"{kind} #{index} icon"


class Generator:
    """
    Builds a page from a configuration and a theme directory.

    Example:
        config = load_config(Path("config.toml"))
        theme_path = find_theme_path(config.theme.name)
        result = Generator(config, theme_path, Path("output/index.html")).generate()
    """

    def __init__(
        self,
        config: GenkanConfig,
        theme_path: Path,
        output_path: Path,
        session: Optional[requests.Session] = None,
        max_workers: Optional[int] = None,
    ):
        """
        Args:
            config: Loaded configuration
            theme_path: Theme directory (see find_theme_path)
            output_path: Destination HTML file
            session: Optional requests session for remote assets
            max_workers: Asset resolution threads (default: [build].max_workers)
        """
        self.config = config
        self.theme_path = Path(theme_path)
        self.output_path = Path(output_path)
        self.session = session
        self.max_workers = max_workers if max_workers is not None else config.build.max_workers

    # -------------------------------------------------------------------------
    # Assets
    # -------------------------------------------------------------------------

    def asset_jobs(self, profile: Profile, links: List[Link], meta: Meta) -> List[AssetJob]:
        """List asset jobs for copies of the profile, links and meta."""
        sizes = self.config.image
        jobs = [
            AssetJob("light mode avatar", profile.light, "avatar", sizes.avatar_size, dropped_value=""),
            AssetJob("dark mode avatar", profile.dark, "avatar", sizes.avatar_size, dropped_value=""),
        ]

        for idx, social_link in enumerate(profile.social_links):
            jobs.append(
                AssetJob(
                    _link_subject("social link", social_link.title, idx),
                    social_link,
                    "icon",
                    sizes.social_icon_size,
                    dropped_value="",
                )
            )

        for idx, link in enumerate(links):
            jobs.append(
                AssetJob(_link_subject("link", link.title, idx), link, "icon", sizes.link_icon_size)
            )

        jobs.append(AssetJob("favicon", meta, "favicon", sizes.favicon_size, favicon=True))

        return [job for job in jobs if job.reference]

    def resolve_assets(self, jobs: List[AssetJob]) -> List[AssetResolution]:
        """
        Resolve all jobs, returning results in job order.

        Runs on a thread pool when max_workers > 1. Each job writes a distinct
        field, so the page is identical to a sequential run.
        """
        if self.max_workers <= 1 or len(jobs) <= 1:
            return [job.resolve(self.session) for job in jobs]

        workers = min(self.max_workers, len(jobs))
        _log_debug(f"Resolving {len(jobs)} asset(s) on {workers} worker(s)")
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(lambda job: job.resolve(self.session), jobs))

    # -------------------------------------------------------------------------
    # Pipeline steps
    # -------------------------------------------------------------------------

    def _generate_qr(self, page_url: Optional[str]) -> tuple[Optional[str], List[Diagnostic]]:
        if not page_url:
            return None, []

        try:
            return generate_qr_code(page_url), []
        except QRGenerationError as e:
            return None, [warning(f"{e}. Omitting QR code.", page_url).for_subject("meta.page_url")]

    def prepare(self) -> PreparedPage:
        """
        Resolve assets, typography and the QR code.

        Works on copies: the loaded config is never modified.
        """
        profile = copy.deepcopy(self.config.profile)
        links = copy.deepcopy(self.config.links)
        meta = copy.deepcopy(self.config.meta)

        jobs = self.asset_jobs(profile, links, meta)
        resolutions = self.resolve_assets(jobs)

        diagnostics = []
        for job, resolution in zip(jobs, resolutions):
            job.apply(resolution)
            diagnostics.extend(attribute(resolution.diagnostics, job.subject))

        qr_code_data, qr_diagnostics = self._generate_qr(meta.page_url)
        diagnostics.extend(qr_diagnostics)

        return PreparedPage(
            profile=profile,
            links=links,
            meta=meta,
            typography=resolve_theme_typography(self.config.theme),
            qr_code_data=qr_code_data,
            resolutions=resolutions,
            diagnostics=diagnostics,
        )

    def css_context(self, page: PreparedPage) -> Dict[str, Any]:
        context = {"theme": self.config.theme, "profile": page.profile}
        for role, style in page.typography.items():
            context[f"typography_{role}"] = style
        return context

    def html_context(self, page: PreparedPage, css: str, js: str) -> Dict[str, Any]:
        """
        Context for template.html.

        qr_code_data is only present when a QR code was generated, so themes
        can test it with `is defined`.
        """
        dark_mode = copy.deepcopy(self.config.dark_mode)
        dark_mode.mode = dark_mode.mode.lower()

        context = {
            "profile": page.profile,
            "theme": self.config.theme,
            "meta": page.meta,
            "links": page.links,
            "dark_mode": dark_mode,
            "css": css,
            "js": js,
        }
        for role, style in page.typography.items():
            context[f"typography_{role}"] = style
        if page.qr_code_data is not None:
            context["qr_code_data"] = page.qr_code_data
        return context

    def write(self, html: str) -> None:
        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self.output_path.write_text(html, encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(self.output_path, original_error=e) from e

    def generate(self) -> GenerationResult:
        """
        Run the full pipeline and write the page.

        Returns:
            GenerationResult with diagnostics and counts

        Raises:
            ConfigValidationError: If the configuration breaks a validation rule
            ThemeFileError: If the theme lacks template.html or style.css
            ThemeRenderError: If a template fails to compile or render
            OutputWriteError: If the page cannot be written
        """
        start = time.perf_counter()

        diagnostics = validate_config(self.config)
        renderer = ThemeRenderer.from_path(self.theme_path)
        log_generation_start(self.config.theme.name, self.theme_path, self.output_path)

        page = self.prepare()
        diagnostics.extend(page.diagnostics)

        css = renderer.render_css(self.css_context(page))
        html = renderer.render_html(self.html_context(page, css, renderer.js))
        self.write(html)

        result = GenerationResult(
            output_path=self.output_path,
            diagnostics=diagnostics,
            assets_embedded=sum(1 for r in page.resolutions if r.kind in EMBEDDED_KINDS),
            assets_degraded=sum(1 for r in page.resolutions if r.degraded),
            qr_generated=page.qr_code_data is not None,
            elapsed_s=time.perf_counter() - start,
        )
        log_generation_result(result)
        return result
