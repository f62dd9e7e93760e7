"""
Asset resolution and embedding.

Turns a raw asset reference into something a page can embed without further
requests: a base64 data URI, inline SVG markup, or (when nothing better is
possible) the original reference. A failure on one asset never propagates:
it is returned as a Diagnostic alongside whatever value could be salvaged.

Degradation policy:
- Remote fetch fails      -> keep the URL (the browser may still load it)
- Local file unreadable   -> keep the path
- Resize fails            -> embed the original bytes
- SVG is not UTF-8        -> drop the asset
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import requests

from genkan.contexts.assets.exceptions import FetchFailed, ResizeError, SvgDecodeError
from genkan.contexts.assets.fetcher import fetch_bytes
from genkan.contexts.assets.logger import log_compressed, log_embedded
from genkan.contexts.assets.raster import resize_image
from genkan.contexts.assets.sniffing import (
    DEFAULT_RASTER_MIME,
    ICO_MIME,
    RASTER_MIME_BY_EXTENSION,
    RESIZED_MIME,
    SVG_EXTENSION,
    SVG_MIME,
    infer_raster_mime,
    is_svg_payload,
    reference_extension,
    to_data_uri,
)
from genkan.contexts.assets.sources import (
    AlreadyEmbedded,
    Literal,
    LocalFile,
    Remote,
    classify_reference,
)
from genkan.contexts.assets.vector import recolor_svg
from genkan.utils.diagnostics import Diagnostic, warning

# Favicons are emitted in <link href>, where these formats are used as-is
FAVICON_NO_RESIZE_EXTENSIONS = ("ico", SVG_EXTENSION)


class EmbedKind(str, Enum):
    EMPTY = "empty"
    PASSTHROUGH = "passthrough"
    DATA_URI = "data_uri"
    INLINE_SVG = "inline_svg"
    FALLBACK = "fallback"
    DROPPED = "dropped"


@dataclass
class AssetResolution:
    """
    Outcome of resolving one asset reference.

    Attributes:
        value: Embeddable string, or None when there is nothing to embed
        kind: How the value was produced
        diagnostics: Recoverable problems met along the way
    """

    value: Optional[str]
    kind: EmbedKind
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return self.kind in (EmbedKind.FALLBACK, EmbedKind.DROPPED)


@dataclass(frozen=True)
class EmbedPolicy:
    """
    Per-role embedding rules.

    Attributes:
        inline_vectors: Emit SVG as marker-prefixed markup (else as a data URI)
        no_resize_extensions: Extensions never passed to the resizer
        local_default_mime: MIME for local rasters with an unrecognised extension
        drop_missing_local: Drop (rather than pass through) references that are not files
        warn_unknown_local_type: Report local files whose extension is not recognised
    """

    inline_vectors: bool = True
    no_resize_extensions: Tuple[str, ...] = ()
    local_default_mime: str = DEFAULT_RASTER_MIME
    drop_missing_local: bool = False
    warn_unknown_local_type: bool = False


ICON_POLICY = EmbedPolicy()
FAVICON_POLICY = EmbedPolicy(
    inline_vectors=False,
    no_resize_extensions=FAVICON_NO_RESIZE_EXTENSIONS,
    local_default_mime=ICO_MIME,
    drop_missing_local=True,
    warn_unknown_local_type=True,
)


def _embed_vector(reference: str, data: bytes, policy: EmbedPolicy) -> AssetResolution:
    if not policy.inline_vectors:
        value = to_data_uri(data, SVG_MIME)
        return AssetResolution(value=value, kind=EmbedKind.DATA_URI)

    try:
        markup = recolor_svg(data)
    except SvgDecodeError as e:
        return AssetResolution(
            value=None,
            kind=EmbedKind.DROPPED,
            diagnostics=[warning(f"{e}. Skipping this image.", reference)],
        )

    return AssetResolution(value=markup, kind=EmbedKind.INLINE_SVG)


def _embed_raster(
    reference: str,
    data: bytes,
    target_size: Optional[int],
    policy: EmbedPolicy,
    default_mime: str,
) -> AssetResolution:
    diagnostics = []
    final_data = data
    resized = False

    if target_size is not None and reference_extension(reference) not in policy.no_resize_extensions:
        try:
            outcome = resize_image(data, target_size)
        except ResizeError as e:
            diagnostics.append(warning(f"{e}. Using original.", reference))
        else:
            final_data = outcome.data
            resized = outcome.resized
            if resized:
                log_compressed(reference, len(data), len(final_data), target_size)

    mime_type = RESIZED_MIME if resized else infer_raster_mime(reference, default_mime)
    return AssetResolution(
        value=to_data_uri(final_data, mime_type),
        kind=EmbedKind.DATA_URI,
        diagnostics=diagnostics,
    )


def embed_bytes(
    reference: str,
    data: bytes,
    is_svg: bool,
    target_size: Optional[int] = None,
    policy: EmbedPolicy = ICON_POLICY,
    default_mime: str = DEFAULT_RASTER_MIME,
) -> AssetResolution:
    """
    Embed already-loaded asset bytes.

    Args:
        reference: Original reference (used for MIME inference and diagnostics)
        data: Raw file or response bytes
        is_svg: Whether the payload is a vector image
        target_size: Optional maximum pixel dimension for rasters
        policy: Embedding rules for this asset role
        default_mime: MIME for rasters whose extension is not recognised

    Returns:
        AssetResolution with a data URI or inline SVG markup
    """
    if is_svg:
        resolution = _embed_vector(reference, data, policy)
    else:
        resolution = _embed_raster(reference, data, target_size, policy, default_mime)

    if resolution.value is not None:
        log_embedded(reference[:80], resolution.kind.value, len(resolution.value))
    return resolution


def _resolve_remote(
    source: Remote,
    target_size: Optional[int],
    policy: EmbedPolicy,
    session: Optional[requests.Session],
) -> AssetResolution:
    try:
        data = fetch_bytes(source.url, session=session)
    except FetchFailed as e:
        return AssetResolution(
            value=source.url,
            kind=EmbedKind.FALLBACK,
            diagnostics=[warning(f"{e}. Using original URL.", source.url)],
        )

    return embed_bytes(
        source.url,
        data,
        is_svg=is_svg_payload(source.url, data),
        target_size=target_size,
        policy=policy,
    )


def _resolve_local(
    reference: str,
    source: LocalFile,
    target_size: Optional[int],
    policy: EmbedPolicy,
) -> AssetResolution:
    try:
        data = source.path.read_bytes()
    except OSError as e:
        return AssetResolution(
            value=reference,
            kind=EmbedKind.FALLBACK,
            diagnostics=[warning(f"Failed to read file: {e}", reference)],
        )

    diagnostics = []
    default_mime = policy.local_default_mime
    extension = source.extension
    if (
        policy.warn_unknown_local_type
        and extension != SVG_EXTENSION
        and extension not in RASTER_MIME_BY_EXTENSION
    ):
        diagnostics.append(warning(f"Unknown file type, defaulting to {default_mime}", reference))

    resolution = embed_bytes(
        reference,
        data,
        is_svg=extension == SVG_EXTENSION,
        target_size=target_size,
        policy=policy,
        default_mime=default_mime,
    )
    resolution.diagnostics = diagnostics + resolution.diagnostics
    return resolution


def resolve_asset(
    reference: Optional[str],
    target_size: Optional[int] = None,
    session: Optional[requests.Session] = None,
    policy: EmbedPolicy = ICON_POLICY,
) -> AssetResolution:
    """
    Resolve an asset reference into an embeddable string.

    Never raises for a single bad asset; failures come back as diagnostics.

    Args:
        reference: Raw reference (data URI, URL, local path, emoji/text)
        target_size: Optional maximum pixel dimension for raster images
        session: Optional requests session for remote fetches
        policy: Embedding rules (icons by default)

    Returns:
        AssetResolution (value None for empty references and dropped assets)

    Examples:
        >>> resolve_asset("🌐").value
        '🌐'
        >>> resolve_asset("data:image/png;base64,AAAA").kind
        <EmbedKind.PASSTHROUGH: 'passthrough'>
    """
    if not reference:
        return AssetResolution(value=None, kind=EmbedKind.EMPTY)

    source = classify_reference(reference)

    if isinstance(source, AlreadyEmbedded):
        return AssetResolution(value=source.value, kind=EmbedKind.PASSTHROUGH)

    if isinstance(source, Remote):
        return _resolve_remote(source, target_size, policy, session)

    if isinstance(source, LocalFile):
        return _resolve_local(reference, source, target_size, policy)

    if isinstance(source, Literal) and policy.drop_missing_local:
        return AssetResolution(
            value=None,
            kind=EmbedKind.DROPPED,
            diagnostics=[warning("File not found", reference)],
        )

    return AssetResolution(value=reference, kind=EmbedKind.PASSTHROUGH)


def resolve_favicon(
    reference: Optional[str],
    target_size: Optional[int] = None,
    session: Optional[requests.Session] = None,
) -> AssetResolution:
    """
    Resolve a favicon reference.

    Like resolve_asset, but the result must work inside <link href>: SVG is
    embedded as an image/svg+xml data URI, .ico/.svg files are not resized,
    and a path that does not exist is dropped instead of passed through.
    """
    return resolve_asset(reference, target_size=target_size, session=session, policy=FAVICON_POLICY)
