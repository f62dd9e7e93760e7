"""
Assets Context

Responsibilities:
- Classifies asset references (data URI, remote URL, local file, literal)
- Fetches remote assets and reads local ones
- Downscales raster images and recolors SVG icons for inline use
- Generates the QR code for the page URL

Owns: Asset bytes, embedding format decisions, per-asset degradation
Never: Aborts a run because of one bad asset
"""

from genkan.contexts.assets.qr import generate_qr_code
from genkan.contexts.assets.resolver import (
    AssetResolution,
    EmbedKind,
    resolve_asset,
    resolve_favicon,
)
from genkan.contexts.assets.vector import INLINE_SVG_MARKER

__all__ = [
    "AssetResolution",
    "EmbedKind",
    "INLINE_SVG_MARKER",
    "generate_qr_code",
    "resolve_asset",
    "resolve_favicon",
]
