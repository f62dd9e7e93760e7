"""
Genkan - static link page generator

Turns a declarative TOML profile/link description into a single self-contained
HTML page. Every avatar, icon and favicon is embedded into the document so the
result can be hosted anywhere as one file.

Architecture:
- Configuration Context: TOML schema, loading, validation and typography cascade
- Assets Context: Asset classification, fetching, resizing, SVG recoloring, QR codes
- Rendering Context: Theme loading, template rendering and output management
"""

__version__ = "0.1.0"
