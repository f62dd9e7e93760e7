"""
Image format sniffing.

Decides SVG vs raster and infers MIME types from reference strings and byte
prefixes, without consulting a system MIME registry.
"""

import base64
from typing import Optional
from urllib.parse import urlsplit

SVG_EXTENSION = "svg"

# Only the start of the payload is inspected
SNIFF_WINDOW = 256

XML_DECLARATION_PREFIX = b"<?xml"
SVG_TAG_PREFIX = b"<svg"
UTF8_BOM = b"\xef\xbb\xbf"

DEFAULT_RASTER_MIME = "image/png"
RESIZED_MIME = "image/png"
SVG_MIME = "image/svg+xml"
ICO_MIME = "image/x-icon"

RASTER_MIME_BY_EXTENSION = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "webp": "image/webp",
    "ico": ICO_MIME,
}


def reference_extension(reference: str) -> str:
    """
    Lowercase file extension of a path or URL, ignoring any query string or fragment.

    Examples:
        reference_extension("https://x.org/logo.SVG?v=2")  # "svg"
        reference_extension("./avatar.jpeg")                # "jpeg"
        reference_extension("https://x.org/icon")           # ""
    """
    path = urlsplit(reference).path if "://" in reference or reference.startswith("//") else reference
    name = path.rsplit("/", 1)[-1]
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1].lower()


def looks_like_svg_bytes(data: bytes) -> bool:
    """True if the payload starts with an XML declaration or an <svg tag."""
    head = data[:SNIFF_WINDOW]
    if head.startswith(UTF8_BOM):
        head = head[len(UTF8_BOM):]
    head = head.lstrip()
    return head.startswith(XML_DECLARATION_PREFIX) or head.startswith(SVG_TAG_PREFIX)


def is_svg_reference(reference: str) -> bool:
    return reference_extension(reference) == SVG_EXTENSION


def is_svg_payload(reference: str, data: Optional[bytes] = None) -> bool:
    """
    Classify a fetched payload as vector or raster.

    Checks the extension (also before a query string) and then the content.
    """
    if is_svg_reference(reference):
        return True
    return data is not None and looks_like_svg_bytes(data)


def infer_raster_mime(reference: str, default: str = DEFAULT_RASTER_MIME) -> str:
    """
    MIME type for a raster embedded without re-encoding.

    Unknown extensions (and .png) map to the default.
    """
    return RASTER_MIME_BY_EXTENSION.get(reference_extension(reference), default)


def to_data_uri(data: bytes, mime_type: str) -> str:
    """Encode bytes as a data:<mime>;base64,<payload> URI (standard alphabet, padded)."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"
