"""
Asset reference classification.

An asset reference is the raw, as-configured string naming an avatar, icon or
favicon. Classification is a single total function over the string's prefix
and, for local files, filesystem existence. No network or decoding happens here.

Examples:
    >>> classify_reference("data:image/png;base64,iVBOR...")
    AlreadyEmbedded(value='data:image/png;base64,iVBOR...')

    >>> classify_reference("https://cdn.simpleicons.org/github")
    Remote(url='https://cdn.simpleicons.org/github')

    >>> classify_reference("🌐")
    Literal(value='🌐')
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from genkan.contexts.assets.sniffing import RASTER_MIME_BY_EXTENSION, SVG_EXTENSION, reference_extension

DATA_URI_PREFIX = "data:"
REMOTE_PREFIXES = ("http://", "https://", "//")
PATH_PREFIXES = ("/", ".")
IMAGE_EXTENSIONS = frozenset(RASTER_MIME_BY_EXTENSION) | {SVG_EXTENSION}


@dataclass(frozen=True)
class AlreadyEmbedded:
    """A data URI, passed through untouched."""

    value: str


@dataclass(frozen=True)
class Remote:
    """An http(s) or protocol-relative URL."""

    url: str


@dataclass(frozen=True)
class LocalFile:
    """A path that exists on disk."""

    path: Path

    @property
    def extension(self) -> str:
        return self.path.suffix.lower().lstrip(".")


@dataclass(frozen=True)
class Literal:
    """Anything else: typically an emoji or plain text, passed through untouched."""

    value: str


AssetReference = Union[AlreadyEmbedded, Remote, LocalFile, Literal]


def is_remote(reference: str) -> bool:
    return reference.startswith(REMOTE_PREFIXES)


def _existing_path(reference: str) -> Union[Path, None]:
    path = Path(reference)
    try:
        return path if path.is_file() else None
    except (OSError, ValueError):
        # Emoji and other text can be invalid as a path on some platforms
        return None


def classify_reference(reference: str) -> AssetReference:
    """
    Classify a non-empty asset reference string.

    Order matters: data URIs first, then remote prefixes, then existing local
    files. Everything else is a literal.

    Args:
        reference: Raw reference string from the configuration

    Returns:
        One of AlreadyEmbedded, Remote, LocalFile, Literal
    """
    if reference.startswith(DATA_URI_PREFIX):
        return AlreadyEmbedded(reference)

    if is_remote(reference):
        return Remote(reference)

    path = _existing_path(reference)
    if path is not None:
        return LocalFile(path)

    return Literal(reference)


def is_image_reference(value: Any) -> bool:
    """
    True when a resolved asset value should be loaded as an image, not shown as text.

    Data URIs, URLs and path-like values qualify, including a bare file name
    such as "avatar.png" left unembedded because it could not be read.

    Examples:
        >>> is_image_reference("avatar.png")
        True
        >>> is_image_reference("🌐")
        False
    """
    if not isinstance(value, str) or not value:
        return False
    if value.startswith((DATA_URI_PREFIX, *REMOTE_PREFIXES, *PATH_PREFIXES)):
        return True
    return reference_extension(value) in IMAGE_EXTENSIONS
