"""Custom exceptions for the assets context."""

from typing import Optional


class AssetError(Exception):
    """
    Base class for recoverable, per-asset failures.

    Attributes:
        message: Error description
        reference: The asset reference being processed
        original_error: The underlying library error, if any
    """

    def __init__(
        self,
        message: str,
        reference: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.reference = reference
        self.original_error = original_error

        parts = [message]
        if original_error:
            parts.append(f": {original_error}")

        super().__init__("".join(parts))


class FetchFailed(AssetError):
    """Raised when a remote asset cannot be retrieved (transport error, timeout, non-2xx)."""

    def __init__(
        self,
        message: str,
        reference: Optional[str] = None,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        self.status_code = status_code
        super().__init__(message, reference=reference, original_error=original_error)


class ResizeError(AssetError):
    """Raised when a raster image cannot be decoded or re-encoded."""


class SvgDecodeError(AssetError):
    """Raised when SVG bytes are not valid UTF-8."""


class QRGenerationError(AssetError):
    """Raised when a payload cannot be encoded as a QR code (e.g., exceeds capacity)."""
