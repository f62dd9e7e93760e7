"""
Raster image downscaling.

Aspect-preserving resize to a maximum pixel dimension, re-encoded as PNG.
Images already within bounds are returned byte-identical so they never suffer
a needless re-encode.
"""

import io
from dataclasses import dataclass
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from genkan.contexts.assets.exceptions import ResizeError

RESAMPLE_FILTER = Image.Resampling.LANCZOS
OUTPUT_FORMAT = "PNG"


@dataclass
class ResizeOutcome:
    """
    Result of a resize attempt.

    Attributes:
        data: Encoded image bytes (the input bytes when not resized)
        resized: Whether the image was re-encoded
        original_size: (width, height) of the decoded input
        final_size: (width, height) of the returned image
    """

    data: bytes
    resized: bool
    original_size: Tuple[int, int]
    final_size: Tuple[int, int]


def target_dimensions(width: int, height: int, target: int) -> Tuple[int, int]:
    """
    Scale (width, height) so the longer edge equals target.

    The short edge is scaled by the same factor and rounded down (minimum 1px).

    Examples:
        target_dimensions(1000, 500, 200)  # (200, 100)
        target_dimensions(500, 1000, 200)  # (100, 200)
    """
    if width >= height:
        return target, max(1, int(height * target / width))
    return max(1, int(width * target / height)), target


def resize_image(data: bytes, target: int) -> ResizeOutcome:
    """
    Downscale an encoded raster so neither side exceeds target.

    Args:
        data: Encoded image bytes (any format Pillow can decode)
        target: Maximum width/height in pixels

    Returns:
        ResizeOutcome (input bytes unchanged when already within bounds)

    Raises:
        ResizeError: If the image cannot be decoded or re-encoded
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size

            if width <= target and height <= target:
                return ResizeOutcome(
                    data=data, resized=False, original_size=(width, height), final_size=(width, height)
                )

            new_size = target_dimensions(width, height, target)

            # Palette and CMYK images resample poorly; keep alpha where present
            if img.mode not in ("L", "LA", "RGB", "RGBA"):
                img = img.convert("RGBA")

            resized = img.resize(new_size, RESAMPLE_FILTER)

            buffer = io.BytesIO()
            resized.save(buffer, format=OUTPUT_FORMAT, optimize=True)
    # Truncated or corrupt chunks surface as SyntaxError or EOFError from the PNG plugin
    except (
        UnidentifiedImageError,
        OSError,
        ValueError,
        SyntaxError,
        EOFError,
        Image.DecompressionBombError,
    ) as e:
        raise ResizeError("Failed to resize image", original_error=e) from e

    return ResizeOutcome(
        data=buffer.getvalue(),
        resized=True,
        original_size=(width, height),
        final_size=new_size,
    )
