"""
QR code generation for the page URL.

Encodes a URL into a scannable code and embeds it as a PNG data URI of a fixed
size. The module size is the largest whole number of pixels that fits the box,
and the code is centred on a white canvas so the output is always exactly
QR_SIZE x QR_SIZE regardless of payload length.
"""

import io

import qrcode
from PIL import Image, ImageDraw
from qrcode.constants import ERROR_CORRECT_M
from qrcode.exceptions import DataOverflowError

from genkan.contexts.assets.exceptions import QRGenerationError
from genkan.contexts.assets.sniffing import to_data_uri

QR_SIZE = 200
QUIET_ZONE_MODULES = 4
ERROR_CORRECTION = ERROR_CORRECT_M

DARK = 0
LIGHT = 255


def build_qr_matrix(payload: str) -> list[list[bool]]:
    """
    Encode a payload and return the module matrix, quiet zone included.

    Raises:
        QRGenerationError: If the payload exceeds the largest code's capacity
    """
    code = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECTION,
        box_size=1,
        border=QUIET_ZONE_MODULES,
    )
    code.add_data(payload)

    try:
        code.make(fit=True)
    except (DataOverflowError, ValueError) as e:
        raise QRGenerationError(
            "Failed to create QR code", reference=payload, original_error=e
        ) from e

    return code.get_matrix()


def render_qr_image(matrix: list[list[bool]], size: int = QR_SIZE) -> Image.Image:
    """
    Draw a module matrix into a size x size grayscale image.

    Args:
        matrix: Square matrix of dark (True) / light (False) modules
        size: Output width and height in pixels

    Returns:
        Pillow image of exactly (size, size)
    """
    modules = len(matrix)
    module_px = max(1, size // modules)
    offset = max(0, (size - modules * module_px) // 2)

    image = Image.new("L", (size, size), LIGHT)
    draw = ImageDraw.Draw(image)

    for row_index, row in enumerate(matrix):
        for col_index, dark in enumerate(row):
            if not dark:
                continue
            x0 = offset + col_index * module_px
            y0 = offset + row_index * module_px
            draw.rectangle([x0, y0, x0 + module_px - 1, y0 + module_px - 1], fill=DARK)

    return image


def generate_qr_code(url: str) -> str:
    """
    Generate a QR code for a URL as a base64 PNG data URI.

    Args:
        url: Non-empty destination URL

    Returns:
        data:image/png;base64,... of a QR_SIZE x QR_SIZE image

    Raises:
        QRGenerationError: If the URL is empty or cannot be encoded
    """
    if not url:
        raise QRGenerationError("Cannot create a QR code for an empty URL")

    image = render_qr_image(build_qr_matrix(url))

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return to_data_uri(buffer.getvalue(), "image/png")
