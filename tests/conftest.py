"""Shared fixtures: in-memory images, mocked HTTP sessions and minimal configs."""

import io
import struct
import zlib
from unittest.mock import Mock

import pytest
from PIL import Image

MINIMAL_CONFIG = """\
[profile]
name = "Ada"
bio = "Engineer"

[theme]
name = "simple"

[meta]
title = "Ada's links"
description = "Everything in one place"

[[links]]
title = "My Website"
url = "https://example.com"
"""

SVG_ICON = b'<svg width="24" height="24" viewBox="0 0 24 24"><path fill="#ff0000" d="M0 0h24v24H0z"/></svg>'


def encode_image(width: int, height: int, fmt: str = "PNG", mode: str = "RGB") -> bytes:
    """Encode a solid-color image of the given size."""
    color = 128 if mode in ("L", "P") else (200, 30, 30) if mode == "RGB" else (200, 30, 30, 255)
    buffer = io.BytesIO()
    Image.new(mode, (width, height), color).save(buffer, format=fmt)
    return buffer.getvalue()


def corrupt_png(data: bytes) -> bytes:
    """
    Cut the first IDAT chunk short and follow it with a malformed chunk header.

    The header chunks stay intact, so the image opens and reports its size;
    decoding the pixels fails partway through.
    """
    pos = 8
    parts = [data[:pos]]
    while True:
        length, chunk_type = struct.unpack(">I4s", data[pos : pos + 8])
        if chunk_type == b"IDAT":
            body = data[pos + 8 : pos + 8 + 16]
            parts.append(struct.pack(">I", len(body)) + b"IDAT" + body)
            parts.append(struct.pack(">I", zlib.crc32(b"IDAT" + body)))
            parts.append(struct.pack(">I", 16) + b"\x00\x01\x02\x03")
            return b"".join(parts)
        parts.append(data[pos : pos + 12 + length])
        pos += 12 + length


def http_response(content: bytes = b"", status_code: int = 200) -> Mock:
    """Stand-in for requests.Response."""
    return Mock(content=content, status_code=status_code, ok=200 <= status_code < 400)


@pytest.fixture
def make_image():
    return encode_image


@pytest.fixture
def corrupt_image():
    """A 300x300 PNG whose pixel data is corrupt."""
    return corrupt_png(encode_image(300, 300))


@pytest.fixture
def session():
    """Mock requests session; set session.get.return_value / side_effect per test."""
    mock_session = Mock()
    mock_session.get.return_value = http_response(b"", 404)
    return mock_session


@pytest.fixture
def minimal_config_text():
    return MINIMAL_CONFIG


@pytest.fixture
def make_response():
    return http_response


@pytest.fixture
def svg_icon():
    return SVG_ICON
