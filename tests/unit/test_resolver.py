"""Unit tests for asset resolution and embedding."""

import base64
import io

import pytest
import requests
from PIL import Image

from genkan.contexts.assets.resolver import (
    EmbedKind,
    embed_bytes,
    resolve_asset,
    resolve_favicon,
)
from genkan.contexts.assets.vector import INLINE_SVG_MARKER


def payload(data_uri: str) -> bytes:
    return base64.b64decode(data_uri.split(",", 1)[1])


@pytest.mark.unit
class TestPassthrough:
    """Tests for references that need no work."""

    @pytest.mark.parametrize("reference", [None, ""])
    def test_empty(self, reference):
        resolution = resolve_asset(reference, 128)

        assert resolution.kind == EmbedKind.EMPTY
        assert resolution.value is None

    def test_data_uri_unchanged(self, session):
        reference = "data:image/png;base64,iVBORw0KGgo="

        resolution = resolve_asset(reference, 128, session=session)

        assert resolution.value == reference
        assert resolution.kind == EmbedKind.PASSTHROUGH
        session.get.assert_not_called()

    def test_emoji_unchanged(self, session):
        resolution = resolve_asset("🌐", 128, session=session)

        assert resolution.value == "🌐"
        assert resolution.diagnostics == []
        session.get.assert_not_called()


@pytest.mark.unit
class TestLocalFiles:
    """Tests for local file embedding."""

    def test_small_png_embedded_byte_identical(self, tmp_path, make_image):
        data = make_image(64, 64)
        icon = tmp_path / "icon.png"
        icon.write_bytes(data)

        resolution = resolve_asset(str(icon), 128)

        assert resolution.kind == EmbedKind.DATA_URI
        assert resolution.value.startswith("data:image/png;base64,")
        assert payload(resolution.value) == data

    def test_small_jpeg_keeps_jpeg_mime(self, tmp_path, make_image):
        """Test that an image that was not re-encoded keeps its own MIME type."""
        icon = tmp_path / "photo.JPG"
        icon.write_bytes(make_image(32, 32, fmt="JPEG"))

        resolution = resolve_asset(str(icon), 128)

        assert resolution.value.startswith("data:image/jpeg;base64,")

    def test_large_jpeg_resized_to_png(self, tmp_path, make_image):
        avatar = tmp_path / "avatar.jpg"
        avatar.write_bytes(make_image(1000, 500, fmt="JPEG"))

        resolution = resolve_asset(str(avatar), 200)

        assert resolution.value.startswith("data:image/png;base64,")
        assert payload(resolution.value).startswith(b"\x89PNG")

    def test_no_target_size_skips_resize(self, tmp_path, make_image):
        data = make_image(1000, 500)
        avatar = tmp_path / "avatar.png"
        avatar.write_bytes(data)

        assert payload(resolve_asset(str(avatar)).value) == data

    def test_svg_inlined(self, tmp_path, svg_icon):
        icon = tmp_path / "icon.svg"
        icon.write_bytes(svg_icon)

        resolution = resolve_asset(str(icon), 128)

        assert resolution.kind == EmbedKind.INLINE_SVG
        assert resolution.value.startswith(INLINE_SVG_MARKER)
        assert "currentColor" in resolution.value

    def test_non_utf8_svg_dropped(self, tmp_path):
        icon = tmp_path / "broken.svg"
        icon.write_bytes(b"<svg>\xff</svg>")

        resolution = resolve_asset(str(icon), 128)

        assert resolution.kind == EmbedKind.DROPPED
        assert resolution.value is None
        assert len(resolution.diagnostics) == 1

    def test_undecodable_raster_embedded_as_is(self, tmp_path):
        """Test that a resize failure falls back to the original bytes with a warning."""
        icon = tmp_path / "icon.gif"
        icon.write_bytes(b"GIF89a-truncated")

        resolution = resolve_asset(str(icon), 128)

        assert resolution.value.startswith("data:image/gif;base64,")
        assert payload(resolution.value) == b"GIF89a-truncated"
        assert "Using original" in resolution.diagnostics[0].cause

    def test_corrupt_png_embedded_as_is(self, tmp_path, corrupt_image):
        """Test that a PNG failing mid-decode still embeds its original bytes."""
        icon = tmp_path / "icon.png"
        icon.write_bytes(corrupt_image)

        resolution = resolve_asset(str(icon), 64)

        assert resolution.kind == EmbedKind.DATA_URI
        assert payload(resolution.value) == corrupt_image
        assert "Using original" in resolution.diagnostics[0].cause


@pytest.mark.unit
class TestRemote:
    """Tests for remote asset embedding."""

    def test_remote_svg_sniffed_from_content(self, session, make_response, svg_icon):
        """Test an SVG served from a URL without an .svg extension."""
        session.get.return_value = make_response(svg_icon)

        resolution = resolve_asset("https://cdn.simpleicons.org/github", 128, session=session)

        assert resolution.kind == EmbedKind.INLINE_SVG
        assert 'fill="currentColor"' in resolution.value

    def test_remote_raster_resized(self, session, make_response, make_image):
        session.get.return_value = make_response(make_image(600, 600))

        resolution = resolve_asset("https://x.org/avatar.png?s=600", 128, session=session)

        assert resolution.kind == EmbedKind.DATA_URI
        assert resolution.value.startswith("data:image/png;base64,")

    def test_fetch_failure_keeps_url(self, session):
        session.get.side_effect = requests.ConnectionError("refused")

        resolution = resolve_asset("https://down.example.com/a.png", 128, session=session)

        assert resolution.kind == EmbedKind.FALLBACK
        assert resolution.value == "https://down.example.com/a.png"
        assert resolution.degraded
        assert "Using original URL" in resolution.diagnostics[0].cause

    def test_http_error_keeps_url(self, session, make_response):
        session.get.return_value = make_response(b"", status_code=500)

        resolution = resolve_asset("//cdn.example.com/a.png", 128, session=session)

        assert resolution.value == "//cdn.example.com/a.png"
        assert "HTTP 500" in resolution.diagnostics[0].cause


@pytest.mark.unit
class TestFavicon:
    """Tests for favicon-specific embedding rules."""

    def test_svg_becomes_data_uri(self, tmp_path, svg_icon):
        """Test that favicons never use the inline marker (they live in <link href>)."""
        favicon = tmp_path / "favicon.svg"
        favicon.write_bytes(svg_icon)

        resolution = resolve_favicon(str(favicon), 64)

        assert resolution.value.startswith("data:image/svg+xml;base64,")
        assert payload(resolution.value) == svg_icon

    def test_ico_not_resized(self, tmp_path, make_image):
        data = make_image(256, 256, fmt="ICO")
        favicon = tmp_path / "favicon.ico"
        favicon.write_bytes(data)

        resolution = resolve_favicon(str(favicon), 64)

        assert resolution.value.startswith("data:image/x-icon;base64,")
        assert payload(resolution.value) == data

    def test_large_png_resized(self, tmp_path, make_image):
        favicon = tmp_path / "favicon.png"
        favicon.write_bytes(make_image(512, 512))

        resolution = resolve_favicon(str(favicon), 64)

        assert resolution.value.startswith("data:image/png;base64,")
        with Image.open(io.BytesIO(payload(resolution.value))) as img:
            assert img.size == (64, 64)

    def test_unknown_type_warns(self, tmp_path, make_image):
        favicon = tmp_path / "favicon.bmp"
        favicon.write_bytes(make_image(16, 16, fmt="BMP"))

        resolution = resolve_favicon(str(favicon), 64)

        assert resolution.value.startswith("data:image/x-icon;base64,")
        assert "Unknown file type" in resolution.diagnostics[0].cause

    def test_missing_file_dropped(self):
        resolution = resolve_favicon("missing/favicon.png", 64)

        assert resolution.kind == EmbedKind.DROPPED
        assert resolution.value is None
        assert resolution.diagnostics[0].cause == "File not found"

    def test_remote_svg_favicon(self, session, make_response, svg_icon):
        session.get.return_value = make_response(svg_icon)

        resolution = resolve_favicon("https://x.org/favicon.svg", 64, session=session)

        assert resolution.value.startswith("data:image/svg+xml;base64,")


@pytest.mark.unit
def test_embed_bytes_raster_default_mime():
    """Test that an unrecognised extension uses the supplied default MIME."""
    resolution = embed_bytes("icon", b"\x00\x01", is_svg=False, default_mime="image/webp")

    assert resolution.value == "data:image/webp;base64,AAE="
