"""
Integration tests for the generation pipeline, using the bundled simple theme.

Remote requests go through a mocked session; local images are written to tmp_path.
"""

import base64

import pytest
import requests

from genkan.contexts.assets.vector import INLINE_SVG_MARKER
from genkan.contexts.configuration import parse_config
from genkan.contexts.configuration.config import SocialLink
from genkan.contexts.rendering import Generator, ThemeFileError, ThemeRenderError
from genkan.contexts.rendering.themes import BUNDLED_THEMES_PATH

SIMPLE_THEME = BUNDLED_THEMES_PATH / "simple"


@pytest.fixture
def project(tmp_path, make_image, svg_icon):
    """A project directory with a local avatar and SVG icon."""
    (tmp_path / "avatar.jpg").write_bytes(make_image(1024, 768, fmt="JPEG"))
    (tmp_path / "globe.svg").write_bytes(svg_icon)
    return tmp_path


def full_config(project, page_url=None, max_workers=4):
    page_url_line = f'page_url = "{page_url}"' if page_url else ""
    text = f"""\
[profile]
name = "Ada Lovelace"
bio = "Analyst & <engineer>"

[profile.light]
avatar = "{project / 'avatar.jpg'}"

[[profile.social_links]]
title = "GitHub"
icon = "https://cdn.simpleicons.org/github"
url = "https://github.com/ada"

[theme]
name = "simple"

[theme.light]
header_color = "#123456"

[meta]
title = "Ada's links"
description = "Everything in one place"
{page_url_line}

[dark_mode]
mode = "Auto"

[build]
max_workers = {max_workers}

[[links]]
title = "My Website"
url = "https://example.com"
icon = "{project / 'globe.svg'}"
description = "Personal site"

[[links]]
link_type = "space"
height = "32px"

[[links]]
title = "Blog"
url = "https://blog.example.com"
icon = "📝"
"""
    return parse_config(text)


@pytest.mark.integration
class TestGenerate:
    """End-to-end generation tests."""

    def test_writes_self_contained_page(self, project, session, make_response, svg_icon):
        session.get.return_value = make_response(svg_icon)
        output = project / "output" / "index.html"

        result = Generator(full_config(project), SIMPLE_THEME, output, session=session).generate()

        html = output.read_text(encoding="utf-8")
        assert result.output_path == output
        assert "My Website" in html
        assert 'href="https://example.com"' in html
        assert "data:image/png;base64," in html
        assert 'fill="currentColor"' in html
        assert INLINE_SVG_MARKER not in html
        assert "📝" in html
        assert "Analyst &amp; &lt;engineer&gt;" in html
        assert "color: #123456" in html
        assert '"mode": "auto"' in html
        assert result.assets_embedded == 3
        assert result.diagnostics == []

    def test_qr_code_only_with_page_url(self, project, session):
        without_url = Generator(full_config(project), SIMPLE_THEME, project / "a.html", session=session)
        with_url = Generator(
            full_config(project, page_url="https://ada.example.com"),
            SIMPLE_THEME,
            project / "b.html",
            session=session,
        )

        page = without_url.prepare()
        assert "qr_code_data" not in without_url.html_context(page, "", "")

        page = with_url.prepare()
        context = with_url.html_context(page, "", "")
        assert context["qr_code_data"].startswith("data:image/png;base64,")

        result = with_url.generate()
        assert result.qr_generated
        assert 'class="qr-code"' in (project / "b.html").read_text(encoding="utf-8")

    def test_context_keys(self, project, session):
        generator = Generator(full_config(project), SIMPLE_THEME, project / "index.html", session=session)
        page = generator.prepare()

        context = generator.html_context(page, "css", "js")

        assert {
            "profile",
            "theme",
            "meta",
            "links",
            "dark_mode",
            "css",
            "js",
            "typography_default",
            "typography_header",
            "typography_bio",
            "typography_link_title",
            "typography_link_description",
        } == set(context)
        assert context["links"][0].title == "My Website"
        assert context["links"][0].url == "https://example.com"

    def test_remote_failure_degrades_with_diagnostic(self, project, session):
        session.get.side_effect = requests.ConnectionError("offline")
        output = project / "index.html"

        result = Generator(full_config(project), SIMPLE_THEME, output, session=session).generate()

        assert output.exists()
        assert result.assets_degraded == 1
        assert [d.subject for d in result.diagnostics] == ["social link 'GitHub' icon"]
        assert 'src="https://cdn.simpleicons.org/github"' in output.read_text(encoding="utf-8")

    def test_untitled_items_named_by_position(self, project, session):
        session.get.side_effect = requests.ConnectionError("offline")
        config = full_config(project)
        config.profile.social_links.append(
            SocialLink(icon="https://cdn.simpleicons.org/mastodon", url="https://mastodon.social/@ada")
        )
        config.links[2].title = None
        config.links[2].link_type = "space"
        config.links[2].icon = "https://example.com/spacer.png"
        config.links[2].height = "8px"

        result = Generator(config, SIMPLE_THEME, project / "index.html", session=session).generate()

        assert [d.subject for d in result.diagnostics] == [
            "social link 'GitHub' icon",
            "social link #1 icon",
            "link #2 icon",
        ]

    def test_unembedded_file_name_rendered_as_image(self, project, session):
        config = full_config(project)
        config.links[0].icon = "missing-icon.png"
        output = project / "index.html"

        Generator(config, SIMPLE_THEME, output, session=session).generate()

        assert 'src="missing-icon.png"' in output.read_text(encoding="utf-8")

    @pytest.mark.parametrize("max_workers", [1, 4])
    def test_corrupt_icon_does_not_abort(self, project, session, corrupt_image, max_workers):
        """Test that an icon failing mid-decode is embedded as-is and the page is still written."""
        (project / "broken.png").write_bytes(corrupt_image)
        config = full_config(project, max_workers=max_workers)
        config.links[0].icon = str(project / "broken.png")
        output = project / "index.html"

        result = Generator(config, SIMPLE_THEME, output, session=session).generate()

        assert output.exists()
        assert [d.subject for d in result.diagnostics][-1] == "link 'My Website' icon"
        assert base64.b64encode(corrupt_image).decode() in output.read_text(encoding="utf-8")

    def test_concurrent_matches_sequential(self, project, session, make_response, svg_icon):
        session.get.return_value = make_response(svg_icon)

        Generator(full_config(project, max_workers=1), SIMPLE_THEME, project / "seq.html", session=session).generate()
        Generator(full_config(project, max_workers=8), SIMPLE_THEME, project / "par.html", session=session).generate()

        assert (project / "seq.html").read_text() == (project / "par.html").read_text()

    def test_config_not_modified(self, project, session):
        config = full_config(project)
        icon = config.links[0].icon

        Generator(config, SIMPLE_THEME, project / "index.html", session=session).generate()

        assert config.links[0].icon == icon

    def test_favicon_embedded(self, project, session, make_image):
        (project / "favicon.png").write_bytes(make_image(256, 256))
        config = full_config(project)
        config.meta.favicon = str(project / "favicon.png")

        Generator(config, SIMPLE_THEME, project / "index.html", session=session).generate()

        assert '<link rel="icon" href="data:image/png;base64,' in (project / "index.html").read_text()

    def test_creates_output_directory(self, project, session):
        output = project / "deep" / "nested" / "index.html"

        Generator(full_config(project), SIMPLE_THEME, output, session=session).generate()

        assert output.exists()


@pytest.mark.integration
class TestStructuralFailures:
    """Tests for failures that abort generation."""

    def test_missing_template(self, project, session):
        theme = project / "themes" / "broken"
        theme.mkdir(parents=True)
        (theme / "style.css").write_text("")

        with pytest.raises(ThemeFileError):
            Generator(full_config(project), theme, project / "index.html", session=session).generate()

    def test_template_error(self, project, session):
        theme = project / "themes" / "broken"
        theme.mkdir(parents=True)
        (theme / "template.html").write_text("{% for %}")
        (theme / "style.css").write_text("")

        with pytest.raises(ThemeRenderError):
            Generator(full_config(project), theme, project / "index.html", session=session).generate()

        assert not (project / "index.html").exists()


@pytest.mark.integration
def test_minimal_link_needs_no_embedding(minimal_config_text, tmp_path, session):
    """Test that a single plain link yields a context without assets or QR code."""
    config = parse_config(minimal_config_text)
    config.meta.page_url = ""
    generator = Generator(config, SIMPLE_THEME, tmp_path / "index.html", session=session)

    page = generator.prepare()
    context = generator.html_context(page, "", "")

    assert page.resolutions == []
    assert [(link.title, link.url, link.icon) for link in context["links"]] == [
        ("My Website", "https://example.com", None)
    ]
    assert "qr_code_data" not in context
    session.get.assert_not_called()
