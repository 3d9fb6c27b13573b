# SPDX-License-Identifier: MIT
"""Integration test: Build the sample site.

This test verifies the full pipeline over a real directory:
- Front matter is read into file records
- Jinja2 and Python component templates render selected files
- Base files wrap rendered pages, with per-file overrides
- Output keys are renamed to .html and written to disk
"""

from pathlib import Path

import pytest

from sitesmith_templates import Site, SiteError, TemplateNotFoundError, Templates


class TestBuildSampleSite:
    """Integration tests for building the sample site."""

    @pytest.fixture
    def sample_site_dir(self) -> Path:
        """Get the sample site directory."""
        return Path(__file__).parent / "sample_site"

    @pytest.fixture
    def site(self, sample_site_dir: Path, tmp_path: Path) -> Site:
        """Create a Site writing into a temporary directory."""
        return Site(
            sample_site_dir,
            destination=str(tmp_path / "build"),
            metadata={"site_name": "Sample"},
        )

    def test_build_sample_site(self, site: Site, tmp_path: Path):
        site.use(Templates(base_file="base.jinja", pattern=["**/*.md", "!drafts/**"]))

        files = site.build()

        assert list(files) == ["drafts/wip.md", "index.html", "posts/hello.html", "style.css"]

        index = (tmp_path / "build" / "index.html").read_text()
        assert index.startswith("<html><head><title>Home | Sample</title></head><body>")
        assert "<h1>Home</h1>" in index
        assert "<p>Welcome</p>" in index

        post = (tmp_path / "build" / "posts" / "hello.html").read_text()
        assert '<article class="post"><h1>Hello</h1>' in post
        assert '<ul class="tags"><li>intro</li><li>news</li></ul>' in post
        assert "<title>Hello | Sample</title>" in post

        draft = (tmp_path / "build" / "drafts" / "wip.md").read_text()
        assert draft == "Not ready\n"
        assert (tmp_path / "build" / "style.css").read_text() == "body { margin: 0; }\n"

    def test_per_file_base_file(self, site: Site):
        files = site.read()
        files["index.md"]["baseFile"] = "../layouts/plain.html"

        site.use(Templates(base_file="base.jinja", pattern="**/*.md"))
        site.process(files)

        index = files["index.html"]["contents"].decode("utf-8")
        post = files["posts/hello.html"]["contents"].decode("utf-8")
        assert index.startswith('<html><body class="plain"><article>')
        assert post.startswith("<html><head><title>Hello | Sample</title>")

    def test_preserve_raw_contents(self, site: Site):
        site.use(Templates(preserve=True, pattern="index.md"))

        files = site.process()

        assert files["index.html"]["rawContents"] == b"<p>Welcome</p>\n"
        assert files["index.html"]["title"] == "Home"

    def test_missing_template_aborts_build(self, site: Site, tmp_path: Path):
        site.use(Templates(default_template="missing.jinja"))

        with pytest.raises(SiteError) as exc_info:
            site.build()

        assert isinstance(exc_info.value.__cause__, TemplateNotFoundError)
        assert not (tmp_path / "build").exists()
