# SPDX-License-Identifier: MIT
"""Tests for component template rendering."""

from __future__ import annotations

from pathlib import Path

import pytest

from sitesmith_templates.errors import (
    TemplateCompileError,
    TemplateNotFoundError,
    TemplateRenderError,
)
from sitesmith_templates.loader import ComponentLoader
from sitesmith_templates.options import Options
from sitesmith_templates.renderer import (
    HYDRATION_ATTRIBUTE,
    mark_hydration_root,
    render_template,
)


@pytest.fixture
def loader() -> ComponentLoader:
    return ComponentLoader()


class TestRenderTemplate:
    """Tests for render_template."""

    def test_success(self, loader: ComponentLoader, tmp_path: Path):
        path = tmp_path / "t.jinja"
        path.write_text("{{ contents | upper }}")

        outcome = render_template(path, {"contents": "hi"}, Options(), loader)

        assert outcome.ok
        assert outcome.result == "HI"
        assert outcome.error is None

    def test_missing_template_is_returned(self, loader: ComponentLoader, tmp_path: Path):
        outcome = render_template(tmp_path / "missing.jinja", {}, Options(), loader)

        assert not outcome.ok
        assert outcome.result is None
        assert isinstance(outcome.error, TemplateNotFoundError)

    def test_compile_error_is_returned(self, loader: ComponentLoader, tmp_path: Path):
        path = tmp_path / "t.jinja"
        path.write_text("{% for %}")

        outcome = render_template(path, {}, Options(), loader)

        assert isinstance(outcome.error, TemplateCompileError)

    def test_render_error_is_returned(self, loader: ComponentLoader, tmp_path: Path):
        path = tmp_path / "t.py"
        path.write_text("def render(props):\n    return props['missing']\n")

        outcome = render_template(path, {}, Options(), loader)

        assert isinstance(outcome.error, TemplateRenderError)
        assert isinstance(outcome.error.__cause__, KeyError)

    def test_none_result_is_empty(self, loader: ComponentLoader, tmp_path: Path):
        path = tmp_path / "t.py"
        path.write_text("def render(props):\n    return None\n")

        assert render_template(path, {}, Options(), loader).result == ""

    def test_props_are_copied(self, loader: ComponentLoader, tmp_path: Path):
        path = tmp_path / "t.py"
        path.write_text("def render(props):\n    props['seen'] = True\n    return ''\n")
        props = {"contents": ""}

        render_template(path, props, Options(), loader)

        assert "seen" not in props

    def test_static_mode_has_no_marker(self, loader: ComponentLoader, tmp_path: Path):
        path = tmp_path / "t.jinja"
        path.write_text("<div>{{ contents }}</div>")

        outcome = render_template(path, {"contents": "x"}, Options(is_static=True), loader)

        assert outcome.result == "<div>x</div>"

    def test_hydration_mode_marks_root(self, loader: ComponentLoader, tmp_path: Path):
        path = tmp_path / "t.jinja"
        path.write_text("<div><span>{{ contents }}</span></div>")

        outcome = render_template(path, {"contents": "x"}, Options(is_static=False), loader)

        assert outcome.result == f"<div {HYDRATION_ATTRIBUTE}><span>x</span></div>"


class TestMarkHydrationRoot:
    """Tests for mark_hydration_root."""

    def test_only_first_element(self):
        assert mark_hydration_root("<a></a><b></b>") == f"<a {HYDRATION_ATTRIBUTE}></a><b></b>"

    def test_skips_leading_text(self):
        assert mark_hydration_root("text <p>x</p>") == f"text <p {HYDRATION_ATTRIBUTE}>x</p>"

    def test_no_element(self):
        assert mark_hydration_root("plain text") == "plain text"
