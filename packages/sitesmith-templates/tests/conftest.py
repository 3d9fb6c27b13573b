# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for templates plugin tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Generator, Optional

import pytest
from click.testing import CliRunner

from sitesmith_templates import FileSet, Site


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def site_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary site directory with a templates folder."""
    project_dir = tmp_path / "site"
    (project_dir / "templates").mkdir(parents=True)
    (project_dir / "src").mkdir()
    yield project_dir


@pytest.fixture
def site(site_dir: Path) -> Site:
    """Create a Site rooted at the temporary site directory."""
    return Site(site_dir)


@pytest.fixture
def write_template(site_dir: Path) -> Callable[..., Path]:
    """Return a helper writing a file under the templates directory."""

    def write(name: str, text: str, directory: str = "templates") -> Path:
        path = site_dir / directory / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return write


class DoneRecorder:
    """Completion callback recording every call."""

    def __init__(self) -> None:
        self.calls: list[Optional[BaseException]] = []

    def __call__(self, error: Optional[BaseException] = None) -> None:
        self.calls.append(error)

    @property
    def error(self) -> Optional[BaseException]:
        assert len(self.calls) == 1, f"done called {len(self.calls)} times"
        return self.calls[0]


@pytest.fixture
def done() -> DoneRecorder:
    """Create a recording completion callback."""
    return DoneRecorder()


@pytest.fixture
def make_files() -> Callable[[dict[str, dict]], FileSet]:
    """Return a helper building a FileSet, encoding str contents as UTF-8."""

    def build(records: dict[str, dict]) -> FileSet:
        files = FileSet()
        for key, record in records.items():
            record = dict(record)
            if isinstance(record.get("contents"), str):
                record["contents"] = record["contents"].encode("utf-8")
            files[key] = record
        return files

    return build
