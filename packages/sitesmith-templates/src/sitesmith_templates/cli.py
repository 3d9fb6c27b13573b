# SPDX-License-Identifier: MIT
"""Command line interface for building a site with the templates plugin."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import click
import yaml

from . import __version__
from .errors import OptionsError, SiteError
from .options import Options
from .plugin import Templates
from .site import Site


def echo_info(message: str) -> None:
    click.echo(message)


def echo_success(message: str) -> None:
    click.secho(message, fg="green")


def echo_warning(message: str) -> None:
    click.secho(f"Warning: {message}", fg="yellow", err=True)


def echo_error(message: str) -> None:
    click.secho(f"Error: {message}", fg="red", err=True)


def _load_metadata(path: Path) -> dict[str, Any]:
    """Load global metadata from a YAML file."""
    try:
        with open(path, encoding="utf-8") as f:
            metadata = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise SiteError(f"Invalid metadata file {path}: {e}") from e

    if not isinstance(metadata, dict):
        raise SiteError(f"Metadata file {path} must contain a mapping")
    return metadata


@click.group()
@click.version_option(__version__, prog_name="sitesmith")
def main() -> None:
    """Render static sites through component templates."""


@main.command()
@click.argument(
    "project_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
)
@click.option("--source", "-s", default="src", help="Source directory, relative to the project.")
@click.option(
    "--destination", "-d", default="build", help="Output directory, relative to the project."
)
@click.option(
    "--metadata",
    "-m",
    "metadata_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file with global site metadata.",
)
@click.option("--pattern", "-p", multiple=True, help="Glob selecting files to render.")
@click.option("--directory", help="Template directory, relative to the project.")
@click.option("--base-file", help="Base file wrapping every rendered page.")
@click.option("--html/--no-html", default=None, help="Rename rendered files to .html.")
@click.option("--verbose", "-v", is_flag=True, help="Log every processing step.")
def build(
    project_dir: Path,
    source: str,
    destination: str,
    metadata_file: Optional[Path],
    pattern: tuple[str, ...],
    directory: Optional[str],
    base_file: Optional[str],
    html: Optional[bool],
    verbose: bool,
) -> None:
    """Render every selected source file and write the site.

    Options are read from [tool.sitesmith.templates] in the project's
    pyproject.toml when present; command line flags take precedence.

    \b
    Examples:
        sitesmith build                       # Build the current directory
        sitesmith build site -p '**/*.md'     # Only render markdown files
        sitesmith build --base-file base.html # Wrap pages in a layout
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    overrides: dict[str, Any] = {}
    if pattern:
        overrides["pattern"] = list(pattern)
    if directory is not None:
        overrides["directory"] = directory
    if base_file is not None:
        overrides["base_file"] = base_file
    if html is not None:
        overrides["html"] = html

    try:
        pyproject_path = project_dir / "pyproject.toml"
        if pyproject_path.exists():
            options = Options.from_pyproject(pyproject_path)
        else:
            options = Options()
        plugin = Templates(options, **overrides)
    except OptionsError as e:
        echo_error(f"Configuration error: {e}")
        raise SystemExit(1)

    site = Site(project_dir, source=source, destination=destination)

    try:
        if metadata_file is not None:
            site.metadata(_load_metadata(metadata_file))
        files = site.use(plugin).build()
    except SiteError as e:
        echo_error(str(e))
        raise SystemExit(1)

    if not files:
        echo_warning(f"No files found in {site.path(source)}")

    echo_success(f"Built {len(files)} file(s) into {site.path(destination)}")
