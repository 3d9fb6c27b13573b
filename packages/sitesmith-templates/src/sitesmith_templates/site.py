# SPDX-License-Identifier: MIT
"""A minimal static-site pipeline hosting the templates plugin.

The Site reads a source directory into a FileSet, passes it through its
plugins in order and writes the result to a destination directory. Files may
start with a YAML front-matter block, whose fields are merged into the file
record:

    ---
    title: Hello
    rtemplate: post.jinja
    ---
    Body text
"""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

import yaml

from .errors import SiteError
from .files import FileRecord, FileSet

logger = logging.getLogger(__name__)

Plugin = Callable[[FileSet, "Site", Callable[[Optional[BaseException]], None]], None]

# Leading front-matter block delimited by --- lines
FRONT_MATTER_PATTERN = re.compile(
    rb"\A---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)", re.DOTALL
)


def parse_front_matter(raw: bytes, source: str = "<file>") -> FileRecord:
    """Split raw file bytes into front-matter fields and contents.

    Args:
        raw: File contents as read from disk
        source: Name used in error messages

    Returns:
        A file record with ``contents`` holding the bytes after the block

    Raises:
        SiteError: If the front matter is not valid YAML or not a mapping
    """
    match = FRONT_MATTER_PATTERN.match(raw)
    if match is None:
        return {"contents": raw}

    try:
        fields = yaml.safe_load((match.group(1) or b"").decode("utf-8")) or {}
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise SiteError(f"Invalid front matter in {source}: {e}") from e

    if not isinstance(fields, dict):
        raise SiteError(f"Front matter in {source} must be a mapping")

    record: FileRecord = dict(fields)
    record["contents"] = raw[match.end() :]
    return record


class Site:
    """Host pipeline: read, process through plugins, write."""

    def __init__(
        self,
        directory: str | Path,
        source: str = "src",
        destination: str = "build",
        clean: bool = True,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.directory = Path(directory).resolve()
        self.source = source
        self.destination = destination
        self.clean = clean
        self.plugins: list[Plugin] = []
        self._metadata: dict[str, Any] = dict(metadata or {})

    def path(self, *segments: str | Path) -> Path:
        """Resolve path segments against the site directory."""
        return self.directory.joinpath(*segments)

    def metadata(self, mapping: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
        """Return the global metadata, merging ``mapping`` in first if given."""
        if mapping is not None:
            self._metadata.update(mapping)
        return self._metadata

    def use(self, plugin: Plugin) -> "Site":
        """Append a plugin to the pipeline."""
        self.plugins.append(plugin)
        return self

    def read(self) -> FileSet:
        """Read every file under the source directory.

        Keys are POSIX-style paths relative to the source directory, in
        sorted order.

        Raises:
            SiteError: If the source directory is missing or front matter is invalid
        """
        source_dir = self.path(self.source)
        if not source_dir.is_dir():
            raise SiteError(f"Source directory not found: {source_dir}")

        paths = {
            path.relative_to(source_dir).as_posix(): path
            for path in source_dir.rglob("*")
            if path.is_file()
        }

        files = FileSet()
        for key in sorted(paths):
            files[key] = parse_front_matter(paths[key].read_bytes(), source=key)

        logger.debug("Read %d files from %s", len(files), source_dir)
        return files

    def process(self, files: Optional[FileSet] = None) -> FileSet:
        """Run every plugin over the file set.

        Raises:
            SiteError: If a plugin reports an error or completes more than once
        """
        if files is None:
            files = self.read()

        for plugin in self.plugins:
            outcome: list[Optional[BaseException]] = []
            plugin(files, self, outcome.append)

            if len(outcome) != 1:
                raise SiteError(
                    f"Plugin {plugin!r} completed {len(outcome)} times instead of once"
                )
            if outcome[0] is not None:
                raise SiteError(str(outcome[0])) from outcome[0]

        return files

    def write(self, files: Mapping[str, FileRecord]) -> list[Path]:
        """Write file contents under the destination directory.

        Returns:
            Written paths
        """
        destination = self.path(self.destination)
        if self.clean and destination.exists():
            shutil.rmtree(destination)

        written: list[Path] = []
        for key, record in files.items():
            output_path = destination / key
            output_path.parent.mkdir(parents=True, exist_ok=True)
            contents = record.get("contents", b"")
            if isinstance(contents, str):
                contents = contents.encode("utf-8")
            output_path.write_bytes(contents)
            written.append(output_path)

        logger.debug("Wrote %d files to %s", len(written), destination)
        return written

    def build(self) -> FileSet:
        """Read, process and write the site."""
        files = self.process(self.read())
        self.write(files)
        return files
