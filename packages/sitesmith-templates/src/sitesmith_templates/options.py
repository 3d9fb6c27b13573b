# SPDX-License-Identifier: MIT
"""Plugin options for sitesmith-templates.

This module provides the Options dataclass that holds all configuration
resolved once when the templates plugin is constructed.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .errors import OptionsError

DEFAULT_TEMPLATE = "default.jinja"
DEFAULT_DIRECTORY = "templates"
DEFAULT_PATTERN = ("**/*",)

# Metadata keys holding a per-file template override
NO_CONFLICT_TEMPLATE_KEY = "rtemplate"
TEMPLATE_KEY = "template"

# Original camelCase option names accepted alongside the snake_case ones
OPTION_ALIASES = {
    "defaultTemplate": "default_template",
    "requireIgnoreExt": "require_ignore_ext",
    "noConflict": "no_conflict",
    "baseFile": "base_file",
    "baseFileDirectory": "base_file_directory",
    "isStatic": "is_static",
}


@dataclass(frozen=True)
class Options:
    """Configuration for the templates plugin.

    Attributes:
        default_template: Template used when a file declares no override
        directory: Directory (relative to the site) holding templates
        html: Whether output keys are renamed to ``.html``
        pattern: Glob patterns selecting which files are processed
        preserve: Whether the untemplated contents are kept under ``rawContents``
        require_ignore_ext: Extensions that load as empty components
        no_conflict: Read the per-file override from ``rtemplate`` instead of ``template``
        base_file: Outer template wrapping every rendered file
        base_file_directory: Directory for ``base_file`` when it differs from ``directory``
        tooling: Options forwarded to the component compilers
        is_static: Render plain markup, without the hydration root marker
    """

    default_template: str = DEFAULT_TEMPLATE
    directory: str = DEFAULT_DIRECTORY
    html: bool = True
    pattern: tuple[str, ...] = DEFAULT_PATTERN
    preserve: bool = False
    require_ignore_ext: tuple[str, ...] = ()
    no_conflict: bool = True
    base_file: Optional[str] = None
    base_file_directory: Optional[str] = None
    tooling: Mapping[str, Any] = field(default_factory=dict)
    is_static: bool = True

    @property
    def template_key(self) -> str:
        """Return the file field that holds a per-file template override."""
        return NO_CONFLICT_TEMPLATE_KEY if self.no_conflict else TEMPLATE_KEY

    def with_static(self) -> "Options":
        """Return a copy forced into static rendering mode."""
        return replace(self, is_static=True)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "Options":
        """Create Options from a plain mapping.

        Both the snake_case field names and the camelCase names used by the
        JavaScript plugin are accepted.

        Args:
            mapping: Option names mapped to values

        Returns:
            Options instance

        Raises:
            OptionsError: If an option is unknown or has the wrong type
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}

        for raw_key, value in mapping.items():
            key = OPTION_ALIASES.get(raw_key, raw_key).replace("-", "_")
            if key not in known:
                raise OptionsError(f"Unknown option: {raw_key}")
            if key in values:
                raise OptionsError(f"Option given twice: {raw_key}")
            values[key] = value

        for key in ("html", "preserve", "no_conflict", "is_static"):
            if key in values and not isinstance(values[key], bool):
                raise OptionsError(f"Option '{key}' must be a boolean")

        for key in ("default_template", "directory"):
            if key in values and (not isinstance(values[key], str) or not values[key]):
                raise OptionsError(f"Option '{key}' must be a non-empty string")

        for key in ("base_file", "base_file_directory"):
            if values.get(key) is not None and not isinstance(values[key], str):
                raise OptionsError(f"Option '{key}' must be a string")

        if "pattern" in values:
            values["pattern"] = _string_tuple("pattern", values["pattern"])

        if "require_ignore_ext" in values:
            values["require_ignore_ext"] = tuple(
                ext if ext.startswith(".") else f".{ext}"
                for ext in _string_tuple("require_ignore_ext", values["require_ignore_ext"])
            )

        if "tooling" in values:
            tooling = values["tooling"]
            if tooling is None:
                tooling = {}
            if not isinstance(tooling, Mapping):
                raise OptionsError("Option 'tooling' must be a table")
            values["tooling"] = dict(tooling)

        return cls(**values)

    @classmethod
    def from_pyproject(cls, pyproject_path: str | Path) -> "Options":
        """Create Options from the ``[tool.sitesmith.templates]`` table.

        Args:
            pyproject_path: Path to pyproject.toml

        Returns:
            Options instance (defaults when the table is absent)

        Raises:
            OptionsError: If the file is invalid or an option is malformed
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(pyproject_path)
        if not path.exists():
            raise FileNotFoundError(f"pyproject.toml not found: {path}")

        try:
            with open(path, "rb") as f:
                pyproject = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise OptionsError(f"Invalid TOML syntax: {e}") from e

        return cls.from_pyproject_dict(pyproject)

    @classmethod
    def from_pyproject_dict(cls, pyproject: dict[str, Any]) -> "Options":
        """Create Options from a parsed pyproject.toml dictionary."""
        table = pyproject.get("tool", {}).get("sitesmith", {}).get("templates", {})
        if not isinstance(table, dict):
            raise OptionsError("[tool.sitesmith.templates] must be a table")
        return cls.from_mapping(table)


def _string_tuple(name: str, value: Any) -> tuple[str, ...]:
    """Coerce a string or a list of strings into a tuple."""
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        return tuple(value)
    raise OptionsError(f"Option '{name}' must be a string or a list of strings")
