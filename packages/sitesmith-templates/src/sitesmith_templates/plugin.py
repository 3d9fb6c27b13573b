# SPDX-License-Identifier: MIT
"""The templates plugin.

For every selected file the plugin:
1. assembles render props from the file record and the site metadata
2. renders the file's component template
3. optionally wraps the result in a base file (component or naive template)
4. optionally renames the output key to ``.html``

Files are processed one at a time. The first error aborts the batch and is
handed to the pipeline's ``done`` callback; files processed before it keep
their rendered state.
"""

from __future__ import annotations

import logging
from dataclasses import fields
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Mapping, MutableMapping, Optional, Union

from markupsafe import Markup

from .errors import BaseFileError, TemplatesError
from .filename import html_name
from .files import FileRecord, FileSet
from .loader import ComponentLoader
from .naive import apply_naive_template
from .options import Options
from .props import assemble_props
from .renderer import render_template
from .selector import select_files

if TYPE_CHECKING:
    from .site import Site

logger = logging.getLogger(__name__)

Done = Callable[[Optional[BaseException]], None]

# File fields read and written by the plugin
BASE_FILE_KEY = "baseFile"
RAW_CONTENTS_KEY = "rawContents"
CHILDREN_PROP = "children"


def wrap_base_file(
    record: FileRecord,
    props: Mapping[str, Any],
    rendered: str,
    base_file_path: Path,
    options: Options,
    loader: ComponentLoader,
) -> tuple[FileRecord, Optional[TemplatesError]]:
    """Wrap already rendered content in a base file.

    Component base files are rendered with the child markup as the
    ``children`` prop, always in static mode. Any other base file is read as
    UTF-8 text and filled in with ``apply_naive_template``.

    Args:
        record: The file record, ``contents`` already holding the rendered child
        props: The props the child was rendered with
        rendered: The rendered child markup
        base_file_path: Resolved path of the base file
        options: Plugin options
        loader: Loader compiling component base files

    Returns:
        The wrapped record and ``None``, or the unchanged record and the error
    """
    if loader.is_component(base_file_path):
        logger.debug("Using component base file: %s", base_file_path)
        base_props = dict(props)
        base_props[CHILDREN_PROP] = Markup(rendered)
        outcome = render_template(base_file_path, base_props, options.with_static(), loader)
        if outcome.error is not None:
            return record, outcome.error

        wrapped = dict(record)
        wrapped["contents"] = outcome.result.encode("utf-8")
        return wrapped, None

    logger.debug("Using naive base file: %s", base_file_path)
    try:
        text = base_file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        error = BaseFileError(f"Could not read base file {base_file_path}: {e}")
        error.__cause__ = e
        return record, error

    return apply_naive_template(text, record), None


class Templates:
    """Render files of a site through component templates.

    Example:
        >>> site = Site("my-site")
        >>> site.use(Templates(directory="layouts", base_file="base.html"))
        >>> site.build()
    """

    def __init__(
        self,
        options: Union[Options, Mapping[str, Any], None] = None,
        loader: Optional[ComponentLoader] = None,
        **kwargs: Any,
    ) -> None:
        """Resolve options and prepare the component loader.

        Args:
            options: An Options instance or a mapping of option names
            loader: Component loader to use (a fresh one by default)
            **kwargs: Options given as keyword arguments

        Raises:
            OptionsError: If an option is invalid
        """
        if isinstance(options, Options):
            if kwargs:
                options = Options.from_mapping({**_options_as_mapping(options), **kwargs})
        else:
            options = Options.from_mapping({**(options or {}), **kwargs})

        self.options: Options = options
        self.loader = loader if loader is not None else ComponentLoader(options.tooling)

        for extension in options.require_ignore_ext:
            self.loader.ignore(extension)

    def __call__(self, files: MutableMapping[str, FileRecord], site: "Site", done: Done) -> None:
        """Process every selected file, then report to ``done`` exactly once."""
        metadata = site.metadata()

        for key in select_files(list(files), self.options.pattern):
            try:
                error = self.process_file(files, key, metadata, site)
            except Exception as e:
                error = TemplatesError(f"Failed to process {key}: {e}")
                error.__cause__ = e
            if error is not None:
                logger.debug("Aborting on %s: %s", key, error)
                done(error)
                return

        done(None)

    def process_file(
        self,
        files: MutableMapping[str, FileRecord],
        key: str,
        metadata: Mapping[str, Any],
        site: "Site",
    ) -> Optional[TemplatesError]:
        """Render a single file in place.

        Returns:
            The error that stopped processing, or None
        """
        options = self.options
        data = files[key]
        base_file = data.get(BASE_FILE_KEY) or options.base_file
        if base_file and not isinstance(base_file, str):
            return _field_type_error(key, BASE_FILE_KEY, base_file)

        logger.debug("Preparing props: %s", key)
        props = assemble_props(data, metadata)

        if options.preserve:
            logger.debug("Preserving untouched contents: %s", key)
            data[RAW_CONTENTS_KEY] = data.get("contents")

        logger.debug("Starting conversion: %s", key)
        template = data.get(options.template_key) or options.default_template
        if not isinstance(template, str):
            return _field_type_error(key, options.template_key, template)
        outcome = render_template(
            site.path(options.directory, template), props, options, self.loader
        )
        if outcome.error is not None:
            return outcome.error

        data["contents"] = outcome.result.encode("utf-8")

        if base_file:
            logger.debug("Applying base file to contents: %s", key)
            directory = options.base_file_directory or options.directory
            data, error = wrap_base_file(
                data, props, outcome.result, site.path(directory, base_file), options, self.loader
            )
            if error is not None:
                return error

        if options.html:
            new_key = html_name(key)
            logger.debug("Renaming file: %s -> %s", key, new_key)
            if isinstance(files, FileSet):
                files.replace_key(key, new_key, data)
            else:
                del files[key]
                files[new_key] = data
        else:
            files[key] = data

        logger.debug("Saved file: %s", key)
        return None


def _options_as_mapping(options: Options) -> dict[str, Any]:
    return {f.name: getattr(options, f.name) for f in fields(options)}


def _field_type_error(key: str, field: str, value: Any) -> TemplatesError:
    return TemplatesError(
        f"Field '{field}' of {key} must be a file name, got {type(value).__name__}"
    )
