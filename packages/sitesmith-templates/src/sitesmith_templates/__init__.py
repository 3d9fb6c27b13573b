# SPDX-License-Identifier: MIT
"""Component template rendering for static-site pipelines.

This package provides a plugin that renders every selected file of a site
through a component template:
- Jinja2 templates or Python component modules, compiled on load
- Optional base files wrapping the rendered page
- Renaming of output files to .html

Example:
    >>> from sitesmith_templates import Site, Templates
    >>>
    >>> site = Site("my-site", source="src", destination="build")
    >>> site.metadata({"site_name": "My Site"})
    >>> site.use(Templates(directory="templates", base_file="base.jinja"))
    >>> files = site.build()
    >>> list(files)
    ['index.html', 'posts/hello.html']
"""

__version__ = "0.1.0"

from .errors import (
    BaseFileError,
    OptionsError,
    SiteError,
    TemplateCompileError,
    TemplateNotFoundError,
    TemplateRenderError,
    TemplatesError,
)
from .filename import HTML_EXTENSION, html_name
from .files import FileRecord, FileSet
from .loader import (
    JINJA_EXTENSIONS,
    MODULE_EXTENSION,
    Component,
    ComponentLoader,
    compile_ignored,
    compile_jinja,
    compile_module,
)
from .naive import VARIABLE_PATTERN, apply_naive_template, substitute
from .options import (
    DEFAULT_DIRECTORY,
    DEFAULT_PATTERN,
    DEFAULT_TEMPLATE,
    Options,
)
from .plugin import Templates, wrap_base_file
from .props import assemble_props, decode_contents
from .renderer import HYDRATION_ATTRIBUTE, RenderResult, render_template
from .selector import compile_pattern, expand_braces, matches, select_files
from .site import Site, parse_front_matter

__all__ = [
    # Errors
    "TemplatesError",
    "OptionsError",
    "TemplateNotFoundError",
    "TemplateCompileError",
    "TemplateRenderError",
    "BaseFileError",
    "SiteError",
    # Options
    "Options",
    "DEFAULT_TEMPLATE",
    "DEFAULT_DIRECTORY",
    "DEFAULT_PATTERN",
    # File set
    "FileRecord",
    "FileSet",
    "HTML_EXTENSION",
    "html_name",
    # Selection
    "select_files",
    "matches",
    "compile_pattern",
    "expand_braces",
    # Rendering
    "Component",
    "ComponentLoader",
    "JINJA_EXTENSIONS",
    "MODULE_EXTENSION",
    "compile_jinja",
    "compile_module",
    "compile_ignored",
    "HYDRATION_ATTRIBUTE",
    "RenderResult",
    "render_template",
    "assemble_props",
    "decode_contents",
    "VARIABLE_PATTERN",
    "apply_naive_template",
    "substitute",
    # Plugin and host
    "Templates",
    "wrap_base_file",
    "Site",
    "parse_front_matter",
]
