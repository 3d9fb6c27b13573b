# SPDX-License-Identifier: MIT
"""Exception hierarchy shared by the plugin, the renderer and the host site."""

from __future__ import annotations


class TemplatesError(Exception):
    """Base class for every error raised or returned by sitesmith-templates."""

    pass


class OptionsError(TemplatesError):
    """Raised when plugin options are invalid."""

    pass


class TemplateNotFoundError(TemplatesError):
    """Returned when a template or base file does not exist."""

    pass


class TemplateCompileError(TemplatesError):
    """Returned when a component cannot be loaded or compiled."""

    pass


class TemplateRenderError(TemplatesError):
    """Returned when a component raises while rendering."""

    pass


class BaseFileError(TemplatesError):
    """Returned when a naive base file cannot be read."""

    pass


class SiteError(TemplatesError):
    """Raised when the host site fails to read, process or write files."""

    pass
