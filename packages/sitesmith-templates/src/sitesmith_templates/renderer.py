# SPDX-License-Identifier: MIT
"""Component template rendering.

Rendering never raises for template problems: failures are returned in a
RenderResult so the caller decides how to abort.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from .errors import TemplateRenderError, TemplatesError
from .loader import ComponentLoader
from .options import Options

logger = logging.getLogger(__name__)

# Marker added to the root element when rendering for client-side hydration
HYDRATION_ATTRIBUTE = 'data-hydrate-root=""'

# First opening tag of the rendered markup
ROOT_TAG_PATTERN = re.compile(r"<([A-Za-z][\w:-]*)")


@dataclass
class RenderResult:
    """Outcome of a render call.

    Attributes:
        result: Rendered markup, when rendering succeeded
        error: The failure, when it did not
    """

    result: Optional[str] = None
    error: Optional[TemplatesError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def mark_hydration_root(markup: str) -> str:
    """Add the hydration marker to the first element of ``markup``."""
    return ROOT_TAG_PATTERN.sub(
        lambda match: f"<{match.group(1)} {HYDRATION_ATTRIBUTE}", markup, count=1
    )


def render_template(
    template_path: str | Path,
    props: Mapping[str, Any],
    options: Options,
    loader: ComponentLoader,
) -> RenderResult:
    """Render the component at ``template_path`` with ``props``.

    Args:
        template_path: Absolute path of the component template
        props: Render props (see ``assemble_props``)
        options: Plugin options; ``is_static`` selects the render mode
        loader: Loader compiling the component

    Returns:
        RenderResult carrying either the markup or the error
    """
    try:
        component = loader.load(template_path)
    except TemplatesError as e:
        logger.debug("Could not load %s: %s", template_path, e)
        return RenderResult(error=e)

    try:
        rendered = component(dict(props))
    except Exception as e:
        error = TemplateRenderError(f"Failed to render {template_path}: {e}")
        error.__cause__ = e
        return RenderResult(error=error)

    markup = "" if rendered is None else str(rendered)
    if not options.is_static:
        markup = mark_hydration_root(markup)

    return RenderResult(result=markup)
