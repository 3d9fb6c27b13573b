# SPDX-License-Identifier: MIT
"""Naive placeholder templates for plain-text base files."""

from __future__ import annotations

import re
from typing import Any, Mapping

from .props import decode_contents

# Pattern for matching template variables: {{variable_name}} or {{ variable_name }}
VARIABLE_PATTERN = re.compile(r"\{\{\s*([\w.-]+)\s*\}\}")


def substitute(text: str, record: Mapping[str, Any]) -> str:
    """Substitute {{variable}} patterns in a template string.

    Variables missing from the record are left in place.

    Args:
        text: The template string containing {{variable}} patterns.
        record: Mapping of variable names to values. Bytes values are
            decoded as UTF-8, anything else goes through ``str``.

    Returns:
        The text with all known variables substituted.
    """

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        if var_name not in record or record[var_name] is None:
            return match.group(0)
        return decode_contents(record[var_name])

    return VARIABLE_PATTERN.sub(replacer, text)


def apply_naive_template(text: str, record: Mapping[str, Any]) -> dict[str, Any]:
    """Render a base file against a file record.

    Returns:
        A shallow copy of ``record`` whose ``contents`` holds the
        substituted text encoded as UTF-8.
    """
    result = dict(record)
    result["contents"] = substitute(text, record).encode("utf-8")
    return result
