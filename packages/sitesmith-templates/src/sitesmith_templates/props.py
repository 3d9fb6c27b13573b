# SPDX-License-Identifier: MIT
"""Render props assembly."""

from __future__ import annotations

from typing import Any, Mapping


def decode_contents(contents: Any) -> str:
    """Return file contents as text.

    Bytes are decoded as UTF-8; invalid sequences become U+FFFD so binary
    files never stop a build.
    """
    if isinstance(contents, (bytes, bytearray, memoryview)):
        return bytes(contents).decode("utf-8", errors="replace")
    if contents is None:
        return ""
    return str(contents)


def assemble_props(data: Mapping[str, Any], metadata: Mapping[str, Any]) -> dict[str, Any]:
    """Merge a file record and the site metadata into render props.

    File fields take precedence over metadata on key collisions, and
    ``contents`` is always the decoded file contents. Neither input is
    modified.

    Args:
        data: The file record
        metadata: Global site metadata

    Returns:
        A fresh props dictionary whose ``contents`` is always a string
    """
    props = dict(metadata)
    props.update(data)
    props["contents"] = decode_contents(data.get("contents"))
    return props
