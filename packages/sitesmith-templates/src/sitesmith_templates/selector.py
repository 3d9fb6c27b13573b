# SPDX-License-Identifier: MIT
"""Glob-based selection of file-set keys.

Patterns follow the usual static-site conventions:
- ``*`` matches within one path segment, ``?`` a single character
- ``[abc]`` / ``[!abc]`` character classes, ``{a,b}`` alternation
- ``**`` as a whole segment matches any number of directories
- a leading ``!`` removes matches from what earlier patterns selected

Wildcards never match a segment starting with a dot unless the pattern
segment itself starts with one.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Iterable, Sequence, Union

logger = logging.getLogger(__name__)

Pattern = Union[str, Sequence[str]]

# Segment regexes for the two wildcard forms
_NO_DOT = r"(?!\.)"
_GLOBSTAR_DIRS = rf"(?:{_NO_DOT}[^/]*/)*"
_GLOBSTAR_TAIL = rf"(?:{_NO_DOT}[^/]*(?:/{_NO_DOT}[^/]*)*)?"


def _find_closing_brace(pattern: str, start: int) -> int:
    """Return the index of the brace closing the one at ``start``, or -1."""
    depth = 0
    for index in range(start, len(pattern)):
        char = pattern[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return -1


def _split_alternatives(body: str) -> list[str]:
    """Split a brace body on commas that are not nested in other braces."""
    parts: list[str] = []
    depth = 0
    current = ""
    for char in body:
        if char == "," and depth == 0:
            parts.append(current)
            current = ""
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
        current += char
    parts.append(current)
    return parts


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternations into separate patterns.

    Examples:
        >>> expand_braces("*.{md,html}")
        ['*.md', '*.html']
        >>> expand_braces("{a}")
        ['{a}']
    """
    start = pattern.find("{")
    while start != -1:
        end = _find_closing_brace(pattern, start)
        if end == -1:
            return [pattern]
        alternatives = _split_alternatives(pattern[start + 1 : end])
        if len(alternatives) > 1:
            head, tail = pattern[:start], pattern[end + 1 :]
            expanded: list[str] = []
            for alternative in alternatives:
                expanded.extend(expand_braces(head + alternative + tail))
            return expanded
        start = pattern.find("{", end + 1)
    return [pattern]


def _translate_segment(segment: str) -> str:
    """Translate one path segment of a glob into a regex fragment."""
    parts: list[str] = [] if segment.startswith(".") else [_NO_DOT]
    index = 0
    while index < len(segment):
        char = segment[index]
        if char == "*":
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        elif char == "[":
            end = segment.find("]", index + 2)
            if end == -1:
                parts.append(re.escape(char))
            else:
                body = segment[index + 1 : end]
                if body[0] in "!^":
                    body = "^" + body[1:]
                parts.append("[" + body.replace("\\", "\\\\") + "]")
                index = end
        else:
            parts.append(re.escape(char))
        index += 1
    return "".join(parts)


def translate(pattern: str) -> str:
    """Translate a single brace-free glob into a regular expression string."""
    if pattern.startswith("./"):
        pattern = pattern[2:]

    segments = pattern.split("/")
    regex = ""
    for index, segment in enumerate(segments):
        last = index == len(segments) - 1
        if segment == "**":
            regex += _GLOBSTAR_TAIL if last else _GLOBSTAR_DIRS
        else:
            regex += _translate_segment(segment)
            if not last:
                regex += "/"
    return regex


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a glob (braces allowed) into a full-match regex."""
    alternatives = [translate(expanded) for expanded in expand_braces(pattern)]
    return re.compile("(?:" + "|".join(alternatives) + r")\Z")


def matches(key: str, pattern: str) -> bool:
    """Check if a file key matches a single non-negated glob pattern."""
    return compile_pattern(pattern).match(key) is not None


def select_files(keys: Iterable[str], pattern: Pattern) -> list[str]:
    """Return the keys selected by one or more glob patterns.

    Patterns are applied in order: a plain pattern adds every key it matches,
    a ``!pattern`` removes its matches from the keys selected so far.

    Args:
        keys: File-set keys in iteration order
        pattern: A glob string or a sequence of glob strings

    Returns:
        The selected keys, in the same relative order as ``keys``
    """
    patterns = (pattern,) if isinstance(pattern, str) else tuple(pattern)
    ordered = list(keys)
    selected: set[str] = set()

    for glob in patterns:
        if glob.startswith("!"):
            regex = compile_pattern(glob[1:])
            selected = {key for key in selected if regex.match(key) is None}
        else:
            regex = compile_pattern(glob)
            selected.update(key for key in ordered if regex.match(key) is not None)

    result = [key for key in ordered if key in selected]
    logger.debug("Selected %d of %d files with %s", len(result), len(ordered), patterns)
    return result
