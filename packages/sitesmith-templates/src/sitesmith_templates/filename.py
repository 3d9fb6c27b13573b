# SPDX-License-Identifier: MIT
"""Output naming for rendered files.

File-set keys are POSIX-style relative paths. Rendering a file replaces its
final extension with ``.html`` and keeps the directory prefix as-is:
- ``docs/a.md``  -> ``docs/a.html``
- ``a.md``       -> ``a.html``
- ``a``          -> ``a.html``
"""

from __future__ import annotations

import posixpath

HTML_EXTENSION = ".html"


def html_name(key: str) -> str:
    """Return the output key for a rendered file.

    Args:
        key: The file-set key of the source file

    Returns:
        The key with its final extension replaced by ``.html``

    Examples:
        >>> html_name("docs/index.md")
        'docs/index.html'
        >>> html_name("notes.tar.gz")
        'notes.tar.html'
        >>> html_name(".profile")
        '.profile.html'
    """
    directory, basename = posixpath.split(key)
    stem, _ = posixpath.splitext(basename)
    filename = (stem or basename) + HTML_EXTENSION

    if directory:
        return f"{directory}/{filename}"
    return filename
