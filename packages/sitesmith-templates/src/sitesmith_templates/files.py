# SPDX-License-Identifier: MIT
"""Ordered file set shared between the host site and its plugins."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Iterator, Mapping, Optional

# A file record: ``contents`` (bytes) plus arbitrary front-matter fields
FileRecord = dict[str, Any]


class FileSet(MutableMapping[str, FileRecord]):
    """Insertion-ordered mapping of relative path to file record.

    Besides the usual mapping operations it supports ``replace_key``, which
    renames an entry in place so that no observer ever sees both the old and
    the new key.
    """

    def __init__(self, entries: Optional[Mapping[str, FileRecord]] = None) -> None:
        self._entries: dict[str, FileRecord] = dict(entries or {})

    def __getitem__(self, key: str) -> FileRecord:
        return self._entries[key]

    def __setitem__(self, key: str, record: FileRecord) -> None:
        self._entries[key] = record

    def __delitem__(self, key: str) -> None:
        del self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"FileSet({list(self._entries)!r})"

    def replace_key(self, old: str, new: str, record: Optional[FileRecord] = None) -> None:
        """Move the record stored under ``old`` to ``new``.

        The entry keeps its position. An existing entry under ``new`` is
        overwritten, so exactly one entry remains for the document.

        Keeping the position means rebuilding the mapping, which is linear in
        the size of the set. Renaming the last entry skips the rebuild.

        Args:
            old: Current key
            new: Key to store the record under
            record: Replacement record (defaults to the current one)

        Raises:
            KeyError: If ``old`` is not in the set
        """
        current = self._entries[old]
        if record is None:
            record = current
        if old == new:
            self._entries[old] = record
            return

        if next(reversed(self._entries)) == old:
            del self._entries[old]
            self._entries.pop(new, None)
            self._entries[new] = record
            return

        self._entries = {
            (new if key == old else key): (record if key == old else value)
            for key, value in self._entries.items()
            if key != new
        }
