"""
Record cache shared by the ingestion pipeline and the detail view.

Maps a record's display key to its raw payload. The cache is reset at the
start of every browse action; each reset starts a new generation, and writes
tagged with an older generation are dropped so a worker left over from a
previous browse cannot leak records into the current one.

All writes are expected to happen on the UI thread (through the surface's
``apply_mutation``), so the cache holds no lock.
"""

from __future__ import annotations

from typing import Iterator


class RecordCache:
    """Insertion-ordered display key -> payload store."""

    def __init__(self) -> None:
        self._entries: dict[str, bytes] = {}
        self._generation = 0

    @property
    def generation(self) -> int:
        """The generation started by the most recent ``reset()``."""
        return self._generation

    def put(self, key: str, payload: bytes, generation: int | None = None) -> bool:
        """Insert or overwrite ``key``.

        Args:
            key: Display key of the record.
            payload: Raw record bytes.
            generation: Generation the writer belongs to. When given and
                stale, the write is ignored.

        Returns:
            True if the entry was stored.
        """
        if generation is not None and generation != self._generation:
            return False
        self._entries[key] = payload
        return True

    def get(self, key: str) -> bytes | None:
        """Return the payload stored under ``key``, or None."""
        return self._entries.get(key)

    def reset(self) -> int:
        """Drop every entry and start a new generation.

        Returns:
            The new generation number.
        """
        self._entries = {}
        self._generation += 1
        return self._generation

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def keys(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))
