"""ETag store — the latest content digest computed for each path."""

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """The etag last sent for a path.

    ``stamp`` is an optional ``(mtime_ns, size)`` fingerprint of the file
    the etag was computed from; ``CachedFiles`` uses it to spot edits.
    """

    etag: str
    stamp: tuple[int, int] | None = None


class ETagStore:
    """Mapping of resource path to its most recent ``CacheEntry``.

    One entry per path. Entries are overwritten, never evicted, so the
    store grows with the number of distinct paths served.

    Thread safety:
        No locks. Two requests racing on the same path hash the same
        bytes, so whichever write lands last stores the same etag.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}

    def get(self, path: str) -> str | None:
        """Return the stored etag for *path*, or ``None``."""
        entry = self._entries.get(path)
        return entry.etag if entry is not None else None

    def entry(self, path: str) -> CacheEntry | None:
        return self._entries.get(path)

    def set(self, path: str, etag: str, *, stamp: tuple[int, int] | None = None) -> None:
        """Record *etag* for *path*, replacing any previous entry."""
        self._entries[path] = CacheEntry(etag=etag, stamp=stamp)

    def matches(self, path: str, validator: str) -> bool:
        """True when *validator* is exactly the etag stored for *path*."""
        if not validator:
            return False
        return self.get(path) == validator

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"ETagStore({len(self._entries)} entries)"
