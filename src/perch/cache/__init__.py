"""Conditional GET: ETag / If-None-Match caching.

Two shapes share one protocol:

- ``ConditionalCache`` wraps any handler (middleware shape).
- ``CachedFiles`` reads files itself (handler shape) and can answer
  304 without touching the file contents.

Both record ``path -> etag`` in an ``ETagStore`` passed in by the caller.
"""

from perch.cache.conditional import DEFAULT_MAX_AGE, CachedFiles, ConditionalCache
from perch.cache.digest import digest
from perch.cache.store import CacheEntry, ETagStore

__all__ = [
    "DEFAULT_MAX_AGE",
    "CacheEntry",
    "CachedFiles",
    "ConditionalCache",
    "ETagStore",
    "digest",
]
