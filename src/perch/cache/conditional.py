"""Conditional-cache component — ETag / If-None-Match.

::

    Client                          Server
      |---- GET /app.js ------------->|   (1) first request
      |<--- 200 OK -------------------|   (2) body + ETag + Cache-Control
      |     ETag: 9f86d0...           |
      |     Cache-Control: max-age=3600
      |                               |
      |---- GET /app.js ------------->|   (3) client revalidates
      |     If-None-Match: 9f86d0...  |
      |<--- 304 Not Modified ---------|   (4) stored etag matches, no body

The etag is the lowercase hex SHA-256 of the body bytes. The store key
is the request path without its leading ``/``.
"""

import logging

from perch._internal.invoke import invoke
from perch.cache.digest import digest_async
from perch.cache.store import ETagStore
from perch.context import Context
from perch.files import FileServer, content_type_for
from perch.http.request import Request
from perch.http.response import Response
from perch.middleware.protocol import Handler
from perch.result import Err, ErrorInfo, Ok, Result, attempt

logger = logging.getLogger("perch.cache")

DEFAULT_MAX_AGE = 3600

# Conditional GET applies to safe reads only
CONDITIONAL_METHODS = frozenset({"GET", "HEAD"})


def cache_control(max_age: int) -> str:
    return f"max-age={max_age}"


def not_modified(etag: str, max_age: int) -> Response:
    """An empty 304 that repeats the validator the client already holds."""
    return (
        Response(body=b"", status=304)
        .with_header("ETag", etag)
        .with_header("Cache-Control", cache_control(max_age))
    )


def with_etag(response: Response, etag: str, max_age: int) -> Response:
    """Attach ``ETag`` and ``Cache-Control``; everything else is kept."""
    return response.with_header("ETag", etag).with_header("Cache-Control", cache_control(max_age))


async def _call_next(next: Handler, request: Request, ctx: Context) -> Result[Response]:
    """Run the wrapped handler, forcing whatever happens into a Result."""
    try:
        outcome = await invoke(next, request, ctx)
    except Exception as exc:
        return Err(ErrorInfo.from_exception(exc))
    if isinstance(outcome, Err):
        return outcome
    if isinstance(outcome, Ok) and isinstance(outcome.value, Response):
        return outcome
    return Err(ErrorInfo(f"handler returned {type(outcome).__name__}, expected Ok(Response)"))


class ConditionalCache:
    """Middleware that stamps responses with an ETag and answers 304.

    When the client's ``If-None-Match`` equals the stored etag for the
    path, the wrapped handler is not called at all. Otherwise the handler
    runs, its body is hashed, the store is updated, and the response goes
    out with ``ETag`` and ``Cache-Control`` added.

    Only ``GET`` and ``HEAD`` take part. Other methods go straight to the
    wrapped handler, which always runs, and never touch the store.

    Only ``200`` responses are stamped; anything else passes through and
    leaves the store alone.

    With ``revalidate=True`` the wrapped handler always runs and the 304
    is decided against the fresh digest instead of the stored one. That
    costs a handler call per request but never serves a stale 304.

    Usage::

        store = ETagStore()
        cached = ConditionalCache(store, max_age=600)
        Route("/{file:path}", {"GET": cached(files.handle)})
    """

    __slots__ = ("_max_age", "_revalidate", "_store")

    def __init__(
        self,
        store: ETagStore | None = None,
        *,
        max_age: int = DEFAULT_MAX_AGE,
        revalidate: bool = False,
    ) -> None:
        self._store = store if store is not None else ETagStore()
        self._max_age = max_age
        self._revalidate = revalidate

    @property
    def store(self) -> ETagStore:
        return self._store

    @property
    def max_age(self) -> int:
        return self._max_age

    def __call__(self, next: Handler) -> Handler:
        store = self._store
        max_age = self._max_age
        revalidate = self._revalidate

        async def conditional(request: Request, ctx: Context) -> Result[Response]:
            if request.method not in CONDITIONAL_METHODS:
                response, error = await _call_next(next, request, ctx)
                if error is not None:
                    return Err(error.wrap("failure while running next handler"))
                return Ok(response)

            key = ctx.resource
            validator = request.if_none_match

            if not revalidate and store.matches(key, validator):
                logger.debug("etag hit for %r", key)
                return Ok(not_modified(validator, max_age))

            response, error = await _call_next(next, request, ctx)
            if error is not None:
                return Err(error.wrap("failure while running next handler"))
            if response.status != 200:
                return Ok(response)

            etag, error = await attempt(digest_async, response.body_bytes)
            if error is not None:
                return Err(error.wrap("failure while computing etag"))

            store.set(key, etag)
            logger.debug("stored etag for %r", key)

            if revalidate and validator == etag:
                return Ok(not_modified(etag, max_age))
            return Ok(with_etag(response, etag, max_age))

        return conditional


class CachedFiles:
    """Self-contained file handler with conditional GET.

    Unlike ``ConditionalCache``, this handler checks the store *before*
    doing any I/O on the file contents. With ``verify=True`` (the default)
    a stored etag only short-circuits to 304 while the file's
    ``(mtime_ns, size)`` still equals the fingerprint recorded alongside
    it; an edited file is re-read and re-hashed. ``verify=False`` answers
    304 from the store alone, with no I/O at all.

    Usage::

        store = ETagStore()
        assets = CachedFiles("./public", store)
        Route("/{file:path}", {"GET": assets.handle})
    """

    __slots__ = ("_files", "_max_age", "_store", "_verify")

    def __init__(
        self,
        root: str | FileServer = ".",
        store: ETagStore | None = None,
        *,
        max_age: int = DEFAULT_MAX_AGE,
        verify: bool = True,
    ) -> None:
        self._files = root if isinstance(root, FileServer) else FileServer(root)
        self._store = store if store is not None else ETagStore()
        self._max_age = max_age
        self._verify = verify

    @property
    def store(self) -> ETagStore:
        return self._store

    @property
    def files(self) -> FileServer:
        return self._files

    async def handle(self, request: Request, ctx: Context) -> Result[Response]:
        key = ctx.resource
        validator = request.if_none_match

        if self._store.matches(key, validator):
            if not self._verify:
                return Ok(not_modified(validator, self._max_age))
            entry = self._store.entry(key)
            current, error = await self._files.stamp(key)
            if error is None and entry is not None and current == entry.stamp:
                return Ok(not_modified(validator, self._max_age))
            logger.debug("stored etag for %r is stale, reloading", key)

        # Stamp is taken before the read, never after it
        stamp, _ = await self._files.stamp(key)
        content, error = await self._files.read(key)
        if error is not None:
            return Err(error.wrap("failure while loading file"))

        etag, error = await attempt(digest_async, content)
        if error is not None:
            return Err(error.wrap("failure while computing etag"))

        self._store.set(key, etag, stamp=stamp)
        response = Response(body=content, content_type=content_type_for(key))
        return Ok(with_etag(response, etag, self._max_age))

    __call__ = handle
