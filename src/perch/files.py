"""File-serving handler.

Maps the request path (minus its leading ``/``) onto a file under a root
directory and serves it with a content type guessed from the extension.
Every failure comes back through the Result protocol as
``failure while loading file: <cause>``.
"""

import logging
import mimetypes
from pathlib import Path

import anyio

from perch.context import Context
from perch.http.request import Request
from perch.http.response import Response
from perch.result import Err, ErrorInfo, Ok, Result, attempt

logger = logging.getLogger("perch.files")

FALLBACK_CONTENT_TYPE = "text/plain"

# Textual types that get an explicit charset
_CHARSET_TYPES = frozenset({"application/json", "application/javascript", "image/svg+xml"})


def content_type_for(path: str) -> str:
    """Guess a content type from *path*'s extension.

    Textual types carry ``charset=utf-8``; unknown extensions fall back
    to plain ``text/plain``.
    """
    guessed, _ = mimetypes.guess_type(path)
    if guessed is None:
        return FALLBACK_CONTENT_TYPE
    if guessed.startswith("text/") or guessed in _CHARSET_TYPES:
        return f"{guessed}; charset=utf-8"
    return guessed


class FileServer:
    """Read files from a root directory.

    Security: resolves symlinks and refuses any path whose final target
    lies outside the root, so ``../`` segments cannot escape it.

    Usage::

        files = FileServer("./public")
        Route("/{file:path}", {"GET": files.handle})
    """

    __slots__ = ("_root",)

    def __init__(self, root: str | Path = ".") -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def locate(self, resource: str) -> Result[Path]:
        """Resolve *resource* under the root without touching its contents."""
        try:
            target = (self._root / resource).resolve()
        except (OSError, RuntimeError, ValueError) as exc:
            return Err(ErrorInfo.from_exception(exc))
        if not target.is_relative_to(self._root):
            return Err(ErrorInfo(f"path {resource!r} escapes the served directory"))
        return Ok(target)

    async def read(self, resource: str) -> Result[bytes]:
        """Read *resource* in full. Missing files, directories, and
        permission problems all come back as ``Err``."""
        target, error = self.locate(resource)
        if error is not None:
            return Err(error)
        return await attempt(anyio.Path(target).read_bytes)

    async def stamp(self, resource: str) -> Result[tuple[int, int]]:
        """Return ``(mtime_ns, size)`` for *resource*."""
        target, error = self.locate(resource)
        if error is not None:
            return Err(error)
        info, error = await attempt(anyio.Path(target).stat)
        if error is not None:
            return Err(error)
        return Ok((info.st_mtime_ns, info.st_size))

    async def handle(self, request: Request, ctx: Context) -> Result[Response]:
        """Serve the file named by the request path."""
        resource = ctx.resource
        content, error = await self.read(resource)
        if error is not None:
            logger.debug("cannot load %r: %s", resource, error)
            return Err(error.wrap("failure while loading file"))
        return Ok(Response(body=content, content_type=content_type_for(resource)))

    __call__ = handle


async def send_file(request: Request, ctx: Context) -> Result[Response]:
    """Serve files relative to the current working directory."""
    return await FileServer(".").handle(request, ctx)
