"""Handler and Middleware types.

A handler is any callable matching::

    async def handler(request: Request, ctx: Context) -> Result[Response]: ...

Sync ``def`` handlers are accepted too; callers go through ``invoke``.
A middleware takes a handler and returns a handler with the same shape::

    def timing(next: Handler) -> Handler:
        async def handler(request: Request, ctx: Context) -> Result[Response]:
            start = time.monotonic()
            response, error = await invoke(next, request, ctx)
            if error is not None:
                return Err(error)
            elapsed = time.monotonic() - start
            return Ok(response.with_header("X-Time", f"{elapsed:.3f}"))

        return handler

No base class required. Ordering between middleware is the caller's
business; nothing here validates it.
"""

from collections.abc import Awaitable, Callable
from functools import reduce
from typing import TypeAlias

from perch.context import Context
from perch.http.request import Request
from perch.http.response import Response
from perch.result import Result

HandlerResult: TypeAlias = Result[Response] | Awaitable[Result[Response]]

Handler: TypeAlias = Callable[[Request, Context], HandlerResult]

Middleware: TypeAlias = Callable[[Handler], Handler]


def compose(*middleware: Middleware) -> Middleware:
    """Fold several middleware into one.

    ``compose(a, b, c)(handler)`` is ``a(b(c(handler)))``: the first
    listed is outermost, so it sees the request first and the response
    last. ``compose()`` is the identity.
    """

    def composed(handler: Handler) -> Handler:
        return reduce(lambda inner, mw: mw(inner), reversed(middleware), handler)

    return composed
