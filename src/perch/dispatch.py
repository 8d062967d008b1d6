"""Dispatcher — route a request, run its handler, map the outcome.

The dispatcher is the boundary where the Result protocol ends and HTTP
begins:

- no pattern matches              -> 404
- pattern matches, method missing -> 405 with ``Allow``
- handler returns ``Err``         -> 500
- handler raises anyway           -> 500
- handler returns ``Ok(response)`` -> that response, verbatim

``dispatch`` never raises (cancellation aside).
"""

from collections.abc import Iterable

from perch._internal.invoke import invoke
from perch.context import Context
from perch.errors import HTTPError
from perch.http.request import Request
from perch.http.response import Response
from perch.result import Err, ErrorInfo, Ok
from perch.routing.route import Route
from perch.routing.router import Router
from perch.server.errors import (
    handler_failure_response,
    routing_error_response,
    unhandled_fault_response,
)


class Dispatcher:
    """Dispatch requests over an ordered route table.

    Usage::

        dispatcher = Dispatcher([
            Route("/api/{name}", {"GET": greet}),
            Route("/{file:path}", {"GET": cached_files.handle}),
        ])
        response = await dispatcher.dispatch(request)
    """

    __slots__ = ("_router",)

    def __init__(self, routes: Router | Iterable[Route]) -> None:
        if isinstance(routes, Router):
            self._router = routes
        else:
            self._router = Router(routes)
        self._router.compile()

    @property
    def router(self) -> Router:
        return self._router

    async def dispatch(self, request: Request) -> Response:
        try:
            match = self._router.match(request.method, request.path)
        except HTTPError as exc:
            return routing_error_response(exc, request)

        ctx = Context.for_request(request, match.params)
        try:
            outcome = await invoke(match.handler, request, ctx)
        except Exception as exc:
            return unhandled_fault_response(exc, request)

        if isinstance(outcome, Err):
            return handler_failure_response(outcome.error, request)
        if isinstance(outcome, Ok) and isinstance(outcome.value, Response):
            return outcome.value

        kind = type(outcome).__name__
        return handler_failure_response(
            ErrorInfo(f"handler for {match.route.path!r} returned {kind}, expected Ok(Response)"),
            request,
        )

    __call__ = dispatch


def handler_from_routes(routes: Iterable[Route]) -> Dispatcher:
    """Build a request -> response callable from *routes*.

    The returned dispatcher is itself awaitable-callable::

        handle = handler_from_routes(routes)
        response = await handle(request)
    """
    return Dispatcher(routes)
