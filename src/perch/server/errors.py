"""Error responses for the dispatcher boundary.

Routing decisions (404, 405) and handler failures (500) all end here.
Failure detail goes to the log; the client only ever sees the reason
phrase.
"""

import logging
from http import HTTPStatus

from perch.errors import HTTPError
from perch.http.request import Request
from perch.http.response import Response
from perch.result import ErrorInfo

logger = logging.getLogger("perch.server")


def _phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return f"Error {status}"


def routing_error_response(exc: HTTPError, request: Request) -> Response:
    """Map a router ``HTTPError`` to a plain-text response with its headers."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
    response = Response(body=_phrase(exc.status), status=exc.status)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def handler_failure_response(error: ErrorInfo, request: Request) -> Response:
    """A handler returned ``Err``: log the chain, answer 500."""
    logger.error("500 %s %s: %s", request.method, request.path, error)
    return internal_server_error()


def unhandled_fault_response(exc: Exception, request: Request) -> Response:
    """A handler raised despite the Result protocol: log the traceback, answer 500."""
    logger.exception("500 %s %s: handler raised %s", request.method, request.path, type(exc).__name__)
    return internal_server_error()


def internal_server_error() -> Response:
    return Response(body=_phrase(500), status=500)
