"""ASGI handler — the only component that touches raw ASGI ``http`` scopes.

Reads the request body, builds a ``Request``, hands it to the
dispatcher, and sends the response back.
"""

import logging

from perch._internal.asgi import Receive, Scope, Send
from perch.dispatch import Dispatcher
from perch.http.request import Request
from perch.server.errors import internal_server_error
from perch.server.sender import send_response

logger = logging.getLogger("perch.server")


class ClientDisconnected(Exception):  # noqa: N818
    """The client went away before the request body arrived."""


async def read_body(receive: Receive) -> bytes:
    """Collect the whole request body from ASGI ``http.request`` messages."""
    chunks: list[bytes] = []
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            raise ClientDisconnected
        body = message.get("body", b"")
        if body:
            chunks.append(body)
        if not message.get("more_body", False):
            return b"".join(chunks)


async def handle_request(scope: Scope, receive: Receive, send: Send, *, dispatcher: Dispatcher) -> None:
    """Process a single HTTP request through the dispatcher."""
    if scope["type"] != "http":
        return

    try:
        body = await read_body(receive)
    except ClientDisconnected:
        logger.debug("client disconnected before sending %s %s", scope["method"], scope["path"])
        return

    try:
        request = Request.from_asgi(dict(scope), body)
    except Exception:
        logger.exception("malformed request scope for %s", scope.get("path"))
        await send_response(internal_server_error(), send)
        return

    response = await dispatcher.dispatch(request)
    await send_response(response, send, head=request.method == "HEAD")
