"""Immutable HTTP request.

The body is read in full by the server glue before dispatch, so handlers
see plain bytes and never touch ASGI ``receive``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from perch.http.headers import Headers
from perch.http.query import QueryParams

_DEFAULT_PORTS = {"http": 80, "https": 443}


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request."""

    method: str
    path: str
    headers: Headers
    query: QueryParams
    url: str
    body: bytes = b""
    http_version: str = "1.1"
    client: tuple[str, int] | None = None

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def if_none_match(self) -> str:
        """The client's ``If-None-Match`` validator, ``""`` when absent."""
        return self.headers.get("if-none-match") or ""

    def text(self) -> str:
        return self.body.decode("utf-8")

    @classmethod
    def from_asgi(cls, scope: dict[str, Any], body: bytes = b"") -> Request:
        """Create a Request from an ASGI ``http`` scope and its collected body."""
        headers = Headers(tuple(scope.get("headers", ())))
        query_string: bytes = scope.get("query_string", b"")
        client = scope.get("client")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=headers,
            query=QueryParams(query_string),
            url=_build_url(scope, headers),
            body=body,
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
        )

    @classmethod
    def build(
        cls,
        method: str,
        target: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes = b"",
        host: str = "localhost",
    ) -> Request:
        """Build a request from a method and a ``path?query`` target.

        Handy for calling a ``Dispatcher`` directly::

            response = await dispatcher.dispatch(Request.build("GET", "/http.py"))
        """
        path, _, query_string = target.partition("?")
        url = f"http://{host}{path}"
        if query_string:
            url = f"{url}?{query_string}"
        return cls(
            method=method.upper(),
            path=path or "/",
            headers=Headers.from_pairs(headers or {}),
            query=QueryParams(query_string),
            url=url,
            body=body,
        )


def _build_url(scope: dict[str, Any], headers: Headers) -> str:
    scheme = scope.get("scheme", "http")
    host = headers.get("host")
    if host is None:
        server = scope.get("server")
        if server:
            name, port = server[0], server[1]
            host = name if port in (None, _DEFAULT_PORTS.get(scheme)) else f"{name}:{port}"
        else:
            host = "localhost"
    root_path = scope.get("root_path", "")
    url = f"{scheme}://{host}{root_path}{scope['path']}"
    query_string: bytes = scope.get("query_string", b"")
    if query_string:
        url = f"{url}?{query_string.decode('latin-1')}"
    return url
