"""HTTP response with a chainable ``.with_*()`` API.

Each transformation returns a new Response, so middleware can decorate
what a handler produced without mutating it.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from perch.result import Err, ErrorInfo, Ok, Result


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP status, a content type, extra headers, and a body."""

    body: str | bytes = b""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with *name* set to *value*.

        An existing header of the same name (case-insensitive) is replaced.
        """
        kept = tuple((k, v) for k, v in self.headers if k.lower() != name.lower())
        return replace(self, headers=(*kept, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        response = self
        for name, value in headers.items():
            response = response.with_header(name, value)
        return response

    def with_content_type(self, content_type: str) -> Response:
        return replace(self, content_type=content_type)

    def with_body(self, body: str | bytes) -> Response:
        return replace(self, body=body)

    # -- Accessors --

    def header(self, name: str, default: str | None = None) -> str | None:
        """Look up a header case-insensitively.

        ``Content-Type`` is answered from ``content_type``.
        """
        wanted = name.lower()
        if wanted == "content-type":
            return self.content_type
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return default

    @property
    def body_bytes(self) -> bytes:
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body


def json_response(data: Any, headers: Mapping[str, str] | None = None) -> Result[Response]:
    """Serialize *data* to JSON and wrap it in ``Ok``.

    Extra *headers* are applied after the content type, so a caller can
    still override it. Unserializable data comes back as ``Err``.
    """
    try:
        body = json_module.dumps(data)
    except (TypeError, ValueError) as exc:
        return Err(ErrorInfo.from_exception(exc).wrap("failure while encoding json"))

    response = Response(body=body, content_type="application/json")
    for name, value in (headers or {}).items():
        if name.lower() == "content-type":
            response = response.with_content_type(value)
        else:
            response = response.with_header(name, value)
    return Ok(response)
