"""Per-request context handed to every handler next to the request.

A ``Context`` is built by the dispatcher for each matched request and
dropped when the request completes. Handlers read derived data from it
instead of re-parsing the request.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from perch.http.cookies import parse_cookies
from perch.http.query import QueryParams
from perch.http.request import Request


@dataclass(frozen=True, slots=True)
class Context:
    """Derived, per-request data.

    Attributes:
        params: Captures from the matched route pattern.
        query: Parsed query string.
        cookies: Cookies sent with the request.
        url: The full request URL.
        path: The decoded URL path, e.g. ``/assets/app.js``.
    """

    params: Mapping[str, str] = field(default_factory=dict)
    query: QueryParams = field(default_factory=QueryParams)
    cookies: Mapping[str, str] = field(default_factory=dict)
    url: str = ""
    path: str = "/"

    @property
    def resource(self) -> str:
        """The URL path minus its leading ``/``, used as a storage key."""
        return self.path[1:] if self.path.startswith("/") else self.path

    @classmethod
    def for_request(cls, request: Request, params: Mapping[str, str]) -> Context:
        return cls(
            params=dict(params),
            query=request.query,
            cookies=parse_cookies(request.headers.get("cookie", "") or ""),
            url=request.url,
            path=request.path,
        )
