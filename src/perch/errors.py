"""perch exception hierarchy.

Exceptions are for two things only: configuration mistakes caught at
build time, and the router's routing decisions. Handler outcomes travel
through ``perch.result`` instead.
"""

from collections.abc import Iterable
from dataclasses import dataclass


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when routes, patterns, or the app are misconfigured.

    Typically surfaces while building a ``Route`` or freezing the ``App``.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(PerchError):
    """A routing decision that maps directly to an HTTP status code.

    Raised by ``Router.match``; the dispatcher turns it into a response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route pattern matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """405 — a pattern matched but has no handler for the method.

    ``allowed`` keeps the registration order of the matched route, and
    the ``Allow`` header lists exactly those methods.
    """

    def __init__(self, allowed: Iterable[str], detail: str = "") -> None:
        allow_value = ", ".join(allowed)
        super().__init__(
            status=405,
            detail=detail or f"Method not allowed. Allowed methods: {allow_value}",
            headers=(("Allow", allow_value),),
        )

    @property
    def allowed(self) -> tuple[str, ...]:
        """The methods registered for the matched pattern."""
        for name, value in self.headers:
            if name == "Allow":
                return tuple(m for m in value.split(", ") if m)
        return ()
