"""Route and RouteMatch frozen dataclasses, plus route-table helpers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from perch.errors import ConfigurationError
from perch.routing.pattern import RoutePattern

if TYPE_CHECKING:
    from perch.middleware.protocol import Handler, Middleware

METHODS: tuple[str, ...] = (
    "GET",
    "HEAD",
    "POST",
    "PUT",
    "DELETE",
    "CONNECT",
    "OPTIONS",
    "TRACE",
    "PATCH",
)


@dataclass(frozen=True, slots=True)
class Route:
    """A URL pattern plus the handler for each HTTP method it serves.

    Built once at startup and read-only afterwards. ``pattern`` may be
    given as a string; it is compiled on construction. Method names are
    upper-cased and checked against ``METHODS``::

        Route("/users/{id:int}", {"GET": show_user, "DELETE": delete_user})
    """

    pattern: RoutePattern
    handlers: Mapping[str, Handler]
    name: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.pattern, str):
            object.__setattr__(self, "pattern", RoutePattern.compile(self.pattern))

        normalised: dict[str, Handler] = {}
        for method, handler in self.handlers.items():
            upper = method.upper()
            if upper not in METHODS:
                msg = f"Route {self.pattern.path!r}: unknown HTTP method {method!r}."
                raise ConfigurationError(msg)
            if not callable(handler):
                msg = f"Route {self.pattern.path!r}: handler for {upper} is not callable."
                raise ConfigurationError(msg)
            normalised[upper] = handler
        if not normalised:
            msg = f"Route {self.pattern.path!r} registers no methods."
            raise ConfigurationError(msg)
        object.__setattr__(self, "handlers", MappingProxyType(normalised))

    @property
    def path(self) -> str:
        return self.pattern.path

    @property
    def methods(self) -> tuple[str, ...]:
        """Registered methods, in registration order."""
        return tuple(self.handlers)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    method: str
    params: dict[str, str]

    @property
    def handler(self) -> Handler:
        return self.route.handlers[self.method]


def all_methods(handler: Handler) -> dict[str, Handler]:
    """A handler map that serves every known method with *handler*."""
    return dict.fromkeys(METHODS, handler)


def add_middleware_to_routes(middleware: Middleware, *routes: Route) -> list[Route]:
    """Return copies of *routes* with every handler wrapped by *middleware*.

    The originals are left untouched::

        routes = add_middleware_to_routes(ConditionalCache(store), *asset_routes)
    """
    return [
        Route(
            route.pattern,
            {method: middleware(handler) for method, handler in route.handlers.items()},
            name=route.name,
        )
        for route in routes
    ]
