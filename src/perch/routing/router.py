"""Ordered route table.

Routes are tried in declaration order and the first pattern that matches
the path decides the outcome, even when its method map lacks the request
method.
"""

from collections.abc import Iterable

from perch.errors import MethodNotAllowed, NotFound
from perch.routing.route import Route, RouteMatch


class Router:
    """Ordered route table with first-match-wins semantics.

    Usage::

        router = Router()
        router.add(Route("/users/{id:int}", {"GET": show_user}))
        router.add(Route("/{rest:path}", {"GET": send_file}))
        router.compile()
        match = router.match("GET", "/users/42")
    """

    __slots__ = ("_compiled", "_routes")

    def __init__(self, routes: Iterable[Route] = ()) -> None:
        self._routes: list[Route] = []
        self._compiled = False
        for route in routes:
            self.add(route)

    def add(self, route: Route) -> None:
        """Append a route. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        self._routes.append(route)

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    @property
    def routes(self) -> tuple[Route, ...]:
        return tuple(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request method and path against the table.

        Returns a ``RouteMatch`` on success.
        Raises ``NotFound`` if no pattern matches the path.
        Raises ``MethodNotAllowed`` if the first matching pattern has no
        handler for *method*; later routes are not consulted.
        """
        method = method.upper()
        for route in self._routes:
            params = route.pattern.match(path)
            if params is None:
                continue
            if method not in route.handlers:
                raise MethodNotAllowed(route.methods)
            return RouteMatch(route=route, method=method, params=params)

        raise NotFound(f"No route matches {method} {path!r}")
