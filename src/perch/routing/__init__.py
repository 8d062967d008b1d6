"""Routing — an ordered route table where the first matching pattern wins.

There is no specificity ranking: register specific patterns before
general ones.
"""

from perch.routing.pattern import RoutePattern, parse_path
from perch.routing.route import (
    METHODS,
    Route,
    RouteMatch,
    add_middleware_to_routes,
    all_methods,
)
from perch.routing.router import Router

__all__ = [
    "METHODS",
    "Route",
    "RouteMatch",
    "RoutePattern",
    "Router",
    "add_middleware_to_routes",
    "all_methods",
    "parse_path",
]
