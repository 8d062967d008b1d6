"""Route patterns — URL templates compiled to anchored regular expressions.

Syntax::

    "/users"              static
    "/users/{id}"         one segment, captured as params["id"]
    "/users/{id:int}"     typed segment (str, int, float)
    "/files/{rest:path}"  rest of the path, slashes included
    "/static/*"           rest of the path (possibly empty), as params["*"]
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from perch.errors import ConfigurationError
from perch.routing.params import CONVERTERS

WILDCARD = "*"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:   ``users``      (is_param=False)
    Param:    ``{id}``       (is_param=True, param_name="id")
    Typed:    ``{id:int}``   (is_param=True, param_name="id", param_type="int")
    Wildcard: ``*``          (is_param=True, param_name="*", param_type="wildcard")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"

    @property
    def is_trailing(self) -> bool:
        if self.param_type == "wildcard":
            return True
        converter = CONVERTERS.get(self.param_type)
        return converter is not None and converter.trailing


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"             -> [PathSegment("users")]
        "/users/{id:int}"    -> [PathSegment("users"), PathSegment("{id:int}", True, "id", "int")]
        "/"                  -> []

    Raises ``ConfigurationError`` for Flask-style ``<param>`` segments,
    unknown converters, empty names, and segments after a trailing one.
    """
    if not path.startswith("/"):
        msg = f"Route path {path!r} must start with '/'."
        raise ConfigurationError(msg)

    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if segments and segments[-1].is_trailing:
            msg = f"Route path {path!r}: {segments[-1].value!r} must be the last segment."
            raise ConfigurationError(msg)
        if part.startswith("<") and part.endswith(">"):
            msg = (
                f"Route path {path!r} uses <param> syntax. "
                "perch expects {param} placeholders, e.g. '/users/{id}'."
            )
            raise ConfigurationError(msg)
        if part == WILDCARD:
            segments.append(
                PathSegment(value=part, is_param=True, param_name=WILDCARD, param_type="wildcard")
            )
        elif part.startswith("{") and part.endswith("}"):
            name, _, param_type = part[1:-1].partition(":")
            param_type = param_type or "str"
            if not name:
                msg = f"Route path {path!r} has an unnamed placeholder {part!r}."
                raise ConfigurationError(msg)
            if param_type not in CONVERTERS:
                known = ", ".join(sorted(CONVERTERS))
                msg = f"Route path {path!r}: unknown converter {param_type!r} (known: {known})."
                raise ConfigurationError(msg)
            segments.append(
                PathSegment(value=part, is_param=True, param_name=name, param_type=param_type)
            )
        else:
            segments.append(PathSegment(value=part))
    return segments


@dataclass(frozen=True, slots=True)
class RoutePattern:
    """A compiled route pattern.

    ``match`` returns the captured parameters, or ``None``. The whole path
    must match. A single trailing slash is tolerated unless the pattern
    ends in a trailing capture, which would swallow it anyway.
    """

    path: str
    segments: tuple[PathSegment, ...]
    regex: re.Pattern[str]
    names: tuple[str, ...]

    @classmethod
    def compile(cls, path: str) -> RoutePattern:
        segments = tuple(parse_path(path))
        names: list[str] = []
        parts: list[str] = []
        for seg in segments:
            if not seg.is_param:
                parts.append(re.escape(seg.value))
                continue
            if seg.param_name in names:
                msg = f"Route path {path!r} captures {seg.param_name!r} twice."
                raise ConfigurationError(msg)
            # Group names are positional; param names need not be identifiers
            group = f"g{len(names)}"
            names.append(seg.param_name or "")
            body = ".*" if seg.param_type == "wildcard" else CONVERTERS[seg.param_type].regex
            parts.append(f"(?P<{group}>{body})")

        if not parts:
            source = "/"
        else:
            source = "/" + "/".join(parts)
            if not segments[-1].is_trailing:
                source += "/?"
        return cls(path=path, segments=segments, regex=re.compile(f"^{source}$"), names=tuple(names))

    def match(self, path: str) -> dict[str, str] | None:
        found = self.regex.match(path)
        if found is None:
            return None
        return {name: found.group(f"g{i}") for i, name in enumerate(self.names)}

    def __str__(self) -> str:
        return self.path
