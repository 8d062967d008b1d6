"""Placeholder converters for route patterns such as ``{id:int}``.

A converter decides which characters a placeholder may capture. Captures
stay strings in ``Context.params``; ``convert_param`` turns one into a
Python value when a handler wants it.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Converter:
    regex: str
    python_type: type
    trailing: bool = False  # swallows the rest of the path, slashes included


CONVERTERS: dict[str, Converter] = {
    "str": Converter(r"[^/]+", str),
    "int": Converter(r"\d+", int),
    "float": Converter(r"\d+(?:\.\d+)?", float),
    "path": Converter(r".+", str, trailing=True),
}


def convert_param(value: str, param_type: str) -> str | int | float:
    """Convert a captured value with the named converter.

    Raises ``KeyError`` for an unknown converter and ``ValueError`` when
    *value* does not fit the target type.
    """
    return CONVERTERS[param_type].python_type(value)
