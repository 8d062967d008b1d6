"""Read-only query string parameters."""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl


class QueryParams(Mapping[str, str]):
    """The decoded query string of a request.

    ``params["tag"]`` is the first value sent for ``tag`` and
    ``get_list("tag")`` every value, in order. Blank values are kept, so
    ``?flag=`` yields ``{"flag": ""}``.
    """

    __slots__ = ("_raw", "_values")

    _raw: str
    _values: dict[str, list[str]]

    def __init__(self, query_string: bytes | str = b"") -> None:
        if isinstance(query_string, bytes):
            query_string = query_string.decode("latin-1")
        values: dict[str, list[str]] = {}
        for name, value in parse_qsl(query_string, keep_blank_values=True):
            values.setdefault(name, []).append(value)
        object.__setattr__(self, "_raw", query_string)
        object.__setattr__(self, "_values", values)

    def __getitem__(self, key: str) -> str:
        return self._values[key][0]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"QueryParams({self._raw!r})"

    def get_list(self, key: str) -> list[str]:
        return list(self._values.get(key, ()))

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """The first value for *key* as an ``int``; *default* when missing or not numeric."""
        try:
            return int(self[key])
        except (KeyError, ValueError):
            return default

    @property
    def raw(self) -> str:
        """The undecoded query string, without the leading ``?``."""
        return self._raw
