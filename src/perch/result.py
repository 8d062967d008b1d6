"""Result protocol — outcomes returned instead of raised.

Every handler in perch returns a ``Result``: either ``Ok(value)`` or
``Err(error)``. Both arms expose ``.value`` and ``.error`` (the absent
arm reads ``None``) and unpack as a pair, so callers can write::

    value, error = await handler(request, ctx)
    if error is not None:
        return Err(error.wrap("failure while running next handler"))

A function declared to return ``Result`` must never raise. ``attempt``
folds an arbitrary callable into the protocol.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeAlias, TypeVar

from perch._internal.invoke import invoke

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ErrorInfo:
    """A message plus an optional wrapped cause.

    Chains render outermost first::

        >>> str(ErrorInfo("failure while loading file", ErrorInfo("no such file")))
        'failure while loading file: no such file'
    """

    message: str
    cause: ErrorInfo | None = None

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message

    def wrap(self, message: str) -> ErrorInfo:
        """Return a new link with *message* outside this one."""
        return ErrorInfo(message, self)

    @property
    def root(self) -> ErrorInfo:
        """The innermost link of the chain."""
        link = self
        while link.cause is not None:
            link = link.cause
        return link

    def chain(self) -> Iterator[ErrorInfo]:
        """Iterate links from outermost to innermost."""
        link: ErrorInfo | None = self
        while link is not None:
            yield link
            link = link.cause

    @classmethod
    def from_exception(cls, exc: BaseException) -> ErrorInfo:
        """Fold an exception into a single chain link.

        ``OSError`` carries its own ``strerror``/``filename``, which reads
        better than the default repr-ish ``str()``.
        """
        if isinstance(exc, OSError) and exc.strerror:
            if exc.filename is not None:
                return cls(f"{exc.strerror}: {exc.filename!s}")
            return cls(exc.strerror)
        return cls(str(exc) or type(exc).__name__)


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """The success arm."""

    value: T

    @property
    def error(self) -> None:
        return None

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def __iter__(self) -> Iterator[Any]:
        yield self.value
        yield None


@dataclass(frozen=True, slots=True)
class Err:
    """The failure arm. Always carries an ``ErrorInfo``."""

    error: ErrorInfo

    @property
    def value(self) -> None:
        return None

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def __iter__(self) -> Iterator[Any]:
        yield None
        yield self.error


Result: TypeAlias = Ok[T] | Err


def err(message: str, cause: ErrorInfo | None = None) -> Err:
    """Shorthand for ``Err(ErrorInfo(message, cause))``."""
    return Err(ErrorInfo(message, cause))


async def attempt(fn: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T]:
    """Call a sync or async function and fold any ``Exception`` into ``Err``.

    Cancellation and other non-``Exception`` signals still propagate.
    """
    try:
        return Ok(await invoke(fn, *args, **kwargs))
    except Exception as exc:
        return Err(ErrorInfo.from_exception(exc))
