"""Invoke helpers — call sync or async callables uniformly.

Handlers and ``attempt`` targets can be ``def`` or ``async def``.
The sync/async check lives here and nowhere else::

    from perch._internal.invoke import invoke

    result = await invoke(handler, request, ctx)
"""

import inspect
from typing import Any


async def invoke(fn: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *fn* and await the result if it is awaitable."""
    result = fn(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
