"""Find the ``App`` behind a ``module:attribute`` import string."""

import importlib

from perch.app import App

DEFAULT_ATTRIBUTE = "app"


def _lookup(import_string: str) -> object:
    module_name, _, attribute = import_string.partition(":")
    return getattr(importlib.import_module(module_name), attribute or DEFAULT_ATTRIBUTE)


def resolve_app(import_string: str) -> App:
    """Return the perch ``App`` named by *import_string*.

    ``"pkg.web"`` is short for ``"pkg.web:app"``. When the attribute is a
    plain callable rather than an ``App`` it is called once with no
    arguments, so ``"pkg.web:create_app"`` works too.

    Import and attribute errors propagate unchanged; anything that does
    not end up as an ``App`` raises ``TypeError``.
    """
    target = _lookup(import_string)

    if not isinstance(target, App) and callable(target):
        try:
            target = target()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if isinstance(target, App):
        return target
    msg = f"{import_string!r} resolved to {type(target).__name__}, not a perch.App instance"
    raise TypeError(msg)
