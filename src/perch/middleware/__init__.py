"""Handler and middleware types plus composition helpers."""

from perch.middleware.protocol import Handler, Middleware, compose

__all__ = ["Handler", "Middleware", "compose"]
