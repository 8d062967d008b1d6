"""perch — a minimal HTTP dispatcher with ETag-based conditional caching.

Handlers return results instead of raising::

    from perch import App, Ok, Response

    app = App()

    @app.route("/hello/{name}")
    def hello(request, ctx):
        return Ok(Response(f"Hello, {ctx.params['name']}!"))

    app.static()  # files from the working directory, with ETag / 304

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "CachedFiles",
    "ConditionalCache",
    "ConfigurationError",
    "Context",
    "Dispatcher",
    "ETagStore",
    "Err",
    "ErrorInfo",
    "FileServer",
    "HTTPError",
    "Handler",
    "MethodNotAllowed",
    "Middleware",
    "NotFound",
    "Ok",
    "PerchError",
    "Request",
    "Response",
    "Result",
    "Route",
    "Router",
    "add_middleware_to_routes",
    "all_methods",
    "attempt",
    "compose",
    "err",
    "handler_from_routes",
    "json_response",
    "send_file",
]

_LAZY: dict[str, str] = {
    "App": "perch.app",
    "AppConfig": "perch.config",
    "CachedFiles": "perch.cache.conditional",
    "ConditionalCache": "perch.cache.conditional",
    "ConfigurationError": "perch.errors",
    "Context": "perch.context",
    "Dispatcher": "perch.dispatch",
    "ETagStore": "perch.cache.store",
    "Err": "perch.result",
    "ErrorInfo": "perch.result",
    "FileServer": "perch.files",
    "HTTPError": "perch.errors",
    "Handler": "perch.middleware.protocol",
    "MethodNotAllowed": "perch.errors",
    "Middleware": "perch.middleware.protocol",
    "NotFound": "perch.errors",
    "Ok": "perch.result",
    "PerchError": "perch.errors",
    "Request": "perch.http.request",
    "Response": "perch.http.response",
    "Result": "perch.result",
    "Route": "perch.routing.route",
    "Router": "perch.routing.router",
    "add_middleware_to_routes": "perch.routing.route",
    "all_methods": "perch.routing.route",
    "attempt": "perch.result",
    "compose": "perch.middleware.protocol",
    "err": "perch.result",
    "handler_from_routes": "perch.dispatch",
    "json_response": "perch.http.response",
    "send_file": "perch.files",
}


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import perch`` cheap while offering a flat top-level namespace.
    """
    module_path = _LAZY.get(name)
    if module_path is None:
        msg = f"module 'perch' has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    value = getattr(importlib.import_module(module_path), name)
    globals()[name] = value
    return value
