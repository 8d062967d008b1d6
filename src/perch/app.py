"""perch application class.

Mutable during setup (routes, middleware). Frozen on the first request,
when the pending routes are wrapped in the registered middleware and
compiled into a ``Dispatcher``.
"""

import inspect
import threading
from collections.abc import Callable
from typing import Any

from perch._internal.asgi import Receive, Scope, Send
from perch.cache.conditional import CachedFiles
from perch.cache.store import ETagStore
from perch.config import AppConfig
from perch.dispatch import Dispatcher
from perch.errors import ConfigurationError
from perch.middleware.protocol import Handler, Middleware, compose
from perch.routing.route import Route, add_middleware_to_routes
from perch.routing.router import Router
from perch.server.handler import handle_request


class App:
    """The perch application.

    Usage::

        app = App()

        @app.route("/hello/{name}")
        def hello(request, ctx):
            return Ok(Response(f"Hello, {ctx.params['name']}!"))

        app.static()  # everything else from the working directory, with ETags

    Routes are matched in registration order. Decorating the same path
    twice merges the methods into the first registration.

    Thread safety:
        Setup is single-threaded. The freeze uses a lock plus a double
        check so exactly one thread compiles the dispatcher.
    """

    __slots__ = (
        "_dispatcher",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_pending",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
        "etags",
    )

    def __init__(self, config: AppConfig | None = None, *, etags: ETagStore | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self.etags: ETagStore = etags if etags is not None else ETagStore()
        self._pending: dict[str, dict[str, Handler]] = {}
        self._middleware: list[Middleware] = []
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen = False
        self._freeze_lock = threading.Lock()
        self._dispatcher: Dispatcher | None = None

    # -- Route registration --

    def route(self, path: str, *, methods: list[str] | None = None) -> Callable[[Handler], Handler]:
        """Register a handler for *path* via decorator.

        Args:
            path: URL pattern. Use ``{param}`` for captures.
            methods: HTTP methods. Defaults to ``["GET"]``.
        """

        def decorator(func: Handler) -> Handler:
            self._register(path, dict.fromkeys(methods or ["GET"], func))
            return func

        return decorator

    def add_route(self, route: Route) -> None:
        """Register a prebuilt ``Route``."""
        self._register(route.path, dict(route.handlers))

    def static(self, path: str = "/{file:path}", directory: str | None = None) -> CachedFiles:
        """Serve files from *directory* with conditional GET on *path*.

        The handler shares ``app.etags``. Register it last when its
        pattern is a catch-all.
        """
        files = CachedFiles(
            directory if directory is not None else self.config.static_dir,
            self.etags,
            max_age=self.config.cache_max_age,
            verify=self.config.verify_static,
        )
        self._register(path, {"GET": files.handle, "HEAD": files.handle})
        return files

    def _register(self, path: str, handlers: dict[str, Handler]) -> None:
        self._check_not_frozen()
        existing = self._pending.setdefault(path, {})
        for method, handler in handlers.items():
            upper = method.upper()
            if upper in existing:
                msg = f"{upper} {path!r} is already registered."
                raise ConfigurationError(msg)
            existing[upper] = handler

    # -- Middleware --

    def add_middleware(self, middleware: Middleware) -> None:
        """Wrap every route handler in *middleware*.

        The first middleware added is outermost.
        """
        self._check_not_frozen()
        self._middleware.append(middleware)

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a sync or async startup hook via decorator."""
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a sync or async shutdown hook via decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Compilation --

    @property
    def dispatcher(self) -> Dispatcher:
        return self._ensure_frozen()

    def _ensure_frozen(self) -> Dispatcher:
        dispatcher = self._dispatcher
        if dispatcher is not None:
            return dispatcher
        with self._freeze_lock:
            if self._dispatcher is None:
                self._dispatcher = self._freeze()
                self._frozen = True
            return self._dispatcher

    def _freeze(self) -> Dispatcher:
        routes = [Route(path, handlers) for path, handlers in self._pending.items()]
        if self._middleware:
            routes = add_middleware_to_routes(compose(*self._middleware), *routes)
        return Dispatcher(Router(routes))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = "Cannot modify the app after it has started serving requests."
            raise RuntimeError(msg)

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the app with uvicorn."""
        import uvicorn

        self._ensure_frozen()
        uvicorn.run(
            self,
            host=host or self.config.host,
            port=port or self.config.port,
            log_level=self.config.effective_log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await handle_request(scope, receive, send, dispatcher=self.dispatcher)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    self._ensure_frozen()
                    for hook in self._startup_hooks:
                        await _call_hook(hook)
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                for hook in self._shutdown_hooks:
                    await _call_hook(hook)
                await send({"type": "lifespan.shutdown.complete"})
                return


async def _call_hook(hook: Callable[..., Any]) -> None:
    result = hook()
    if inspect.isawaitable(result):
        await result
