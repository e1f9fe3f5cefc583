"""The App object: a route table plus the hooks handlers run under.

Decorators fill the table at import time; the first request, lifespan
startup or ``app.run()`` compiles it, after which it cannot change.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from perch._internal.asgi import Receive, Scope, Send
from perch._internal.types import ErrorHandler, Handler, Provider
from perch.config import AppConfig
from perch.routing.route import Route
from perch.routing.router import Router, parse_path
from perch.server.handler import handle_request

logger = logging.getLogger("perch.app")


@dataclass(slots=True)
class _PendingRoute:
    """A route waiting to be compiled."""

    path: str
    handler: Handler
    methods: list[str] | None
    name: str | None


class App:
    """A perch application and ASGI callable.

    Routes are matched in declaration order. Registration methods raise
    ``RuntimeError`` once the table has been compiled.

    Thread safety:
        Registration happens at import time, on one thread.
        The freeze transition uses a Lock + double-check so exactly one
        thread compiles the route table, even when several workers take
        their first request at once.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_pending_routes",
        "_providers",
        "_router",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._pending_routes: list[_PendingRoute] = []
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._providers: dict[type, Provider] = {}
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        self._router: Router | None = None

    # -- Route registration --

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Declare a route. The pattern is checked immediately.

        Args:
            path: URL path pattern. Use ``:param`` or ``{param}`` for
                placeholders, ``{param:int}`` for typed ones.
            methods: Methods served. ``None`` means GET only.
            name: Optional route name, shown by ``perch routes``.
        """

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            # Validate the pattern now so a bad declaration fails at import
            parse_path(path)
            self._pending_routes.append(_PendingRoute(path, func, methods, name))
            return func

        return decorator

    def get(self, path: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        """Register a GET route handler via decorator.

        Shorthand for ``@app.route(path, methods=["GET"])``::

            @app.get("/add/:num1/:num2")
            def add(num1: str, num2: str):
                ...
        """
        return self.route(path, methods=["GET"], name=name)

    # -- Service injection --

    def provide(self, annotation: type, factory: Provider) -> None:
        """Make *factory* the source for handler arguments annotated *annotation*.

        The factory is called with no arguments on every request that needs
        it::

            app.provide(GameStore, lambda: store)

            @app.get("/games/:id")
            def game(id: str, store: GameStore): ...
        """
        self._check_not_frozen()
        self._providers[annotation] = factory

    # -- Error handlers --

    def error(
        self,
        code_or_exception: int | type[Exception],
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """Handle an HTTP status or exception type with *func*.

        The handler may take ``()``, ``(request)`` or ``(request, exc)``.
        """

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    # -- Introspection --

    @property
    def routes(self) -> list[Route]:
        """The compiled route table in declaration order (freezes the app)."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router.routes

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start serving the app over HTTP.

        Compiles the app (freezing the route table) and starts a
        listener. ``config.debug`` only affects error bodies here;
        reload needs an import string, see ``perch run``.

        Args:
            host: Override bind host.
            port: Override bind port.
        """
        self._ensure_frozen()

        from perch.server.serve import run_server

        run_server(
            self,
            host if host is not None else self.config.host,
            port if port is not None else self.config.port,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles the lifespan scope directly, then delegates HTTP scopes
        to the request handler pipeline.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()

        assert self._router is not None

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            error_handlers=self._error_handlers,
            debug=self.config.debug,
            providers=self._providers or None,
            access_log=self.config.access_log,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup (before the first HTTP request) so
        a malformed route table fails the server start, not a request.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Build and compile the router. Caller holds ``_freeze_lock``."""
        router = Router()
        for pending in self._pending_routes:
            methods = frozenset(m.upper() for m in (pending.methods or ["GET"]))
            router.add(
                Route(
                    path=pending.path,
                    handler=pending.handler,
                    methods=methods,
                    name=pending.name,
                )
            )
        router.compile()
        self._router = router
        self._frozen = True
        logger.debug("Compiled %d route(s)", len(router.routes))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, error handlers, and providers before calling app.run()."
            )
            raise RuntimeError(msg)
