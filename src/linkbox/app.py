"""The ``App`` object: a registry while setting up, an ASGI callable afterwards.

Decorators (``route``, ``error``, ``on_startup``, ``on_shutdown``) only
collect. The first request, lifespan startup, or ``app.run()`` compiles
what was collected into a ``Router`` and a kida ``Environment``; from then
on the app refuses further registration.
"""

import logging
import sys
import threading
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

import anyio
from kida import Environment

from linkbox._internal.asgi import Receive, Scope, Send
from linkbox._internal.invoke import invoke
from linkbox.assets import AssetBundle
from linkbox.config import AppConfig
from linkbox.data import Database, DataError, MigrationResult, migrate
from linkbox.data.migrate import DEFAULT_MIGRATIONS
from linkbox.routing.route import Route
from linkbox.routing.router import Router
from linkbox.routing.table import RouteName, path_for
from linkbox.server.errors import ErrorHandlers
from linkbox.server.handler import handle_request
from linkbox.templating.integration import create_environment

logger = logging.getLogger("linkbox.app")

type Handler = Callable[..., Any]

_FROZEN_MESSAGE = (
    "Cannot modify the app after it has started serving requests. "
    "Register routes and handlers before calling app.run()."
)


def _resolve_db(db: Database | str | None, config: AppConfig) -> Database | None:
    if isinstance(db, Database):
        return db
    url = db or config.db_url
    return Database(url, echo=config.db_echo) if url else None


class App:
    """A linkbox application.

    Owns one ``Database`` (from ``db=`` or ``config.db_url``; ``None``
    when neither is set) and one ``AssetBundle``, and passes both to the
    request pipeline explicitly.

    Compilation happens once. Concurrent first calls from several
    server threads are serialized by a ``threading.Lock``; whoever gets
    it second sees the compiled state and returns.
    """

    __slots__ = (
        "_assets",
        "_db",
        "_error_handlers",
        "_kida_env",
        "_lock",
        "_migrations_dir",
        "_prepare_lock",
        "_prepared",
        "_router",
        "_routes",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        db: Database | str | None = None,
        assets: Mapping[str, bytes] | None = None,
        migrations: str | Path | None = DEFAULT_MIGRATIONS,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._db: Database | None = _resolve_db(db, self.config)
        self._assets = AssetBundle(assets) if assets is not None else AssetBundle.from_package()
        self._migrations_dir = migrations
        self._prepared = False
        self._prepare_lock: anyio.Lock | None = None

        self._routes: list[Route] = []
        self._error_handlers: ErrorHandlers = {}
        self._startup_hooks: list[Handler] = []
        self._shutdown_hooks: list[Handler] = []

        self._lock = threading.Lock()
        # Both stay None until compiled; _router doubles as the frozen flag.
        self._router: Router | None = None
        self._kida_env: Environment | None = None

    # -- Registration --

    def route(
        self,
        path: str | RouteName,
        *,
        methods: Iterable[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Decorator registering *func* for *path*.

        *path* is a pattern (``/``, ``/links``, ``/pub/*file``) or a
        ``RouteName`` looked up in the route table, in which case the
        enum value doubles as the route name. *methods* defaults to GET.
        """
        if isinstance(path, RouteName):
            name = name or path.value
            path = path_for(path)
        verbs = frozenset(m.upper() for m in (methods or ("GET",)))

        def decorator(func: Handler) -> Handler:
            self._require_setup()
            self._routes.append(Route(path=path, handler=func, methods=verbs, name=name))
            return func

        return decorator

    def error(self, code_or_exception: int | type[Exception]) -> Callable[[Handler], Handler]:
        """Decorator registering an error handler for a status or exception class."""

        def decorator(func: Handler) -> Handler:
            self._require_setup()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    def on_startup(self, func: Handler) -> Handler:
        """Run *func* at startup, after the database is prepared."""
        self._require_setup()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Handler) -> Handler:
        """Run *func* at shutdown, before the database is closed."""
        self._require_setup()
        self._shutdown_hooks.append(func)
        return func

    # -- Accessors --

    @property
    def db(self) -> Database:
        if self._db is None:
            msg = "No database configured. Pass db= to App() or set AppConfig.db_url."
            raise RuntimeError(msg)
        return self._db

    @property
    def assets(self) -> AssetBundle:
        return self._assets

    @property
    def router(self) -> Router:
        """The compiled router. Accessing it compiles the app."""
        return self._compile()

    # -- Lifecycle --

    async def prepare_database(self) -> MigrationResult | None:
        """Connect and apply pending migrations.

        Returns ``None`` when the app was built with ``migrations=None``.
        """
        db = self.db
        await db.connect()
        if self._migrations_dir is None:
            return None
        return await migrate(db, self._migrations_dir)

    async def ensure_database(self) -> None:
        """Run ``prepare_database()`` once per app, the first time it succeeds.

        Called at startup and again by every request that takes a
        ``Context``. A failed attempt leaves nothing cached, so the next
        caller tries again. Concurrent callers wait for the one in progress.
        """
        if self._prepared:
            return
        self._prepare_lock = self._prepare_lock or anyio.Lock()
        async with self._prepare_lock:
            if self._prepared:
                return
            result = await self.prepare_database()
            self._prepared = True
        if result is not None and result.applied:
            logger.info(result.summary)

    async def startup(self) -> None:
        """Compile, prepare the database, run startup hooks.

        Database trouble here is logged and survived. Requests that need
        the database retry connect and migrate, answering 500 until both work.
        """
        self._compile()
        if self._db is not None:
            try:
                await self.ensure_database()
            except DataError:
                logger.exception("database unavailable at startup: %s", self._db.url)
        for hook in self._startup_hooks:
            await invoke(hook)

    async def shutdown(self) -> None:
        for hook in self._shutdown_hooks:
            await invoke(hook)
        if self._db is not None:
            await self._db.disconnect()

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve with pounce. Exits with status 1 if the socket cannot be bound."""
        from pounce.config import ServerConfig
        from pounce.server import Server

        self._compile()
        server_config = ServerConfig(
            host=host or self.config.host,
            port=port or self.config.port,
            workers=1,
            reload=self.config.debug,
        )
        try:
            Server(server_config, self).run()
        except OSError as exc:
            logger.critical(
                "cannot bind %s:%d: %s", server_config.host, server_config.port, exc
            )
            sys.exit(1)

    # -- ASGI --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
            return
        await handle_request(
            scope,
            receive,
            send,
            router=self._compile(),
            error_handlers=self._error_handlers,
            kida_env=self._kida_env,
            db=self._db,
            prepare_db=self.ensure_database if self._db is not None else None,
            title=self.config.title,
            debug=self.config.debug,
        )

    async def _lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            event = (await receive())["type"]
            if event == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    logger.exception("startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif event == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Compilation --

    def _compile(self) -> Router:
        router = self._router
        if router is not None:
            return router
        with self._lock:
            if self._router is None:
                router = Router()
                for route in self._routes:
                    router.add(route)
                router.compile()
                # Environment first: a reader that sees _router also sees the env.
                self._kida_env = create_environment(debug=self.config.debug)
                self._router = router
                logger.debug("app compiled with %d routes", len(self._routes))
            return self._router

    def _require_setup(self) -> None:
        if self._router is not None:
            raise RuntimeError(_FROZEN_MESSAGE)
