"""Button page HTTP server: aiohttp transport around the dispatch core."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from aiohttp import web
from pydantic import ValidationError

from btnify.button import Button
from btnify.config import ServerConfig
from btnify.dispatch import Dispatcher
from btnify.errors import BindError
from btnify.log_context import set_log_context
from btnify.models import ClickRequest
from btnify.page import render_page
from btnify.registry import Registry
from btnify.shutdown import ShutdownConfig, ShutdownCoordinator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BtnifyContext:
    """Everything request handlers need, built once at bind time."""

    registry: Registry
    dispatcher: Dispatcher
    state: Any
    page: str


CONTEXT_KEY: web.AppKey[BtnifyContext] = web.AppKey("btnify_context", BtnifyContext)


async def handle_page(request: web.Request) -> web.Response:
    set_log_context(operation="page")
    ctx = request.app[CONTEXT_KEY]
    return web.Response(text=ctx.page, content_type="text/html")


async def handle_click(request: web.Request) -> web.Response:
    set_log_context(operation="click")
    ctx = request.app[CONTEXT_KEY]

    raw_body = await request.read()
    try:
        payload: Any = json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("Click rejected: invalid JSON")
        return web.json_response({"error": "invalid_json"}, status=400)

    try:
        click = ClickRequest.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Click rejected: invalid request (%d errors)", exc.error_count())
        return web.json_response({"error": "invalid_request"}, status=400)

    set_log_context(button_id=click.id)
    # Handlers are plain functions and may block; keep them off the event loop.
    response = await asyncio.to_thread(
        ctx.dispatcher.dispatch,
        click.id,
        click.answers,
        ctx.state,
    )
    return web.json_response(response.model_dump())


def create_app(context: BtnifyContext, config: ServerConfig | None = None) -> web.Application:
    """Build the aiohttp application serving ``GET /`` and ``POST /``."""
    config = config or ServerConfig()
    app = web.Application(client_max_size=config.max_body_bytes)
    app[CONTEXT_KEY] = context
    app.router.add_get("/", handle_page)
    app.router.add_post("/", handle_click)
    return app


class BtnifyServer:
    """Serves a set of buttons until shutdown is requested.

    Routes:
    - ``GET  /`` -- the pre-rendered button page.
    - ``POST /`` -- ``{"id": int, "answers": [str | null, ...]}`` -> ``{"message": str}``.
    """

    def __init__(
        self,
        buttons: Iterable[Button],
        state: Any = None,
        config: ServerConfig | None = None,
        shutdown: ShutdownConfig | None = None,
    ) -> None:
        self._config = config or ServerConfig()
        registry = Registry.build(buttons)
        self._context = BtnifyContext(
            registry=registry,
            dispatcher=Dispatcher(registry),
            state=state,
            page=render_page(registry, title=self._config.title),
        )
        self._coordinator = ShutdownCoordinator(
            state,
            shutdown,
            install_signal_handlers=self._config.install_signal_handlers,
        )
        self._runner: web.AppRunner | None = None
        self._site: web.TCPSite | None = None

    @property
    def context(self) -> BtnifyContext:
        return self._context

    @property
    def coordinator(self) -> ShutdownCoordinator:
        return self._coordinator

    @property
    def port(self) -> int | None:
        """Actual bound port, or None when not listening."""
        if self._runner is None or self._site is None:
            return None
        addresses = self._runner.addresses
        if not addresses:
            return None
        return int(addresses[0][1])

    def build_app(self) -> web.Application:
        return create_app(self._context, self._config)

    async def start(self) -> None:
        """Create the aiohttp app and start listening.

        Raises:
            BindError: the address could not be bound (e.g. already in use).
        """
        self._runner = web.AppRunner(self.build_app(), access_log=None)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self._config.host, self._config.port)
        try:
            await site.start()
        except OSError as exc:
            await self._runner.cleanup()
            self._runner = None
            msg = f"cannot bind {self._config.host}:{self._config.port}: {exc}"
            raise BindError(msg) from exc
        self._site = site
        logger.info(
            "Button server listening on %s:%s with %d buttons",
            self._config.host,
            self.port,
            len(self._context.registry),
        )

    async def stop(self) -> None:
        """Stop accepting connections and release the listen socket."""
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
            self._site = None
        logger.info("Button server stopped")

    async def serve(self) -> None:
        """Start, block until shutdown is requested, then stop.

        The terminal hook (if any) runs before the listener is torn down;
        a failing hook still stops the listener and then propagates.
        """
        await self.start()
        try:
            await self._coordinator.wait()
        finally:
            await self.stop()


async def bind_server(
    host: str,
    port: int,
    buttons: Iterable[Button],
    state: Any = None,
    shutdown: ShutdownConfig | None = None,
) -> None:
    """Serve *buttons* on ``host:port`` with *state* until shutdown.

    If you don't need any state, leave it as ``None``.

    Raises:
        BindError: the address could not be bound.
    """
    config = ServerConfig(host=host, port=port)
    server = BtnifyServer(buttons, state, config=config, shutdown=shutdown)
    await server.serve()
