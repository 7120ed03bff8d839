"""
Showcase HTTP Server

Serves the rendered cards, the raw values and a health report, and
exposes the refresh trigger:

    GET  /health
    GET  /cards
    GET  /values
    POST /refresh[?wait=true]
"""

from datetime import datetime, timezone

from aiohttp import web

from remoteconfig.common.logging_setup import get_service_logger
from remoteconfig.services.config.accessors import RemoteConfig

from .cards import render_showcase
from .refresh import RefreshController

logger = get_service_logger("server")


class ShowcaseServer:
    """aiohttp front end over an injected config facade and refresh controller"""

    def __init__(
        self,
        config: RemoteConfig,
        refresher: RefreshController,
        host: str = "127.0.0.1",
        port: int = 8085,
    ):
        self.config = config
        self.refresher = refresher
        self.host = host
        self.port = port
        self._start_time = datetime.now(timezone.utc)
        self._runner: web.AppRunner | None = None

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/health", self._health_handler)
        app.router.add_get("/cards", self._cards_handler)
        app.router.add_get("/values", self._values_handler)
        app.router.add_post("/refresh", self._refresh_handler)
        return app

    async def start(self) -> None:
        """Start the HTTP server"""
        self._runner = web.AppRunner(self.build_app())
        await self._runner.setup()

        site = web.TCPSite(self._runner, self.host, self.port)
        await site.start()

        logger.info(f"Showcase server started on {self.host}:{self.port}")

    async def stop(self) -> None:
        """Stop the HTTP server"""
        if self._runner:
            await self._runner.cleanup()
            self._runner = None

    async def _health_handler(self, request: web.Request) -> web.Response:
        uptime = (datetime.now(timezone.utc) - self._start_time).total_seconds()
        service = self.refresher.service

        return web.json_response({
            "status": "healthy",
            "service": "remoteconfig",
            "uptime": int(uptime),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "busy": self.refresher.busy,
            "generation": self.config.store.generation,
            "fetch": service.info.to_dict(),
        })

    async def _cards_handler(self, request: web.Request) -> web.Response:
        cards = render_showcase(self.config)
        return web.json_response({
            "busy": self.refresher.busy,
            "generation": self.config.store.generation,
            "cards": [card.to_dict() for card in cards],
        })

    async def _values_handler(self, request: web.Request) -> web.Response:
        return web.json_response({
            "generation": self.config.store.generation,
            "values": self.config.describe(),
        })

    async def _refresh_handler(self, request: web.Request) -> web.Response:
        """Trigger a refresh; optionally wait for its result"""
        task = self.refresher.request_refresh(source="http")

        if request.query.get("wait", "").lower() not in ("1", "true", "yes"):
            return web.json_response({"busy": self.refresher.busy}, status=202)

        result = await task
        return web.json_response({
            "busy": self.refresher.busy,
            "generation": self.config.store.generation,
            **result.to_dict(),
        })
