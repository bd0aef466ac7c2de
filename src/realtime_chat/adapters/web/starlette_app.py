"""Starlette web adapter serving the chat API and the realtime socket."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse, Response
from starlette.routing import Mount, Route, WebSocketRoute
from starlette.staticfiles import StaticFiles

from realtime_chat.adapters.config import AppConfig
from realtime_chat.adapters.realtime import RealtimeGateway

from .auth_routes import create_auth_routes
from .message_routes import create_message_routes
from .rate_limit_middleware import RateLimitMiddleware
from .socket_endpoint import create_socket_endpoint

if TYPE_CHECKING:
    from collections.abc import Callable
    from contextlib import AbstractAsyncContextManager

    from starlette.requests import Request

    from realtime_chat.domain.ports import AuthService, ChatService

logger = logging.getLogger(__name__)

SOCKET_PATH = "/socket"


class ChatWebAdapter:
    """Starlette-based adapter exposing HTTP routes and the ``/socket`` endpoint."""

    def __init__(
        self,
        chat_service: ChatService,
        auth_service: AuthService,
        gateway: RealtimeGateway,
        config: AppConfig,
        lifespan: Callable[[Starlette], AbstractAsyncContextManager[None]] | None = None,
    ) -> None:
        """Initialize the web adapter.

        Args:
            chat_service: Service for contacts, history and sending messages.
            auth_service: Service for accounts and sessions.
            gateway: Realtime gateway shared with the delivery dispatcher.
            config: Application configuration.
            lifespan: Optional Starlette lifespan opening and closing resources.
        """
        if not isinstance(config, AppConfig):
            raise TypeError("config must be an AppConfig instance")
        if not isinstance(gateway, RealtimeGateway):
            raise TypeError("gateway must be a RealtimeGateway instance")
        # Protocols can't be checked with isinstance, verify required methods exist
        if not callable(getattr(chat_service, "send_message", None)):
            raise TypeError("chat_service must implement ChatService protocol")
        if not callable(getattr(auth_service, "authenticate", None)):
            raise TypeError("auth_service must implement AuthService protocol")

        self.chat_service = chat_service
        self.auth_service = auth_service
        self.gateway = gateway
        self.config = config
        self._lifespan = lifespan
        self._app: Starlette | None = None
        self._server: Any | None = None

    @property
    def app(self) -> Starlette:
        """The ASGI application, built on first access."""
        if self._app is None:
            self._app = self.build_app()
        return self._app

    def build_app(self) -> Starlette:
        """Assemble routes and middleware into a Starlette application."""

        async def healthz(_request: Request) -> Response:
            """Health check endpoint for load balancers and monitoring."""
            return Response(content="Ok", media_type="text/plain")

        async def not_found(_request: Request) -> JSONResponse:
            return JSONResponse({"message": "Not Found"}, status_code=404)

        routes: list[Any] = [
            Route("/healthz", healthz, methods=["GET"]),
            Mount("/api/auth", routes=create_auth_routes(self.auth_service, self.config)),
            Mount(
                "/api/messages",
                routes=create_message_routes(
                    self.chat_service, self.auth_service, self.config.cookie_name
                ),
            ),
            Route("/api/{path:path}", not_found),
            WebSocketRoute(
                SOCKET_PATH,
                create_socket_endpoint(
                    self.gateway,
                    self.auth_service,
                    self.config,
                    on_registry_corrupted=self.stop,
                ),
            ),
        ]

        if self.config.static_dir:
            if Path(self.config.static_dir).is_dir():
                routes.append(
                    Mount("/", app=StaticFiles(directory=self.config.static_dir, html=True))
                )
                logger.info(f"Serving frontend from {self.config.static_dir}")
            else:
                logger.warning(
                    f"Static directory {self.config.static_dir} not found, not serving it"
                )

        middleware = [
            Middleware(
                CORSMiddleware,
                allow_origins=self.config.cors_origins,
                allow_credentials=True,
                allow_methods=["*"],
                allow_headers=["*"],
            ),
            Middleware(
                RateLimitMiddleware,
                requests_per_minute=self.config.rate_limit_per_minute,
            ),
        ]

        logger.info(f"Registered API routes and realtime socket at '{SOCKET_PATH}'")
        return Starlette(routes=routes, middleware=middleware, lifespan=self._lifespan)

    async def start(self) -> None:
        """Start the web server and serve until stopped."""
        import uvicorn

        server_config = uvicorn.Config(
            self.app,
            host=self.config.host,
            port=self.config.port,
            log_level=self.config.log_level.lower(),
            ws_ping_interval=self.config.ws_ping_interval_seconds,
            ws_ping_timeout=self.config.ws_ping_timeout_seconds,
        )
        self._server = uvicorn.Server(server_config)
        logger.info(f"Starting chat server on {self.config.host}:{self.config.port}")
        await self._server.serve()

    async def stop(self) -> None:
        """Ask the web server to exit."""
        if self._server:
            self._server.should_exit = True
        else:
            logger.error("Server was not started by this adapter, restart it manually")
