"""
Facteur - real-time direct-messaging service.

Orchestrates the Clean Architecture components behind one FastAPI
application: WebSocket sessions, message and contact HTTP routes,
heartbeat and graceful shutdown.
"""

import asyncio
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from shared.reporter.emojis import Emoji

from facteur.config.settings import Settings, load_config
from facteur.di import Container
from facteur.domain.events import PingEvent, ShutdownEvent
from facteur.domain.exceptions import FacteurError
from facteur.presentation.api.dependencies import set_container
from facteur.presentation.api.middleware import facteur_exception_handler
from facteur.presentation.api.routes import (
    contacts_router,
    friends_router,
    health_router,
    messages_router,
    stats_router,
    websocket_router,
)


class FacteurApp:
    """
    Facteur application orchestrator.

    Responsibilities:
        - Initialize DI container
        - Setup FastAPI application and routes
        - Manage lifecycle (database, heartbeat, graceful shutdown)
        - Run uvicorn server
    """

    def __init__(self, settings: Settings, container: Optional[Container] = None):
        """
        Initialize Facteur application.

        Args:
            settings: Application settings
            container: Prebuilt container (tests inject their own)
        """
        self.settings = settings
        self.container = container or Container(settings)
        self.reporter = self.container.reporter

        self.app = self._create_app()
        set_container(self.container)

        self.server: Optional[uvicorn.Server] = None
        self.heartbeat_task: Optional[asyncio.Task] = None

        self.reporter.info(
            "Facteur initialized",
            context="Facteur",
            verbose_level=1,
        )

    def _create_app(self) -> FastAPI:
        """
        Create FastAPI application with lifespan management.

        Returns:
            Configured FastAPI application
        """

        @asynccontextmanager
        async def lifespan(app: FastAPI):
            await self._on_startup()
            yield
            await self._on_shutdown()

        app = FastAPI(
            title="Facteur",
            description="Real-time direct messaging core",
            version=self.settings.APP_VERSION,
            lifespan=lifespan,
        )

        app.add_exception_handler(FacteurError, facteur_exception_handler)

        app.include_router(websocket_router)
        app.include_router(messages_router)
        app.include_router(friends_router)
        app.include_router(contacts_router)
        app.include_router(health_router)
        app.include_router(stats_router)

        return app

    async def _on_startup(self) -> None:
        self.reporter.info(
            f"{Emoji.SYSTEM.STARTUP} Facteur starting...",
            context="Facteur",
            verbose_level=1,
        )

        await self.container.startup()

        shutdown_manager = self.container.shutdown_manager
        shutdown_manager.register_shutdown_callback(self._notify_clients_shutdown)
        shutdown_manager.register_shutdown_callback(self._close_all_connections)

        self.reporter.info(
            f"{Emoji.SYSTEM.CONFIG} Host: {self.settings.host}:{self.settings.port} "
            f"[storage={self.settings.storage_backend}] "
            f"[rate_limit={self.settings.rate_limit_enabled}]",
            context="Facteur",
            verbose_level=1,
        )

        self.heartbeat_task = asyncio.create_task(self._heartbeat_loop())

        self.reporter.info(
            f"{Emoji.SYSTEM.READY} Facteur ready",
            context="Facteur",
            verbose_level=1,
        )

    async def _on_shutdown(self) -> None:
        self.reporter.info(
            "Facteur shutting down...",
            context="Facteur",
            verbose_level=1,
        )

        await self.container.shutdown_manager.initiate_shutdown("lifespan")

        if self.heartbeat_task:
            self.heartbeat_task.cancel()
            try:
                await self.heartbeat_task
            except asyncio.CancelledError:
                pass

        await self.container.shutdown()

        self.reporter.info(
            f"{Emoji.SYSTEM.SHUTDOWN} Facteur stopped",
            context="Facteur",
            verbose_level=1,
        )

    async def _notify_clients_shutdown(self) -> None:
        """Send the shutdown notice to every live connection."""
        total = self.container.presence.get_total_connections()
        if total == 0:
            return

        self.reporter.info(
            f"Notifying {total} clients of shutdown",
            context="Facteur",
            verbose_level=1,
        )
        await self.container.event_router.broadcast(ShutdownEvent())

    async def _close_all_connections(self) -> None:
        """Close remaining connections after the grace period."""
        presence = self.container.presence
        if presence.get_total_connections() == 0:
            return

        await asyncio.sleep(self.settings.shutdown_grace_period)

        total_closed = 0
        for connection in presence.all_connections():
            presence.leave(connection)
            try:
                await connection.close(code=1001, reason="Server shutdown")
                total_closed += 1
            except Exception as e:
                self.reporter.debug(
                    f"Close of {connection.id} failed: {e}",
                    context="Facteur",
                )

        self.reporter.info(
            f"{Emoji.SYSTEM.CLEANUP} Closed {total_closed} connections",
            context="Facteur",
            verbose_level=1,
        )

    async def _heartbeat_loop(self) -> None:
        """
        Periodic heartbeat to detect dead connections.

        Pings every live connection; the event router evicts those whose
        push fails. Stops when shutdown is initiated.
        """
        interval = self.settings.heartbeat_interval
        shutdown_manager = self.container.shutdown_manager

        self.reporter.info(
            f"{Emoji.SYSTEM.HEARTBEAT} Heartbeat started (interval: {interval}s)",
            context="Facteur",
            verbose_level=1,
        )

        while not shutdown_manager.is_shutting_down():
            await asyncio.sleep(interval)

            total = self.container.presence.get_total_connections()
            if total == 0:
                continue

            self.reporter.debug(
                f"Heartbeat -> {total} clients",
                context="Facteur",
                verbose_level=3,
            )
            await self.container.event_router.broadcast(PingEvent())

    async def serve(self) -> None:
        """Run server through the uvicorn.Server API."""
        config = uvicorn.Config(
            self.app,
            host=self.settings.host,
            port=self.settings.port,
            log_level=self.settings.log_level,
        )
        self.server = uvicorn.Server(config)
        await self.server.serve()

    def start(self) -> None:
        """Start Facteur server. Blocks until the server is stopped."""
        asyncio.run(self.serve())


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """ASGI factory (uvicorn --factory facteur.main:create_app)."""
    return FacteurApp(settings or load_config()).app


def main():
    """
    Main entry point for Facteur application.

    Loads configuration and starts the server.
    """
    config = load_config()

    # Allow port override from command line
    if len(sys.argv) > 1:
        try:
            config.port = int(sys.argv[1])
        except ValueError:
            print(f"Invalid port: {sys.argv[1]}")
            sys.exit(1)

    app = FacteurApp(config)

    try:
        app.start()
    except KeyboardInterrupt:
        print("\nFacteur stopped by user")
        sys.exit(0)


if __name__ == "__main__":
    main()
