"""
Graceful shutdown manager.

Tracks shutdown state and runs registered cleanup callbacks once.
Process signals are owned by uvicorn, which triggers the application
lifespan shutdown that calls initiate_shutdown().
"""

import asyncio
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional

from shared.reporter import SystemReporter
from shared.reporter.emojis import Emoji


class ShutdownState(Enum):
    """Shutdown state enum."""

    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"
    SHUTDOWN = "shutdown"


class ShutdownManager:
    """
    Coordinates graceful shutdown of the Facteur service.

    Sequence:
    1. Mark service as shutting down (new connections are refused)
    2. Run callbacks in registration order (notify clients, close
       connections, dispose database)
    3. Mark shutdown complete

    Attributes:
        state: Current shutdown state
        grace_period: Seconds granted to clients after the shutdown notice
        shutdown_started_at: Timestamp when shutdown initiated
    """

    def __init__(
        self,
        grace_period: float = 1.0,
        reporter: Optional[SystemReporter] = None,
    ):
        self.grace_period = grace_period
        self.reporter = reporter

        self.state = ShutdownState.RUNNING
        self.shutdown_started_at: Optional[datetime] = None
        self._shutdown_event = asyncio.Event()
        self._shutdown_callbacks: List[Callable] = []

    def is_shutting_down(self) -> bool:
        return self.state in (ShutdownState.SHUTTING_DOWN, ShutdownState.SHUTDOWN)

    def is_running(self) -> bool:
        return self.state == ShutdownState.RUNNING

    def register_shutdown_callback(self, callback: Callable) -> None:
        """
        Register callback to be called on shutdown.

        Args:
            callback: Sync or async callable without arguments
        """
        self._shutdown_callbacks.append(callback)

    async def initiate_shutdown(self, reason: str = "manual") -> None:
        """
        Run the shutdown sequence once.

        A failing callback is logged and the remaining callbacks still run.
        """
        if self.state != ShutdownState.RUNNING:
            return

        self.state = ShutdownState.SHUTTING_DOWN
        self.shutdown_started_at = datetime.utcnow()
        self._shutdown_event.set()

        if self.reporter:
            self.reporter.info(
                f"{Emoji.SYSTEM.SHUTDOWN} Shutdown initiated (reason={reason})",
                context="Shutdown",
                verbose_level=1,
            )

        for callback in self._shutdown_callbacks:
            try:
                if asyncio.iscoroutinefunction(callback):
                    await callback()
                else:
                    callback()
            except Exception as e:
                if self.reporter:
                    self.reporter.error(
                        f"{Emoji.ERROR.ERROR} Shutdown callback "
                        f"{getattr(callback, '__name__', callback)} failed: {e}",
                        context="Shutdown",
                        verbose_level=1,
                    )

        self.state = ShutdownState.SHUTDOWN

    async def wait_for_shutdown(self) -> None:
        """Block until shutdown has been initiated."""
        await self._shutdown_event.wait()
