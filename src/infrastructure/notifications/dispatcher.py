"""In-process notification dispatcher.

Services publish events after their transaction commits; a single worker task
drains the queue and hands each event to the delivery handler. Publishing
never blocks or raises, and delivery failures never reach the request that
produced the event.
"""

import asyncio
import contextlib
from collections.abc import Awaitable, Callable
from typing import Any

import structlog

from core.config import settings
from domain.entities.notification import NotificationEvent

logger = structlog.get_logger()

Handler = Callable[[NotificationEvent], Awaitable[Any]]


class NotificationDispatcher:
    """Bounded queue plus one consumer task."""

    def __init__(self, handler: Handler, maxsize: int = settings.notification_queue_size) -> None:
        self._handler = handler
        self._queue: asyncio.Queue[NotificationEvent] = asyncio.Queue(maxsize=maxsize)
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def publish(self, event: NotificationEvent) -> bool:
        """Enqueue an event. A full queue drops it with a warning."""
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            logger.warning(
                "notification_dropped_queue_full",
                type=event.type.value,
                club_id=event.club_id,
                queue_size=self._queue.maxsize,
            )
            return False
        return True

    async def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="notification-dispatcher")
        logger.info("notification_dispatcher_started")

    async def drain(self) -> None:
        """Wait until every queued event has been handled."""
        await self._queue.join()

    async def stop(self, timeout: float = 5.0) -> None:
        """Give queued events ``timeout`` seconds to finish, then cancel the worker."""
        if self._task is None:
            return
        if self.running:
            try:
                await asyncio.wait_for(self.drain(), timeout)
            except asyncio.TimeoutError:
                logger.warning("notification_dispatcher_stop_timeout", pending=self.pending)
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("notification_dispatcher_stopped")

    async def _run(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                await self._handler(event)
            except Exception:
                logger.exception(
                    "notification_dispatch_failed",
                    type=event.type.value,
                    club_id=event.club_id,
                )
            finally:
                self._queue.task_done()
