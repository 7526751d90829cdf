"""Session expiration signal."""

import asyncio
import logging
from inspect import isawaitable
from typing import Awaitable, Callable, TypeAlias

from .exceptions import SessionExpired

__all__ = ("SessionExpiredHandler", "SessionExpiredNotifier")

logger = logging.getLogger(__name__)

SessionExpiredHandler: TypeAlias = Callable[[SessionExpired], Awaitable[None] | None]


class SessionExpiredNotifier:
    """
    Observers of session expiration of a single client.
    Client calls `notify` every time request detects that user is not logged in anymore,
    so handlers can do login again. Handlers can be plain functions or coroutine functions.

    Usage::

        @client.session_expired.subscribe
        async def relogin(error: SessionExpired):
            await client.login(username, password)
    """

    __slots__ = ("_handlers", "_tasks")

    def __init__(self):
        self._handlers: list[SessionExpiredHandler] = []
        self._tasks: set[asyncio.Task] = set()  # strong refs to running handlers

    def subscribe(self, handler: SessionExpiredHandler) -> SessionExpiredHandler:
        """Register handler. Return it back, so can be used as decorator"""

        if handler not in self._handlers:
            self._handlers.append(handler)
        return handler

    def unsubscribe(self, handler: SessionExpiredHandler) -> bool:
        """Unregister handler. Return `True` if handler was registered"""

        try:
            self._handlers.remove(handler)
        except ValueError:
            return False
        return True

    @property
    def handlers(self) -> tuple[SessionExpiredHandler, ...]:
        return tuple(self._handlers)

    def notify(self, error: SessionExpired):
        """Call all handlers with an error. Coroutines are scheduled as tasks on a running loop"""

        logger.warning("Session expired: %s", error)

        for handler in tuple(self._handlers):  # handler can unsubscribe itself
            try:
                result = handler(error)
            except Exception:
                logger.exception("Session expired handler %r failed", handler)
                continue

            if isawaitable(result):
                task = asyncio.ensure_future(result)
                self._tasks.add(task)
                task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task):
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Session expired handler failed", exc_info=task.exception())

    def __len__(self):
        return len(self._handlers)
