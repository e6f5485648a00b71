"""
Cooperative cancellation token for the async combinators.

Cancellation is advisory: a triggered token decides which Result is surfaced
to the caller, it never aborts the in-flight work itself.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from .errors import cancellation_error

logger = logging.getLogger(__name__)

CancelCallback = Callable[["CancellationToken"], None]


class CancellationToken:
    """
    Cancellation signal queryable for "already triggered" and subscribable
    for "triggers later".

    Usage:
        token = CancellationToken()

        result = await from_awaitable(fetch_user(user_id), token)

        # From another task:
        token.cancel("user navigated away")
    """

    __slots__ = ("_cancelled", "_reason", "_callbacks")

    def __init__(self) -> None:
        self._cancelled = False
        self._reason: str | None = None
        self._callbacks: list[CancelCallback] = []

    @classmethod
    def cancelled_token(cls, reason: str | None = None) -> CancellationToken:
        """Return a token that is already cancelled."""
        token = cls()
        token.cancel(reason)
        return token

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Trigger the token. Subsequent calls are no-ops."""
        if self._cancelled:
            return
        self._cancelled = True
        self._reason = reason
        logger.debug("Cancellation requested: %s", reason or "no reason given")
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback(self)

    def add_callback(self, callback: CancelCallback) -> Callable[[], None]:
        """
        Subscribe to cancellation.

        The callback runs immediately if the token is already cancelled.
        Returns a function that removes the subscription.
        """
        if self._cancelled:
            callback(self)
            return lambda: None

        self._callbacks.append(callback)

        def remove() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return remove

    async def wait(self) -> None:
        """Suspend until the token is cancelled."""
        if self._cancelled:
            return
        waiter = asyncio.get_running_loop().create_future()

        def wake(_: CancellationToken) -> None:
            if not waiter.done():
                waiter.set_result(None)

        remove = self.add_callback(wake)
        try:
            await waiter
        finally:
            remove()

    def raise_if_cancelled(self) -> None:
        """Raise a cancellation ResultError if the token was triggered."""
        if self._cancelled:
            raise cancellation_error(self._reason)

    def __repr__(self) -> str:
        state = f"cancelled, reason={self._reason!r}" if self._cancelled else "active"
        return f"CancellationToken({state})"
