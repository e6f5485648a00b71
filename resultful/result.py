"""
Result type: a disjoint union of Success, Failure and Cancelled.

Every combinator returns a Result (or, for the terminal ones, a plain value)
and never raises because of a state mismatch. Failures short-circuit, so
pipelines read left to right:

    ok(5).map(lambda x: x * 2).flat_map(check_limit).match(render, report)
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, NoReturn, TypeVar

from .cancellation import CancellationToken
from .context import caught_exceptions
from .errors import (
    InvalidStateAccess,
    ResultError,
    cancellation_error,
    ensure_exception,
    error_message,
    error_name,
    is_cancellation,
)

logger = logging.getLogger(__name__)

V = TypeVar("V")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Mapped success type
F = TypeVar("F")  # Mapped error type
R = TypeVar("R")  # Terminal return type


class Result(Generic[V, E]):
    """
    Base of Success, Failure and Cancelled.

    Results are immutable. Use ok(), fail(), cancelled(), from_throwable()
    or from_awaitable() to build them, and either the combinators below or
    a match statement to consume them:

        match result:
            case Success(value):
                ...
            case Cancelled():
                ...
            case Failure(error):
                ...
    """

    __slots__ = ()

    @property
    def is_success(self) -> bool:
        return isinstance(self, Success)

    @property
    def is_failure(self) -> bool:
        """True for Failure and Cancelled."""
        return isinstance(self, Failure)

    @property
    def is_cancelled(self) -> bool:
        return isinstance(self, Cancelled)

    # Transformations

    def map(self, f: Callable[[V], U]) -> Result[U, E]:
        """Apply ``f`` to the success payload. An exception in ``f`` becomes a Failure."""
        if not isinstance(self, Success):
            return self  # type: ignore[return-value]
        try:
            return Success(f(self.value))
        except caught_exceptions() as exc:
            return Failure(exc)

    def map_error(self, f: Callable[[E], F]) -> Result[V, F]:
        """Apply ``f`` to the error payload. Success passes through."""
        if not isinstance(self, Failure):
            return self  # type: ignore[return-value]
        try:
            error = f(self.error)
        except caught_exceptions() as exc:
            return Failure(exc)
        if isinstance(self, Cancelled) and is_cancellation(error):
            return Cancelled(error)
        return Failure(error)

    def flat_map(self, f: Callable[[V], Result[U, E]]) -> Result[U, E]:
        """Chain a Result-returning ``f``. Its Result is returned as-is."""
        if not isinstance(self, Success):
            return self  # type: ignore[return-value]
        try:
            out = f(self.value)
        except caught_exceptions() as exc:
            return Failure(exc)
        return _expect_result(out, "flat_map")

    def tap(self, f: Callable[[V], Any]) -> Result[V, E]:
        """Run ``f`` on the success payload and return self. Exceptions propagate."""
        if isinstance(self, Success):
            f(self.value)
        return self

    def tap_error(self, f: Callable[[E], Any]) -> Result[V, E]:
        """Run ``f`` on the error payload and return self. Exceptions propagate."""
        if isinstance(self, Failure):
            f(self.error)
        return self

    # Terminal operations and fallbacks

    def match(self, on_success: Callable[[V], R], on_failure: Callable[[E], R]) -> R:
        if isinstance(self, Success):
            return on_success(self.value)
        return on_failure(self.error)  # type: ignore[attr-defined]

    def get_or_else(self, default: V) -> V:
        if isinstance(self, Success):
            return self.value
        return default

    def get_or_call(self, f: Callable[[E], V]) -> V:
        if isinstance(self, Success):
            return self.value
        return f(self.error)  # type: ignore[attr-defined]

    def recover(self, f: Callable[[E], Result[V, E]]) -> Result[V, E]:
        """Replace a failure with the Result produced by ``f``."""
        if isinstance(self, Success):
            return self
        try:
            out = f(self.error)  # type: ignore[attr-defined]
        except caught_exceptions() as exc:
            return Failure(exc)
        return _expect_result(out, "recover")

    def or_else(self, alternative: Result[V, E]) -> Result[V, E]:
        """Return ``alternative`` verbatim on any failure."""
        if not isinstance(alternative, Result):
            raise TypeError(
                f"or_else expects a Result, got {type(alternative).__name__}"
            )
        if isinstance(self, Success):
            return self
        return alternative

    # Async bridging

    async def async_map(
        self,
        f: Callable[[V], Awaitable[U] | U],
        token: CancellationToken | None = None,
    ) -> Result[U, E]:
        """
        Async counterpart of map.

        A token that is already cancelled short-circuits to cancelled()
        without calling ``f``. ``f`` may return a plain value or an awaitable.
        """
        if token is not None and token.is_cancelled:
            return cancelled()
        if not isinstance(self, Success):
            return self  # type: ignore[return-value]
        try:
            out = f(self.value)
        except caught_exceptions() as exc:
            return Failure(exc)
        if inspect.isawaitable(out):
            return await from_awaitable(out, token)
        return Success(out)

    async def async_flat_map(
        self,
        f: Callable[[V], Awaitable[Result[U, E]] | Result[U, E]],
        token: CancellationToken | None = None,
    ) -> Result[U, E]:
        """Async counterpart of flat_map, with the same cancellation short-circuit."""
        if token is not None and token.is_cancelled:
            return cancelled()
        if not isinstance(self, Success):
            return self  # type: ignore[return-value]
        try:
            out = f(self.value)
        except caught_exceptions() as exc:
            return Failure(exc)
        if inspect.isawaitable(out):
            settled = await from_awaitable(out, token)
            if not isinstance(settled, Success):
                return settled
            out = settled.value
        return _expect_result(out, "async_flat_map")

    async def to_awaitable(self) -> V:
        """Return the payload, or raise the error. Inverse of from_awaitable."""
        if isinstance(self, Success):
            return self.value
        raise ensure_exception(self.error)  # type: ignore[attr-defined]

    def to_dict(self) -> dict[str, Any]:
        """Minimal record for logging or transport. No traceback, no cause."""
        if isinstance(self, Success):
            return {"success": True, "value": self.value}
        error = self.error  # type: ignore[attr-defined]
        return {
            "success": False,
            "error": {"name": error_name(error), "message": error_message(error)},
        }


@dataclass(frozen=True, slots=True)
class Success(Result[V, E]):
    """Success result containing a value."""

    value: V

    @property
    def error(self) -> NoReturn:
        raise InvalidStateAccess("Cannot access the error of a Success")


@dataclass(frozen=True, slots=True)
class Failure(Result[V, E]):
    """Failure result containing an error."""

    error: E

    @property
    def value(self) -> NoReturn:
        raise InvalidStateAccess(
            f"Cannot access the value of a {type(self).__name__}: "
            f"{error_message(self.error)}"
        )


@dataclass(frozen=True, slots=True)
class Cancelled(Failure[V, E]):
    """Failure produced by a triggered cancellation token."""


def ok(value: V) -> Result[V, Any]:
    return Success(value)


def fail(error: E) -> Result[Any, E]:
    return Failure(error)


def cancelled(
    operation_id: str | None = None, message: str | None = None
) -> Result[Any, Any]:
    """Failure carrying a cancellation error. ``operation_id`` is context only."""
    return Cancelled(cancellation_error(message, operation_id))


def from_throwable(thunk: Callable[..., V], *args: Any, **kwargs: Any) -> Result[V, Any]:
    """Call ``thunk`` and capture its return value or raised exception."""
    try:
        return Success(thunk(*args, **kwargs))
    except caught_exceptions() as exc:
        return _from_exception(exc)


async def from_awaitable(
    awaitable: Awaitable[V], token: CancellationToken | None = None
) -> Result[V, Any]:
    """
    Await ``awaitable`` and capture its outcome as a Result.

    If ``token`` is already cancelled, nothing is awaited and cancelled() is
    returned. If it triggers while the awaitable is pending, cancelled() is
    returned as soon as it triggers; the awaitable itself keeps running.
    """
    if token is not None and token.is_cancelled:
        _discard(awaitable)
        return cancelled()

    if token is None:
        try:
            value = await awaitable
        except caught_exceptions() as exc:
            return _from_exception(exc)
        return Success(value)

    task = asyncio.ensure_future(awaitable)
    waiter = asyncio.get_running_loop().create_future()

    def wake(_: CancellationToken) -> None:
        if not waiter.done():
            waiter.set_result(None)

    remove = token.add_callback(wake)
    try:
        await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        task.cancel()
        raise
    finally:
        remove()
        if not waiter.done():
            waiter.cancel()

    if not task.done():
        logger.debug("Abandoning %r after cancellation", task)
        task.add_done_callback(_retrieve_exception)
        return cancelled()

    try:
        value = task.result()
    except caught_exceptions() as exc:
        return _from_exception(exc)
    return Success(value)


def _from_exception(exc: BaseException) -> Result[Any, Any]:
    # Payloads that to_awaitable had to wrap come back as they went in
    if isinstance(exc, ResultError) and exc.context.get("wrapped"):
        return Failure(exc.context["payload"])
    if is_cancellation(exc):
        return Cancelled(exc)
    return Failure(exc)


def _expect_result(out: Any, where: str) -> Result[Any, Any]:
    if isinstance(out, Result):
        return out
    return Failure(
        TypeError(f"{where} function must return a Result, got {type(out).__name__}")
    )


def _discard(awaitable: Awaitable[Any]) -> None:
    # Never-started coroutines would otherwise warn "was never awaited"
    if inspect.iscoroutine(awaitable):
        awaitable.close()
    elif isinstance(awaitable, asyncio.Future):
        awaitable.add_done_callback(_retrieve_exception)


def _retrieve_exception(future: asyncio.Future) -> None:
    if not future.cancelled():
        future.exception()
