"""
Helpers that work across several Results or wrap async work in a Result.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Iterable, TypeVar

from .cancellation import CancellationToken
from .errors import error_message, timeout_error
from .result import (
    Result,
    Success,
    cancelled,
    fail,
    from_awaitable,
    from_throwable,
    ok,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


def combine_results(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """
    Collect the payloads of several Results.

    Returns Ok([values...]) if every Result succeeded, else the first
    non-success Result unchanged.
    """
    values: list[T] = []
    for result in results:
        if not isinstance(result, Success):
            return result  # type: ignore[return-value]
        values.append(result.value)
    return ok(values)


def map_result(items: Iterable[T], f: Callable[[T], Result[U, E]]) -> Result[list[U], E]:
    """Apply a Result-returning ``f`` to each item, stopping at the first failure."""
    values: list[U] = []
    for item in items:
        result = ok(item).flat_map(f)
        if not isinstance(result, Success):
            return result  # type: ignore[return-value]
        values.append(result.value)
    return ok(values)


def from_predicate(
    value: T, predicate: Callable[[T], bool], error: E | Callable[[T], E]
) -> Result[T, E]:
    """
    Ok(value) if ``predicate(value)`` holds, else Failure.

    ``error`` may be the error itself or a function building it from the value.
    """
    if predicate(value):
        return ok(value)
    return fail(error(value) if callable(error) else error)


async def try_catch_async(
    fn: Callable[..., Any],
    *args: Any,
    token: CancellationToken | None = None,
    **kwargs: Any,
) -> Result[Any, Any]:
    """
    Call ``fn`` (sync or async) and capture its outcome as a Result.

    A Result returned by ``fn`` is passed through rather than nested.
    """
    return await _settle(fn, args, kwargs, token)


async def with_fallback(
    primary: Callable[[], Any],
    fallback: Callable[[], Any],
    token: CancellationToken | None = None,
) -> Result[Any, Any]:
    """Run ``primary``; if it fails (but was not cancelled), run ``fallback``."""
    result = await _settle(primary, (), {}, token)
    if result.is_success or result.is_cancelled:
        return result
    logger.debug("Primary failed, using fallback: %s", error_message(result.error))
    return await _settle(fallback, (), {}, token)


async def with_timeout(
    awaitable: Awaitable[T],
    seconds: float,
    operation: str = "operation",
    token: CancellationToken | None = None,
) -> Result[T, Any]:
    """
    Await ``awaitable`` for at most ``seconds``.

    On expiry returns a timeout-kind Failure and the awaitable is cancelled.
    A TimeoutError raised by the awaitable itself is an ordinary Failure.
    """
    if token is not None and token.is_cancelled:
        return await from_awaitable(awaitable, token)

    result = await from_awaitable(_run_until(awaitable, seconds), token)
    if isinstance(result, Success) and result.value is _EXPIRED:
        return fail(timeout_error(operation, seconds * 1000))
    return result


async def retry(
    fn: Callable[[], Any],
    *,
    attempts: int = 3,
    delay: float = 0.0,
    backoff: float = 2.0,
    token: CancellationToken | None = None,
) -> Result[Any, Any]:
    """
    Call ``fn`` until it succeeds or ``attempts`` are used up.

    Args:
        fn: Zero-argument callable, sync or async, returning a value or a
            Result. Raising counts as a failed attempt.
        attempts: Maximum number of calls
        delay: Seconds to sleep after the first failure
        backoff: Multiplier applied to the delay after each failure
        token: Optional cancellation token, checked before each attempt and
            while sleeping

    Returns:
        The first Success, the last Failure, or cancelled()
    """
    if attempts < 1:
        raise ValueError(f"attempts must be at least 1, got {attempts}")

    wait = delay
    result: Result[Any, Any] = cancelled()
    for attempt in range(1, attempts + 1):
        if token is not None and token.is_cancelled:
            return cancelled()

        result = await _settle(fn, (), {}, token)
        if result.is_success or result.is_cancelled:
            return result

        logger.warning(
            "Attempt %d/%d failed: %s", attempt, attempts, error_message(result.error)
        )
        if attempt < attempts and wait > 0:
            slept = await from_awaitable(asyncio.sleep(wait), token)
            if slept.is_cancelled:
                return slept
            wait *= backoff

    logger.info("Giving up after %d attempts", attempts)
    return result


_EXPIRED = object()


async def _run_until(awaitable: Awaitable[T], seconds: float) -> Any:
    """Await ``awaitable``, or cancel it and return _EXPIRED once ``seconds`` pass."""
    task = asyncio.ensure_future(awaitable)
    try:
        done, _ = await asyncio.wait({task}, timeout=seconds)
    except asyncio.CancelledError:
        task.cancel()
        raise
    if done:
        return task.result()

    task.cancel()
    await asyncio.wait({task})
    if not task.cancelled():
        task.exception()
    return _EXPIRED


async def _settle(
    fn: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    token: CancellationToken | None,
) -> Result[Any, Any]:
    called = from_throwable(fn, *args, **kwargs)
    if not isinstance(called, Success):
        return called
    out = called.value
    if inspect.isawaitable(out):
        settled = await from_awaitable(out, token)
        if not isinstance(settled, Success):
            return settled
        out = settled.value
    return out if isinstance(out, Result) else ok(out)
