"""
The @resultify decorator for turning raising functions into Result-returning ones.
"""

import inspect
from functools import wraps
from typing import Any, Callable

from .context import result_context
from .result import Result, Success, from_awaitable, from_throwable


def resultify(
    _func: Callable | None = None,
    *,
    catch: type[BaseException] | tuple[type[BaseException], ...] | None = None,
) -> Callable:
    """
    Decorator that makes a function return a Result instead of raising.

    The decorated function's return value becomes Ok(value) and a raised
    exception becomes Failure(exc). A Result returned by the function is
    passed through unchanged. Coroutine functions stay coroutine functions:
    awaiting the wrapper yields the Result.

    Can be used with or without arguments:
        @resultify
        def parse_port(s): ...

        @resultify(catch=ValueError)
        async def fetch_user(user_id): ...

    Args:
        catch: Exception type(s) to capture. Others propagate. Defaults to
               the current result_context setting (Exception).

    Returns:
        Decorated function returning a Result.
    """

    def decorator(func: Callable) -> Callable:
        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Result:
                with result_context(catch=catch):
                    started = from_throwable(func, *args, **kwargs)
                    if not isinstance(started, Success):
                        return started
                    result = await from_awaitable(started.value)
                return _flatten(result)

            return async_wrapper

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Result:
            with result_context(catch=catch):
                result = from_throwable(func, *args, **kwargs)
            return _flatten(result)

        return wrapper

    # Handle both @resultify and @resultify(...) syntax
    if _func is not None:
        # Called as @resultify without parentheses
        return decorator(_func)
    else:
        # Called as @resultify(...) with arguments
        return decorator


def _flatten(result: Result) -> Result:
    if isinstance(result, Success) and isinstance(result.value, Result):
        return result.value
    return result
