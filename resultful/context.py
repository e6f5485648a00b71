"""
Context manager for result configuration (caught exceptions, root path label).
"""

from contextlib import contextmanager
from contextvars import ContextVar

# Exception types that transforming combinators turn into Failure
_caught: ContextVar[tuple[type[BaseException], ...]] = ContextVar(
    "caught_exceptions", default=(Exception,)
)

# Path label used by Validator for errors recorded at the root
_root_label: ContextVar[str] = ContextVar("root_label", default="value")


def caught_exceptions() -> tuple[type[BaseException], ...]:
    """Exception types currently converted to Failure by map/flat_map/etc."""
    return _caught.get()


def root_label() -> str:
    """Path label for errors recorded against the validated value itself."""
    return _root_label.get()


@contextmanager
def result_context(
    *,
    catch: type[BaseException] | tuple[type[BaseException], ...] | None = None,
    root_label: str | None = None,
):
    """
    Context manager for result configuration.

    Args:
        catch: Exception type(s) that transforming combinators (map, map_error,
               flat_map, recover, from_throwable, async_map, ...) convert into
               a Failure. Anything else propagates. Defaults to Exception.
        root_label: Path label used in validation messages recorded at the
               root of a Validator. Defaults to "value".

    Example:
        from resultful import ok, result_context

        # Normal: a KeyError inside map becomes a Failure
        ok({}).map(lambda d: d["missing"])

        # Narrowed: only ValueError is captured, the KeyError propagates
        with result_context(catch=ValueError):
            ok({}).map(lambda d: d["missing"])  # KeyError!
    """
    tokens = []
    if catch is not None:
        if isinstance(catch, type):
            catch = (catch,)
        if not all(isinstance(c, type) and issubclass(c, BaseException) for c in catch):
            raise TypeError("catch must be exception type(s)")
        tokens.append((_caught, _caught.set(tuple(catch))))
    if root_label is not None:
        tokens.append((_root_label, _root_label.set(root_label)))
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)
