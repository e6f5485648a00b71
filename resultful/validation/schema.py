"""
Schema adapters for resultful validation.

Provides from_schema() and from_pydantic(), which turn an external schema's
parse-or-raise function into a function returning a Result.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..errors import ResultError, validation_error
from ..result import Result, fail, ok
from .types import Path, format_path

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

ErrorExtractor = Callable[[Exception], Iterable[tuple[Path, str]] | None]


def from_schema(
    parse: Callable[[Any], Any],
    *,
    extract_errors: ErrorExtractor | None = None,
) -> Callable[[T], Result[T, ResultError]]:
    """
    Wrap a schema parse function that raises on invalid data.

    Args:
        parse: Called with the data; any return value means valid
        extract_errors: Optional function pulling (path, message) pairs out
            of the raised exception

    Returns:
        Function returning Ok(data) when parse passes, or a validation
        Failure whose message lists "path: message" pairs joined with ", "

    Usage:
        check_user = from_schema(user_schema.parse, extract_errors=lambda e: e.issues)
        result = check_user({"name": "Alice"})
    """

    def run(data: T) -> Result[T, ResultError]:
        try:
            parse(data)
        except Exception as exc:
            return fail(_to_validation_error(exc, extract_errors))
        return ok(data)

    return run


def from_pydantic(model: type[M]) -> Callable[[Any], Result[M, ResultError]]:
    """
    Validate data against a Pydantic model.

    Returns:
        Function returning Ok(model instance) on success, or a validation
        Failure listing every field error with its path.

    Usage:
        class User(BaseModel):
            name: str
            tags: list[str]

        check_user = from_pydantic(User)
        check_user({"name": "Alice", "tags": ["a", 1]})
        # Failure: "Validation Error: tags[1]: Input should be a valid string"
    """
    if not (isinstance(model, type) and issubclass(model, BaseModel)):
        raise TypeError("from_pydantic requires a pydantic BaseModel subclass")

    def run(data: Any) -> Result[M, ResultError]:
        try:
            return ok(model.model_validate(data))
        except PydanticValidationError as exc:
            return fail(_to_validation_error(exc, pydantic_errors))

    return run


def pydantic_errors(exc: Exception) -> list[tuple[Path, str]] | None:
    """Extract (path, message) pairs from a pydantic ValidationError."""
    if not isinstance(exc, PydanticValidationError):
        return None
    return [(tuple(err["loc"]), err["msg"]) for err in exc.errors()]


def _to_validation_error(
    exc: Exception, extract_errors: ErrorExtractor | None
) -> ResultError:
    pairs = extract_errors(exc) if extract_errors is not None else None
    if not pairs:
        return validation_error(str(exc), cause=exc)
    messages = [f"{format_path(path)}: {message}" for path, message in pairs]
    return validation_error(", ".join(messages), cause=exc, errors=messages)
