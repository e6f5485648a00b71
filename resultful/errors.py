"""
Error kinds carried in the failure channel of a Result.

The taxonomy is a closed enum rather than a class hierarchy, so callers can
match on ``error.kind`` exhaustively:

    match err.kind:
        case ErrorKind.NOT_FOUND: ...
        case ErrorKind.VALIDATION: ...
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Closed set of error kinds, each with its public name and message prefix."""

    VALIDATION = ("ValidationError", "Validation Error")
    NOT_FOUND = ("NotFoundError", "Not Found")
    UNAUTHORIZED = ("UnauthorizedError", "Unauthorized")
    BUSINESS_RULE = ("BusinessRuleError", "Business Rule Violation")
    TECHNICAL = ("TechnicalError", "Technical Error")
    TIMEOUT = ("TimeoutError", "Technical Error")
    CONCURRENCY = ("ConcurrencyError", "Concurrency Error")
    CANCELLATION = ("CancellationError", "Cancellation")

    def __init__(self, label: str, prefix: str):
        self.label = label
        self.prefix = prefix

    @property
    def is_technical(self) -> bool:
        """Timeout and cancellation are technical-flavored kinds."""
        return self in (ErrorKind.TECHNICAL, ErrorKind.TIMEOUT, ErrorKind.CANCELLATION)


class ResultError(Exception):
    """
    Error payload tagged with an ErrorKind.

    Attributes:
        kind: The ErrorKind discriminant
        detail: Message without the kind prefix
        message: Full message, "<prefix>: <detail>"
        cause: Optional underlying exception (also chained as __cause__)
        context: Structured extras (operation_id, resource, errors, ...)
    """

    def __init__(
        self,
        kind: ErrorKind,
        detail: str,
        cause: BaseException | None = None,
        **context: Any,
    ):
        self.kind = kind
        self.detail = detail
        self.message = f"{kind.prefix}: {detail}"
        self.cause = cause
        self.context = context
        super().__init__(self.message)
        if cause is not None:
            self.__cause__ = cause

    @property
    def name(self) -> str:
        return self.kind.label

    @property
    def operation_id(self) -> str | None:
        return self.context.get("operation_id")

    def is_kind(self, kind: ErrorKind) -> bool:
        return self.kind is kind

    def __repr__(self) -> str:
        return f"ResultError({self.kind.name}, {self.detail!r})"

    # context (operation_id and friends) does not take part in equality
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResultError):
            return NotImplemented
        return (
            self.kind is other.kind
            and self.detail == other.detail
            and self.cause is other.cause
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.detail))

    def __reduce__(self) -> tuple[Any, ...]:
        return (
            type(self),
            (self.kind, self.detail, self.cause),
            {"context": self.context},
        )


class InvalidStateAccess(RuntimeError):
    """Raised on unchecked access to the payload of the other branch."""


def validation_error(
    detail: str, cause: BaseException | None = None, errors: list[str] | None = None
) -> ResultError:
    """Validation failure; ``errors`` keeps the individual messages."""
    return ResultError(
        ErrorKind.VALIDATION, detail, cause, errors=list(errors or [detail])
    )


def not_found_error(
    resource: str, resource_id: str | int | None = None, cause: BaseException | None = None
) -> ResultError:
    if resource_id is None:
        detail = f"{resource} could not be found"
    else:
        detail = f"{resource} with id '{resource_id}' could not be found"
    return ResultError(
        ErrorKind.NOT_FOUND, detail, cause, resource=resource, resource_id=resource_id
    )


def unauthorized_error(
    detail: str | None = None, cause: BaseException | None = None
) -> ResultError:
    return ResultError(
        ErrorKind.UNAUTHORIZED,
        detail or "You are not authorized to perform this operation",
        cause,
    )


def business_rule_error(detail: str, cause: BaseException | None = None) -> ResultError:
    return ResultError(ErrorKind.BUSINESS_RULE, detail, cause)


def technical_error(detail: str, cause: BaseException | None = None) -> ResultError:
    return ResultError(ErrorKind.TECHNICAL, detail, cause)


def timeout_error(
    operation: str, timeout_ms: int | float, cause: BaseException | None = None
) -> ResultError:
    return ResultError(
        ErrorKind.TIMEOUT,
        f"Operation '{operation}' timed out after {timeout_ms:g}ms",
        cause,
        operation=operation,
        timeout_ms=timeout_ms,
    )


def concurrency_error(
    entity: str, entity_id: str | int, cause: BaseException | None = None
) -> ResultError:
    return ResultError(
        ErrorKind.CONCURRENCY,
        f"{entity} with id '{entity_id}' was modified by another process",
        cause,
        entity=entity,
        entity_id=entity_id,
    )


def cancellation_error(
    detail: str | None = None,
    operation_id: str | None = None,
    cause: BaseException | None = None,
) -> ResultError:
    return ResultError(
        ErrorKind.CANCELLATION,
        detail or "Operation was cancelled",
        cause,
        operation_id=operation_id,
    )


def is_cancellation(error: Any) -> bool:
    return isinstance(error, ResultError) and error.kind is ErrorKind.CANCELLATION


def error_name(error: Any) -> str:
    """Error-shaped name for any failure payload."""
    if isinstance(error, ResultError):
        return error.name
    if isinstance(error, BaseException):
        return type(error).__name__
    return "Error"


def error_message(error: Any) -> str:
    """Error-shaped message for any failure payload."""
    if isinstance(error, ResultError):
        return error.message
    return str(error)


def ensure_exception(error: Any) -> BaseException:
    """Return ``error`` if raisable, else wrap it in a technical ResultError."""
    if isinstance(error, BaseException):
        return error
    return ResultError(ErrorKind.TECHNICAL, str(error), payload=error, wrapped=True)
