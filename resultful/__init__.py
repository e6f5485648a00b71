import logging

from .cancellation import CancellationToken
from .context import caught_exceptions, result_context, root_label
from .decorator import resultify
from .errors import (
    ErrorKind,
    InvalidStateAccess,
    ResultError,
    business_rule_error,
    cancellation_error,
    concurrency_error,
    error_message,
    error_name,
    not_found_error,
    technical_error,
    timeout_error,
    unauthorized_error,
    validation_error,
)
from .result import (
    Cancelled,
    Failure,
    Result,
    Success,
    cancelled,
    fail,
    from_awaitable,
    from_throwable,
    ok,
)
from .utils import (
    combine_results,
    from_predicate,
    map_result,
    retry,
    try_catch_async,
    with_fallback,
    with_timeout,
)
from .validation import Validator, from_pydantic, from_schema, validate

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Result
    "Result",
    "Success",
    "Failure",
    "Cancelled",
    "ok",
    "fail",
    "cancelled",
    "from_throwable",
    "from_awaitable",
    # Errors
    "ErrorKind",
    "ResultError",
    "InvalidStateAccess",
    "validation_error",
    "not_found_error",
    "unauthorized_error",
    "business_rule_error",
    "technical_error",
    "timeout_error",
    "concurrency_error",
    "cancellation_error",
    "error_name",
    "error_message",
    # Cancellation
    "CancellationToken",
    # Configuration
    "result_context",
    "caught_exceptions",
    "root_label",
    # Helpers
    "combine_results",
    "map_result",
    "from_predicate",
    "try_catch_async",
    "with_fallback",
    "with_timeout",
    "retry",
    "resultify",
    # Validation
    "Validator",
    "validate",
    "from_schema",
    "from_pydantic",
]
