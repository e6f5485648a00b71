"""
Resultful Validation - fluent, path-tracking validation that ends in a Result.

Usage:
    from resultful.validation import validate, from_pydantic

    result = (
        validate({"name": "", "age": 10})
        .property("name", lambda n: n.not_empty())
        .property("age", lambda a: a.min(18))
        .validate()
    )
    # Failure: "Validation Error: name cannot be empty, age must be at least 18"

    check_user = from_pydantic(UserModel)
"""

from .core import Validator, validate
from .schema import from_pydantic, from_schema, pydantic_errors
from .types import Path, PathSegment, format_path, render_message
from .validators import (
    Email,
    IsNumber,
    Matches,
    Max,
    MaxLength,
    Min,
    MinLength,
    NotEmpty,
    OneOf,
    Predicate,
    Required,
    Rule,
)

__all__ = [
    # Core
    "Validator",
    "validate",
    # Paths
    "Path",
    "PathSegment",
    "format_path",
    "render_message",
    # Rules
    "Rule",
    "Required",
    "NotEmpty",
    "MinLength",
    "MaxLength",
    "IsNumber",
    "Min",
    "Max",
    "Email",
    "Matches",
    "OneOf",
    "Predicate",
    # Schema
    "from_schema",
    "from_pydantic",
    "pydantic_errors",
]
