"""
Core Validator class for resultful validation.

A Validator walks a value with chained rules, collects path-qualified error
messages, and ends in a Result:

    validate(user)
        .property("name", lambda v: v.not_empty().max_length(100))
        .nested("address", lambda a: a.property("zip", lambda z: z.matches(r"^\\d{5}$")))
        .array("items", lambda i: i.property("price", lambda p: p.min(0)))
        .validate()
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Generic, Iterable, TypeVar

from ..errors import ResultError, validation_error
from ..result import Result, fail, ok
from .types import Path, PathSegment, render_message
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

T = TypeVar("T")

RuleFn = Callable[["Validator[Any]"], Any]


def _read_field(value: Any, name: str) -> Any:
    """Read ``name`` from a mapping or an object. Missing reads as None."""
    if value is None:
        return None
    if isinstance(value, Mapping):
        return value.get(name)
    return getattr(value, name, None)


class Validator(Generic[T]):
    """
    Fluent rule accumulator over a single value.

    Not safe to share across concurrent validations: the path stack and
    error list are mutated in place by the chained calls.
    """

    __slots__ = ("_value", "_errors", "_path", "_pending_message")

    def __init__(self, value: T, path: Path = ()):
        self._value = value
        self._errors: list[str] = []
        self._path: list[PathSegment] = list(path)
        self._pending_message: str | None = None

    @classmethod
    def of(cls, value: T) -> Validator[T]:
        """Start a validation chain over ``value``."""
        return cls(value)

    @property
    def value(self) -> T:
        return self._value

    @property
    def errors(self) -> tuple[str, ...]:
        """Messages recorded so far, in accumulation order."""
        return tuple(self._errors)

    @property
    def path(self) -> Path:
        return tuple(self._path)

    # Structural rules

    def property(self, name: str, fn: RuleFn) -> Validator[T]:
        """Validate the field ``name`` with the rules applied by ``fn``."""
        self._descend(name, _read_field(self._value, name), fn)
        return self

    def nested(self, name: str, fn: RuleFn) -> Validator[T]:
        """Validate an object-typed field. Same behavior as property()."""
        return self.property(name, fn)

    def array(self, name: str, item_fn: RuleFn) -> Validator[T]:
        """
        Validate every element of the sequence field ``name``.

        A missing or None field, or one that is not a sequence (strings and
        bytes do not count), records a single error and the elements are not
        visited.
        """
        items = _read_field(self._value, name)

        if items is None:
            self._record_at(name, "{path} is missing or null")
            return self

        if not isinstance(items, Sequence) or isinstance(
            items, (str, bytes, bytearray)
        ):
            self._record_at(name, "{path} is not an array")
            return self

        self._path.append(name)
        try:
            for index, item in enumerate(items):
                self._descend(index, item, item_fn)
        finally:
            self._path.pop()
        return self

    def with_message(self, msg: str) -> Validator[T]:
        """Use ``msg`` for the next rule that fails."""
        self._pending_message = msg
        return self

    # Leaf rules

    def required(self) -> Validator[T]:
        return self._apply(Required())

    def not_empty(self) -> Validator[T]:
        return self._apply(NotEmpty())

    def min_length(self, length: int) -> Validator[T]:
        return self._apply(MinLength(length))

    def max_length(self, length: int) -> Validator[T]:
        return self._apply(MaxLength(length))

    def is_number(self) -> Validator[T]:
        return self._apply(IsNumber())

    def min(self, bound: float) -> Validator[T]:
        return self._apply(Min(bound))

    def max(self, bound: float) -> Validator[T]:
        return self._apply(Max(bound))

    def email(self) -> Validator[T]:
        return self._apply(Email())

    def matches(self, pattern: str | re.Pattern[str]) -> Validator[T]:
        return self._apply(Matches(pattern))

    def one_of(self, allowed: Iterable[Any]) -> Validator[T]:
        return self._apply(OneOf(allowed))

    def custom(
        self,
        predicate: Callable[[T], bool],
        message: str = "Validation failed for {path}",
    ) -> Validator[T]:
        return self._apply(Predicate(predicate, message))

    def rule(self, rule: Rule) -> Validator[T]:
        """Apply a prebuilt Rule."""
        return self._apply(rule)

    # Terminal

    def validate(self) -> Result[T, ResultError]:
        """Success with the original value, or Failure with a validation error."""
        if not self._errors:
            return ok(self._value)
        return fail(validation_error(", ".join(self._errors), errors=self._errors))

    # Internals

    def _apply(self, rule: Rule) -> Validator[T]:
        if not rule(self._value):
            self._record(rule.message)
        return self

    def _record(self, template: str) -> None:
        message = self._pending_message
        if message is None:
            message = template
        self._pending_message = None
        self._errors.append(render_message(message, self._path))

    def _record_at(self, segment: PathSegment, template: str) -> None:
        self._path.append(segment)
        try:
            self._record(template)
        finally:
            self._path.pop()

    def _descend(self, segment: PathSegment, child_value: Any, fn: RuleFn) -> None:
        self._path.append(segment)
        try:
            child = Validator(child_value, self._path)
            fn(child)
            self._errors.extend(child._errors)
        finally:
            self._path.pop()

    def __repr__(self) -> str:
        return f"Validator(value={self._value!r}, errors={len(self._errors)})"


def validate(value: T) -> Validator[T]:
    """
    Shorthand to start a validation chain.

    Usage:
        result = (
            validate(user)
            .property("name", lambda v: v.not_empty().max_length(100))
            .property("email", lambda v: v.not_empty().email())
            .validate()
        )
    """
    return Validator.of(value)
