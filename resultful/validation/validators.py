"""
Built-in rules for resultful validation.

Provides factory functions that return Rule instances. Every rule except
Required and OneOf is type-guarded: a value of the wrong runtime type passes
(MaxLength on an int never fires).
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from numbers import Real
from typing import Any, Iterable

from .types import CheckFn

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[A-Za-z]{2,}$")


@dataclass(frozen=True, slots=True)
class Rule:
    """
    Immutable leaf rule.

    ``check`` returns True when the value passes. ``message`` is a template
    that may contain the ``{path}`` placeholder.
    """

    check: CheckFn
    message: str

    def __call__(self, value: Any) -> bool:
        return self.check(value)

    def with_message(self, msg: str) -> Rule:
        """Return new rule with custom error message."""
        return Rule(check=self.check, message=msg)


def _is_real(x: Any) -> bool:
    return isinstance(x, Real) and not isinstance(x, bool)


def _strictly_equal(a: Any, b: Any) -> bool:
    # bool is an int subclass; True must not match 1
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a is b
    return a == b


def Required() -> Rule:
    """Value must not be None."""
    return Rule(check=lambda x: x is not None, message="{path} is required")


def NotEmpty() -> Rule:
    """String must not be blank."""

    def check(x: Any) -> bool:
        return not isinstance(x, str) or x.strip() != ""

    return Rule(check=check, message="{path} cannot be empty")


def MinLength(n: int) -> Rule:
    """Validate minimum string length."""

    def check(x: Any) -> bool:
        return not isinstance(x, str) or len(x) >= n

    return Rule(check=check, message=f"{{path}} must be at least {n} characters")


def MaxLength(n: int) -> Rule:
    """Validate maximum string length."""

    def check(x: Any) -> bool:
        return not isinstance(x, str) or len(x) <= n

    return Rule(check=check, message=f"{{path}} cannot exceed {n} characters")


def IsNumber() -> Rule:
    """
    Validate value is a finite real number.

    bool is rejected, as are NaN and the infinities.
    """

    def check(x: Any) -> bool:
        return _is_real(x) and math.isfinite(x)

    return Rule(check=check, message="{path} must be a number")


def Min(bound: Real) -> Rule:
    """Validate number is at least ``bound``."""

    def check(x: Any) -> bool:
        return not _is_real(x) or not x < bound

    return Rule(check=check, message=f"{{path}} must be at least {bound}")


def Max(bound: Real) -> Rule:
    """Validate number does not exceed ``bound``."""

    def check(x: Any) -> bool:
        return not _is_real(x) or not x > bound

    return Rule(check=check, message=f"{{path}} cannot exceed {bound}")


def Email() -> Rule:
    """Validate string looks like an email address."""

    def check(x: Any) -> bool:
        return not isinstance(x, str) or EMAIL_PATTERN.match(x) is not None

    return Rule(check=check, message="{path} must be a valid email address")


def Matches(pattern: str | re.Pattern[str]) -> Rule:
    """
    Validate string contains a match for the regex pattern.

    Like a regex test, the pattern is searched, not anchored; anchor it with
    ^ and $ to match the whole string.

    Usage:
        Matches(r"^\\d{5}$")
        Matches(re.compile(r"[a-z]+", re.I))
    """
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern

    def check(x: Any) -> bool:
        return not isinstance(x, str) or compiled.search(x) is not None

    return Rule(check=check, message="{path} does not match the required pattern")


def OneOf(allowed: Iterable[Any]) -> Rule:
    """
    Validate value is one of the allowed values.

    Usage:
        OneOf(["active", "inactive", "pending"])
        OneOf([1, 2, 3])
    """
    options = list(allowed)

    def check(x: Any) -> bool:
        return any(_strictly_equal(x, option) for option in options)

    listed = ", ".join(str(option) for option in options)
    return Rule(check=check, message=f"{{path}} must be one of: {listed}")


def Predicate(fn: CheckFn, message: str = "Validation failed for {path}") -> Rule:
    """
    Create rule from arbitrary predicate function.

    A predicate that raises counts as failing.

    Usage:
        Predicate(lambda x: x > 0, "{path} must be positive")
    """

    def check(x: Any) -> bool:
        try:
            return bool(fn(x))
        except Exception:
            return False

    return Rule(check=check, message=message)
