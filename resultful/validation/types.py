"""
Type definitions for resultful validation.

Provides path aliases and the path formatter shared by the Validator and
the schema adapters.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable

from ..context import root_label

# Type aliases
CheckFn = Callable[[Any], bool]
PathSegment = str | int
Path = tuple[PathSegment, ...]

PATH_PLACEHOLDER = "{path}"


def format_path(path: Iterable[PathSegment]) -> str:
    """
    Render a path as dotted keys with bracketed indices.

    Examples:
        ("address", "street")        -> "address.street"
        ("items", 2, "price")        -> "items[2].price"
        ()                           -> "value" (the configured root label)
    """
    rendered = ""
    for segment in path:
        if isinstance(segment, int) and not isinstance(segment, bool):
            rendered += f"[{segment}]"
        elif rendered:
            rendered += f".{segment}"
        else:
            rendered = str(segment)
    return rendered or root_label()


def render_message(template: str, path: Iterable[PathSegment]) -> str:
    """Substitute the ``{path}`` placeholder in a message template."""
    return template.replace(PATH_PLACEHOLDER, format_path(path))
