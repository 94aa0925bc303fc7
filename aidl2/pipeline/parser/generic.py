"""
Parser for the generic parameter block of an interface declaration.

``<T extends Foo & Bar, U>`` becomes
``[GenericParameter("T", ["Foo", "Bar"]), GenericParameter("U", [])]``.
"""

from __future__ import annotations

from ..errors import ParseError
from .nodes import GenericParameter


def split_top_level(text: str, separator: str) -> list[str]:
    """Split ``text`` on ``separator`` occurrences outside angle brackets."""
    parts = []
    depth = 0
    current = []
    for char in text:
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
        if char == separator and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts


def parse_generic_parameters(generic: str | None, filename: str | None = None) -> list[GenericParameter]:
    """
    Parse a generic parameter block.

    Args:
        generic: The raw block including the outer angle brackets, or None
        filename: Used for error messages

    Returns:
        The declared parameters in order; empty for None

    Raises:
        ParseError: If the block is malformed
    """
    if generic is None:
        return []

    text = generic.strip()
    if not (text.startswith("<") and text.endswith(">")):
        raise ParseError(f"Malformed generic parameters '{generic}'", filename)

    result = []
    for part in split_top_level(text[1:-1], ","):
        words = part.split(None, 2)
        if not words:
            raise ParseError(f"Empty generic parameter in '{generic}'", filename)

        name = words[0]
        bounds: list[str] = []
        if len(words) > 1:
            if words[1] != "extends" or len(words) < 3:
                raise ParseError(f"Malformed generic parameter '{part.strip()}'", filename)
            bounds = [b.strip() for b in split_top_level(words[2], "&")]
            if not all(bounds):
                raise ParseError(f"Malformed generic parameter '{part.strip()}'", filename)

        result.append(GenericParameter(name, bounds))
    return result
