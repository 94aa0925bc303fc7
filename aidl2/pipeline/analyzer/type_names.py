"""
Structured Java type names.

Type matching works on a parsed TypeName instead of raw text so that
``java . util . List < String >`` and ``java.util.List<String>`` are the
same type.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..parser.generic import split_top_level

JAVA_PRIMITIVES = frozenset(["boolean", "byte", "char", "short", "int", "long", "float", "double"])

OBJECT = "java.lang.Object"


@dataclass(frozen=True)
class TypeName:
    """A parsed Java type reference."""

    base: str  # Qualified or simple name without generics or array suffix
    type_arguments: tuple[TypeName, ...] = ()
    array_depth: int = 0
    wildcard: str | None = None  # "extends", "super", or "?" for a bare wildcard

    @classmethod
    def parse(cls, text: str) -> TypeName:
        """
        Parse a type as written in an interface file.

        Raises:
            ValueError: If the text is not a well-formed type
        """
        rest = text.strip()

        array_depth = 0
        while rest.endswith("]"):
            rest = rest[:-1].rstrip()
            if not rest.endswith("["):
                raise ValueError(f"Malformed array type '{text}'")
            rest = rest[:-1].rstrip()
            array_depth += 1

        if rest.startswith("?"):
            bound = rest[1:].strip()
            if not bound:
                return cls("?", wildcard="?")
            words = bound.split(None, 1)
            if len(words) != 2 or words[0] not in ("extends", "super"):
                raise ValueError(f"Malformed wildcard '{text}'")
            parsed = cls.parse(words[1])
            return replace(parsed, wildcard=words[0], array_depth=parsed.array_depth + array_depth)

        type_arguments: tuple[TypeName, ...] = ()
        if "<" in rest:
            start = rest.index("<")
            if not rest.endswith(">"):
                raise ValueError(f"Malformed generic type '{text}'")
            arguments = split_top_level(rest[start + 1:-1], ",")
            type_arguments = tuple(cls.parse(argument) for argument in arguments)
            rest = rest[:start]

        base = "".join(rest.split())
        if not base or base.startswith(".") or base.endswith(".") or ".." in base:
            raise ValueError(f"Malformed type name '{text}'")

        return cls(base, type_arguments, array_depth)

    @property
    def simple_name(self) -> str:
        return self.base.rsplit(".", 1)[-1]

    @property
    def is_array(self) -> bool:
        return self.array_depth > 0

    @property
    def is_primitive(self) -> bool:
        return not self.is_array and self.base in JAVA_PRIMITIVES

    @property
    def element(self) -> TypeName | None:
        """The element type of an array, None for non-arrays."""
        if not self.is_array:
            return None
        return replace(self, array_depth=self.array_depth - 1)

    @property
    def content(self) -> TypeName | None:
        """
        The single type argument of a generic type with wildcards removed.

        ``List<? extends Foo>`` has content ``Foo`` and ``List<?>`` has
        content ``java.lang.Object``.
        """
        if len(self.type_arguments) != 1:
            return None
        argument = self.type_arguments[0]
        if argument.wildcard == "?":
            return TypeName(OBJECT)
        if argument.wildcard is not None:
            return replace(argument, wildcard=None)
        return argument

    @property
    def raw(self) -> str:
        """The type without its generic arguments, array suffix kept."""
        return self.base + "[]" * self.array_depth

    def with_base(self, base: str) -> TypeName:
        return replace(self, base=base)

    def __str__(self) -> str:
        if self.wildcard == "?":
            text = "?"
        else:
            text = self.base
            if self.type_arguments:
                text += "<" + ", ".join(str(argument) for argument in self.type_arguments) + ">"
            if self.wildcard is not None:
                text = f"? {self.wildcard} {text}"
        return text + "[]" * self.array_depth
