"""
AST node definitions for .aidl2 interface files.

The parser produces one Interface per file. Arguments carry a lazily
bound marshaller slot which the marshalling layer fills on first use.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .lexer import TokenList


class Direction(Enum):
    """Data-flow role of an argument."""

    IN = "in"
    OUT = "out"
    INOUT = "inout"
    RETURN = "return"

    @classmethod
    def from_value(cls, value: str) -> Direction:
        for direction in cls:
            if direction.value == value:
                return direction
        raise ValueError(f"Unknown direction '{value}'")


class ImportKind(Enum):
    """Declared kind of an import entry."""

    IMPORT = "import"  # Plain import, no declared kind
    INTERFACE = "interface"
    PARCELABLE = "parcelable"
    SERIALIZABLE = "serializable"

    @classmethod
    def from_value(cls, value: str) -> ImportKind:
        for kind in cls:
            if kind.value == value:
                return kind
        raise ValueError(f"Unknown import kind '{value}'")


@dataclass
class ImportEntry:
    """One ``import`` statement."""

    kind: ImportKind = ImportKind.IMPORT
    name: str = ""  # Fully qualified name


@dataclass
class GenericParameter:
    """A type parameter of a generic interface, e.g. ``T extends Foo``."""

    name: str = ""
    bounds: list[str] = field(default_factory=list)

    @property
    def upper_bound(self) -> str | None:
        return self.bounds[0] if self.bounds else None


@dataclass(eq=False)
class Argument:
    """
    A method argument, or the synthetic return value.

    Identity semantics: two arguments with the same type and name are still
    different arguments, each with its own marshaller.
    """

    direction: Direction = Direction.IN
    type: str = ""
    name: str = ""
    position: int | None = None  # Token index of the argument's type

    # Bound on first encode request and reused afterwards
    marshaller: Any = None

    @property
    def is_return(self) -> bool:
        return self.direction is Direction.RETURN


@dataclass
class Method:
    """A method declaration."""

    name: str = ""
    return_type: str = "void"
    arguments: list[Argument] = field(default_factory=list)
    modifiers: list[str] = field(default_factory=list)
    javadoc: str | None = None
    position: int | None = None

    # Synthetic return-direction argument, None for void methods
    result: Argument | None = None

    @property
    def is_void(self) -> bool:
        return self.return_type == "void"

    @property
    def is_oneway(self) -> bool:
        return "oneway" in self.modifiers

    @property
    def is_mainthread(self) -> bool:
        return "mainthread" in self.modifiers

    @property
    def is_localthrow(self) -> bool:
        return "localthrow" in self.modifiers


@dataclass
class Interface:
    """A parsed interface definition file."""

    package: str = ""
    name: str = ""
    imports: list[ImportEntry] = field(default_factory=list)
    generic: str | None = None  # Raw generic block, e.g. "<T extends Foo>"
    generic_parameters: list[GenericParameter] = field(default_factory=list)
    methods: list[Method] = field(default_factory=list)
    modifiers: list[str] = field(default_factory=list)
    javadoc: str | None = None
    tokens: TokenList | None = None

    @property
    def qualified_name(self) -> str:
        if not self.package:
            return self.name
        return f"{self.package}.{self.name}"

    @property
    def generic_arguments(self) -> str:
        """Type parameter names as a Java argument list, e.g. ``<T, U>``."""
        if not self.generic_parameters:
            return ""
        return "<" + ", ".join(p.name for p in self.generic_parameters) + ">"
