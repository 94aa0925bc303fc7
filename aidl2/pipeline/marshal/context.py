"""
Per-pass encoding context.

An EncodeContext is created for every generated file. It carries what the
marshallers need to know about their surroundings and owns the counter used
to name temporaries, so concurrent or consecutive passes never share
suffixes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, AbstractSet

from ...log import get_logger
from ..analyzer.classifier import InterfaceClass, SourceLookup, classify
from ..parser.nodes import GenericParameter, ImportEntry
from .registry import TypeRegistry, default_registry

if TYPE_CHECKING:
    from ..parser.lexer import TokenList

logger = get_logger(__name__)


class TempNames:
    """
    Names of the temporaries of one snippet.

    Attribute access produces the name for a role: with index 1, ``names.msb``
    is ``_msb``; with index 3 it is ``_msb3``.
    """

    def __init__(self, index: int):
        self._index = index

    def __getattr__(self, role: str) -> str:
        if role.startswith("_"):
            raise AttributeError(role)
        return self[role]

    def __getitem__(self, role: str) -> str:
        if self._index == 1:
            return f"_{role}"
        return f"_{role}{self._index}"


class NameAllocator:
    """Monotonic counter scoped to one generation pass."""

    def __init__(self):
        self.counter = 0

    def allocate(self) -> TempNames:
        self.counter += 1
        return TempNames(self.counter)

    def reset(self) -> None:
        self.counter = 0


@dataclass
class EncodeContext:
    """Everything a marshaller may consult while generating code."""

    package: str = ""
    imports: list[ImportEntry] = field(default_factory=list)
    generic_parameters: list[GenericParameter] = field(default_factory=list)
    known_parcelables: AbstractSet[str] = frozenset()
    source_lookup: SourceLookup | None = None
    tokens: TokenList | None = None
    registry: TypeRegistry = field(default_factory=lambda: default_registry)
    names: NameAllocator = field(default_factory=NameAllocator)

    def allocate(self) -> TempNames:
        return self.names.allocate()

    def classify(self, typename: str) -> InterfaceClass:
        result = classify(typename, self.package, self.imports, self.source_lookup, self.known_parcelables)
        logger.debug(f"Classified '{typename}' as {result.value}")
        return result

    def substitute_generics(self, typename: str) -> str:
        """Replace a type parameter name with its upper bound."""
        stripped = typename.strip()
        for parameter in self.generic_parameters:
            if parameter.name == stripped:
                return parameter.upper_bound or "java.lang.Object"
        return typename
