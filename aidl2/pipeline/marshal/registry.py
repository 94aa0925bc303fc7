"""
Type registry: maps a parsed type name to the marshaller that handles it.

Rules are kept in registration order and scanned in reverse, so a rule
registered later overrides an earlier one. The catch-all rule is registered
first and therefore only applies when nothing more specific matches.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..analyzer.type_names import TypeName


def qualified(package: str, *names: str) -> tuple[str, ...]:
    """Accept each name both bare and qualified with ``package``."""
    result = []
    for name in names:
        result.append(name)
        result.append(f"{package}.{name}")
    return tuple(result)


class TypePattern(ABC):
    """A predicate over TypeName."""

    @abstractmethod
    def matches(self, type_name: TypeName) -> bool:
        pass


class AnyType(TypePattern):
    """Matches every type."""

    def matches(self, type_name: TypeName) -> bool:
        return True

    def __repr__(self) -> str:
        return "AnyType()"


class Named(TypePattern):
    """A plain, non-generic, non-array type with one of the given names."""

    def __init__(self, *names: str):
        self.names = frozenset(names)

    def matches(self, type_name: TypeName) -> bool:
        return (
            not type_name.is_array
            and not type_name.type_arguments
            and type_name.wildcard is None
            and type_name.base in self.names
        )

    def __repr__(self) -> str:
        return f"Named({', '.join(sorted(self.names))})"


class ArrayOf(TypePattern):
    """An array whose element type matches ``element``."""

    def __init__(self, element: TypePattern):
        self.element = element

    def matches(self, type_name: TypeName) -> bool:
        return type_name.is_array and self.element.matches(type_name.element)

    def __repr__(self) -> str:
        return f"ArrayOf({self.element!r})"


class GenericOf(TypePattern):
    """
    A generic type with a single type argument, e.g. ``List<Foo>``.

    Args:
        names: Accepted raw type names
        content: Pattern the type argument must match (wildcards removed);
            None accepts any argument
    """

    def __init__(self, names: tuple[str, ...], content: TypePattern | None = None):
        self.names = frozenset(names)
        self.content = content

    def matches(self, type_name: TypeName) -> bool:
        if type_name.is_array or type_name.base not in self.names:
            return False
        content = type_name.content
        if content is None:
            return False
        return self.content is None or self.content.matches(content)

    def __repr__(self) -> str:
        return f"GenericOf({', '.join(sorted(self.names))}, {self.content!r})"


# (argument, representation type, context) -> marshaller
MarshallerFactory = Callable[..., Any]


@dataclass
class TypeRule:
    """One registry entry."""

    pattern: TypePattern
    factory: MarshallerFactory


class TypeRegistry:
    """An append-ordered list of TypeRules."""

    def __init__(self, rules: list[TypeRule] | None = None):
        self.rules: list[TypeRule] = list(rules or [])

    def add(self, pattern: TypePattern, factory: MarshallerFactory) -> None:
        self.rules.append(TypeRule(pattern, factory))

    def register(self, pattern: TypePattern):
        """
        Class decorator registering a marshaller for ``pattern``.

        Example:
            @registry.register(Named("int"))
            class IntMarshaller(Marshaller):
                ...
        """

        def decorator(cls):
            self.add(pattern, cls)
            return cls

        return decorator

    def resolve(self, type_name: TypeName) -> MarshallerFactory:
        """
        Find the factory for a type, latest registration first.

        Raises:
            LookupError: If no rule matches, i.e. the catch-all is missing
        """
        for rule in reversed(self.rules):
            if rule.pattern.matches(type_name):
                return rule.factory
        raise LookupError(f"No marshaller registered for '{type_name}'")

    def copy(self) -> TypeRegistry:
        return TypeRegistry(self.rules)


default_registry = TypeRegistry()
register_type = default_registry.register
