"""
Recursive descent parser turning a TokenList into an Interface.

Grammar::

    file     := 'package' qname ';' import* javadoc? modifier* 'interface' NAME generic? '{' method* '}'
    import   := 'import' [kind] qname ';'
    method   := javadoc? modifier* type NAME '(' [argument (',' argument)*] ')' ';'
    argument := direction? type NAME
    type     := qname generic? ('[' ']')*
"""

from __future__ import annotations

from ..errors import ParseError
from .generic import parse_generic_parameters
from .lexer import TokenList
from .nodes import Argument, Direction, ImportEntry, ImportKind, Interface, Method

RESULT_NAME = "_result"


class Parser:
    """Parses one token list. Use ``Parser.parse(tokens)``."""

    def __init__(self, tokens: TokenList):
        self.tokens = tokens
        self.types = tokens.types
        self.pos = 0

    @classmethod
    def parse(cls, tokens: TokenList) -> Interface | None:
        """
        Parse a whole file.

        Returns:
            The interface, or None when the file holds no tokens

        Raises:
            ParseError: On any syntax or semantic error
        """
        if not tokens.tokens:
            return None
        return cls(tokens).parse_file()

    # Token helpers

    def peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        return self.types[index] if index < len(self.types) else ""

    def value(self, offset: int = 0) -> str:
        return self.tokens.tokens[self.pos + offset].value

    def expect(self, kind: str, what: str) -> str:
        if self.peek() != kind:
            found = f"'{self.value()}'" if self.pos < len(self.types) else "end of file"
            raise self.error(f"Expected {what}, found {found}")
        value = self.value()
        self.pos += 1
        return value

    def accept(self, kind: str) -> str | None:
        if self.peek() == kind:
            value = self.value()
            self.pos += 1
            return value
        return None

    def error(self, message: str, position: int | None = None) -> ParseError:
        return ParseError.at(message, self.tokens, self.pos if position is None else position)

    # Grammar

    def parse_file(self) -> Interface:
        interface = Interface(tokens=self.tokens)

        self.expect("p", "'package'")
        interface.package = self.parse_qname()
        self.expect(";", "';'")

        while self.peek() == "o":
            interface.imports.append(self.parse_import(interface.package))

        interface.javadoc = self.accept("j")
        interface.modifiers = self.parse_modifiers()
        self.expect("i", "'interface'")
        interface.name = self.expect("n", "interface name")

        generic = self.accept("g")
        if generic is not None:
            interface.generic = generic
            interface.generic_parameters = parse_generic_parameters(generic, self.tokens.filename)

        self.expect("{", "'{'")
        while self.peek() not in ("}", ""):
            interface.methods.append(self.parse_method(interface.modifiers))
        self.expect("}", "'}'")

        if self.pos < len(self.types):
            raise self.error("Unexpected token after interface body")
        return interface

    def parse_qname(self) -> str:
        parts = [self.expect("n", "identifier")]
        while self.peek() == "." and self.peek(1) == "n":
            self.pos += 1
            parts.append(self.expect("n", "identifier"))
        return ".".join(parts)

    def parse_import(self, package: str) -> ImportEntry:
        self.expect("o", "'import'")
        kind = ImportKind.IMPORT
        if self.peek() in ("i", "k"):
            kind = ImportKind.from_value(self.value())
            self.pos += 1

        name = self.parse_qname()
        self.expect(";", "';'")
        if "." not in name and package:
            name = f"{package}.{name}"
        return ImportEntry(kind, name)

    def parse_modifiers(self) -> list[str]:
        modifiers = []
        while self.peek() == "m":
            modifier = self.value()
            if modifier not in modifiers:
                modifiers.append(modifier)
            self.pos += 1
        return modifiers

    def parse_type(self) -> str:
        result = self.parse_qname()
        generic = self.accept("g")
        if generic is not None:
            result += generic
        while self.peek() == "[":
            self.pos += 1
            self.expect("]", "']'")
            result += "[]"
        return result

    def parse_method(self, inherited_modifiers: list[str]) -> Method:
        method = Method()
        method.javadoc = self.accept("j")
        modifiers = list(inherited_modifiers)
        for modifier in self.parse_modifiers():
            if modifier not in modifiers:
                modifiers.append(modifier)
        method.modifiers = modifiers

        type_position = self.pos
        method.return_type = self.parse_type()
        method.position = self.pos
        method.name = self.expect("n", "method name")

        self.expect("(", "'('")
        if self.peek() != ")":
            method.arguments.append(self.parse_argument())
            while self.accept(","):
                method.arguments.append(self.parse_argument())
        self.expect(")", "')'")
        self.expect(";", "';'")

        if not method.is_void:
            method.result = Argument(Direction.RETURN, method.return_type, RESULT_NAME, type_position)

        self.check_method(method)
        return method

    def parse_argument(self) -> Argument:
        direction = Direction.IN
        word = self.accept("d")
        if word is not None:
            direction = Direction.from_value(word)

        position = self.pos
        arg_type = self.parse_type()
        name = self.expect("n", "argument name")
        return Argument(direction, arg_type, name, position)

    def check_method(self, method: Method) -> None:
        seen = set()
        for argument in method.arguments:
            if argument.name in seen:
                raise self.error(f"Duplicate argument '{argument.name}' in method '{method.name}'", argument.position)
            seen.add(argument.name)

        if method.is_oneway:
            if not method.is_void:
                raise self.error(f"Oneway method '{method.name}' cannot return a value", method.position)
            for argument in method.arguments:
                if argument.direction is not Direction.IN:
                    raise self.error(
                        f"Oneway method '{method.name}' cannot have '{argument.direction.value}' arguments",
                        argument.position,
                    )
