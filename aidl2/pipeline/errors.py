"""
Exception hierarchy for aidl2.

Every failure that can be tied to a place in an ``.aidl2`` file is a
ParseError carrying the file name, line, column and the offending source
line, so the driver can report it the way a compiler would.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .parser.lexer import TokenList


class Aidl2Error(Exception):
    """Base class for all aidl2 errors."""


class ParseError(Aidl2Error):
    """An error located in an interface definition file."""

    def __init__(
        self,
        message: str,
        filename: str | None = None,
        line: int | None = None,
        column: int | None = None,
        source_line: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.filename = filename
        self.line = line
        self.column = column
        self.source_line = source_line

    @classmethod
    def at(cls, message: str, tokens: TokenList | None, position: int | None) -> ParseError:
        """
        Build an error pointing at a token.

        Args:
            message: Human readable description
            tokens: The token list of the file being processed
            position: Index of the offending token; clamped to the last token

        Returns:
            An instance of ``cls`` (subclasses keep their own type)
        """
        if tokens is None:
            return cls(message)

        filename = tokens.filename
        if position is None or not tokens.tokens:
            return cls(message, filename)

        token = tokens.tokens[min(position, len(tokens.tokens) - 1)]
        return cls(
            message,
            filename,
            token.line,
            token.column,
            tokens.source_line(token.line),
        )

    def __str__(self) -> str:
        location = self.filename or "<input>"
        if self.line is not None:
            location += f":{self.line}"
            if self.column is not None:
                location += f":{self.column}"

        lines = [f"{location}: error: {self.message}"]
        if self.source_line is not None:
            lines.append(self.source_line)
            if self.column is not None:
                lines.append(" " * (self.column - 1) + "^")
        return "\n".join(lines)


class UnsupportedMarshallingError(ParseError):
    """A type cannot be marshalled in the requested direction."""


class StructuralMismatchError(ParseError):
    """The package or interface name disagrees with the file location."""


class OutputValidationError(Aidl2Error):
    """Generated Java code failed the structural checks before writing."""
