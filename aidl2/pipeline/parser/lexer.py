"""
Tokenizer for .aidl2 interface definitions.

Every token is tagged with a one-character class. The classes of a whole
file are concatenated into ``TokenList.types`` so the parser (and tests)
can reason about the shape of a declaration at a glance, e.g. a package
statement reads ``pn.n.n;``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from ..errors import ParseError

KEYWORDS = {
    "package": "p",
    "import": "o",
    "interface": "i",
    "parcelable": "k",
    "serializable": "k",
    "oneway": "m",
    "mainthread": "m",
    "localthrow": "m",
    "in": "d",
    "out": "d",
    "inout": "d",
}

PUNCTUATION = set(".;{}(),[]")

_IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*")
_WHITESPACE = re.compile(r"\s+")


@dataclass
class Token:
    """A single lexical token."""

    kind: str  # One-character token class
    value: str
    line: int = 1
    column: int = 1


@dataclass
class TokenList:
    """The tokens of one source file."""

    tokens: list[Token] = field(default_factory=list)
    filename: str | None = None
    source: str = ""

    @property
    def types(self) -> str:
        """Token classes concatenated into a single string."""
        return "".join(token.kind for token in self.tokens)

    @property
    def values(self) -> list[str]:
        """Token texts, in order."""
        return [token.value for token in self.tokens]

    def source_line(self, line: int) -> str | None:
        """Return the text of a 1-based source line, if it exists."""
        lines = self.source.splitlines()
        if 1 <= line <= len(lines):
            return lines[line - 1]
        return None

    def __len__(self) -> int:
        return len(self.tokens)

    def __getitem__(self, index: int) -> Token:
        return self.tokens[index]


class Tokenizer:
    """Splits source text into a TokenList."""

    def __init__(self, text: str, filename: str | None = None):
        self.text = text
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.line_start = 0
        self.result = TokenList(filename=filename, source=text)

    @classmethod
    def tokenize(cls, text: str, filename: str | None = None) -> TokenList:
        """Tokenize ``text``; ``filename`` is only used in error messages."""
        tokenizer = cls(text, str(filename) if filename is not None else None)
        tokenizer.run()
        return tokenizer.result

    def run(self) -> None:
        text = self.text
        while self.pos < len(text):
            char = text[self.pos]

            if char.isspace():
                self._advance(_WHITESPACE.match(text, self.pos).end())
            elif text.startswith("//", self.pos):
                end = text.find("\n", self.pos)
                self._advance(len(text) if end < 0 else end)
            elif text.startswith("/**", self.pos) and not text.startswith("/**/", self.pos):
                self._comment(javadoc=True)
            elif text.startswith("/*", self.pos):
                self._comment(javadoc=False)
            elif char == "<":
                self._generic()
            elif char in PUNCTUATION:
                self._emit(char, char, self.pos + 1)
            else:
                match = _IDENTIFIER.match(text, self.pos)
                if match is None:
                    self._raise(f"Unexpected character '{char}'")
                word = match.group()
                self._emit(KEYWORDS.get(word, "n"), word, match.end())

    def _comment(self, javadoc: bool) -> None:
        end = self.text.find("*/", self.pos + 2)
        if end < 0:
            what = "Javadoc" if javadoc else "comment"
            self._raise(f"Unterminated {what}")
        end += 2
        if javadoc:
            self._emit("j", self.text[self.pos:end], end)
        else:
            self._advance(end)

    def _generic(self) -> None:
        depth = 0
        for end in range(self.pos, len(self.text)):
            char = self.text[end]
            if char == "<":
                depth += 1
            elif char == ">":
                depth -= 1
                if depth == 0:
                    self._emit("g", self.text[self.pos:end + 1], end + 1)
                    return
        self._raise("Unbalanced generic type")

    def _emit(self, kind: str, value: str, end: int) -> None:
        column = self.pos - self.line_start + 1
        self.result.tokens.append(Token(kind, value, self.line, column))
        self._advance(end)

    def _advance(self, end: int) -> None:
        newlines = self.text.count("\n", self.pos, end)
        if newlines:
            self.line += newlines
            self.line_start = self.text.rfind("\n", self.pos, end) + 1
        self.pos = end

    def _raise(self, message: str):
        column = self.pos - self.line_start + 1
        raise ParseError(
            message,
            self.filename,
            self.line,
            column,
            self.result.source_line(self.line),
        )
