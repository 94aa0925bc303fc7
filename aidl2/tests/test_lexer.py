#!/usr/bin/env python3
"""
Tests for the .aidl2 tokenizer.
"""

import pytest

from aidl2.pipeline.errors import ParseError
from aidl2.pipeline.parser import Tokenizer

TEST_INPUT = """package com.example.test;

/* Comment */
import java.util.List; // Line comment

/** Javadoc
// Line comment inside Javadoc
*/
mainthread localthrow interface Bar {
    List<String> transform(in List<? extends CharSequence> input);
    oneway void check(inout List<List<Integer>>[ ] input);
}
"""


class TestTokenizer:
    """Test cases for Tokenizer."""

    def test_basic(self):
        """Test token values and classes of a complete file."""
        tokens = Tokenizer.tokenize(TEST_INPUT)

        assert tokens.values == [
            "package", "com", ".", "example", ".", "test", ";",
            "import", "java", ".", "util", ".", "List", ";",
            "/** Javadoc\n// Line comment inside Javadoc\n*/",
            "mainthread", "localthrow", "interface", "Bar", "{",
            "List", "<String>", "transform",
            "(", "in", "List", "<? extends CharSequence>", "input", ")", ";",
            "oneway", "void", "check",
            "(", "inout", "List", "<List<Integer>>", "[", "]", "input", ")", ";",
            "}",
        ]  # fmt: skip
        assert tokens.types == "pn.n.n;on.n.n;jmmin{ngn(dngn);mnn(dng[]n);}"

    def test_positions(self):
        """Test that tokens carry 1-based line and column numbers."""
        tokens = Tokenizer.tokenize(TEST_INPUT)

        assert (tokens[0].line, tokens[0].column) == (1, 1)
        assert (tokens[1].line, tokens[1].column) == (1, 9)

        interface = tokens[tokens.values.index("interface")]
        assert (interface.line, interface.column) == (9, 23)

        check = tokens[tokens.values.index("check")]
        assert (check.line, check.column) == (11, 17)

    def test_source_line(self):
        """Test access to the raw text of a line."""
        tokens = Tokenizer.tokenize(TEST_INPUT)
        assert tokens.source_line(1) == "package com.example.test;"
        assert tokens.source_line(0) is None
        assert tokens.source_line(100) is None

    def test_keywords(self):
        """Test keyword classes."""
        tokens = Tokenizer.tokenize("import parcelable serializable interface in out inout oneway foo")
        assert tokens.types == "okkidddmn"

    def test_empty_comment_is_not_javadoc(self):
        """Test that /**/ is an ordinary comment."""
        tokens = Tokenizer.tokenize("/**/ foo")
        assert tokens.types == "n"

    def test_unbalanced_generic(self):
        """Test that an unterminated generic block fails."""
        with pytest.raises(ParseError):
            Tokenizer.tokenize("List<<")

    def test_unknown_char(self):
        """Test that a stray closing bracket fails."""
        with pytest.raises(ParseError) as exc_info:
            Tokenizer.tokenize(">", "IFoo.aidl2")
        assert exc_info.value.filename == "IFoo.aidl2"
        assert (exc_info.value.line, exc_info.value.column) == (1, 1)

    def test_run_away_comment(self):
        """Test that an unterminated comment fails."""
        with pytest.raises(ParseError, match="Unterminated comment"):
            Tokenizer.tokenize("eee /* unfinished comment")

    def test_run_away_javadoc(self):
        """Test that an unterminated Javadoc fails."""
        with pytest.raises(ParseError, match="Unterminated Javadoc"):
            Tokenizer.tokenize("/** unfinished javadoc")

    def test_single_line_comment_at_end(self):
        """Test that a file holding only a comment has no tokens."""
        tokens = Tokenizer.tokenize("// test")
        assert tokens.tokens == []
        assert tokens.types == ""

    def test_error_rendering(self):
        """Test the compiler-style error message."""
        with pytest.raises(ParseError) as exc_info:
            Tokenizer.tokenize("package a;\nint # b;", "IFoo.aidl2")
        assert str(exc_info.value) == "IFoo.aidl2:2:5: error: Unexpected character '#'\nint # b;\n    ^"


if __name__ == "__main__":
    pytest.main([__file__])
