"""
Front end: tokenizer, parser and AST nodes for .aidl2 files.
"""

from .generic import parse_generic_parameters
from .lexer import Token, TokenList, Tokenizer
from .nodes import Argument, Direction, GenericParameter, ImportEntry, ImportKind, Interface, Method
from .parser import Parser

__all__ = [
    "Argument",
    "Direction",
    "GenericParameter",
    "ImportEntry",
    "ImportKind",
    "Interface",
    "Method",
    "Parser",
    "Token",
    "TokenList",
    "Tokenizer",
    "parse_generic_parameters",
]
