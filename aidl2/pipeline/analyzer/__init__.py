"""
Type analysis: structured type names and type classification.
"""

from .classifier import InterfaceClass, SourceTree, classify, load_known_parcelables, remove_generics
from .type_names import JAVA_PRIMITIVES, TypeName

__all__ = [
    "InterfaceClass",
    "JAVA_PRIMITIVES",
    "SourceTree",
    "TypeName",
    "classify",
    "load_known_parcelables",
    "remove_generics",
]
