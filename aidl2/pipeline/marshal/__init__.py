"""
Type-driven marshalling code synthesis.

Importing this package registers every marshaller with the default
registry. The catch-all comes first so that every later, more specific
rule overrides it.
"""

from .base import (
    OPERATIONS,
    PARCEL_NAMES,
    CallSite,
    Marshaller,
    Operation,
    Phase,
    encode,
    get_creator_var,
    get_parcelable_flag,
    resolve_marshaller,
)
from .context import EncodeContext, NameAllocator, TempNames
from .registry import AnyType, ArrayOf, GenericOf, Named, TypePattern, TypeRegistry, TypeRule, default_registry

# Registration order matters
# isort: off
from .objects import GenericMarshaller, ObjectMarshaller, ParcelableMarshaller
from .primitives import BooleanMarshaller, IntLikeMarshaller, PrimitiveMarshaller
from .arrays import GenericArrayMarshaller, PrimitiveArrayMarshaller
from .lists import GenericListMarshaller, PrimitiveListMarshaller
from .uuids import UUIDArrayMarshaller, UUIDListMarshaller, UUIDMarshaller
from .containers import SparseBooleanArrayMarshaller, UntypedCollectionMarshaller
# isort: on

__all__ = [
    "AnyType",
    "ArrayOf",
    "BooleanMarshaller",
    "CallSite",
    "EncodeContext",
    "GenericArrayMarshaller",
    "GenericListMarshaller",
    "GenericMarshaller",
    "GenericOf",
    "IntLikeMarshaller",
    "Marshaller",
    "NameAllocator",
    "Named",
    "OPERATIONS",
    "ObjectMarshaller",
    "Operation",
    "PARCEL_NAMES",
    "ParcelableMarshaller",
    "Phase",
    "PrimitiveArrayMarshaller",
    "PrimitiveListMarshaller",
    "PrimitiveMarshaller",
    "SparseBooleanArrayMarshaller",
    "TempNames",
    "TypePattern",
    "TypeRegistry",
    "TypeRule",
    "UUIDArrayMarshaller",
    "UUIDListMarshaller",
    "UUIDMarshaller",
    "UntypedCollectionMarshaller",
    "default_registry",
    "encode",
    "get_creator_var",
    "get_parcelable_flag",
    "resolve_marshaller",
]
