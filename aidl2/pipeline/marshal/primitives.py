"""
Value types with a direct Parcel representation. None of them can be an
``out`` argument since there is nothing to read back into.
"""

from __future__ import annotations

from .base import Marshaller
from .registry import Named, qualified, register_type

PRIMITIVE_NAMES = (
    "byte",
    "double",
    "float",
    "int",
    "long",
    *qualified("java.io", "Serializable"),
    *qualified("java.lang", "String"),
    *qualified("android.os", "IBinder"),
)


@register_type(Named(*PRIMITIVE_NAMES))
class PrimitiveMarshaller(Marshaller):
    """``int`` -> ``readInt()``/``writeInt()``, ``IBinder`` -> ``StrongBinder``."""

    def __init__(self, argument, repr_type, context):
        super().__init__(argument, repr_type, context)
        if repr_type.simple_name == "IBinder":
            self.method_name = "StrongBinder"
        else:
            self.method_name = repr_type.simple_name.capitalize()

    def create_from_parcel(self, parcel, name):
        return f" = {parcel}.read{self.method_name}();"

    def write_to_parcel(self, parcel, name):
        return f"{parcel}.write{self.method_name}({name});"


@register_type(Named("char", "short"))
class IntLikeMarshaller(Marshaller):
    """Types written as an ``int`` and cast back when read."""

    def create_from_parcel(self, parcel, name):
        return f" = ({self.declared_type}) {parcel}.readInt();"

    def write_to_parcel(self, parcel, name):
        return f"{parcel}.writeInt({name});"


@register_type(Named("boolean"))
class BooleanMarshaller(Marshaller):
    def create_from_parcel(self, parcel, name):
        return f" = ({parcel}.readInt() != 0);"

    def write_to_parcel(self, parcel, name):
        return f"{parcel}.writeInt({name} ? 1 : 0);"
