"""
Object-like types: the catch-all for user types, plus the framework's
``Parcelable`` and ``Object`` which are written as dynamically typed values.
"""

from __future__ import annotations

from ..analyzer.classifier import InterfaceClass, remove_generics
from .base import Marshaller, get_creator_var, get_parcelable_flag
from .registry import AnyType, Named, qualified, register_type

PARCELABLE_CREATE = """
    ;
    if ({{ parcel }}.readInt() != 0) {
        {{ name }} = {{ cast }}{{ creator }}.createFromParcel({{ parcel }});
    } else {
        {{ name }} = null;
    }
"""

PARCELABLE_WRITE = """
    if ({{ name }} != null) {
        {{ parcel }}.writeInt(1);
        {{ name }}.writeToParcel({{ parcel }}, {{ flag }});
    } else {
        {{ parcel }}.writeInt(0);
    }
"""

PARCELABLE_READ = """
    if ({{ parcel }}.readInt() != 0) {
        {{ name }}.readFromParcel({{ parcel }});
    }
"""


@register_type(AnyType())
class GenericMarshaller(Marshaller):
    """
    Any type no other rule claims. Behaviour depends on the classification of
    the type: Parcelable, remote interface or Serializable.
    """

    def __init__(self, argument, repr_type, context):
        super().__init__(argument, repr_type, context)
        self.raw_type = remove_generics(str(repr_type))
        self.interface_class = context.classify(self.raw_type)
        self.creator = get_creator_var(self.raw_type)

    def create_from_parcel(self, parcel, name):
        if self.interface_class is InterfaceClass.PARCELABLE:
            return self.render(PARCELABLE_CREATE, parcel, name, cast=self.cast, creator=self.creator)
        elif self.interface_class is InterfaceClass.INTERFACE:
            return f" = {self.cast}{self.raw_type}.Stub.asInterface({parcel}.readStrongBinder());"
        else:
            return f" = ({self.declared_type}) {parcel}.readSerializable();"

    def write_to_parcel(self, parcel, name):
        if self.interface_class is InterfaceClass.PARCELABLE:
            return self.render(PARCELABLE_WRITE, parcel, name, flag=get_parcelable_flag(parcel))
        elif self.interface_class is InterfaceClass.INTERFACE:
            return f"{parcel}.writeStrongInterface({name});"
        else:
            return f"{parcel}.writeSerializable({name});"

    def read_from_parcel(self, parcel, name):
        if self.interface_class is not InterfaceClass.PARCELABLE:
            self.unsupported()
        return self.render(PARCELABLE_READ, parcel, name)

    def create_buffer(self, parcel, name):
        if self.interface_class is InterfaceClass.INTERFACE:
            self.unsupported()
        return f" = {self.cast}new {self.repr_type}();"


@register_type(Named(*qualified("android.os", "Parcelable")))
class ParcelableMarshaller(Marshaller):
    """The abstract ``Parcelable`` type, written together with its class name."""

    def create_from_parcel(self, parcel, name):
        return f" = {parcel}.readParcelable(getClass().getClassLoader());"

    def write_to_parcel(self, parcel, name):
        return f"{parcel}.writeParcelable({name}, {get_parcelable_flag(parcel)});"


@register_type(Named(*qualified("java.lang", "Object")))
class ObjectMarshaller(Marshaller):
    def create_from_parcel(self, parcel, name):
        return f" = ({self.declared_type}) {parcel}.readValue(getClass().getClassLoader());"

    def write_to_parcel(self, parcel, name):
        return f"{parcel}.writeValue({name});"
