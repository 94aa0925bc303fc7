"""
Arrays. Arrays of primitives use the dedicated Parcel methods. Any other
element type is classified like a list element: Parcelables are written as
a typed array, remote interfaces as an array of binders and Serializables
one by one after the length.
"""

from __future__ import annotations

from functools import cached_property

from ..analyzer.classifier import InterfaceClass, remove_generics
from .base import Marshaller, get_creator_var, get_parcelable_flag
from .registry import AnyType, ArrayOf, Named, qualified, register_type

ARRAY_BUFFER_CREATE = """
    ;
    final int {{ t.length }} = {{ parcel }}.readInt();
    if ({{ t.length }} >= 0) {
        {{ name }} = new {{ element }}[{{ t.length }}];
    } else {
        {{ name }} = null;
    }
"""

INTERFACE_ARRAY_CREATE = """
    ;
    final android.os.IBinder[] {{ t.binders }} = {{ parcel }}.createBinderArray();
    if ({{ t.binders }} != null) {
        {{ name }} = new {{ element }}[{{ t.binders }}.length];
        for (int {{ t.i }} = 0; {{ t.i }} < {{ t.binders }}.length; ++{{ t.i }}) {
            {{ name }}[{{ t.i }}] = {{ raw_element }}.Stub.asInterface({{ t.binders }}[{{ t.i }}]);
        }
    } else {
        {{ name }} = null;
    }
"""

INTERFACE_ARRAY_WRITE = """
    if ({{ name }} != null) {
        final android.os.IBinder[] {{ t.binders }} = new android.os.IBinder[{{ name }}.length];
        for (int {{ t.i }} = 0; {{ t.i }} < {{ name }}.length; ++{{ t.i }}) {
            {{ t.binders }}[{{ t.i }}] = ({{ name }}[{{ t.i }}] != null) ? {{ name }}[{{ t.i }}].asBinder() : null;
        }
        {{ parcel }}.writeBinderArray({{ t.binders }});
    } else {
        {{ parcel }}.writeBinderArray(null);
    }
"""

INTERFACE_ARRAY_READ = """
    final android.os.IBinder[] {{ t.binders }} = {{ parcel }}.createBinderArray();
    if ({{ t.binders }} != null) {
        for (int {{ t.i }} = 0; {{ t.i }} < {{ t.binders }}.length && {{ t.i }} < {{ name }}.length; ++{{ t.i }}) {
            {{ name }}[{{ t.i }}] = {{ raw_element }}.Stub.asInterface({{ t.binders }}[{{ t.i }}]);
        }
    }
"""

SERIALIZABLE_ARRAY_CREATE = """
    ;
    final int {{ t.size }} = {{ parcel }}.readInt();
    if ({{ t.size }} >= 0) {
        {{ name }} = new {{ element }}[{{ t.size }}];
        for (int {{ t.i }} = 0; {{ t.i }} < {{ t.size }}; ++{{ t.i }}) {
            {{ name }}[{{ t.i }}] = ({{ element }}) {{ parcel }}.readSerializable();
        }
    } else {
        {{ name }} = null;
    }
"""

SERIALIZABLE_ARRAY_WRITE = """
    if ({{ name }} != null) {
        {{ parcel }}.writeInt({{ name }}.length);
        for (final java.io.Serializable {{ t.item }} : {{ name }}) {
            {{ parcel }}.writeSerializable({{ t.item }});
        }
    } else {
        {{ parcel }}.writeInt(-1);
    }
"""

SERIALIZABLE_ARRAY_READ = """
    final int {{ t.size }} = {{ parcel }}.readInt();
    for (int {{ t.i }} = 0; {{ t.i }} < {{ t.size }}; ++{{ t.i }}) {
        final {{ element }} {{ t.item }} = ({{ element }}) {{ parcel }}.readSerializable();
        if ({{ t.i }} < {{ name }}.length) {
            {{ name }}[{{ t.i }}] = {{ t.item }};
        }
    }
"""


@register_type(ArrayOf(AnyType()))
class GenericArrayMarshaller(Marshaller):
    """
    ``T[]`` where T is a Parcelable, a remote interface or a Serializable.

    An out array is sized by the caller: the proxy sends the length, the
    dispatcher allocates an array of that length. Reading back into an
    existing array never changes its length.
    """

    def __init__(self, argument, repr_type, context):
        super().__init__(argument, repr_type, context)
        self.element = repr_type.element
        self.raw_element = remove_generics(str(self.element))
        self.creator = get_creator_var(self.raw_element)

    @cached_property
    def element_class(self) -> InterfaceClass:
        return self.context.classify(self.raw_element)

    def check_element(self) -> None:
        if self.element.is_array or self.element.is_primitive:
            self.unsupported()

    def render_array(self, template, parcel, name):
        t = self.context.allocate()
        return self.render(template, parcel, name, t=t, element=self.element, raw_element=self.raw_element)

    def create_from_parcel(self, parcel, name):
        self.check_element()
        if self.element_class is InterfaceClass.PARCELABLE:
            return f" = {parcel}.createTypedArray({self.creator});"
        elif self.element_class is InterfaceClass.INTERFACE:
            return self.render_array(INTERFACE_ARRAY_CREATE, parcel, name)
        else:
            return self.render_array(SERIALIZABLE_ARRAY_CREATE, parcel, name)

    def write_to_parcel(self, parcel, name):
        self.check_element()
        if self.element_class is InterfaceClass.PARCELABLE:
            return f"{parcel}.writeTypedArray({name}, {get_parcelable_flag(parcel)});"
        elif self.element_class is InterfaceClass.INTERFACE:
            return self.render_array(INTERFACE_ARRAY_WRITE, parcel, name)
        else:
            return self.render_array(SERIALIZABLE_ARRAY_WRITE, parcel, name)

    def read_from_parcel(self, parcel, name):
        self.check_element()
        if self.element_class is InterfaceClass.PARCELABLE:
            return f"{parcel}.readTypedArray({name}, {self.creator});"
        elif self.element_class is InterfaceClass.INTERFACE:
            return self.render_array(INTERFACE_ARRAY_READ, parcel, name)
        else:
            return self.render_array(SERIALIZABLE_ARRAY_READ, parcel, name)

    def write_buffer_info(self, parcel, name):
        self.check_element()
        return f"{parcel}.writeInt(({name} != null) ? {name}.length : -1);"

    def create_buffer(self, parcel, name):
        self.check_element()
        return self.render_array(ARRAY_BUFFER_CREATE, parcel, name)


PRIMITIVE_ELEMENT_NAMES = (
    "boolean",
    "byte",
    "char",
    "double",
    "float",
    "int",
    "long",
    *qualified("java.lang", "String"),
    *qualified("android.os", "IBinder"),
)


@register_type(ArrayOf(Named(*PRIMITIVE_ELEMENT_NAMES)))
class PrimitiveArrayMarshaller(GenericArrayMarshaller):
    """``int[]`` -> ``createIntArray()``, ``IBinder[]`` -> ``createBinderArray()``."""

    def __init__(self, argument, repr_type, context):
        super().__init__(argument, repr_type, context)
        if self.element.simple_name == "IBinder":
            self.method_name = "Binder"
        else:
            self.method_name = self.element.simple_name.capitalize()

    def check_element(self) -> None:
        pass

    def create_from_parcel(self, parcel, name):
        return f" = {parcel}.create{self.method_name}Array();"

    def write_to_parcel(self, parcel, name):
        return f"{parcel}.write{self.method_name}Array({name});"

    def read_from_parcel(self, parcel, name):
        return f"{parcel}.read{self.method_name}Array({name});"
