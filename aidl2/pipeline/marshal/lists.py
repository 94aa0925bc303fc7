"""
Typed lists, ``List<T>`` and ``ArrayList<T>``.
"""

from __future__ import annotations

from ..analyzer.classifier import InterfaceClass
from .base import Marshaller, get_creator_var
from .registry import GenericOf, Named, qualified, register_type

LIST_NAMES = qualified("java.util", "List", "ArrayList")

INTERFACE_LIST_CREATE = """
    ;
    final java.util.ArrayList<android.os.IBinder> {{ t.binders }} = {{ parcel }}.createBinderArrayList();
    if ({{ t.binders }} != null) {
        final int {{ t.size }} = {{ t.binders }}.size();
        {{ name }} = new java.util.ArrayList<{{ content }}>({{ t.size }});
        for (final android.os.IBinder {{ t.binder }} : {{ t.binders }}) {
            {{ name }}.add({{ raw_content }}.Stub.asInterface({{ t.binder }}));
        }
    } else {
        {{ name }} = null;
    }
"""

INTERFACE_LIST_WRITE = """
    if ({{ name }} != null) {
        final int {{ t.size }} = {{ name }}.size();
        final java.util.ArrayList<android.os.IBinder> {{ t.binders }} = new java.util.ArrayList<android.os.IBinder>({{ t.size }});
        for (final android.os.IInterface {{ t.interface }} : {{ name }}) {
            {{ t.binders }}.add({{ t.interface }} != null ? {{ t.interface }}.asBinder() : null);
        }
        {{ parcel }}.writeBinderList({{ t.binders }});
    } else {
        {{ parcel }}.writeBinderList(null);
    }
"""

INTERFACE_LIST_READ = """
    final java.util.ArrayList<android.os.IBinder> {{ t.binders }} = {{ parcel }}.createBinderArrayList();
    if ({{ t.binders }} != null) {
        {{ name }}.clear();
        for (final android.os.IBinder {{ t.binder }} : {{ t.binders }}) {
            {{ name }}.add({{ raw_content }}.Stub.asInterface({{ t.binder }}));
        }
    }
"""

SERIALIZABLE_LIST_CREATE = """
    ;
    final int {{ t.size }} = {{ parcel }}.readInt();
    if ({{ t.size }} >= 0) {
        {{ name }} = new java.util.ArrayList<{{ content }}>({{ t.size }});
        for (int {{ t.i }} = 0; {{ t.i }} < {{ t.size }}; ++{{ t.i }}) {
            {{ name }}.add(({{ content }}) {{ parcel }}.readSerializable());
        }
    } else {
        {{ name }} = null;
    }
"""

SERIALIZABLE_LIST_WRITE = """
    if ({{ name }} != null) {
        {{ parcel }}.writeInt({{ name }}.size());
        for (final java.io.Serializable {{ t.item }} : {{ name }}) {
            {{ parcel }}.writeSerializable({{ t.item }});
        }
    } else {
        {{ parcel }}.writeInt(-1);
    }
"""

SERIALIZABLE_LIST_READ = """
    final int {{ t.size }} = {{ parcel }}.readInt();
    if ({{ t.size }} >= 0) {
        {{ name }}.clear();
        for (int {{ t.i }} = 0; {{ t.i }} < {{ t.size }}; ++{{ t.i }}) {
            {{ name }}.add(({{ content }}) {{ parcel }}.readSerializable());
        }
    }
"""


class ArrayListBufferMixin:
    """Out lists are allocated as an empty ``java.util.ArrayList``."""

    def create_buffer(self, parcel, name):
        return f" = new java.util.ArrayList<{self.repr_type.content}>();"


@register_type(GenericOf(LIST_NAMES))
class GenericListMarshaller(ArrayListBufferMixin, Marshaller):
    """``List<T>`` where T is a Parcelable, a remote interface or a Serializable."""

    def __init__(self, argument, repr_type, context):
        super().__init__(argument, repr_type, context)
        self.content = repr_type.content
        self.raw_content = self.content.base
        self.interface_class = context.classify(self.raw_content)
        self.creator = get_creator_var(self.raw_content)

    def render_list(self, template, parcel, name):
        t = self.context.allocate()
        return self.render(template, parcel, name, t=t, content=self.content, raw_content=self.raw_content)

    def create_from_parcel(self, parcel, name):
        if self.interface_class is InterfaceClass.PARCELABLE:
            return f" = {parcel}.createTypedArrayList({self.creator});"
        elif self.interface_class is InterfaceClass.INTERFACE:
            return self.render_list(INTERFACE_LIST_CREATE, parcel, name)
        else:
            return self.render_list(SERIALIZABLE_LIST_CREATE, parcel, name)

    def write_to_parcel(self, parcel, name):
        if self.interface_class is InterfaceClass.PARCELABLE:
            return f"{parcel}.writeTypedList({name});"
        elif self.interface_class is InterfaceClass.INTERFACE:
            return self.render_list(INTERFACE_LIST_WRITE, parcel, name)
        else:
            return self.render_list(SERIALIZABLE_LIST_WRITE, parcel, name)

    def read_from_parcel(self, parcel, name):
        if self.interface_class is InterfaceClass.PARCELABLE:
            return f"{parcel}.readTypedList({name}, {self.creator});"
        elif self.interface_class is InterfaceClass.INTERFACE:
            return self.render_list(INTERFACE_LIST_READ, parcel, name)
        else:
            return self.render_list(SERIALIZABLE_LIST_READ, parcel, name)


PRIMITIVE_CONTENT_NAMES = (
    *qualified("java.lang", "String"),
    *qualified("android.os", "IBinder"),
)


@register_type(GenericOf(LIST_NAMES, Named(*PRIMITIVE_CONTENT_NAMES)))
class PrimitiveListMarshaller(ArrayListBufferMixin, Marshaller):
    """``List<String>`` and ``List<IBinder>``."""

    def __init__(self, argument, repr_type, context):
        super().__init__(argument, repr_type, context)
        simple_name = repr_type.content.simple_name
        self.method_name = "Binder" if simple_name == "IBinder" else simple_name

    def create_from_parcel(self, parcel, name):
        return f" = {parcel}.create{self.method_name}ArrayList();"

    def write_to_parcel(self, parcel, name):
        return f"{parcel}.write{self.method_name}List({name});"

    def read_from_parcel(self, parcel, name):
        return f"{parcel}.read{self.method_name}List({name});"
