"""
Untyped collections and ``SparseBooleanArray``.
"""

from __future__ import annotations

from .base import Marshaller
from .registry import Named, qualified, register_type

SPARSE_BOOLEAN_ARRAY_READ = """
    {{ name }}.clear();
    final android.util.SparseBooleanArray {{ t.array }} = {{ parcel }}.readSparseBooleanArray();
    if ({{ t.array }} != null) {
        final int {{ t.size }} = {{ t.array }}.size();
        for (int {{ t.i }} = 0; {{ t.i }} < {{ t.size }}; ++{{ t.i }}) {
            final int {{ t.key }} = {{ t.array }}.keyAt({{ t.i }});
            final boolean {{ t.value }} = {{ t.array }}.valueAt({{ t.i }});
            {{ name }}.append({{ t.key }}, {{ t.value }});
        }
    }
"""


@register_type(Named(*qualified("java.util", "List", "ArrayList", "Map", "HashMap")))
class UntypedCollectionMarshaller(Marshaller):
    """Raw ``List`` and ``Map``, written element by element as Parcel values."""

    def __init__(self, argument, repr_type, context):
        super().__init__(argument, repr_type, context)
        if repr_type.simple_name.endswith("List"):
            self.method_names = ("List", "ArrayList")
        else:
            self.method_names = ("Map", "HashMap")

    def create_from_parcel(self, parcel, name):
        return f" = {parcel}.read{self.method_names[1]}(getClass().getClassLoader());"

    def write_to_parcel(self, parcel, name):
        return f"{parcel}.write{self.method_names[0]}({name});"

    def read_from_parcel(self, parcel, name):
        return f"{parcel}.read{self.method_names[0]}({name}, getClass().getClassLoader());"

    def create_buffer(self, parcel, name):
        return f" = new java.util.{self.method_names[1]}();"


@register_type(Named("SparseBooleanArray", "android.util.SparseBooleanArray", "android.os.SparseBooleanArray"))
class SparseBooleanArrayMarshaller(Marshaller):
    def create_from_parcel(self, parcel, name):
        return f" = {parcel}.readSparseBooleanArray();"

    def write_to_parcel(self, parcel, name):
        return f"{parcel}.writeSparseBooleanArray({name});"

    def read_from_parcel(self, parcel, name):
        t = self.context.allocate()
        return self.render(SPARSE_BOOLEAN_ARRAY_READ, parcel, name, t=t)

    def create_buffer(self, parcel, name):
        return " = new android.util.SparseBooleanArray();"
