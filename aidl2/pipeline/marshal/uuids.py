"""
``java.util.UUID`` and collections of it.

A single UUID is written as a presence flag and its two halves. Arrays and
lists are written as one flat ``long[]``; null elements are replaced by a
shared random sentinel that equals no element of the collection, and the
sentinel (if any) follows the array so the reader can map it back to null.
"""

from __future__ import annotations

from .arrays import GenericArrayMarshaller
from .base import Marshaller
from .context import TempNames
from .lists import LIST_NAMES, ArrayListBufferMixin
from .registry import ArrayOf, GenericOf, Named, qualified, register_type

UUID_NAMES = qualified("java.util", "UUID")

UUID_CREATE = """
    ;
    if ({{ parcel }}.readInt() != 0) {
        final long {{ t.msb }} = {{ parcel }}.readLong();
        final long {{ t.lsb }} = {{ parcel }}.readLong();
        {{ name }} = new java.util.UUID({{ t.msb }}, {{ t.lsb }});
    } else {
        {{ name }} = null;
    }
"""

UUID_WRITE = """
    if ({{ name }} != null) {
        {{ parcel }}.writeInt(1);
        {{ parcel }}.writeLong({{ name }}.getMostSignificantBits());
        {{ parcel }}.writeLong({{ name }}.getLeastSignificantBits());
    } else {
        {{ parcel }}.writeInt(0);
    }
"""

UUID_LIST_READ = """
    final long[] {{ t.bits }} = {{ parcel }}.createLongArray();
    if ({{ t.bits }} != null) {
        final boolean {{ t.hasNull }} = ({{ parcel }}.readInt() != 0);
        long {{ t.nullMsb }} = 0;
        long {{ t.nullLsb }} = 0;
        if ({{ t.hasNull }}) {
            {{ t.nullMsb }} = {{ parcel }}.readLong();
            {{ t.nullLsb }} = {{ parcel }}.readLong();
        }
        final int {{ t.length }} = {{ t.bits }}.length / 2;
    {% if initializer %}
        {{ initializer | indent(4) }}
    {% endif %}
        for (int {{ t.i }} = 0, {{ t.j }} = 0; {{ t.i }} < {{ t.length }}; ++{{ t.i }}) {
            final long {{ t.msb }} = {{ t.bits }}[{{ t.j }}++];
            final long {{ t.lsb }} = {{ t.bits }}[{{ t.j }}++];
            final java.util.UUID {{ t.uuid }};
            if ({{ t.hasNull }} && {{ t.msb }} == {{ t.nullMsb }} && {{ t.lsb }} == {{ t.nullLsb }}) {
                {{ t.uuid }} = null;
            } else {
                {{ t.uuid }} = new java.util.UUID({{ t.msb }}, {{ t.lsb }});
            }
            {{ setter | indent(8) }}
        }
    }{% if else_null %} else {
        {{ name }} = null;
    }{% endif %}
"""

UUID_LIST_WRITE = """
    if ({{ name }} != null) {
        final long[] {{ t.bits }} = new long[{{ name }}.{{ length_member }} * 2];
        java.util.UUID {{ t.nullUuid }} = null;
        int {{ t.i }} = 0;
        for (java.util.UUID {{ t.uuid }} : {{ name }}) {
            if ({{ t.uuid }} == null) {
                if ({{ t.nullUuid }} == null) {
                    do {
                        {{ t.nullUuid }} = java.util.UUID.randomUUID();
                    } while ({{ as_list }}.contains({{ t.nullUuid }}));
                }
                {{ t.uuid }} = {{ t.nullUuid }};
            }
            {{ t.bits }}[{{ t.i }}++] = {{ t.uuid }}.getMostSignificantBits();
            {{ t.bits }}[{{ t.i }}++] = {{ t.uuid }}.getLeastSignificantBits();
        }
        {{ parcel }}.writeLongArray({{ t.bits }});
        if ({{ t.nullUuid }} != null) {
            {{ parcel }}.writeInt(1);
            {{ parcel }}.writeLong({{ t.nullUuid }}.getMostSignificantBits());
            {{ parcel }}.writeLong({{ t.nullUuid }}.getLeastSignificantBits());
        } else {
            {{ parcel }}.writeInt(0);
        }
    } else {
        {{ parcel }}.writeLongArray(null);
    }
"""


@register_type(Named(*UUID_NAMES))
class UUIDMarshaller(Marshaller):
    def create_from_parcel(self, parcel, name):
        t = self.context.allocate()
        return self.render(UUID_CREATE, parcel, name, t=t)

    def write_to_parcel(self, parcel, name):
        return self.render(UUID_WRITE, parcel, name)


class UUIDCollectionMixin:
    """Shared reader and writer of the flat sentinel encoding."""

    def read_uuids(self, parcel: str, name: str, t: TempNames, initializer: str, setter: str, else_null: bool) -> str:
        """
        Args:
            parcel: The parcel variable
            name: The collection variable
            t: Temporaries of this snippet
            initializer: Statements run once the length is known (may be empty)
            setter: Statements storing ``t.uuid`` at index ``t.i``
            else_null: Assign null to ``name`` when a null collection was sent
        """
        return self.render(
            UUID_LIST_READ, parcel, name, t=t, initializer=initializer, setter=setter, else_null=else_null
        )

    def write_uuids(self, parcel: str, name: str, length_member: str, as_list: str) -> str:
        t = self.context.allocate()
        return self.render(UUID_LIST_WRITE, parcel, name, t=t, length_member=length_member, as_list=as_list)


@register_type(ArrayOf(Named(*UUID_NAMES)))
class UUIDArrayMarshaller(UUIDCollectionMixin, GenericArrayMarshaller):
    def create_from_parcel(self, parcel, name):
        t = self.context.allocate()
        initializer = f"{name} = new java.util.UUID[{t.length}];"
        setter = f"{name}[{t.i}] = {t.uuid};"
        return ";\n" + self.read_uuids(parcel, name, t, initializer, setter, else_null=True)

    def write_to_parcel(self, parcel, name):
        return self.write_uuids(parcel, name, "length", f"java.util.Arrays.asList({name})")

    def read_from_parcel(self, parcel, name):
        t = self.context.allocate()
        setter = f"if ({t.i} < {name}.length) {{\n    {name}[{t.i}] = {t.uuid};\n}}"
        return self.read_uuids(parcel, name, t, "", setter, else_null=False)


@register_type(GenericOf(LIST_NAMES, Named(*UUID_NAMES)))
class UUIDListMarshaller(UUIDCollectionMixin, ArrayListBufferMixin, Marshaller):
    def create_from_parcel(self, parcel, name):
        t = self.context.allocate()
        initializer = f"{name} = new java.util.ArrayList<java.util.UUID>({t.length});"
        setter = f"{name}.add({t.uuid});"
        return ";\n" + self.read_uuids(parcel, name, t, initializer, setter, else_null=True)

    def write_to_parcel(self, parcel, name):
        return self.write_uuids(parcel, name, "size()", name)

    def read_from_parcel(self, parcel, name):
        t = self.context.allocate()
        initializer = (
            f"final int {t.curSize} = {name}.size();\n"
            f"if ({t.curSize} > {t.length}) {{\n"
            f"    {name}.subList({t.length}, {t.curSize}).clear();\n"
            f"}}"
        )
        setter = (
            f"if ({t.i} < {t.curSize}) {{\n"
            f"    {name}.set({t.i}, {t.uuid});\n"
            f"}} else {{\n"
            f"    {name}.add({t.uuid});\n"
            f"}}"
        )
        return self.read_uuids(parcel, name, t, initializer, setter, else_null=False)
