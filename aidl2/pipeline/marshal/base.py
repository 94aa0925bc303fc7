"""
The marshalling protocol shared by every type category.

The Java writer asks for one code fragment per argument, call site and
phase. A fixed table maps (call site, direction, phase) to one of five
operations; every Marshaller subclass implements the operations its type
category supports and raises UnsupportedMarshallingError for the rest.

Fragments produced by ``create_from_parcel`` and ``create_buffer`` are
appended to a declaration ``final Type name`` and therefore start either
with `` = `` (an initializer) or with ``;`` followed by statements that
assign ``name`` on every path.
"""

from __future__ import annotations

import textwrap
from enum import Enum
from functools import lru_cache
from typing import TYPE_CHECKING, NoReturn

from jinja2 import Environment, StrictUndefined, Template

from ...log import get_logger
from ..analyzer.type_names import TypeName
from ..errors import ParseError, UnsupportedMarshallingError
from ..parser.nodes import Argument, Direction

if TYPE_CHECKING:
    from .context import EncodeContext

logger = get_logger(__name__)


class CallSite(Enum):
    PROXY = "proxy"  # Caller side
    DISPATCHER = "dispatcher"  # Callee side, Stub.onTransact


class Phase(Enum):
    PRE = "pre"
    POST = "post"


class Operation(Enum):
    CREATE_FROM_PARCEL = "create_from_parcel"
    WRITE_TO_PARCEL = "write_to_parcel"
    READ_FROM_PARCEL = "read_from_parcel"
    CREATE_BUFFER = "create_buffer"
    WRITE_BUFFER_INFO = "write_buffer_info"


_P, _D = CallSite.PROXY, CallSite.DISPATCHER
_IN, _OUT, _INOUT, _RET = Direction.IN, Direction.OUT, Direction.INOUT, Direction.RETURN
_PRE, _POST = Phase.PRE, Phase.POST

OPERATIONS: dict[tuple[CallSite, Direction, Phase], Operation | None] = {
    (_P, _IN, _PRE): Operation.WRITE_TO_PARCEL,
    (_P, _IN, _POST): None,
    (_P, _OUT, _PRE): Operation.WRITE_BUFFER_INFO,
    (_P, _OUT, _POST): Operation.READ_FROM_PARCEL,
    (_P, _INOUT, _PRE): Operation.WRITE_TO_PARCEL,
    (_P, _INOUT, _POST): Operation.READ_FROM_PARCEL,
    (_P, _RET, _PRE): None,
    (_P, _RET, _POST): Operation.CREATE_FROM_PARCEL,
    (_D, _IN, _PRE): Operation.CREATE_FROM_PARCEL,
    (_D, _IN, _POST): None,
    (_D, _OUT, _PRE): Operation.CREATE_BUFFER,
    (_D, _OUT, _POST): Operation.WRITE_TO_PARCEL,
    (_D, _INOUT, _PRE): Operation.CREATE_FROM_PARCEL,
    (_D, _INOUT, _POST): Operation.WRITE_TO_PARCEL,
    (_D, _RET, _PRE): None,
    (_D, _RET, _POST): Operation.WRITE_TO_PARCEL,
}

PARCEL_NAMES: dict[tuple[CallSite, Phase], str] = {
    (_P, _PRE): "_data",
    (_P, _POST): "_reply",
    (_D, _PRE): "data",
    (_D, _POST): "reply",
}

_snippet_env = Environment(trim_blocks=True, lstrip_blocks=True, undefined=StrictUndefined, autoescape=False)


@lru_cache(maxsize=None)
def snippet(text: str) -> Template:
    """Compile a multi-line Java snippet; common indentation is removed."""
    return _snippet_env.from_string(textwrap.dedent(text).strip("\n"))


def get_creator_var(typename: str) -> str:
    """The ``Parcelable.Creator`` expression for a Parcelable type."""
    if typename in ("java.lang.CharSequence", "CharSequence"):
        return "android.text.TextUtils.CHAR_SEQUENCE_CREATOR"
    return f"{typename}.CREATOR"


def get_parcelable_flag(parcel: str) -> str:
    """The ``writeToParcel`` flags for a parcel."""
    if parcel == "reply":
        return "android.os.Parcelable.PARCELABLE_WRITE_RETURN_VALUE"
    return "0"


class Marshaller:
    """
    Base class of all type categories.

    Args:
        argument: The argument being marshalled; never modified
        repr_type: The type used for matching, after generic substitution
        context: The per-pass encode context
    """

    def __init__(self, argument: Argument, repr_type: TypeName, context: EncodeContext):
        self.argument = argument
        self.repr_type = repr_type
        self.context = context

    @property
    def declared_type(self) -> str:
        return self.argument.type

    @property
    def cast(self) -> str:
        """A cast to the declared type when it is a generic type parameter."""
        declared = self.argument.type.strip()
        if all(parameter.name != declared for parameter in self.context.generic_parameters):
            return ""
        return f"({self.argument.type}) "

    def encode(self, call_site: CallSite, phase: Phase, name: str) -> str:
        operation = OPERATIONS[(call_site, self.argument.direction, phase)]
        if operation is None:
            return ""
        parcel = PARCEL_NAMES[(call_site, phase)]
        return getattr(self, operation.value)(parcel, name)

    def unsupported(self) -> NoReturn:
        """Fail for a direction this type category cannot handle."""
        message = f"Cannot marshall '{self.argument.direction.value} {self.argument.type}'."
        raise UnsupportedMarshallingError.at(message, self.context.tokens, self.argument.position)

    def render(self, template: str, parcel: str, name: str, **values) -> str:
        return snippet(template).render(parcel=parcel, name=name, **values)

    # Operations

    def create_from_parcel(self, parcel: str, name: str) -> str:
        """Declare-and-initialize ``name`` from the parcel."""
        self.unsupported()

    def write_to_parcel(self, parcel: str, name: str) -> str:
        """Write ``name`` into the parcel."""
        self.unsupported()

    def read_from_parcel(self, parcel: str, name: str) -> str:
        """Update the existing object ``name`` from the parcel."""
        self.unsupported()

    def create_buffer(self, parcel: str, name: str) -> str:
        """Declare-and-initialize a placeholder for an out argument."""
        self.unsupported()

    def write_buffer_info(self, parcel: str, name: str) -> str:
        """Send what the callee needs to build the placeholder; nothing by default."""
        return ""


def resolve_marshaller(argument: Argument, context: EncodeContext) -> Marshaller:
    """
    Return the marshaller of an argument, creating it on first use.

    Generic type parameters are replaced by their bound before matching.
    """
    if argument.marshaller is None:
        repr_text = context.substitute_generics(argument.type)
        try:
            repr_type = TypeName.parse(repr_text)
        except ValueError as e:
            raise ParseError.at(str(e), context.tokens, argument.position) from e

        factory = context.registry.resolve(repr_type)
        argument.marshaller = factory(argument, repr_type, context)
        logger.debug(f"Resolved '{argument.type}' ({argument.direction.value}) to {type(argument.marshaller).__name__}")
    return argument.marshaller


def encode(call_site: CallSite, phase: Phase, argument: Argument, name: str, context: EncodeContext) -> str:
    """
    Produce the Java fragment for one argument at one call site and phase.

    Args:
        call_site: Proxy or dispatcher
        phase: Before or after the actual call
        argument: The argument; its marshaller is bound on first use
        name: The Java variable holding the value
        context: The per-pass encode context

    Returns:
        The fragment; empty when nothing happens in this cell

    Raises:
        UnsupportedMarshallingError: If the type cannot be marshalled this way
    """
    return resolve_marshaller(argument, context).encode(call_site, phase, name)

