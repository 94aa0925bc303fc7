"""
Renders a parsed Interface into a Java source file.

The writer owns one generation pass: it builds a fresh EncodeContext (and
with it a fresh temporary-name counter), asks the marshalling layer for a
fragment for every argument at every call site and phase, and assembles the
fragments with the Jinja2 templates in ``templates/java``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import AbstractSet

import jinja2

from ...log import get_logger
from ..analyzer.classifier import SourceLookup, SourceTree, load_known_parcelables
from ..config import CodeGeneratorConfig
from ..marshal import CallSite, EncodeContext, Phase, encode
from ..parser.nodes import Argument, Interface, Method

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent.parent / "templates" / "java"

BOXED_TYPES = {
    "void": "Void",
    "boolean": "Boolean",
    "byte": "Byte",
    "char": "Character",
    "short": "Short",
    "int": "Integer",
    "long": "Long",
    "float": "Float",
    "double": "Double",
}


def box(typename: str) -> str:
    """The reference type usable as a generic argument for ``typename``."""
    return BOXED_TYPES.get(typename, typename)


@dataclass
class ArgumentView:
    """An argument as seen by the templates."""

    type: str
    name: str  # Proxy-side parameter name
    var: str  # Dispatcher-side local variable
    create: str = ""  # Dispatcher declaration suffix


@dataclass
class MethodView:
    """A method with every marshalling fragment already generated."""

    method: Method
    transaction: str
    index: int
    arguments: list[ArgumentView] = field(default_factory=list)
    dispatcher_result: str = ""
    dispatcher_post: list[str] = field(default_factory=list)
    proxy_pre: list[str] = field(default_factory=list)
    proxy_result: str = ""
    proxy_post: list[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.method.name

    @property
    def return_type(self) -> str:
        return self.method.return_type

    @property
    def parameters(self) -> str:
        return ", ".join(f"{a.type} {a.name}" for a in self.arguments)

    @property
    def call_arguments(self) -> str:
        return ", ".join(a.var for a in self.arguments)


class JavaWriter:
    """Converts an Interface into Java code.

    Args:
        interface: The parsed interface
        prefix: Project directory, searched for project Parcelables
        config: Generator configuration
        command_line: Shown in the generation banner
        known_parcelables: Overrides the allow-list from the configuration
        source_lookup: Overrides the filesystem lookup (tests pass a stub)
    """

    def __init__(
        self,
        interface: Interface,
        prefix: Path | str,
        config: CodeGeneratorConfig | None = None,
        command_line: str | None = None,
        known_parcelables: AbstractSet[str] | None = None,
        source_lookup: SourceLookup | None = None,
        source_name: str | None = None,
    ):
        self.interface = interface
        self.prefix = Path(prefix)
        self.config = config or CodeGeneratorConfig()
        self.command_line = command_line
        self.source_name = source_name

        if known_parcelables is None:
            known_parcelables = load_known_parcelables(
                self.config.known_parcelables_file or None, self.config.known_parcelables
            )
        if source_lookup is None:
            source_lookup = SourceTree(self.prefix, self.config.source_dir, self.config.java_extension)

        self.context = EncodeContext(
            package=interface.package,
            imports=interface.imports,
            generic_parameters=interface.generic_parameters,
            known_parcelables=known_parcelables,
            source_lookup=source_lookup,
            tokens=interface.tokens,
        )

        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(TEMPLATES_DIR),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
            undefined=jinja2.StrictUndefined,
        )
        self.jinja_env.filters["box"] = box

    @property
    def package(self) -> str:
        return self.interface.package

    @property
    def imports(self) -> list[str]:
        return [entry.name for entry in self.interface.imports]

    def encode(self, call_site: CallSite, phase: Phase, argument: Argument, name: str) -> str:
        return encode(call_site, phase, argument, name, self.context)

    def transaction_names(self) -> list[str]:
        """``TRANSACTION_<name>`` per method; overloads get ``_1``, ``_2``..."""
        seen: dict[str, int] = {}
        result = []
        for method in self.interface.methods:
            count = seen.get(method.name, 0)
            seen[method.name] = count + 1
            suffix = f"_{count}" if count else ""
            result.append(f"TRANSACTION_{method.name}{suffix}")
        return result

    def method_view(self, method: Method, index: int, transaction: str) -> MethodView:
        view = MethodView(method, transaction, index)
        dispatcher, proxy = CallSite.DISPATCHER, CallSite.PROXY

        for i, argument in enumerate(method.arguments):
            var = f"_arg{i}"
            create = self.encode(dispatcher, Phase.PRE, argument, var)
            view.arguments.append(ArgumentView(argument.type, argument.name, var, create))
            view.proxy_pre.append(self.encode(proxy, Phase.PRE, argument, argument.name))

        # The return value goes first on the wire, then out and inout arguments
        if method.result is not None:
            view.dispatcher_result = self.encode(dispatcher, Phase.POST, method.result, method.result.name)
            view.proxy_result = self.encode(proxy, Phase.POST, method.result, method.result.name)

        for argument, argument_view in zip(method.arguments, view.arguments):
            view.dispatcher_post.append(self.encode(dispatcher, Phase.POST, argument, argument_view.var))
            view.proxy_post.append(self.encode(proxy, Phase.POST, argument, argument.name))

        view.proxy_pre = [f for f in view.proxy_pre if f]
        view.dispatcher_post = [f for f in view.dispatcher_post if f]
        view.proxy_post = [f for f in view.proxy_post if f]
        return view

    def encode_interface(self) -> str:
        """
        Generate the whole Java file.

        Raises:
            ParseError: If any argument cannot be marshalled; nothing is
                returned for the file in that case
        """
        self.context.names.reset()
        methods = [
            self.method_view(method, i, transaction)
            for i, (method, transaction) in enumerate(zip(self.interface.methods, self.transaction_names()))
        ]
        logger.debug(f"Encoded {len(methods)} methods of {self.interface.qualified_name}")

        template = self.jinja_env.get_template("interface.java.jinja2")
        return template.render(
            interface=self.interface,
            package=self.package,
            imports=self.imports,
            generic=self.interface.generic or "",
            generic_arguments=self.interface.generic_arguments,
            methods=methods,
            needs_main_thread=any(m.is_mainthread for m in self.interface.methods),
            add_generation_comment=self.config.add_generation_comment,
            command_line=self.command_line,
            source_name=self.source_name,
        )
