"""
Type classification: is a referenced type a Parcelable, a remote
interface, or a Serializable?

The decision logic in ``classify`` is pure. The only outside knowledge it
needs, whether a Java source file exists for a type, comes from an injected
``source_lookup`` callable; ``SourceTree`` is the filesystem-backed one.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import AbstractSet

from ...log import get_logger
from ..parser.nodes import ImportEntry, ImportKind

logger = get_logger(__name__)

KNOWN_PARCELABLES_FILE = Path(__file__).parent.parent.parent / "known_parcelables.txt"

# (qualified type name, current package) -> whether a source file exists
SourceLookup = Callable[[str, str], bool]


class InterfaceClass(Enum):
    """Classification of a non-builtin type."""

    PARCELABLE = "parcelable"
    INTERFACE = "interface"
    SERIALIZABLE = "serializable"


_KIND_TO_CLASS = {
    ImportKind.PARCELABLE: InterfaceClass.PARCELABLE,
    ImportKind.INTERFACE: InterfaceClass.INTERFACE,
    ImportKind.SERIALIZABLE: InterfaceClass.SERIALIZABLE,
}


def remove_generics(typename: str) -> str:
    """``Foo<Bar>`` -> ``Foo``."""
    return typename.split("<", 1)[0].strip()


def classify(
    typename: str,
    package: str,
    imports: Iterable[ImportEntry],
    source_lookup: SourceLookup | None,
    known_parcelables: AbstractSet[str],
) -> InterfaceClass:
    """
    Classify a type.

    Args:
        typename: Type as written, generic arguments are ignored
        package: Package of the interface being generated
        imports: Import table of the interface being generated
        source_lookup: Looks up project source files, or None to skip the lookup
        known_parcelables: Fully qualified names known to be Parcelable

    Returns:
        The classification. Types with an explicit import kind get that kind;
        known and project-local types are Parcelable; anything else is
        assumed to be a remote interface.
    """
    raw_type = remove_generics(typename)
    qualified = raw_type
    suffix = "." + raw_type

    matched = False
    for entry in imports:
        if entry.name == raw_type or entry.name.endswith(suffix):
            if entry.kind is not ImportKind.IMPORT:
                return _KIND_TO_CLASS[entry.kind]
            # A plain import only qualifies the name; the first one wins
            if not matched:
                qualified = entry.name
                matched = True

    # java.lang types are visible without an import
    if not matched and "." not in raw_type and f"java.lang.{raw_type}" in known_parcelables:
        qualified = f"java.lang.{raw_type}"

    if qualified in known_parcelables:
        return InterfaceClass.PARCELABLE
    if source_lookup is not None and source_lookup(qualified, package):
        return InterfaceClass.PARCELABLE
    return InterfaceClass.INTERFACE


class SourceTree:
    """
    Searches ``<prefix>/<source_dir>`` for Java sources.

    Results are cached per (type, package) for the lifetime of the object,
    which is one generation pass.
    """

    def __init__(self, prefix: Path | str, source_dir: str = "src", extension: str = ".java"):
        self.root = Path(prefix) / source_dir
        self.extension = extension
        self._cache: dict[tuple[str, str], bool] = {}

    def typename_to_path(self, typename: str, package: str, extension: str | None = None) -> Path:
        """
        Find the expected source path of a type.

        ``com.example.Foo`` maps to ``<root>/com/example/Foo.java``. When that
        file does not exist the name is resolved inside ``package`` instead.
        """
        filename = typename.replace(".", "/") + (extension or self.extension)
        path = self.root / filename
        if path.exists() or not package:
            return path
        return self.root / package.replace(".", "/") / filename

    def __call__(self, typename: str, package: str) -> bool:
        key = (typename, package)
        if key not in self._cache:
            self._cache[key] = self.typename_to_path(typename, package).is_file()
        return self._cache[key]


@lru_cache(maxsize=None)
def _read_parcelables(path: str) -> frozenset[str]:
    names = set()
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                names.add(line)
    logger.debug(f"Loaded {len(names)} known parcelables from {path}")
    return frozenset(names)


def load_known_parcelables(path: Path | str | None = None, extra: Iterable[str] = ()) -> frozenset[str]:
    """
    Load the known-Parcelable allow-list.

    Args:
        path: A newline-delimited file of qualified names; the bundled list
            when None. Each file is read once per process.
        extra: Additional names to include

    Returns:
        An immutable set of fully qualified names
    """
    names = _read_parcelables(str(path or KNOWN_PARCELABLES_FILE))
    extra = frozenset(extra)
    return names | extra if extra else names
