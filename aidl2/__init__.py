"""aidl2 - binder interface compiler

Generates Java Binder stubs and proxies from .aidl2 interface definitions,
with Parcel marshalling code synthesized per argument type.
"""

__version__ = "1.0.0"

from .pipeline import (
    Aidl2Error,
    AtomicWriter,
    CodeGeneratorConfig,
    GenerationReport,
    JavaWriter,
    OutputConfig,
    ParseError,
    ProjectGenerator,
    UnsupportedMarshallingError,
)

__all__ = [
    "Aidl2Error",
    "AtomicWriter",
    "CodeGeneratorConfig",
    "GenerationReport",
    "JavaWriter",
    "OutputConfig",
    "ParseError",
    "ProjectGenerator",
    "UnsupportedMarshallingError",
]
