"""
Pipeline - .aidl2 interface definitions to Java binder code.

1. Phase 1 (Parser): Tokenize and parse the interface definition
2. Phase 2 (Analyzer): Parse type names and classify referenced types
3. Phase 3 (Marshal): Synthesize Parcel read/write code per argument
4. Phase 4 (Writer): Assemble the Java file from templates
5. Phase 5 (Output): Validate and write the file atomically
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, OutputConfig
from .errors import Aidl2Error, OutputValidationError, ParseError, StructuralMismatchError, UnsupportedMarshallingError
from .generator import GenerationReport, ProjectGenerator
from .output import AtomicWriter
from .writer import JavaWriter

__all__ = [
    "Aidl2Error",
    "AtomicWriter",
    "CodeGeneratorConfig",
    "GenerationReport",
    "JavaWriter",
    "OutputConfig",
    "OutputValidationError",
    "ParseError",
    "ProjectGenerator",
    "StructuralMismatchError",
    "UnsupportedMarshallingError",
]
