"""
Configuration for the interface compiler.

Loaded from a JSON file passed with ``--config``; every key is optional and
unknown keys are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        validate_before_write: Whether to check the generated Java before writing
        atomic_write: Whether to write through a temporary file and rename
    """

    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Project sub-directory holding .aidl2 and .java sources
    source_dir: str = "src"

    # Project sub-directory receiving generated .java files
    gen_dir: str = "gen"

    # Extension of interface definition files
    source_extension: str = ".aidl2"

    # Extension of Java sources, for source lookups and output
    java_extension: str = ".java"

    # Extra fully qualified names treated as Parcelable
    known_parcelables: list[str] = field(default_factory=list)

    # Replacement for the bundled known-Parcelable list (empty = bundled).
    # The command resolves a relative path against the --config file.
    known_parcelables_file: str = ""

    # Add generation comment at top of file
    add_generation_comment: bool = True

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "output" and isinstance(v, dict):
                config.output = OutputConfig(
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "source_dir": self.source_dir,
            "gen_dir": self.gen_dir,
            "source_extension": self.source_extension,
            "java_extension": self.java_extension,
            "known_parcelables": self.known_parcelables,
            "known_parcelables_file": self.known_parcelables_file,
            "add_generation_comment": self.add_generation_comment,
            "output": {
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
