"""
Atomic file writer for generated Java sources.

Ensures that file writes are atomic so an interrupted run never leaves a
half-written source file in the generated tree.
"""

from __future__ import annotations

import re
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..errors import OutputValidationError

_PACKAGE_RE = re.compile(r"^\s*package\s+[\w.]+\s*;", re.MULTILINE)
_TYPE_RE = re.compile(r"\b(?:interface|class|enum)\s+\w+")


def strip_java_comments(content: str) -> str:
    """Remove comments and string literals so braces inside them don't count."""
    content = re.sub(r"/\*.*?\*/", "", content, flags=re.DOTALL)
    content = re.sub(r"//[^\n]*", "", content)
    return re.sub(r'"(?:\\.|[^"\\])*"', '""', content)


def validate_java(content: str) -> None:
    """Basic structural checks of a Java compilation unit.

    Args:
        content: Java code to validate

    Raises:
        OutputValidationError: If validation fails
    """
    code = strip_java_comments(content)

    if not _PACKAGE_RE.search(code):
        raise OutputValidationError("Generated Java code is missing a package declaration")

    if not _TYPE_RE.search(code):
        raise OutputValidationError("Generated Java code has no type declarations")

    open_braces = code.count("{")
    close_braces = code.count("}")
    if open_braces != close_braces:
        raise OutputValidationError(f"Generated Java code has unbalanced braces: {open_braces} open, {close_braces} close")


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(self, validator: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validator: Optional validation function for Java code
        """
        self._validate_java = validator or validate_java

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            OutputValidationError: If validation fails
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )

        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            if validate:
                self._validate_java(content)

            temp_path.replace(path)

        except Exception:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass  # Best effort cleanup
            raise

