"""
Writing generated files to disk.
"""

from .atomic_writer import AtomicWriter, validate_java

__all__ = ["AtomicWriter", "validate_java"]
