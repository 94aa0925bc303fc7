"""
Java source generation.
"""

from .java_writer import ArgumentView, JavaWriter, MethodView, box

__all__ = ["ArgumentView", "JavaWriter", "MethodView", "box"]
