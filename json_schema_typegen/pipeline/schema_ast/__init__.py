"""
Schema AST module.

Contains the node definitions and parser for JSON Schema.
"""

from __future__ import annotations

from .nodes import SchemaDocument, SchemaType, TypeName
from .parser import SchemaParser

__all__ = [
    "SchemaDocument",
    "SchemaType",
    "TypeName",
    "SchemaParser",
]
