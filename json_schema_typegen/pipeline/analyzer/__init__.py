"""
Analyzer module.

Contains type synthesis, reference resolution and the IR it produces.
"""

from __future__ import annotations

from .ir_nodes import (
    IR,
    ConstantDef,
    EnumDef,
    FieldDef,
    ImportDef,
    StructType,
    TypeDecl,
    TypeKind,
    TypeRef,
)
from .name_scope import NameScope
from .output import Output
from .schema_generator import SchemaGenerator

__all__ = [
    "ConstantDef",
    "EnumDef",
    "FieldDef",
    "ImportDef",
    "StructType",
    "TypeDecl",
    "TypeKind",
    "TypeRef",
    "IR",
    "NameScope",
    "Output",
    "SchemaGenerator",
]
