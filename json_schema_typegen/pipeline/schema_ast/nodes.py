"""
Node definitions for parsed JSON Schema documents.

Nodes are compared and hashed by identity: two structurally identical
subtrees at different positions are different nodes. The generator relies on
this to memoize one declaration per node.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TypeName(str, Enum):
    """The JSON Schema "type" keyword values the generator understands."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"

    @property
    def is_primitive(self) -> bool:
        return self in (TypeName.STRING, TypeName.INTEGER, TypeName.NUMBER, TypeName.BOOLEAN)


@dataclass(eq=False)
class SchemaType:
    """A schema node."""

    # None when the schema does not declare a type
    type: TypeName | None = None

    properties: dict[str, SchemaType] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)

    items: SchemaType | None = None

    # None when there is no "enum" keyword; an empty list is an error at generation time
    enum: list[Any] | None = None

    # JSON null is treated as "no default"
    default: Any = None

    description: str = ""
    ref: str = ""

    # Location in the source document (for error messages)
    source_path: str = ""

    @property
    def is_inline_primitive(self) -> bool:
        """Primitive types that can be used directly without a named declaration."""
        return self.type is not None and self.type.is_primitive and self.enum is None and not self.ref

    @property
    def is_reference(self) -> bool:
        """Nodes whose type is decided by their $ref alone."""
        if not self.ref or self.enum is not None:
            return False
        return self.type not in (TypeName.ARRAY, TypeName.OBJECT, TypeName.NULL)

    @property
    def is_unconstrained(self) -> bool:
        return self.type is None and not self.properties


@dataclass(eq=False)
class SchemaDocument:
    """Root of a parsed schema file."""

    id: str = ""
    root: SchemaType | None = None
    definitions: dict[str, SchemaType] = field(default_factory=dict)

    # Where the document was loaded from, if anywhere
    file_name: str = ""
