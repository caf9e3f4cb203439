"""
Per-module output state.

An Output collects the declarations generated for one (file, package) pair,
remembers which schema node produced which declaration, deduplicates enums
by value and keeps declaration names unique.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from ...runtime import json_equal
from ..schema_ast.nodes import SchemaType
from .ir_nodes import IR, TypeDecl


@dataclass
class CachedEnum:
    values: list[Any]
    decl: TypeDecl


@dataclass
class PendingReference:
    decl: TypeDecl
    used: bool = False


@dataclass(frozen=True)
class OutputCheckpoint:
    """Sizes of every append-only collection of an Output at one point in time."""

    declarations: int
    imports: int
    by_schema: int
    by_name: int
    constant_names: int
    enums: int


def _enum_key(values: list[Any]) -> str:
    return json.dumps(values, sort_keys=True, default=repr)


def _truncate_dict(d: dict, size: int) -> None:
    for key in list(d)[size:]:
        del d[key]


class Output:
    """Declarations and bookkeeping for one generated module."""

    def __init__(
        self,
        file_name: str,
        package: str,
        warner: Callable[[str], None],
        reserved_names: Iterable[str] = (),
    ):
        self.ir = IR(file_name=file_name, package=package)
        self.warner = warner

        # Names the generated module imports; declarations may not take them
        self.reserved_names = frozenset(reserved_names)

        self.declarations_by_schema: dict[SchemaType, TypeDecl] = {}
        self.declarations_by_name: dict[str, TypeDecl] = {}
        self.constant_names: dict[str, None] = {}
        self.enums: dict[str, CachedEnum] = {}
        self.pending_references: dict[SchemaType, PendingReference] = {}

    def __repr__(self) -> str:
        return f"Output(file_name={self.file_name!r}, package={self.package!r})"

    @property
    def file_name(self) -> str:
        return self.ir.file_name

    @property
    def package(self) -> str:
        return self.ir.package

    @property
    def declarations(self) -> list[TypeDecl]:
        return self.ir.declarations

    def _is_taken(self, name: str) -> bool:
        return name in self.declarations_by_name or name in self.constant_names or name in self.reserved_names

    def unique_type_name(self, name: str) -> str:
        """Return name, or name with the first free _N suffix if it is already used."""
        if not self._is_taken(name):
            return name
        count = 1
        while True:
            suffixed = f"{name}_{count}"
            if not self._is_taken(suffixed):
                self.warner(f"multiple types map to the name {name!r}; declaring duplicate as {suffixed!r} instead")
                return suffixed
            count += 1

    def reserve(self, node: SchemaType | None, decl: TypeDecl) -> None:
        """Register a declaration by name (and node) before its shape is generated."""
        if node is not None:
            self.declarations_by_schema[node] = decl
        self.declarations_by_name[decl.name] = decl

    def begin_reference(self, node: SchemaType, decl: TypeDecl) -> None:
        """Register decl for a $ref-only node while its reference is resolved; its name stays free."""
        self.pending_references[node] = PendingReference(decl)

    def pending_reference(self, node: SchemaType) -> TypeDecl | None:
        """Hand out the pending declaration of node, marking it as used."""
        pending = self.pending_references.get(node)
        if pending is None:
            return None
        pending.used = True
        return pending.decl

    def end_reference(self, node: SchemaType) -> bool:
        """Drop the pending entry of node; True if it was handed out in the meantime."""
        pending = self.pending_references.pop(node)
        return pending.used

    def add_constant_name(self, name: str) -> str:
        name = self.unique_type_name(name)
        self.constant_names[name] = None
        return name

    def find_enum(self, values: list[Any]) -> TypeDecl | None:
        cached = self.enums.get(_enum_key(values))
        if cached is not None and json_equal(cached.values, values):
            return cached.decl
        return None

    def cache_enum(self, values: list[Any], decl: TypeDecl) -> None:
        self.enums[_enum_key(values)] = CachedEnum(values=list(values), decl=decl)

    def checkpoint(self) -> OutputCheckpoint:
        return OutputCheckpoint(
            declarations=len(self.ir.declarations),
            imports=len(self.ir.imports),
            by_schema=len(self.declarations_by_schema),
            by_name=len(self.declarations_by_name),
            constant_names=len(self.constant_names),
            enums=len(self.enums),
        )

    def rollback(self, checkpoint: OutputCheckpoint) -> None:
        """Forget everything added since checkpoint was taken."""
        del self.ir.declarations[checkpoint.declarations :]
        del self.ir.imports[checkpoint.imports :]
        _truncate_dict(self.declarations_by_schema, checkpoint.by_schema)
        _truncate_dict(self.declarations_by_name, checkpoint.by_name)
        _truncate_dict(self.constant_names, checkpoint.constant_names)
        _truncate_dict(self.enums, checkpoint.enums)
