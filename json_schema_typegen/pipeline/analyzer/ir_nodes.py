"""
IR (Intermediate Representation) node definitions.

These nodes describe the declarations synthesized for one output module:
every reference is resolved and every name is final. Backends render them
without making any further decisions about the schema.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TypeKind(Enum):
    """Kind of type in the IR."""

    PRIMITIVE = "primitive"  # str, int, float, bool
    NAMED = "named"  # A generated declaration, possibly in another package
    ARRAY = "array"  # list[T]
    MAP = "map"  # dict[str, Any]
    OPTIONAL = "optional"  # T | None
    ANY = "any"  # Any


@dataclass
class TypeRef:
    """A resolved type reference."""

    kind: TypeKind = TypeKind.ANY

    # Schema primitive name ("string", "integer", ...) for PRIMITIVE
    name: str = ""

    # Target declaration for NAMED
    decl: TypeDecl | None = None

    # Package of the target declaration when it lives in another package
    package: str = ""

    # Element type for ARRAY, wrapped type for OPTIONAL
    type_args: list[TypeRef] = field(default_factory=list)

    @property
    def elem(self) -> TypeRef:
        return self.type_args[0]

    @property
    def qualifier(self) -> str:
        """Module alias used to qualify a NAMED type from another package."""
        return package_alias(self.package) if self.package else ""

    def qualified(self, package: str) -> TypeRef:
        """Copy of a NAMED type as seen from outside its package."""
        return TypeRef(kind=TypeKind.NAMED, decl=self.decl, package=package)


def primitive_type(name: str) -> TypeRef:
    return TypeRef(kind=TypeKind.PRIMITIVE, name=name)


def any_type() -> TypeRef:
    return TypeRef(kind=TypeKind.ANY)


def map_type() -> TypeRef:
    return TypeRef(kind=TypeKind.MAP)


def named_type(decl: TypeDecl) -> TypeRef:
    return TypeRef(kind=TypeKind.NAMED, decl=decl)


def array_type(elem: TypeRef) -> TypeRef:
    return TypeRef(kind=TypeKind.ARRAY, type_args=[elem])


def optional_type(inner: TypeRef) -> TypeRef:
    return TypeRef(kind=TypeKind.OPTIONAL, type_args=[inner])


def package_alias(package: str) -> str:
    """Name a package is imported under, e.g. "example.models" -> "models"."""
    return package.rsplit(".", 1)[-1]


@dataclass
class FieldDef:
    """A field definition in a struct."""

    name: str = ""
    json_name: str = ""  # Original JSON property name
    type_ref: TypeRef | None = None
    comment: str = ""
    is_required: bool = False
    default_value: Any = None
    has_default: bool = False


@dataclass
class StructType:
    """Shape of a struct declaration."""

    fields: list[FieldDef] = field(default_factory=list)

    # JSON names that must be present and non-null when decoding
    required_fields: list[str] = field(default_factory=list)

    def add_field(self, field_def: FieldDef) -> None:
        self.fields.append(field_def)


@dataclass
class ConstantDef:
    """A module-level constant naming one enum member."""

    name: str = ""
    member: str = ""
    value: Any = None


@dataclass
class EnumDef:
    """Shape of an enum declaration."""

    # "string", "integer", "number", "boolean"; None for values of mixed types
    value_type: str | None = None

    # Allowed values in schema order
    values: list[Any] = field(default_factory=list)

    # member_name -> value, for enums rendered as Enum classes
    members: dict[str, Any] = field(default_factory=dict)

    # Enums without a common base type are wrapped in a dataclass with a Value field
    is_carrier: bool = False

    constants: list[ConstantDef] = field(default_factory=list)

    values_name: str = ""


@dataclass(eq=False)
class TypeDecl:
    """A named declaration in a generated module."""

    name: str = ""
    comment: str = ""

    # StructType, EnumDef, or TypeRef for aliases; None while being generated
    shape: StructType | EnumDef | TypeRef | None = None

    @property
    def is_struct(self) -> bool:
        return isinstance(self.shape, StructType)

    @property
    def is_enum(self) -> bool:
        return isinstance(self.shape, EnumDef)

    @property
    def is_alias(self) -> bool:
        return isinstance(self.shape, TypeRef)


@dataclass
class ImportDef:
    """An import of another generated package."""

    module: str = ""  # Qualified module path
    alias: str = ""  # Name it is bound to


@dataclass
class IR:
    """Everything that goes into one generated module."""

    file_name: str = ""
    package: str = ""

    # All declarations, in the order they were completed
    declarations: list[TypeDecl] = field(default_factory=list)

    imports: list[ImportDef] = field(default_factory=list)

    def add_import(self, module: str, alias: str) -> None:
        for existing in self.imports:
            if existing.module == module and existing.alias == alias:
                return
        self.imports.append(ImportDef(module=module, alias=alias))

    def add_declaration(self, decl: TypeDecl) -> None:
        self.declarations.append(decl)
