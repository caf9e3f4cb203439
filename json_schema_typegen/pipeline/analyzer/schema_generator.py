"""
Recursive type synthesis for one schema document.

A SchemaGenerator walks the nodes of one SchemaDocument and turns them into
declarations of one Output. References to other files are followed through
the owning Generator, which hands back a SchemaGenerator bound to the
referenced document's Output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ...errors import MissingDefinitionError, SchemaCodegenError, SchemaError
from ...utils import enum_member_name, identifierize, safe_identifier
from ..schema_ast.nodes import SchemaDocument, SchemaType, TypeName
from .ir_nodes import (
    ConstantDef,
    EnumDef,
    FieldDef,
    StructType,
    TypeDecl,
    TypeRef,
    any_type,
    array_type,
    map_type,
    named_type,
    optional_type,
    primitive_type,
)
from .name_scope import NameScope
from .output import Output
from .reference_resolver import parse_reference

if TYPE_CHECKING:
    from ..generator import Generator

ENUM_VALUES_PREFIX = "ENUM_VALUES_"


def literal_kind(value: Any) -> str | None:
    """Schema type name of a JSON literal, or None for null."""
    if value is None:
        return None
    if isinstance(value, bool):
        return TypeName.BOOLEAN.value
    if isinstance(value, int):
        return TypeName.INTEGER.value
    if isinstance(value, float):
        return TypeName.NUMBER.value
    if isinstance(value, str):
        return TypeName.STRING.value
    raise SchemaError(f"enum has non-primitive value {value!r}")


def is_empty_definition(node: SchemaType) -> bool:
    """A definition that constrains nothing and therefore gets no declaration."""
    return node.is_unconstrained and node.enum is None and not node.ref


def _matches_kind(value: Any, kind: str) -> bool:
    value_kind = literal_kind(value)
    if kind == TypeName.NUMBER.value:
        return value_kind in (TypeName.INTEGER.value, TypeName.NUMBER.value)
    if kind == TypeName.INTEGER.value and value_kind == TypeName.NUMBER.value:
        return value.is_integer()
    return value_kind == kind


class SchemaGenerator:
    """Turns the nodes of one schema document into declarations of one Output."""

    def __init__(
        self,
        generator: Generator,
        document: SchemaDocument,
        output: Output,
        file_name: str,
        root_type_name: str,
    ):
        """
        Initialize the schema generator.

        Args:
            generator: The Generator that owns the document cache and the Output registry
            document: The document whose nodes are generated
            output: Output receiving the declarations
            file_name: Location of the document; relative $ref paths resolve against it
            root_type_name: Name of the document's root declaration
        """
        self.generator = generator
        self.document = document
        self.output = output
        self.file_name = file_name
        self.root_type_name = root_type_name

    @property
    def capitalizations(self) -> list[str]:
        return self.generator.config.capitalizations

    def warn(self, message: str) -> None:
        self.generator.config.warner(message)

    def identifierize(self, text: str) -> str:
        return identifierize(text, self.capitalizations)

    def generate_root(self) -> None:
        """
        Generate the root declaration of the document.

        A root without a type and without properties marks a definitions-only
        document: every definition is then generated under its own name, in
        name order.

        Raises:
            SchemaError: If the document has no root
        """
        root = self.document.root
        if root is None:
            raise SchemaError(f"schema {self.file_name or self.document.id!r} has no root")

        if root.is_unconstrained:
            for name in sorted(self.document.definitions):
                definition = self.document.definitions[name]
                if is_empty_definition(definition):
                    continue
                self.generate_declared(definition, NameScope(safe_identifier(self.identifierize(name))))
            return

        if self.root_type_name in self.output.declarations_by_name:
            return
        self.generate_declared(root, NameScope(self.root_type_name))

    def generate_declared(self, node: SchemaType, scope: NameScope) -> TypeRef | None:
        """
        Generate a named declaration for node, or return the one already generated.

        The declaration is registered before the node's children are visited,
        so a node that refers back to itself (directly or through other
        definitions) resolves to the declaration being built.

        Returns:
            A NAMED type, or None if node resolves to an unconstrained definition
        """
        existing = self.output.declarations_by_schema.get(node)
        if existing is not None:
            return named_type(existing)

        pending = self.output.pending_reference(node)
        if pending is not None:
            return named_type(pending)

        if node.enum is not None:
            return self.generate_enum_type(node, scope)
        if node.is_reference:
            return self._generate_reference_node(node, scope)

        decl = TypeDecl(
            name=self.output.unique_type_name(safe_identifier(scope.string())),
            comment=node.description,
        )
        self.output.reserve(node, decl)

        decl.shape = self.generate_type(node, scope)
        self.output.ir.add_declaration(decl)
        return named_type(decl)

    def _generate_reference_node(self, node: SchemaType, scope: NameScope) -> TypeRef | None:
        """
        Resolve a $ref-only node to its target.

        The node gets a declaration of its own only when resolving the
        reference leads back to it; it is then declared as an alias of the
        target so the cycle has a name to refer to.
        """
        decl = TypeDecl(name=safe_identifier(scope.string()), comment=node.description)
        self.output.begin_reference(node, decl)
        try:
            shape = self.generate_reference(node.ref)
        finally:
            used = self.output.end_reference(node)

        if not used:
            return shape
        if shape is None:
            shape = any_type()
        elif shape.decl is decl:
            raise SchemaError(f"{node.source_path or '<node>'}: $ref {node.ref!r} refers back to itself")

        decl.name = self.output.unique_type_name(decl.name)
        decl.shape = shape
        self.output.reserve(node, decl)
        self.output.ir.add_declaration(decl)
        return named_type(decl)

    def generate_inline(self, node: SchemaType, scope: NameScope) -> TypeRef | None:
        """Type for a field or array element; bare primitives and arrays need no declaration."""
        if node.is_inline_primitive:
            return primitive_type(node.type.value)

        if node.type == TypeName.ARRAY and node.enum is None and not node.ref:
            return array_type(self._generate_items(node, scope))

        return self.generate_declared(node, scope)

    def _generate_items(self, node: SchemaType, scope: NameScope) -> TypeRef:
        if node.items is None:
            raise SchemaError("array property must have 'items' set to a type")
        elem = self.generate_inline(node.items, scope.add("Elem"))
        return elem if elem is not None else any_type()

    def generate_type(self, node: SchemaType, scope: NameScope) -> TypeRef | StructType | None:
        """
        Synthesize the type of node.

        Raises:
            SchemaError: If node has no usable type
        """
        if node.enum is not None:
            return self.generate_enum_type(node, scope)

        match node.type:
            case TypeName.ARRAY:
                return array_type(self._generate_items(node, scope))
            case TypeName.OBJECT:
                return self.generate_struct_type(node, scope)
            case TypeName.NULL:
                return any_type()

        if node.ref:
            return self.generate_reference(node.ref)

        match node.type:
            case TypeName.STRING | TypeName.INTEGER | TypeName.NUMBER | TypeName.BOOLEAN:
                return primitive_type(node.type.value)
        raise SchemaError(f"{node.source_path or '<node>'}: property must have a type")

    def generate_struct_type(self, node: SchemaType, scope: NameScope) -> StructType | TypeRef:
        """Synthesize a struct for an object node; objects without properties become maps."""
        if not node.properties:
            if node.required:
                self.warn(
                    "object type with no properties has required fields; "
                    "skipping validation code for them since we don't know their types"
                )
            return map_type()

        required = set(node.required)
        struct = StructType()
        used_names: dict[str, int] = {}

        for json_name in sorted(node.properties):
            prop = node.properties[json_name]

            field_name = safe_identifier(self.identifierize(json_name), fallback="Field")
            if field_name in used_names:
                count = used_names[field_name]
                while f"{field_name}_{count}" in used_names:
                    count += 1
                used_names[field_name] = count + 1
                suffixed = f"{field_name}_{count}"
                self.warn(
                    f"field {json_name!r} maps to a field by the same name declared "
                    f"in the same struct; it will be declared as {suffixed}"
                )
                field_name = suffixed
            used_names[field_name] = used_names.get(field_name, 1)

            try:
                type_ref = self.generate_inline(prop, scope.add(field_name))
            except SchemaCodegenError as e:
                e.add_note(f"could not generate type for field {json_name!r}")
                raise
            if type_ref is None:
                type_ref = any_type()

            field_def = FieldDef(name=field_name, json_name=json_name, comment=prop.description)
            if prop.default is not None:
                field_def.default_value = prop.default
                field_def.has_default = True
            elif json_name in required:
                field_def.is_required = True
                struct.required_fields.append(json_name)
            else:
                type_ref = optional_type(type_ref)
            field_def.type_ref = type_ref

            struct.add_field(field_def)

        return struct

    def generate_enum_type(self, node: SchemaType, scope: NameScope) -> TypeRef:
        """
        Synthesize an enum declaration, reusing one with the same values if there is one.

        Raises:
            SchemaError: If the value list is empty or does not fit the declared type
        """
        values = node.enum
        if not values:
            raise SchemaError(f"{node.source_path or '<node>'}: enum array cannot be empty")

        existing = self.output.find_enum(values)
        if existing is not None:
            return named_type(existing)

        value_type = self._enum_value_type(node)
        is_carrier = value_type is None
        if is_carrier:
            self.warn("Enum field wrapped in struct in order to store values of multiple types")

        decl = TypeDecl(
            name=self.output.unique_type_name(safe_identifier(scope.add("Enum").string())),
            comment=node.description,
        )
        enum_def = EnumDef(value_type=value_type, values=list(values), is_carrier=is_carrier)
        decl.shape = enum_def

        self.output.reserve(None, decl)
        self.output.ir.add_declaration(decl)
        self.output.cache_enum(values, decl)

        enum_def.values_name = self.output.add_constant_name(ENUM_VALUES_PREFIX + decl.name)
        if not is_carrier:
            enum_def.members = self._enum_members(values)
        if value_type == TypeName.STRING.value:
            enum_def.constants = self._enum_constants(decl.name, enum_def.members)

        return named_type(decl)

    def _enum_value_type(self, node: SchemaType) -> str | None:
        """Common primitive type of the enum values; None means values of mixed types."""
        if node.type is not None:
            if node.type == TypeName.NULL:
                return None
            if not node.type.is_primitive:
                raise SchemaError(f"{node.source_path or '<node>'}: enum of type {node.type.value} is not supported")
            for value in node.enum:
                if not _matches_kind(value, node.type.value):
                    raise SchemaError(
                        f"{node.source_path or '<node>'}: enum value {value!r} does not match type {node.type.value}"
                    )
            return node.type.value

        common = None
        for value in node.enum:
            kind = literal_kind(value)
            if kind is None:
                return None
            if common is None or common == kind:
                common = kind
            elif {common, kind} == {TypeName.INTEGER.value, TypeName.NUMBER.value}:
                common = TypeName.NUMBER.value
            else:
                return None
        return common

    def _enum_members(self, values: list[Any]) -> dict[str, Any]:
        members: dict[str, Any] = {}
        for value in values:
            if any(v == value and type(v) is type(value) for v in members.values()):
                continue
            base = enum_member_name(value)
            name = base
            count = 1
            while name in members:
                name = f"{base}_{count}"
                count += 1
            members[name] = value
        return members

    def _enum_constants(self, type_name: str, members: dict[str, Any]) -> list[ConstantDef]:
        constants = []
        for member, value in members.items():
            suffix = self.identifierize(value) or "Empty"
            if suffix[0].isdigit():
                suffix = "_" + suffix
            name = self.output.add_constant_name(type_name + suffix)
            constants.append(ConstantDef(name=name, member=member, value=value))
        return constants

    def generate_reference(self, ref: str) -> TypeRef | None:
        """
        Resolve a $ref to a named type, generating the target declaration if needed.

        Returns:
            The named type, qualified when the target lives in another package,
            or None if the reference points to an unconstrained definition

        Raises:
            UnsupportedReferenceError: If the fragment is not #/definitions/<name>
            MissingDefinitionError: If the definition does not exist
            LoadError: If the referenced file cannot be loaded
        """
        parsed = parse_reference(ref)

        if parsed.is_local:
            target = self
        else:
            target = self.generator.schema_generator_for(
                self.generator.resolve_and_load(parsed.file_part, self.file_name)
            )
        document = target.document

        if parsed.targets_root:
            node = document.root
            if node is None:
                raise SchemaError(f"$ref {ref!r} points to a schema without a root")
            scope = NameScope(target.root_type_name)
        else:
            node = document.definitions.get(parsed.definition_name)
            if node is None:
                raise MissingDefinitionError(parsed.definition_name, ref)
            if is_empty_definition(node):
                return None
            scope = NameScope(safe_identifier(self.identifierize(parsed.definition_name)))

        result = target.generate_declared(node, scope)
        if result is None:
            return None

        # A target that is itself a reference may already be qualified by a third package
        package = result.package or target.output.package
        if package == self.output.package:
            return named_type(result.decl)
        qualified = result.qualified(package)
        self.output.ir.add_import(package, qualified.qualifier)
        return qualified
