"""
Python code generation backend.

Generates dataclasses, enums and type aliases from IR. Every declaration
carries the code that decodes it from JSON data (from_json) and encodes it
back (to_json); both are rendered from the declaration's data by the
expression builders below.
"""

from __future__ import annotations

import collections
from typing import Any

from ..analyzer.ir_nodes import IR, EnumDef, FieldDef, StructType, TypeDecl, TypeKind, TypeRef
from ..config import GeneratorConfig
from .base import CodeBackend, render_docstring, render_literal, wrap_comment

RUNTIME_MODULE = "json_schema_typegen.runtime"

STDLIB_MODULES = {"dataclasses", "enum", "typing"}

ENUM_BASES = {
    "string": "str, Enum",
    "integer": "int, Enum",
    "number": "float, Enum",
    "boolean": "Enum",
}


class PythonBackend(CodeBackend):
    """Python code generation backend."""

    TEMPLATE_LANG = "python"
    FILE_EXTENSION = "py"
    TEMPLATES = ("prefix", "struct", "enum", "carrier", "alias")

    TYPE_MAP = {
        "integer": "int",
        "string": "str",
        "boolean": "bool",
        "number": "float",
    }

    # Names imported into every generated module; declarations must not shadow them
    RESERVED_NAMES = frozenset({"Any", "Enum"})

    def __init__(self, config: GeneratorConfig):
        super().__init__(config)
        self.python_imports: set[tuple[str, str]] = set()

    def generate(self, ir: IR, generation_comment: str = "") -> str:
        """Generate Python code from IR."""
        self.python_imports = {("__future__", "annotations")}

        blocks = [self._render_declaration(decl) for decl in ir.declarations]

        header_lines = generation_comment.splitlines() if self.config.add_generation_comment else []
        prefix = self.templates["prefix"].render(
            header_lines=header_lines,
            imports=self._assemble_imports(ir),
        )

        sections = [prefix.rstrip("\n")] + [block.rstrip("\n") for block in blocks]
        return "\n\n\n".join(sections) + "\n"

    def _render_declaration(self, decl: TypeDecl) -> str:
        if decl.is_struct:
            return self._render_struct(decl, decl.shape)
        if decl.is_enum:
            if decl.shape.is_carrier:
                return self._render_carrier(decl, decl.shape)
            return self._render_enum(decl, decl.shape)
        return self._render_alias(decl, decl.shape)

    def _docstring(self, decl: TypeDecl) -> str:
        if not decl.comment.strip():
            return ""
        return render_docstring(decl.comment, "    ", self.line_length)

    def _render_struct(self, decl: TypeDecl, struct: StructType) -> str:
        self._use("dataclasses", "dataclass")
        self._use("typing", "Any")
        self._use_runtime("expect_object")
        if struct.required_fields:
            self._use_runtime("check_required")

        return self.templates["struct"].render(
            name=decl.name,
            name_literal=render_literal(decl.name),
            doc=self._docstring(decl),
            fields=[self._prepare_field_context(f) for f in self._order_fields(struct.fields)],
            required=render_literal(struct.required_fields) if struct.required_fields else "",
        )

    def _prepare_field_context(self, field: FieldDef) -> dict[str, Any]:
        """
        Prepare the template context for a field.

        Args:
            field: The field definition

        Returns:
            Dictionary of template variables
        """
        key = render_literal(field.json_name)
        raw = f"raw[{key}]"
        type_ref = field.type_ref
        declaration = f"{field.name}: {self.translate_type(type_ref)}"
        omit_none = False

        if field.has_default:
            declaration += f" = {self.format_default_value(field)}"
            self._use_runtime("is_absent")
            default = self.decode_expr(type_ref, render_literal(field.default_value))
            decode = f"{default} if is_absent(raw, {key}) else {self.decode_expr(type_ref, raw)}"
            encode = self.encode_expr(type_ref, f"self.{field.name}")
        elif type_ref.kind == TypeKind.OPTIONAL:
            declaration += " = None"
            self._use_runtime("is_absent")
            decode = f"None if is_absent(raw, {key}) else {self.decode_expr(type_ref.elem, raw)}"
            encode = self.encode_expr(type_ref.elem, f"self.{field.name}")
            omit_none = True
        else:
            decode = self.decode_expr(type_ref, raw)
            encode = self.encode_expr(type_ref, f"self.{field.name}")

        comment_lines = wrap_comment(field.comment, self.line_length - 6) if field.comment.strip() else []
        return {
            "name": field.name,
            "key": key,
            "declaration": declaration,
            "comment_lines": comment_lines,
            "decode": decode,
            "encode": encode,
            "omit_none": omit_none,
        }

    def _render_enum(self, decl: TypeDecl, enum_def: EnumDef) -> str:
        self._use("enum", "Enum")
        self._use("typing", "Any")
        self._use_runtime("decode_enum_value")

        return self.templates["enum"].render(
            name=decl.name,
            bases=ENUM_BASES[enum_def.value_type],
            doc=self._docstring(decl),
            values_name=enum_def.values_name,
            values_literal=render_literal(enum_def.values),
            members=[{"name": name, "literal": render_literal(value)} for name, value in enum_def.members.items()],
            decode_args=f"data, {enum_def.values_name}, {render_literal(enum_def.value_type)}",
            constants=enum_def.constants,
        )

    def _render_carrier(self, decl: TypeDecl, enum_def: EnumDef) -> str:
        self._use("dataclasses", "dataclass")
        self._use("typing", "Any")
        self._use_runtime("decode_enum_value")

        return self.templates["carrier"].render(
            name=decl.name,
            doc=self._docstring(decl),
            values_name=enum_def.values_name,
            values_literal=render_literal(enum_def.values),
        )

    def _render_alias(self, decl: TypeDecl, type_ref: TypeRef) -> str:
        self._use("typing", "Any")
        comment_lines = wrap_comment(decl.comment, self.line_length - 2) if decl.comment.strip() else []
        return self.templates["alias"].render(
            name=decl.name,
            comment_lines=comment_lines,
            annotation=self.translate_type(type_ref),
            decode=self.decode_expr(type_ref, "data"),
            encode=self.encode_expr(type_ref, "value"),
        )

    def translate_type(self, type_ref: TypeRef) -> str:
        """Translate IR type to Python type string."""
        match type_ref.kind:
            case TypeKind.PRIMITIVE:
                return self.TYPE_MAP[type_ref.name]
            case TypeKind.NAMED:
                return self._qualified_name(type_ref)
            case TypeKind.ARRAY:
                return f"list[{self.translate_type(type_ref.elem)}]"
            case TypeKind.MAP:
                self._use("typing", "Any")
                return "dict[str, Any]"
            case TypeKind.OPTIONAL:
                return f"{self.translate_type(type_ref.elem)} | None"
        self._use("typing", "Any")
        return "Any"

    def format_default_value(self, field: FieldDef) -> str:
        """Format a field default as a plain literal, or a default_factory for anything mutable."""
        type_ref = field.type_ref
        value = field.default_value
        if type_ref.kind == TypeKind.PRIMITIVE and _literal_fits(value, type_ref.name):
            if type_ref.name == "number":
                value = float(value)
            return render_literal(value)
        self._use("dataclasses", "field")
        return f"field(default_factory=lambda: {self.decode_expr(type_ref, render_literal(value))})"

    def decode_expr(self, type_ref: TypeRef, value: str, depth: int = 0) -> str:
        """
        Build the expression that decodes the JSON data in value into type_ref.

        Args:
            type_ref: Type to decode into
            value: Expression holding the JSON data; it may be evaluated more than once
            depth: Nesting depth, used to name comprehension variables

        Returns:
            A Python expression
        """
        match type_ref.kind:
            case TypeKind.PRIMITIVE:
                self._use_runtime("decode_primitive")
                return f"decode_primitive({value}, {render_literal(type_ref.name)})"
            case TypeKind.MAP:
                self._use_runtime("expect_object")
                return f'dict(expect_object({value}, "object"))'
            case TypeKind.ARRAY:
                self._use_runtime("expect_list")
                item = f"item{depth}"
                return f"[{self.decode_expr(type_ref.elem, item, depth + 1)} for {item} in expect_list({value})]"
            case TypeKind.OPTIONAL:
                return f"None if {value} is None else {self.decode_expr(type_ref.elem, value, depth)}"
            case TypeKind.NAMED:
                if type_ref.decl.is_alias:
                    return f"{self._qualified_name(type_ref, 'decode_')}({value})"
                return f"{self._qualified_name(type_ref)}.from_json({value})"
        return value

    def encode_expr(self, type_ref: TypeRef, value: str, depth: int = 0) -> str:
        """Build the expression that turns the Python value in value back into JSON data."""
        match type_ref.kind:
            case TypeKind.ARRAY:
                item = f"item{depth}"
                elem = self.encode_expr(type_ref.elem, item, depth + 1)
                if elem == item:
                    return f"list({value})"
                return f"[{elem} for {item} in {value}]"
            case TypeKind.OPTIONAL:
                inner = self.encode_expr(type_ref.elem, value, depth)
                if inner == value:
                    return value
                return f"None if {value} is None else {inner}"
            case TypeKind.MAP:
                return f"dict({value})"
            case TypeKind.NAMED:
                if type_ref.decl.is_alias:
                    return f"{self._qualified_name(type_ref, 'encode_')}({value})"
                return f"{value}.to_json()"
        return value

    def _qualified_name(self, type_ref: TypeRef, prefix: str = "") -> str:
        name = prefix + type_ref.decl.name
        if type_ref.qualifier:
            return f"{type_ref.qualifier}.{name}"
        return name

    def _use(self, module: str, name: str) -> None:
        self.python_imports.add((module, name))

    def _use_runtime(self, name: str) -> None:
        self.python_imports.add((RUNTIME_MODULE, name))

    def _assemble_imports(self, ir: IR) -> list[str]:
        """Assemble Python import statements."""
        # Group imports by module
        import_groups: dict[str, set[str]] = collections.defaultdict(set)
        for module, name in self.python_imports:
            import_groups[module].add(name)

        stdlib_groups = {m: import_groups[m] for m in import_groups if m in STDLIB_MODULES}
        third_party_groups = {m: import_groups[m] for m in import_groups if m not in STDLIB_MODULES and m != "__future__"}

        sections: list[list[str]] = []

        if "__future__" in import_groups:
            sections.append([f"from __future__ import {', '.join(sorted(import_groups['__future__']))}"])

        if stdlib_groups:
            sections.append([f"from {m} import {', '.join(sorted(stdlib_groups[m]))}" for m in sorted(stdlib_groups)])

        if third_party_groups:
            sections.append(
                [f"from {m} import {', '.join(sorted(third_party_groups[m]))}" for m in sorted(third_party_groups)]
            )

        # Other generated packages
        if ir.imports:
            lines = []
            for imp in sorted(ir.imports, key=lambda i: (i.module, i.alias)):
                if imp.module == imp.alias:
                    lines.append(f"import {imp.module}")
                else:
                    lines.append(f"import {imp.module} as {imp.alias}")
            sections.append(lines)

        assembled: list[str] = []
        for section in sections:
            if assembled:
                assembled.append("")
            assembled.extend(section)
        return assembled


def _literal_fits(value: Any, kind: str) -> bool:
    """True if value can be used as-is for a field of the given primitive kind."""
    if isinstance(value, bool):
        return kind == "boolean"
    match kind:
        case "string":
            return isinstance(value, str)
        case "integer":
            return isinstance(value, int)
        case "number":
            return isinstance(value, (int, float))
    return False
