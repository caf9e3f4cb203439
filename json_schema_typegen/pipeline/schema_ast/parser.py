"""
JSON Schema parser that builds the node tree.

Reads JSON or YAML documents and turns them into SchemaType nodes without
resolving references.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from ...errors import LoadError, ParseError, SchemaModelError
from .nodes import SchemaDocument, SchemaType, TypeName

YAML_SUFFIXES = {".yaml", ".yml"}


class SchemaParser:
    """Parses JSON Schema documents."""

    def from_file(self, path: str | Path) -> SchemaDocument:
        """
        Load and parse a schema file.

        Args:
            path: Path to a .json, .yaml or .yml file

        Returns:
            The parsed SchemaDocument

        Raises:
            LoadError: If the file cannot be read
            ParseError: If the content is not valid JSON/YAML
            SchemaModelError: If the content is not a schema
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError(str(path), str(e)) from e
        return self.from_text(text, str(path))

    def from_text(self, text: str, file_name: str = "") -> SchemaDocument:
        """Parse schema source text; YAML is used for .yaml/.yml file names."""
        if Path(file_name).suffix.lower() in YAML_SUFFIXES:
            try:
                data = yaml.safe_load(text)
            except yaml.YAMLError as e:
                raise ParseError(f"{file_name}: invalid YAML: {e}") from e
        else:
            try:
                data = json.loads(text)
            except json.JSONDecodeError as e:
                raise ParseError(f"{file_name or '<string>'}: invalid JSON: {e}") from e
        document = self.from_dict(data)
        document.file_name = file_name
        return document

    def from_dict(self, data: Any) -> SchemaDocument:
        """Build a SchemaDocument from already-decoded JSON data."""
        if isinstance(data, bool):
            return SchemaDocument(root=SchemaType(source_path="#"))
        if data is None:
            return SchemaDocument()
        if not isinstance(data, dict):
            raise SchemaModelError(f"schema must be an object, got {type(data).__name__}")

        schema_id = data.get("$id", data.get("id", ""))
        if not isinstance(schema_id, str):
            raise SchemaModelError("schema id must be a string")

        definitions = {}
        raw_definitions = data.get("definitions") or data.get("$defs") or {}
        if not isinstance(raw_definitions, dict):
            raise SchemaModelError("definitions must be an object")
        for name, def_schema in raw_definitions.items():
            definitions[name] = self._parse_node(def_schema, f"#/definitions/{name}")

        return SchemaDocument(
            id=schema_id,
            root=self._parse_node(data, "#"),
            definitions=definitions,
        )

    def _parse_node(self, schema: Any, path: str) -> SchemaType:
        # Boolean schemas accept anything (true) or nothing (false); both are unconstrained here
        if isinstance(schema, bool):
            return SchemaType(source_path=path)
        if not isinstance(schema, dict):
            raise SchemaModelError(f"{path}: schema must be an object, got {type(schema).__name__}")

        node = SchemaType(
            type=self._parse_type(schema.get("type"), path),
            required=self._parse_required(schema.get("required", []), path),
            default=schema.get("default"),
            description=schema.get("description") or "",
            ref=schema.get("$ref") or "",
            source_path=path,
        )

        properties = schema.get("properties") or {}
        if not isinstance(properties, dict):
            raise SchemaModelError(f"{path}: properties must be an object")
        for name, prop_schema in properties.items():
            node.properties[name] = self._parse_node(prop_schema, f"{path}/properties/{name}")

        # Objects may omit "type" when they declare properties
        if node.type is None and node.properties:
            node.type = TypeName.OBJECT

        if "items" in schema:
            items = schema["items"]
            if isinstance(items, list):
                raise ParseError(f"{path}: tuple-typed items are not supported")
            node.items = self._parse_node(items, f"{path}/items")

        if "enum" in schema:
            values = schema["enum"]
            if not isinstance(values, list):
                raise SchemaModelError(f"{path}: enum must be an array")
            node.enum = list(values)

        return node

    def _parse_type(self, value: Any, path: str) -> TypeName | None:
        if value is None:
            return None
        if isinstance(value, list):
            # ["string", "null"] is treated as "string"
            names = [v for v in value if v != TypeName.NULL.value]
            if not names:
                return TypeName.NULL if value else None
            if len(names) > 1:
                raise ParseError(f"{path}: multiple types {value!r} are not supported")
            value = names[0]
        try:
            return TypeName(value)
        except ValueError:
            raise ParseError(f"{path}: unknown type {value!r}") from None

    def _parse_required(self, value: Any, path: str) -> list[str]:
        # Draft 3 style "required": true on a property is ignored
        if isinstance(value, bool):
            return []
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise SchemaModelError(f"{path}: required must be an array of strings")
        return list(value)
