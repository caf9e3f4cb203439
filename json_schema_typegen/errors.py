"""
Exceptions raised while generating code from JSON schemas.

Errors raised by the *generated* code at decode time live in
:mod:`json_schema_typegen.runtime` instead.
"""

from __future__ import annotations


class SchemaCodegenError(Exception):
    """Base class for all generator-time errors."""

    pass


class LoadError(SchemaCodegenError):
    """Raised when a schema file cannot be read or a referenced path cannot be resolved."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"could not load schema {path!r}: {reason}")


class ParseError(SchemaCodegenError):
    """Raised when a schema document is not valid JSON/YAML."""

    pass


class SchemaModelError(ParseError):
    """Raised when a parsed document does not have the shape of a schema."""

    pass


class ConfigurationError(SchemaCodegenError):
    """Raised for invalid configuration or conflicting output routing."""

    pass


class SchemaError(SchemaCodegenError):
    """Raised when a schema node cannot be turned into a type."""

    pass


class UnsupportedReferenceError(SchemaError):
    """Raised for $ref pointers other than #/definitions/<name>."""

    def __init__(self, ref: str):
        self.ref = ref
        super().__init__(f"unsupported $ref format; must point to definition within file: {ref!r}")


class MissingDefinitionError(SchemaError):
    """Raised when a $ref names a definition the target schema does not have."""

    def __init__(self, name: str, ref: str):
        self.name = name
        self.ref = ref
        super().__init__(f"definition {name!r} (from ref {ref!r}) does not exist in schema")


class OutputValidationError(SchemaCodegenError):
    """Raised when generated code fails validation before being written."""

    pass
