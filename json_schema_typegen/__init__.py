"""JSON Schema to Python types

Generates Python dataclasses and enums, with JSON decoding and encoding,
from a set of JSON Schema files that may reference each other.
"""

__version__ = "0.1.0"

from .errors import (
    ConfigurationError,
    LoadError,
    MissingDefinitionError,
    ParseError,
    SchemaCodegenError,
    SchemaError,
    SchemaModelError,
    UnsupportedReferenceError,
)
from .pipeline import (
    AtomicWriter,
    FormatterConfig,
    Generator,
    GeneratorConfig,
    OutputConfig,
    SchemaMapping,
    load_config,
)

__all__ = [
    "Generator",
    "GeneratorConfig",
    "FormatterConfig",
    "OutputConfig",
    "SchemaMapping",
    "load_config",
    "AtomicWriter",
    "SchemaCodegenError",
    "LoadError",
    "ParseError",
    "SchemaModelError",
    "ConfigurationError",
    "SchemaError",
    "UnsupportedReferenceError",
    "MissingDefinitionError",
]
