"""
Pipeline - JSON Schema to Python type declarations.

1. Parser: Parse JSON/YAML schema documents into SchemaType nodes
2. Analyzer: Synthesize declarations per Output, following $ref across files
3. Backend: Render each Output as a Python module with jinja2 templates
4. Formatter: Optional post-processing with ruff
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter
from .config import FormatterConfig, GeneratorConfig, OutputConfig, SchemaMapping, load_config
from .generator import Generator

__all__ = [
    "Generator",
    "GeneratorConfig",
    "FormatterConfig",
    "OutputConfig",
    "SchemaMapping",
    "load_config",
    "AtomicWriter",
]
