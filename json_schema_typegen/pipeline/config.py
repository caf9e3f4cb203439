"""
Configuration for the code generator pipeline.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from ..errors import ConfigurationError

logger = logging.getLogger("json_schema_typegen")


def log_warning(message: str) -> None:
    """Default warner: report non-fatal generation problems through logging."""
    logger.warning(message)


@dataclass
class SchemaMapping:
    """Routes a schema id to an output file and package."""

    schema_id: str = ""

    # Dotted module path of the generated package, e.g. "example.models"; empty means the default package
    package_name: str = ""

    # Output file name; empty means "use the default output name"
    output_name: str = ""

    # Explicit name for the schema's root type
    root_type: str = ""

    @staticmethod
    def from_dict(d: dict) -> SchemaMapping:
        return SchemaMapping(
            schema_id=d.get("schema_id", ""),
            package_name=d.get("package_name", ""),
            output_name=d.get("output_name", ""),
            root_type=d.get("root_type", ""),
        )


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        validate_before_write: Whether to parse generated code before writing it
        atomic_write: Whether to use atomic file writes
    """

    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class FormatterConfig:
    """Configuration for post-processing formatters."""

    # Whether formatting with ruff is enabled
    enabled: bool = False

    # Line length for the formatter and for wrapping comments
    line_length: int = 100

    # Python version target (e.g., "py312", "py313")
    target_version: str = "py312"


@dataclass
class GeneratorConfig:
    """Configuration options for code generation."""

    # Schema id -> output routing
    schema_mappings: list[SchemaMapping] = field(default_factory=list)

    # Words whose capitalization is kept verbatim in identifiers (e.g. "ID", "URL")
    capitalizations: list[str] = field(default_factory=list)

    # Used for schemas that have no mapping
    default_package_name: str = ""
    default_output_name: str = ""

    # Extensions tried when a referenced file does not exist as written
    resolve_extensions: list[str] = field(default_factory=lambda: [".json", ".yaml", ".yml"])

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Called with human-readable warnings that do not stop generation
    warner: Callable[[str], None] = log_warning

    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    output: OutputConfig = field(default_factory=OutputConfig)

    def find_mapping(self, schema_id: str) -> SchemaMapping | None:
        for mapping in self.schema_mappings:
            if mapping.schema_id == schema_id:
                return mapping
        return None

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary."""
        config = GeneratorConfig()
        for k, v in d.items():
            if k == "schema_mappings":
                config.schema_mappings = [SchemaMapping.from_dict(m) for m in v]
            elif k == "formatter" and isinstance(v, dict):
                config.formatter = FormatterConfig(**v)
            elif k == "output" and isinstance(v, dict):
                config.output = OutputConfig(**v)
            elif k == "warner":
                raise ConfigurationError("warner cannot be set from a dictionary")
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary (the warner is not included)."""
        return {
            "schema_mappings": [
                {
                    "schema_id": m.schema_id,
                    "package_name": m.package_name,
                    "output_name": m.output_name,
                    "root_type": m.root_type,
                }
                for m in self.schema_mappings
            ],
            "capitalizations": self.capitalizations,
            "default_package_name": self.default_package_name,
            "default_output_name": self.default_output_name,
            "resolve_extensions": self.resolve_extensions,
            "add_generation_comment": self.add_generation_comment,
            "formatter": {
                "enabled": self.formatter.enabled,
                "line_length": self.formatter.line_length,
                "target_version": self.formatter.target_version,
            },
            "output": {
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }


def load_config(path: str | Path) -> GeneratorConfig:
    """Load a GeneratorConfig from a JSON or YAML file."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigurationError(f"could not read config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"config {path} must contain an object")
    try:
        return GeneratorConfig.from_dict(data)
    except TypeError as e:
        raise ConfigurationError(f"invalid config {path}: {e}") from e
