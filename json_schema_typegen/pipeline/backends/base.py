"""
Base class for code generation backends.

Defines the interface a backend implements and the helpers shared by the
templates: literal rendering, comment wrapping and field ordering.
"""

from __future__ import annotations

import math
import textwrap
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import jinja2

from ...errors import SchemaError
from ..analyzer.ir_nodes import IR, FieldDef, TypeRef
from ..config import GeneratorConfig


def render_literal(value: Any) -> str:
    """
    Render a JSON value as a Python literal.

    The output is canonical (the same value always renders the same way) and
    is always a single valid expression, whatever the strings contain.

    Raises:
        SchemaError: For values that are not JSON data
    """
    if value is None:
        return "None"
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isfinite(value):
            return repr(value)
        return f'float("{value}")'
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, list):
        return "[" + ", ".join(render_literal(v) for v in value) + "]"
    if isinstance(value, dict):
        items = []
        for k, v in value.items():
            if not isinstance(k, str):
                raise SchemaError(f"cannot render object key {k!r}; keys must be strings")
            items.append(f"{_quote(k)}: {render_literal(v)}")
        return "{" + ", ".join(items) + "}"
    raise SchemaError(f"cannot render value {value!r} of type {type(value).__name__}")


def _quote(text: str) -> str:
    # repr() always gives a valid literal; prefer double quotes when that needs no escaping
    quoted = repr(text)
    if quoted.startswith("'") and '"' not in text:
        quoted = '"' + quoted[1:-1] + '"'
    return quoted


def _printable(text: str) -> str:
    return "".join(c if c.isprintable() or c == "\n" else " " for c in text)


def wrap_comment(text: str, width: int) -> list[str]:
    """Split a description into lines of at most width characters, keeping paragraph breaks."""
    lines: list[str] = []
    for paragraph in _printable(text).strip().split("\n"):
        wrapped = textwrap.wrap(paragraph, width=max(width, 20))
        lines.extend(wrapped or [""])
    return lines


def render_docstring(text: str, indent: str, width: int) -> str:
    """Render a description as an indented docstring block."""
    lines = wrap_comment(text, width - len(indent) - 6)
    lines = [line.replace("\\", "\\\\").replace('"""', '\\"\\"\\"') for line in lines]
    if lines[-1].endswith('"'):
        lines[-1] = lines[-1][:-1] + '\\"'
    if len(lines) == 1:
        return f'{indent}"""{lines[0]}"""'
    body = "\n".join(f"{indent}{line}" if line else "" for line in lines[1:])
    return f'{indent}"""{lines[0]}\n{body}\n{indent}"""'


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Type mapping from schema types to language types
    TYPE_MAP: dict[str, str] = {}

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    # Template names, without the language extension
    TEMPLATES: tuple[str, ...] = ()

    def __init__(self, config: GeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Generator configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
        )
        self.templates = {
            name: self.jinja_env.get_template(f"{name}.{self.FILE_EXTENSION}.jinja2") for name in self.TEMPLATES
        }

    @property
    def line_length(self) -> int:
        return self.config.formatter.line_length

    @abstractmethod
    def generate(self, ir: IR, generation_comment: str = "") -> str:
        """
        Generate code from IR.

        Args:
            ir: The intermediate representation of one output module
            generation_comment: Header comment for the generated file

        Returns:
            Generated code as a string
        """

    @abstractmethod
    def translate_type(self, type_ref: TypeRef) -> str:
        """
        Translate an IR type to a language-specific type string.

        Args:
            type_ref: The type reference

        Returns:
            Language-specific type string
        """

    @abstractmethod
    def format_default_value(self, field: FieldDef) -> str:
        """
        Format the default of a field for the target language.

        Args:
            field: A field with a default value

        Returns:
            Formatted default value string
        """

    def _order_fields(self, fields: list[FieldDef]) -> list[FieldDef]:
        """
        Order fields for dataclass compatibility.

        Fields without a default must come before fields with one; the
        relative order within each group is kept.
        """
        required_fields = []
        optional_fields = []

        for field in fields:
            if field.is_required and not field.has_default:
                required_fields.append(field)
            else:
                optional_fields.append(field)

        return required_fields + optional_fields
