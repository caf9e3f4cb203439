"""
Top-level generator.

The Generator owns the configuration, the cache of loaded schema documents
and the registry of Outputs. Schema files are processed one at a time and
accumulate into the same Outputs, so a batch of files that reference each
other ends up with one consistent set of declarations.
"""

from __future__ import annotations

import keyword
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from ..errors import ConfigurationError, LoadError
from ..utils import identifier_from_file_name, safe_identifier
from .analyzer.output import Output
from .analyzer.schema_generator import SchemaGenerator
from .backends.python_backend import PythonBackend
from .config import GeneratorConfig
from .formatters import RuffFormatter
from .schema_ast import SchemaDocument, SchemaParser

GENERATION_COMMENT = "Code generated by json_schema_typegen. DO NOT EDIT."


def is_valid_package_name(name: str) -> bool:
    """True for dotted module paths such as "example.models"."""
    return all(part.isidentifier() and not keyword.iskeyword(part) for part in name.split("."))


def _truncate(d: dict, size: int) -> None:
    for key in list(d)[size:]:
        del d[key]


class Generator:
    """Generates Python declarations from JSON schema files."""

    def __init__(self, config: GeneratorConfig | None = None):
        self.config = config or GeneratorConfig()
        self.parser = SchemaParser()
        self.backend = PythonBackend(self.config)
        self.formatter = RuffFormatter()

        # Schema id -> Output; several ids may share one Output
        self._outputs: dict[str, Output] = {}

        # Canonical file path -> parsed document
        self._documents: dict[str, SchemaDocument] = {}

        self._in_transaction = False

        # Header comment of every generated module
        self.generation_comment = GENERATION_COMMENT

    def process(self, file_name: str | Path) -> None:
        """
        Load a schema file and generate its declarations.

        Args:
            file_name: Path to a .json, .yaml or .yml schema file

        Raises:
            LoadError: If the file cannot be read
            ParseError: If the file is not valid JSON/YAML
            SchemaModelError: If the file does not contain a schema object
            ConfigurationError: If the schema cannot be routed to an output
            SchemaError: If a schema node cannot be turned into a type
        """
        with self._transaction():
            path = Path(file_name)
            key = self._cache_key(path)
            document = self._documents.get(key)
            if document is None:
                document = self.parser.from_file(path)
                self._documents[key] = document
            self._add_document(str(path), document)

    def add_document(self, source_location: str, document: SchemaDocument) -> None:
        """
        Generate the declarations of an already-parsed document.

        Args:
            source_location: Where the document came from; relative $ref paths
                resolve against it and the root type name is derived from it
            document: The parsed document
        """
        with self._transaction():
            if source_location:
                self._documents.setdefault(self._cache_key(Path(source_location)), document)
            self._add_document(source_location, document)

    def _add_document(self, source_location: str, document: SchemaDocument) -> None:
        self.schema_generator_for(document, source_location).generate_root()

    def resolve_and_load(self, reference: str, from_location: str) -> SchemaDocument:
        """
        Load the document a $ref file part points to.

        Relative paths resolve against the directory of the referring file.
        A document loaded for the first time also gets its own root
        declarations generated.

        Raises:
            LoadError: If no file exists for the reference
        """
        path = Path(reference)
        if not path.is_absolute():
            path = Path(from_location).parent / path
        path = self._find_existing(path)
        if path is None:
            raise LoadError(reference, f"could not follow $ref from {from_location!r}: no such file")

        key = self._cache_key(path)
        document = self._documents.get(key)
        if document is not None:
            return document

        document = self.parser.from_file(path)
        self._documents[key] = document
        self._add_document(str(path), document)
        return document

    def _find_existing(self, path: Path) -> Path | None:
        if path.is_file():
            return path
        for extension in self.config.resolve_extensions:
            candidate = path.with_name(path.name + extension)
            if candidate.is_file():
                return candidate
        return None

    def _cache_key(self, path: Path) -> str:
        return str(path.resolve())

    def schema_generator_for(self, document: SchemaDocument, file_name: str | None = None) -> SchemaGenerator:
        """Build a SchemaGenerator bound to the Output responsible for document."""
        if file_name is None:
            file_name = document.file_name
        return SchemaGenerator(
            generator=self,
            document=document,
            output=self.output_for(document.id),
            file_name=file_name,
            root_type_name=self.root_type_name(document, file_name),
        )

    def root_type_name(self, document: SchemaDocument, file_name: str) -> str:
        """Configured root type of the document, or a name derived from its file name."""
        mapping = self.config.find_mapping(document.id)
        if mapping is not None and mapping.root_type:
            return mapping.root_type
        return safe_identifier(identifier_from_file_name(file_name, self.config.capitalizations), fallback="Root")

    def output_for(self, schema_id: str) -> Output:
        """
        Find or create the Output a schema id is routed to.

        A matching mapping with an empty file or package name does not fail
        routing on its own: the empty part falls back to the configured
        default, so a mapping may set nothing but a root type (as
        `--schema-root-type` does). Routing fails with ConfigurationError only
        when the default is empty too.
        """
        output = self._outputs.get(schema_id)
        if output is not None:
            return output

        mapping = self.config.find_mapping(schema_id)
        if mapping is not None:
            return self.begin_output(
                schema_id,
                mapping.output_name or self.config.default_output_name,
                mapping.package_name or self.config.default_package_name,
            )
        return self.begin_output(schema_id, self.config.default_output_name, self.config.default_package_name)

    def begin_output(self, schema_id: str, output_name: str, package_name: str) -> Output:
        """
        Register the Output for a schema id, reusing one that has the same file and package.

        Raises:
            ConfigurationError: If the file or package is empty or invalid, if
                the file is already claimed by another package, or if the package
                is already written to another file
        """
        if not output_name:
            raise ConfigurationError(f"unable to map schema URI {schema_id!r} to a file name")
        if not package_name:
            raise ConfigurationError(f"unable to map schema URI {schema_id!r} to a package name")
        if not is_valid_package_name(package_name):
            raise ConfigurationError(f"invalid package name {package_name!r} for schema {schema_id!r}")

        for other_id, output in self._outputs.items():
            if output.file_name != output_name:
                if output.package == package_name:
                    raise ConfigurationError(
                        f"conflict: same package ({package_name}) mapped to two different files "
                        f"({output.file_name!r} and {output_name!r}) for schemas {other_id!r} and {schema_id!r}"
                    )
                continue
            if output.package != package_name:
                raise ConfigurationError(
                    f"conflict: same file ({output_name}) mapped to two different packages "
                    f"({output.package!r} and {package_name!r}) for schemas {other_id!r} and {schema_id!r}"
                )
            self._outputs[schema_id] = output
            return output

        output = Output(output_name, package_name, self.config.warner, self.backend.RESERVED_NAMES)
        self._outputs[schema_id] = output
        return output

    def outputs(self) -> list[Output]:
        """Distinct Outputs, in the order they were created."""
        return list(dict.fromkeys(self._outputs.values()))

    def emit_all(self) -> dict[str, bytes]:
        """
        Render every Output.

        Returns:
            Mapping from output file name to generated source, sorted by file name
        """
        bodies: dict[str, list[str]] = {}
        for output in self.outputs():
            code = self.backend.generate(output.ir, self.generation_comment)
            if self.config.formatter.enabled:
                code = self.formatter.format(code, self.config.formatter)
            bodies.setdefault(output.file_name, []).append(code)
        return {name: "".join(bodies[name]).encode("utf-8") for name in sorted(bodies)}

    sources = emit_all

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        """Undo every change to Outputs and the document cache if the body fails."""
        if self._in_transaction:
            yield
            return

        checkpoints = [(output, output.checkpoint()) for output in self.outputs()]
        output_count = len(self._outputs)
        document_count = len(self._documents)
        self._in_transaction = True
        try:
            yield
        except Exception:
            for output, checkpoint in checkpoints:
                output.rollback(checkpoint)
            _truncate(self._outputs, output_count)
            _truncate(self._documents, document_count)
            raise
        finally:
            self._in_transaction = False
