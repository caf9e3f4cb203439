from pathlib import Path

import click

from .cli_utils import collect_schema_files, parse_key_value, reconstruct_command_line
from .errors import SchemaCodegenError
from .pipeline import AtomicWriter, Generator, GeneratorConfig, SchemaMapping, load_config
from .pipeline.generator import GENERATION_COMMENT

STDOUT = "-"


def _error_message(e: Exception) -> str:
    notes = getattr(e, "__notes__", ())
    return "\n".join([str(e), *(f"  {note}" for note in notes)])


def _apply_mappings(config: GeneratorConfig, schema_package, schema_output, schema_root_type) -> None:
    mappings = {m.schema_id: m for m in config.schema_mappings}

    def mapping_for(schema_id: str) -> SchemaMapping:
        if schema_id not in mappings:
            mappings[schema_id] = SchemaMapping(schema_id=schema_id)
        return mappings[schema_id]

    for value in schema_package:
        schema_id, package = parse_key_value("--schema-package", value)
        mapping_for(schema_id).package_name = package
    for value in schema_output:
        schema_id, output = parse_key_value("--schema-output", value)
        mapping_for(schema_id).output_name = output
    for value in schema_root_type:
        schema_id, root_type = parse_key_value("--schema-root-type", value)
        mapping_for(schema_id).root_type = root_type

    config.schema_mappings = list(mappings.values())


def _warn(message: str) -> None:
    click.echo(f"warning: {message}", err=True)


@click.command()
@click.option("--package", "-p", default=None, type=str, help="Default package for schemas without a mapping")
@click.option("--output", "-o", default=None, type=str, help="Default output file; '-' writes to stdout")
@click.option("--schema-package", multiple=True, metavar="ID=PKG", help="Package for a schema id")
@click.option("--schema-output", multiple=True, metavar="ID=FILE", help="Output file for a schema id")
@click.option("--schema-root-type", multiple=True, metavar="ID=NAME", help="Root type name for a schema id")
@click.option("--capitalization", multiple=True, help="Word to keep verbatim in identifiers, e.g. ID or URL")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--format/--no-format", "format_", default=None, help="Format the output with ruff")
@click.option("--output-dir", default=".", type=click.Path(file_okay=False), help="Directory output files go to")
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True))
def json_schema_typegen(
    package,
    output,
    schema_package,
    schema_output,
    schema_root_type,
    capitalization,
    config,
    format_,
    output_dir,
    files,
):
    """Generate Python types from the JSON schema FILES (directories are searched for schemas)."""
    try:
        config = load_config(config) if config is not None else GeneratorConfig()
    except SchemaCodegenError as e:
        raise click.ClickException(_error_message(e)) from e

    if package is not None:
        config.default_package_name = package
    if output is not None:
        config.default_output_name = output
    if not config.default_output_name:
        config.default_output_name = STDOUT
    if capitalization:
        config.capitalizations = [*config.capitalizations, *capitalization]
    if format_ is not None:
        config.formatter.enabled = format_
    config.warner = _warn
    _apply_mappings(config, schema_package, schema_output, schema_root_type)

    generator = Generator(config)
    generator.generation_comment = (
        f"{GENERATION_COMMENT}\nCommand: {reconstruct_command_line(click.get_current_context().command)}"
    )

    try:
        for file_name in collect_schema_files(files):
            generator.process(file_name)
        sources = generator.sources()

        writer = AtomicWriter()
        for name, content in sources.items():
            text = content.decode("utf-8")
            if name == STDOUT:
                click.echo(text, nl=False)
                continue
            path = Path(output_dir) / name
            if config.output.atomic_write:
                writer.write(path, text, validate=config.output.validate_before_write)
            else:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(text, encoding="utf-8")
    except SchemaCodegenError as e:
        raise click.ClickException(_error_message(e)) from e
    except OSError as e:
        raise click.ClickException(f"could not write output: {e}") from e


if __name__ == "__main__":
    json_schema_typegen()
