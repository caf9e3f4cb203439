"""
CLI utilities for command line reconstruction and option parsing.
"""

from pathlib import Path

import click

SCHEMA_SUFFIXES = (".json", ".yaml", ".yml")


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct command line from current Click context using introspection.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    try:
        ctx = click.get_current_context()
        cli_args = ctx.params
    except RuntimeError:
        # No active context, return basic command
        return "json_schema_typegen"

    cmd_parts = ["json_schema_typegen"]
    arguments = []
    options = []

    for param in click_command.params:
        value = cli_args.get(param.name)
        if not value:
            continue

        if isinstance(param, click.Option) and value == param.default:
            continue

        values = value if isinstance(value, (list, tuple)) else [value]
        # File paths are shown by name only, so the comment does not depend on the checkout location
        formatted = [Path(str(v)).name if isinstance(v, Path) or Path(str(v)).exists() else str(v) for v in values]

        if isinstance(param, click.Argument):
            arguments.extend(formatted)
        elif isinstance(param, click.Option):
            flag = param.opts[0] if param.opts else f"--{param.name}"
            if param.is_flag:
                options.append(flag)
            else:
                for v in formatted:
                    options.extend([flag, v])

    cmd_parts.extend(arguments)
    cmd_parts.extend(options)
    return " ".join(cmd_parts)


def parse_key_value(option: str, value: str) -> tuple[str, str]:
    """
    Split an "ID=VALUE" option value.

    Raises:
        click.BadParameter: If there is no "="
    """
    key, sep, rest = value.rpartition("=")
    if not sep or not key:
        raise click.BadParameter(f"expected ID=VALUE, got {value!r}", param_hint=option)
    return key, rest


def collect_schema_files(paths: tuple[str, ...]) -> list[Path]:
    """Expand directories into the schema files they contain, sorted by path."""
    files: list[Path] = []
    for path in map(Path, paths):
        if path.is_dir():
            files.extend(sorted(p for p in path.rglob("*") if p.is_file() and p.suffix.lower() in SCHEMA_SUFFIXES))
        else:
            files.append(path)
    return files
