#!/usr/bin/env python3

import click
import pytest

from json_schema_typegen.cli_utils import collect_schema_files, parse_key_value, reconstruct_command_line
from json_schema_typegen.json_schema_typegen import json_schema_typegen


class TestCliUtils:
    """Test cases for CLI utilities"""

    def test_reconstruct_command_line_without_context(self):
        """Test command reconstruction without active Click context (fallback)"""
        result = reconstruct_command_line(json_schema_typegen)
        assert result == "json_schema_typegen"

    def test_reconstruct_command_line_with_context(self, tmp_path):
        """File arguments are shown by name and options at their default are left out"""
        schema = tmp_path / "person.json"
        schema.write_text("{}")
        ctx = click.Context(json_schema_typegen)
        ctx.params = {
            "package": "models",
            "output": None,
            "schema_package": ("a=pkga",),
            "output_dir": ".",
            "files": (str(schema),),
        }
        with ctx:
            result = reconstruct_command_line(json_schema_typegen)
        assert result == "json_schema_typegen person.json --package models --schema-package a=pkga"

    def test_parse_key_value(self):
        """The value is split on the last '=' so schema URIs may contain one"""
        assert parse_key_value("--schema-package", "https://example.com/a.json=pkga") == (
            "https://example.com/a.json",
            "pkga",
        )
        assert parse_key_value("--schema-output", "a?x=1=out.py") == ("a?x=1", "out.py")

    @pytest.mark.parametrize("value", ["novalue", "=pkg"])
    def test_parse_key_value_rejects(self, value):
        with pytest.raises(click.BadParameter):
            parse_key_value("--schema-package", value)

    def test_collect_schema_files(self, tmp_path):
        """Directories are searched recursively for schema files"""
        (tmp_path / "sub").mkdir()
        for name in ["b.json", "a.yaml", "sub/c.yml", "notes.txt"]:
            (tmp_path / name).write_text("{}")
        single = tmp_path / "b.json"

        files = collect_schema_files((str(tmp_path), str(single)))
        assert [f.relative_to(tmp_path).as_posix() for f in files] == ["a.yaml", "b.json", "sub/c.yml", "b.json"]


if __name__ == "__main__":
    pytest.main([__file__])
