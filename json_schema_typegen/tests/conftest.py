"""
Shared fixtures for the generator tests.
"""

import importlib
import json
import shutil
import sys
from pathlib import Path

import pytest

from json_schema_typegen.pipeline import Generator, GeneratorConfig

TEST_DATA = Path(__file__).parent / "test_data"
SCHEMAS = TEST_DATA / "schemas"


@pytest.fixture
def warnings_list():
    """Warnings reported by the generator during the test."""
    return []


@pytest.fixture
def make_config(warnings_list):
    def make(**kwargs) -> GeneratorConfig:
        kwargs.setdefault("default_package_name", "models")
        kwargs.setdefault("default_output_name", "models.py")
        return GeneratorConfig(warner=warnings_list.append, **kwargs)

    return make


@pytest.fixture
def make_generator(make_config):
    def make(**kwargs) -> Generator:
        return Generator(make_config(**kwargs))

    return make


@pytest.fixture
def schema_dir(tmp_path):
    """A private copy of the schema test data."""
    target = tmp_path / "schemas"
    shutil.copytree(SCHEMAS, target)
    return target


@pytest.fixture
def write_schema(tmp_path):
    """Write a schema dict to a JSON file under tmp_path and return its path."""

    def write(name: str, schema: dict) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(schema, indent=2), encoding="utf-8")
        return path

    return write


@pytest.fixture
def import_generated(tmp_path, monkeypatch):
    """Write generated sources to disk and import one of them."""
    out_dir = tmp_path / "generated"

    def load(sources: dict[str, bytes], module: str):
        for name, content in sources.items():
            path = out_dir / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        monkeypatch.syspath_prepend(str(out_dir))
        for name in sources:
            module_name = name.removesuffix(".py").replace("/", ".")
            for loaded in [m for m in sys.modules if m == module_name or m.startswith(module_name + ".")]:
                monkeypatch.delitem(sys.modules, loaded)
        importlib.invalidate_caches()
        return importlib.import_module(module)

    return load
