"""
Runtime support for generated code.

Modules emitted by the generator import these helpers to decode JSON values
into the generated dataclasses and enums. They only depend on the standard
library so generated code stays light.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

_PRIMITIVE_TYPES: dict[str, tuple[type, ...]] = {
    "string": (str,),
    "integer": (int,),
    "number": (int, float),
    "boolean": (bool,),
}


class DecodeError(ValueError):
    """Raised when a JSON value does not match a generated type."""

    pass


class RequiredFieldMissing(DecodeError):
    """Raised when a required field is absent or null."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"field {field}: required")


class InvalidEnumValue(DecodeError):
    """Raised when a value is not one of the allowed enum values."""

    def __init__(self, value: Any, allowed: list[Any]):
        self.value = value
        self.allowed = list(allowed)
        super().__init__(f"invalid value (expected one of {self.allowed!r}): {value!r}")


def json_equal(a: Any, b: Any) -> bool:
    """Deep equality between JSON values, keeping booleans apart from numbers."""
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if a.keys() != b.keys():
            return False
        return all(json_equal(a[k], b[k]) for k in a)
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(json_equal(x, y) for x, y in zip(a, b))
    return type(a) is type(b) and a == b


def expect_object(data: Any, type_name: str) -> Mapping[str, Any]:
    """Check that data is a JSON object."""
    if not isinstance(data, Mapping):
        raise DecodeError(f"{type_name}: expected a JSON object, got {type(data).__name__}")
    return data


def expect_list(data: Any) -> list[Any]:
    """Check that data is a JSON array."""
    if not isinstance(data, list):
        raise DecodeError(f"expected a JSON array, got {type(data).__name__}")
    return data


def is_absent(raw: Mapping[str, Any], key: str) -> bool:
    """True if key is missing from raw or explicitly null."""
    return raw.get(key) is None


def check_required(raw: Mapping[str, Any], fields: Iterable[str]) -> None:
    """Raise RequiredFieldMissing for the first required key that is absent or null."""
    for name in fields:
        if is_absent(raw, name):
            raise RequiredFieldMissing(name)


def decode_primitive(value: Any, kind: str) -> Any:
    """Check a JSON value against a primitive schema type and return it."""
    expected = _PRIMITIVE_TYPES[kind]
    if isinstance(value, bool) and kind != "boolean":
        raise DecodeError(f"expected {kind}, got boolean")
    if kind == "integer" and isinstance(value, float) and value.is_integer():
        return int(value)
    if not isinstance(value, expected):
        raise DecodeError(f"expected {kind}, got {type(value).__name__}")
    if kind == "number":
        return float(value)
    return value


def decode_enum_value(value: Any, allowed: list[Any], kind: str | None = None) -> Any:
    """Decode value into the enum's base type and check it against the allowed values.

    kind is None for enums whose values have no common primitive type.
    """
    if kind is not None:
        try:
            value = decode_primitive(value, kind)
        except DecodeError:
            raise InvalidEnumValue(value, allowed) from None
    for expected in allowed:
        if json_equal(value, expected):
            return value
    raise InvalidEnumValue(value, allowed)
