"""
Tests for the helpers generated code imports.
"""

import pytest

from json_schema_typegen.runtime import (
    DecodeError,
    InvalidEnumValue,
    RequiredFieldMissing,
    check_required,
    decode_enum_value,
    decode_primitive,
    expect_list,
    expect_object,
    is_absent,
    json_equal,
)


class TestJsonEqual:
    @pytest.mark.parametrize(
        "a,b",
        [(1, 1.0), ("a", "a"), ([1, {"x": None}], [1, {"x": None}]), ({"a": 1, "b": 2}, {"b": 2, "a": 1})],
    )
    def test_equal(self, a, b):
        assert json_equal(a, b)

    @pytest.mark.parametrize("a,b", [(True, 1), (False, 0), ("1", 1), ([1], [1, 2]), ({"a": 1}, {"a": 2}), (None, 0)])
    def test_not_equal(self, a, b):
        assert not json_equal(a, b)


class TestRequired:
    def test_missing_and_null_are_absent(self):
        raw = {"a": None, "b": 0}
        assert is_absent(raw, "a")
        assert is_absent(raw, "c")
        assert not is_absent(raw, "b")

    def test_check_required(self):
        check_required({"name": ""}, ["name"])
        with pytest.raises(RequiredFieldMissing, match="field name: required") as info:
            check_required({"name": None}, ["name"])
        assert info.value.field == "name"


class TestDecodePrimitive:
    def test_accepts_matching_values(self):
        assert decode_primitive("x", "string") == "x"
        assert decode_primitive(3, "integer") == 3
        assert decode_primitive(False, "boolean") is False

    def test_integral_float_is_integer(self):
        value = decode_primitive(3.0, "integer")
        assert value == 3 and isinstance(value, int)

    def test_number_is_float(self):
        value = decode_primitive(2, "number")
        assert value == 2.0 and isinstance(value, float)

    @pytest.mark.parametrize("value,kind", [(True, "integer"), ("3", "integer"), (1.5, "integer"), (1, "string")])
    def test_rejects(self, value, kind):
        with pytest.raises(DecodeError):
            decode_primitive(value, kind)


class TestContainers:
    def test_expect_object(self):
        assert expect_object({"a": 1}, "T") == {"a": 1}
        with pytest.raises(DecodeError, match="T: expected a JSON object, got list"):
            expect_object([], "T")

    def test_expect_list(self):
        assert expect_list([1]) == [1]
        with pytest.raises(DecodeError, match="expected a JSON array"):
            expect_list({"a": 1})


class TestDecodeEnumValue:
    def test_allowed(self):
        assert decode_enum_value(2, [1, 2, 3], "integer") == 2

    def test_not_allowed(self):
        with pytest.raises(InvalidEnumValue) as info:
            decode_enum_value(4, [1, 2, 3], "integer")
        assert info.value.value == 4
        assert info.value.allowed == [1, 2, 3]

    def test_wrong_type_is_invalid_enum_value(self):
        with pytest.raises(InvalidEnumValue):
            decode_enum_value("2", [1, 2, 3], "integer")

    def test_mixed_values_keep_types_apart(self):
        allowed = ["1", 1, None]
        assert decode_enum_value(None, allowed) is None
        assert decode_enum_value("1", allowed) == "1"
        with pytest.raises(InvalidEnumValue):
            decode_enum_value(True, allowed)

    def test_errors_are_value_errors(self):
        assert issubclass(InvalidEnumValue, ValueError)
        assert issubclass(RequiredFieldMissing, DecodeError)
