"""
Tests for identifier helpers.
"""

import pytest

from json_schema_typegen.utils import (
    capitalize,
    enum_member_name,
    identifier_from_file_name,
    identifierize,
    safe_identifier,
    split_identifier,
)


class TestSplitIdentifier:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("firstName", ["first", "Name"]),
            ("first_name", ["first", "name"]),
            ("first-name", ["first", "name"]),
            ("HTMLParser", ["HTMLParser"]),
            ("item2go", ["item", "2", "go"]),
            ("  spaced out  ", ["spaced", "out"]),
            ("--", []),
            ("", []),
        ],
    )
    def test_split(self, text, expected):
        assert split_identifier(text) == expected


class TestIdentifierize:
    def test_pascal_case(self):
        assert identifierize("first_name") == "FirstName"
        assert identifierize("fooBar") == "FooBar"
        assert identifierize("name") == "Name"

    def test_capitalization_override_applies_verbatim(self):
        assert identifierize("my-url", ["URL"]) == "MyURL"
        assert identifierize("user_id", ["ID"]) == "UserID"

    def test_override_must_match_whole_part(self):
        assert identifierize("identity", ["ID"]) == "Identity"

    def test_capitalize_keeps_rest_of_part(self):
        assert capitalize("xmlDoc") == "XmlDoc"
        assert capitalize("") == ""


class TestSafeIdentifier:
    def test_leading_digit(self):
        assert safe_identifier("2Fa") == "_2Fa"

    def test_keyword(self):
        assert safe_identifier("class") == "class_"

    def test_empty_uses_fallback(self):
        assert safe_identifier("", fallback="Field") == "Field"


class TestFileNames:
    @pytest.mark.parametrize(
        "file_name,expected",
        [
            ("person.json", "Person"),
            ("person.schema.json", "Person"),
            ("dir/user-profile.yaml", "UserProfile"),
            ("C:\\schemas\\order_item.yml", "OrderItem"),
        ],
    )
    def test_root_names(self, file_name, expected):
        assert identifier_from_file_name(file_name) == expected

    def test_capitalizations(self):
        assert identifier_from_file_name("api-url.json", ["URL", "API"]) == "APIURL"


class TestEnumMemberName:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("active", "ACTIVE"),
            ("in-progress", "IN_PROGRESS"),
            ("camelCase", "CAMEL_CASE"),
            ("2fa", "VALUE_2_FA"),
            ("", "EMPTY"),
            (1, "VALUE_1"),
            (-1, "VALUE_MINUS_1"),
            (1.5, "VALUE_1_5"),
            (True, "TRUE"),
            (None, "NULL"),
        ],
    )
    def test_member_names(self, value, expected):
        assert enum_member_name(value) == expected
