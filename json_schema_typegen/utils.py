"""
Utility functions for turning schema names into Python identifiers.
"""

from __future__ import annotations

import keyword
import re
from collections.abc import Iterable

_LOWER = "lower"
_UPPER = "upper"
_DIGIT = "digit"
_SEPARATOR = "separator"

_FILE_SUFFIXES = (".json", ".yaml", ".yml")


def _char_class(c: str) -> str:
    if c.islower():
        return _LOWER
    if c.isupper():
        return _UPPER
    if c.isdigit():
        return _DIGIT
    return _SEPARATOR


def split_identifier(text: str) -> list[str]:
    """Split text on case boundaries and separator characters.

    An upper-case run followed by lower-case letters stays in one part, so
    acronyms are kept together with the word they start.

    Examples:
        "firstName" -> ["first", "Name"]
        "first_name" -> ["first", "name"]
        "HTMLParser" -> ["HTMLParser"]
        "item2go" -> ["item", "2", "go"]
        "--" -> []
    """
    parts: list[str] = []
    state = None
    start = 0
    for i, c in enumerate(text):
        next_state = _char_class(c)
        if next_state == state:
            continue
        if state == _SEPARATOR:
            start = i
        elif not (state == _UPPER and next_state == _LOWER):
            if i > start:
                parts.append(text[start:i])
            start = i
        state = next_state
    if state is not None and state != _SEPARATOR and len(text) > start:
        parts.append(text[start:])
    return parts


def capitalize(part: str, capitalizations: Iterable[str] = ()) -> str:
    """Upper-case the first letter of part, unless an override matches it."""
    if not part:
        return ""
    for override in capitalizations:
        if override.lower() == part.lower():
            return override
    return part[0].upper() + part[1:]


def identifierize(text: str, capitalizations: Iterable[str] = ()) -> str:
    """Convert arbitrary text into a PascalCase identifier.

    Examples:
        "first_name" -> "FirstName"
        "my-url" with capitalizations ["URL"] -> "MyURL"
        "fooBar" -> "FooBar"
    """
    capitalizations = list(capitalizations)
    return "".join(capitalize(part, capitalizations) for part in split_identifier(text))


def safe_identifier(name: str, fallback: str = "Value") -> str:
    """Make an identifier usable as a Python name."""
    if not name:
        return fallback
    if name[0].isdigit():
        name = "_" + name
    if keyword.iskeyword(name):
        name = name + "_"
    return name


def identifier_from_file_name(file_name: str, capitalizations: Iterable[str] = ()) -> str:
    """Derive a type name from a schema file name, e.g. "user-profile.schema.json" -> "UserProfile"."""
    base = re.split(r"[\\/]", file_name)[-1]
    for suffix in _FILE_SUFFIXES:
        if base.endswith(suffix):
            base = base[: -len(suffix)]
            break
    if base.endswith(".schema"):
        base = base[: -len(".schema")]
    return identifierize(base, capitalizations)


def enum_member_name(value) -> str:
    """Build an UPPER_SNAKE enum member name for a literal value."""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if value is None:
        return "NULL"
    if isinstance(value, (int, float)):
        text = repr(value).replace("-", "MINUS_").replace(".", "_").replace("+", "")
        return "VALUE_" + text.upper()
    parts = split_identifier(str(value))
    if not parts:
        return "EMPTY"
    name = "_".join(part.upper() for part in parts)
    if name[0].isdigit():
        name = "VALUE_" + name
    return name
