"""
Reference parsing for $ref values.

Only two forms are supported: "<file>#/definitions/<name>" (the file part
is optional) and a bare "<file>" that refers to the root type of that file.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...errors import UnsupportedReferenceError

DEFINITIONS_PREFIX = "/definitions/"


@dataclass(frozen=True)
class ParsedRef:
    """A $ref split into its file part and definition name."""

    ref: str = ""

    # Path of the referenced file, relative to the referring file; empty for local references
    file_part: str = ""

    # Definition name; empty when the reference targets the root type
    definition_name: str = ""

    @property
    def is_local(self) -> bool:
        return not self.file_part

    @property
    def targets_root(self) -> bool:
        return not self.definition_name


def parse_reference(ref: str) -> ParsedRef:
    """
    Split a $ref into file part and definition name.

    Args:
        ref: The raw $ref value, e.g. "other.json#/definitions/Foo"

    Returns:
        The ParsedRef

    Raises:
        UnsupportedReferenceError: If the fragment is not of the form /definitions/<name>
    """
    file_part, sep, fragment = ref.partition("#")
    if not sep or not fragment:
        return ParsedRef(ref=ref, file_part=file_part)
    # The prefix is matched case-insensitively; the name itself is kept as written
    if not fragment.lower().startswith(DEFINITIONS_PREFIX):
        raise UnsupportedReferenceError(ref)
    name = fragment[len(DEFINITIONS_PREFIX) :]
    if not name or "/" in name:
        raise UnsupportedReferenceError(ref)
    return ParsedRef(ref=ref, file_part=file_part, definition_name=name)
