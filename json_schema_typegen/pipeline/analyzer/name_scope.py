"""
Name scopes for building declaration names from their nesting path.
"""

from __future__ import annotations


class NameScope(tuple):
    """Immutable path of name fragments, e.g. ("Order", "Items", "Elem") -> "OrderItemsElem"."""

    __slots__ = ()

    def __new__(cls, *segments: str):
        return super().__new__(cls, segments)

    def add(self, segment: str) -> NameScope:
        return NameScope(*self, segment)

    def string(self) -> str:
        return "".join(self)

    def __str__(self) -> str:
        return self.string()

    def __repr__(self) -> str:
        return f"NameScope({', '.join(repr(s) for s in self)})"
