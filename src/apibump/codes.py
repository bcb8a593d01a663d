"""Code constants for apibump.api results.

These constants prevent stringly-typed codes and ensure client code uses
the correct change and validation codes.
"""

from enum import Enum


class ChangeCode(str, Enum):
    """Change summary codes: <KIND>_<ADDED|REMOVED|CHANGED>."""

    MODULE_ADDED = "MODULE_ADDED"
    MODULE_REMOVED = "MODULE_REMOVED"

    UNION_ADDED = "UNION_ADDED"
    UNION_REMOVED = "UNION_REMOVED"
    UNION_CHANGED = "UNION_CHANGED"

    ALIAS_ADDED = "ALIAS_ADDED"
    ALIAS_REMOVED = "ALIAS_REMOVED"
    ALIAS_CHANGED = "ALIAS_CHANGED"

    VALUE_ADDED = "VALUE_ADDED"
    VALUE_REMOVED = "VALUE_REMOVED"
    VALUE_CHANGED = "VALUE_CHANGED"

    BINOP_ADDED = "BINOP_ADDED"
    BINOP_REMOVED = "BINOP_REMOVED"
    BINOP_CHANGED = "BINOP_CHANGED"

    @classmethod
    def for_entity(cls, kind: str, outcome: str) -> "ChangeCode":
        """Code for an entity kind ("union", "alias", "value", "binop") and outcome ("added", ...)."""
        return cls(f"{kind.upper()}_{outcome.upper()}")


class ValidationCode(str, Enum):
    """Validation error codes."""

    INVALID_STRUCTURE = "INVALID_STRUCTURE"
    DUPLICATE_NAME = "DUPLICATE_NAME"
    INVALID_VERSION = "INVALID_VERSION"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    FILE_UNREADABLE = "FILE_UNREADABLE"
    INVALID_JSON = "INVALID_JSON"
