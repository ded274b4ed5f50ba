"""Core type definitions for SmartValidator.

This module defines the fundamental types used throughout the validator:
- FieldType: The closed set of value categories a field can declare
- ErrorCollectionMode: Whether validation stops at the first error or collects all
- ErrorCode: Error categories attached to every reported field error
- MISSING: Sentinel marking a value that is absent (as opposed to None)

None is the null-marker. A key that is not present in the input, a field spec
without a default, and the value of a "required" error are all MISSING.
"""

from enum import Enum
from typing import Any


class FieldType(str, Enum):
    """Value categories a field spec can declare.

    The engine switches on this tag to decide the runtime type check and
    whether nested ``fields`` (object) or ``items`` (array) are consulted.
    """
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    ANY = "any"


class ErrorCollectionMode(str, Enum):
    """Error collection policies.

    FIRST stops the whole traversal at the first error produced anywhere.
    ALL keeps walking every field and reports every error in traversal order.
    """
    FIRST = "first"
    ALL = "all"


class ErrorCode(str, Enum):
    """Categories of field errors.

    Errors re-surfaced from nested objects or array items keep the code of
    the check that produced them.
    """
    REQUIRED = "required"
    NULL_NOT_ALLOWED = "null_not_allowed"
    UNKNOWN_FIELD = "unknown_field"
    INVALID_TYPE = "invalid_type"
    RULE_VIOLATION = "rule_violation"


class _MissingType:
    """Type of the MISSING sentinel."""

    _instance = None

    def __new__(cls) -> "_MissingType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_MissingType":
        return self

    def __deepcopy__(self, memo: Any) -> "_MissingType":
        return self

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Any = _MissingType()


__all__ = [
    "FieldType",
    "ErrorCollectionMode",
    "ErrorCode",
    "MISSING",
]
