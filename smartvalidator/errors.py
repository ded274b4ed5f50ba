"""Structured error types for SmartValidator.

Validation outcomes are never raised. Every failed check becomes a FieldError
record in the ValidationResult, with a dotted/bracketed field path
(e.g. "user.profile.firstName" or "tags[2]"), a human-readable message and the
offending value.

Exceptions are reserved for authoring mistakes detected while building a
validator: a malformed schema definition (SchemaDefinitionError) or invalid
options (ConfigurationError).
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional

from smartvalidator.types import MISSING, ErrorCode


@dataclass(frozen=True)
class FieldError:
    """A single field validation failure.

    Attributes:
        field: Path of the failing field, dot-joined for nested objects and
            bracket-indexed for array items
        message: Human-readable error description
        value: The offending value (MISSING for absent required fields)
        code: Error category

    Examples:
        >>> err = FieldError(field="email", message="email must be a valid email address",
        ...                  value="nope")
        >>> err.prefixed("contact").field
        'contact.email'
    """
    field: str
    message: str
    value: Any = MISSING
    code: ErrorCode = ErrorCode.RULE_VIOLATION

    def prefixed(self, prefix: str) -> "FieldError":
        """Return a copy re-rooted under a parent path.

        The message, value and code are preserved verbatim.
        """
        return replace(self, field=f"{prefix}.{self.field}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        result: Dict[str, Any] = {
            "field": self.field,
            "code": self.code.value if isinstance(self.code, ErrorCode) else self.code,
            "message": self.message,
        }
        if self.value is not MISSING:
            result["value"] = self.value
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldError":
        """Create FieldError from dict."""
        code = data.get("code", ErrorCode.RULE_VIOLATION)
        if isinstance(code, str):
            code = ErrorCode(code)
        return cls(
            field=data["field"],
            message=data["message"],
            value=data.get("value", MISSING),
            code=code,
        )


class SmartValidatorError(Exception):
    """Base class for errors raised while building a validator."""


class SchemaDefinitionError(SmartValidatorError):
    """Raised when a schema definition or rule fragment is malformed.

    Attributes:
        path: Path of the offending field spec, if known
        problems: Individual problems found in the definition
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        problems: Optional[List[str]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.problems = problems or []


class ConfigurationError(SmartValidatorError, ValueError):
    """Raised when validator options are invalid."""


__all__ = [
    "FieldError",
    "SmartValidatorError",
    "SchemaDefinitionError",
    "ConfigurationError",
]
