"""SmartValidator: declarative data-shape validation.

SmartValidator checks an arbitrary input value against a schema of field
types, constraints and defaults, and produces either a cleaned copy of the
data or a list of structured errors:
- Required/nullable semantics and runtime type checks per field
- Nested objects and arrays of items, with path-qualified errors
- Ordered rule chains built from a catalog of reusable rules
- Per-field transforms and defaults applied to the output
- Stop-at-first or collect-all error policies, optional strict mode

Basic usage:
    >>> from smartvalidator import SmartValidator, rules
    >>> validator = SmartValidator({
    ...     "email": {"type": "string", "required": True, "rules": [rules.string.email()]},
    ... })
    >>> result = validator.validate({"email": "invalid-email"})
    >>> result.valid
    False
    >>> result.errors[0].message
    'email must be a valid email address'
"""

__version__ = "0.1.0"
__author__ = "SmartValidator Team"

# Version info
VERSION = (0, 1, 0)

# Core exports
from smartvalidator import rules
from smartvalidator.errors import (
    ConfigurationError,
    FieldError,
    SchemaDefinitionError,
    SmartValidatorError,
)
from smartvalidator.schema import FieldSpec, Rule, ValidatorOptions, parse_schema
from smartvalidator.types import MISSING, ErrorCode, ErrorCollectionMode, FieldType
from smartvalidator.validation import SmartValidator, ValidationResult

# Package metadata
__all__ = [
    "__version__",
    "VERSION",
    "SmartValidator",
    "ValidationResult",
    "FieldSpec",
    "Rule",
    "ValidatorOptions",
    "parse_schema",
    "FieldError",
    "SmartValidatorError",
    "SchemaDefinitionError",
    "ConfigurationError",
    "FieldType",
    "ErrorCode",
    "ErrorCollectionMode",
    "MISSING",
    "rules",
]
