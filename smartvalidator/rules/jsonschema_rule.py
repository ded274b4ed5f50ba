"""Rule backed by a JSON Schema fragment.

Lets a field reuse an existing JSON Schema (Draft 7) for checks the rule
catalog does not cover:

    >>> rule = json_schema({"type": "string", "format": "date", "maxLength": 10})
    >>> rule.check("2024-01-01")
    True
"""

from typing import Any, Dict, Mapping, Optional

from jsonschema import Draft7Validator, FormatChecker
from jsonschema.exceptions import SchemaError

from smartvalidator.errors import SchemaDefinitionError
from smartvalidator.schema import Rule


def json_schema(fragment: Mapping[str, Any], message: Optional[str] = None) -> Rule:
    """Build a rule that passes when the value satisfies ``fragment``.

    Raises:
        SchemaDefinitionError: If the fragment is not a valid JSON Schema
    """
    schema: Dict[str, Any] = dict(fragment)
    try:
        Draft7Validator.check_schema(schema)
    except SchemaError as exc:
        raise SchemaDefinitionError(
            f"Invalid JSON schema fragment: {exc.message}",
            problems=[exc.message],
        ) from exc
    validator = Draft7Validator(schema, format_checker=FormatChecker())

    return Rule(
        validate=validator.is_valid,
        message=message or (lambda value, field: f"{field} does not match the expected JSON schema"),
    )
