"""Recursive field-validation engine for SmartValidator.

This module provides SmartValidator, which walks a schema tree against a data
tree and produces a ValidationResult: either a cleaned copy of the data (with
transforms and defaults applied) or the ordered list of field errors.

Validation runs in three passes per schema level:
1. Required fields, in schema order
2. Data keys, in data order: strict-mode unknown keys, pass-through of
   undeclared keys, field validation and output assembly
3. Defaults for schema fields still absent from the output

Nested objects and arrays of objects are validated by a fresh SmartValidator
scoped to the sub-schema, sharing the parent's options.
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from smartvalidator.errors import FieldError
from smartvalidator.schema import FieldSpec, Schema, ValidatorOptions, parse_schema
from smartvalidator.types import MISSING, ErrorCode, FieldType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating data against a schema.

    Attributes:
        valid: Whether the data passed all validation checks
        errors: Field-level errors in traversal order (empty if valid)
        data: The assembled output (transforms and defaults applied) when
            valid, None otherwise

    Examples:
        >>> validator = SmartValidator({'name': FieldSpec(type='string', required=True)})
        >>> result = validator.validate({'name': 'Ada'})
        >>> result.valid
        True
        >>> result.data
        {'name': 'Ada'}
    """
    valid: bool
    errors: List[FieldError]
    data: Optional[Dict[str, Any]] = None

    @property
    def missing_fields(self) -> List[str]:
        """Paths of required fields that were not provided."""
        return [e.field for e in self.errors if e.code == ErrorCode.REQUIRED]

    @property
    def invalid_fields(self) -> List[str]:
        """Paths of fields that were provided but failed validation."""
        return [e.field for e in self.errors if e.code != ErrorCode.REQUIRED]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        result: Dict[str, Any] = {
            "valid": self.valid,
            "errors": [e.to_dict() for e in self.errors],
        }
        if self.data is not None:
            result["data"] = self.data
        return result


class SmartValidator:
    """Declarative data-shape validator.

    Attributes:
        schema: Normalized schema (field name -> FieldSpec)
        options: Transform, strict-mode and error-collection settings

    Examples:
        >>> from smartvalidator import rules
        >>> validator = SmartValidator(
        ...     {
        ...         'username': {'type': 'string', 'required': True,
        ...                      'rules': [rules.string.min(3)]},
        ...         'age': {'type': 'number', 'default': 18},
        ...     },
        ...     errorCollectionMode='all',
        ... )
        >>> validator.validate({'username': 'ada'}).data
        {'username': 'ada', 'age': 18}

        >>> result = validator.validate({'username': 'al'})
        >>> result.errors[0].message
        'username must be at least 3 characters long'
    """

    def __init__(
        self,
        schema: Union[Schema, Dict[str, Any]],
        options: Optional[Union[ValidatorOptions, Dict[str, Any]]] = None,
        **overrides: Any,
    ) -> None:
        """Initialize the validator with a schema and options.

        Args:
            schema: Mapping of field names to FieldSpec instances or dict-form specs
            options: ValidatorOptions, or a dict using camelCase or snake_case keys
            **overrides: Individual options taking precedence over ``options``

        Raises:
            SchemaDefinitionError: If the schema is malformed
            ConfigurationError: If the options are invalid
        """
        self.schema = parse_schema(schema)
        if isinstance(options, ValidatorOptions):
            if overrides:
                options = ValidatorOptions.from_dict({**options.to_dict(), **overrides})
            self.options = options
        else:
            self.options = ValidatorOptions.from_dict({**(options or {}), **overrides})
        logger.debug(
            "Built validator for %d field(s) with options %s", len(self.schema), self.options.to_dict()
        )

    def validate(self, data: Any) -> ValidationResult:
        """Validate data against the schema.

        Args:
            data: The mapping to validate. Anything else is handled best-effort:
                every schema field is treated as absent.

        Returns:
            ValidationResult with the output data when valid, the errors otherwise
        """
        stop_at_first = self.options.stop_at_first
        record = data if isinstance(data, Mapping) else {}
        errors: List[FieldError] = []
        output: Dict[str, Any] = {}

        for name, spec in self.schema.items():
            value = record.get(name, MISSING)
            if spec.required and (value is MISSING or (value is None and not spec.nullable)):
                errors.append(FieldError(
                    field=name,
                    message=f"Field '{name}' is required",
                    code=ErrorCode.REQUIRED,
                ))
                if stop_at_first:
                    return self._fail(errors)

        for name, value in record.items():
            spec = self.schema.get(name)
            if spec is None:
                if self.options.strict_mode:
                    errors.append(FieldError(
                        field=name,
                        message=f"Unknown field '{name}'",
                        value=value,
                        code=ErrorCode.UNKNOWN_FIELD,
                    ))
                    if stop_at_first:
                        return self._fail(errors)
                else:
                    output[name] = value
                continue

            field_errors = self._validate_field(name, value, spec)
            if field_errors:
                errors.extend(field_errors)
                if stop_at_first:
                    return self._fail(errors)
            elif self.options.transform_enabled and spec.transform is not None:
                output[name] = spec.transform(value)
            else:
                output[name] = value

        for name, spec in self.schema.items():
            if output.get(name, MISSING) is MISSING and spec.has_default:
                output[name] = spec.resolve_default()

        if errors:
            return self._fail(errors)
        # A transform may have produced MISSING for a field without a default.
        output = {k: v for k, v in output.items() if v is not MISSING}
        logger.debug("Validation passed for %d field(s)", len(output))
        return ValidationResult(valid=True, errors=[], data=output)

    def _fail(self, errors: List[FieldError]) -> ValidationResult:
        logger.debug(
            "Validation failed with %d error(s) (mode=%s)",
            len(errors),
            self.options.error_collection_mode.value,
        )
        return ValidationResult(valid=False, errors=errors, data=None)

    def _validate_field(self, name: str, value: Any, spec: FieldSpec) -> List[FieldError]:
        """Validate a single value against its field spec.

        Returns the field's errors in order: nested object errors, array item
        errors, then rule violations. Checks past a null, absent or mistyped
        value are skipped.
        """
        if value is None:
            if spec.nullable:
                return []
            return [FieldError(
                field=name,
                message=f"Field '{name}' cannot be null",
                value=None,
                code=ErrorCode.NULL_NOT_ALLOWED,
            )]

        if value is MISSING and not spec.required:
            return []

        if not self._check_type(value, spec.type):
            return [FieldError(
                field=name,
                message=f"Field '{name}' must be of type {spec.type.value}",
                value=value,
                code=ErrorCode.INVALID_TYPE,
            )]

        stop_at_first = self.options.stop_at_first
        errors: List[FieldError] = []

        if spec.type == FieldType.OBJECT and spec.fields is not None:
            errors.extend(self._validate_nested(name, value, spec.fields))
            if errors and stop_at_first:
                return errors

        if spec.type == FieldType.ARRAY and spec.items is not None:
            items = spec.items
            for index, item in enumerate(value):
                item_name = f"{name}[{index}]"
                if items.type == FieldType.OBJECT and items.fields is not None:
                    errors.extend(self._validate_nested(item_name, item, items.fields))
                else:
                    errors.extend(self._validate_field(item_name, item, items))
                if errors and stop_at_first:
                    return errors

        for rule in spec.rules:
            if not rule.check(value):
                errors.append(FieldError(
                    field=name,
                    message=rule.format_message(value, name),
                    value=value,
                    code=ErrorCode.RULE_VIOLATION,
                ))
                if stop_at_first:
                    break

        return errors

    def _validate_nested(self, prefix: str, value: Any, schema: Schema) -> List[FieldError]:
        logger.debug("Delegating nested validation for '%s'", prefix)
        nested = SmartValidator(schema, self.options)
        result = nested.validate(value)
        # Nested transforms and defaults are not part of the parent's output.
        return [error.prefixed(prefix) for error in result.errors]

    @staticmethod
    def _check_type(value: Any, field_type: FieldType) -> bool:
        if field_type == FieldType.STRING:
            return isinstance(value, str)
        if field_type == FieldType.NUMBER:
            return (
                isinstance(value, (int, float))
                and not isinstance(value, bool)
                and not (isinstance(value, float) and math.isnan(value))
            )
        if field_type == FieldType.BOOLEAN:
            return isinstance(value, bool)
        if field_type == FieldType.OBJECT:
            return isinstance(value, Mapping)
        if field_type == FieldType.ARRAY:
            return isinstance(value, (list, tuple))
        return field_type == FieldType.ANY


__all__ = [
    "SmartValidator",
    "ValidationResult",
]
