"""Schema definition types for SmartValidator.

A schema maps field names to FieldSpec records. Each FieldSpec declares a
FieldType, required/nullable flags, an ordered chain of Rule records, an
optional transform, an optional default and, depending on the type, a nested
schema (``fields`` for objects) or an item spec (``items`` for arrays).

Schemas can be written with FieldSpec instances or in dict form:

    >>> schema = parse_schema({
    ...     "name": {"type": "string", "required": True},
    ...     "tags": {"type": "array", "items": {"type": "string"}},
    ... })
    >>> schema["tags"].items.type
    <FieldType.STRING: 'string'>

Dict-form specs are checked against a JSON Schema meta-schema at construction
time, so authoring mistakes surface as SchemaDefinitionError instead of odd
validation results later on.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from jsonschema import Draft7Validator
from typing_extensions import Literal, TypeAlias

from smartvalidator.errors import ConfigurationError, SchemaDefinitionError
from smartvalidator.types import MISSING, ErrorCollectionMode, FieldType

MessageFactory: TypeAlias = Callable[[Any, str], str]
ErrorCollectionModeName: TypeAlias = Literal["first", "all"]


@dataclass(frozen=True)
class Rule:
    """A single declarative constraint on a field value.

    Attributes:
        validate: Predicate returning True when the value satisfies the rule
        message: Literal error message, or a callable ``(value, field_name)``
            producing one

    Examples:
        >>> rule = Rule(validate=lambda v: v > 0, message=lambda v, f: f"{f} must be positive")
        >>> rule.check(-1)
        False
        >>> rule.format_message(-1, "age")
        'age must be positive'
    """
    validate: Callable[[Any], bool]
    message: Union[str, MessageFactory]

    def check(self, value: Any) -> bool:
        return bool(self.validate(value))

    def format_message(self, value: Any, field_name: str) -> str:
        if callable(self.message):
            return self.message(value, field_name)
        return self.message


FIELD_SPEC_META_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "type": {"enum": [t.value for t in FieldType]},
        "required": {"type": "boolean"},
        "nullable": {"type": "boolean"},
        "rules": {"type": "array"},
        "transform": {},
        "default": {},
        "fields": {"type": "object"},
        "items": {},
    },
    "required": ["type"],
    "additionalProperties": False,
}

_field_spec_validator = Draft7Validator(FIELD_SPEC_META_SCHEMA)


@dataclass(frozen=True)
class FieldSpec:
    """Per-field configuration within a schema.

    ``type`` accepts a FieldType or its string value. ``fields`` is only
    consulted when the type is object and ``items`` only when it is array;
    a container field with neither is opaque and is not recursed into.

    Attributes:
        type: Declared value category
        required: Whether the field must be present (and non-null unless nullable)
        nullable: Whether an explicit None is accepted
        rules: Ordered rule chain evaluated after the type check
        transform: Optional function applied to the validated value for output
        default: Literal value, or zero-argument callable, used when the field
            is absent from the assembled output
        fields: Nested schema for object fields
        items: Item spec for array fields
    """
    type: FieldType
    required: bool = False
    nullable: bool = False
    rules: Tuple[Rule, ...] = ()
    transform: Optional[Callable[[Any], Any]] = None
    default: Any = MISSING
    fields: Optional[Dict[str, "FieldSpec"]] = None
    items: Optional["FieldSpec"] = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, FieldType):
            try:
                object.__setattr__(self, "type", FieldType(self.type))
            except ValueError:
                raise SchemaDefinitionError(
                    f"Unknown field type {self.type!r}",
                    problems=[f"type must be one of: {', '.join(t.value for t in FieldType)}"],
                ) from None
        object.__setattr__(self, "rules", tuple(_coerce_rule(r) for r in self.rules))
        if self.fields is not None:
            object.__setattr__(self, "fields", parse_schema(self.fields))
        if self.items is not None and not isinstance(self.items, FieldSpec):
            if not isinstance(self.items, Mapping):
                raise SchemaDefinitionError(
                    f"items must be a FieldSpec or a dict, got {type(self.items).__name__}",
                    problems=["items: expected a field spec"],
                )
            object.__setattr__(self, "items", FieldSpec.from_dict(self.items))

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    def resolve_default(self) -> Any:
        """Return the default, calling it when it is a zero-argument factory.

        Factories give every validation call its own instance, so a default
        like ``list`` never shares state between results.
        """
        if callable(self.default):
            return self.default()
        return self.default

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], path: Optional[str] = None) -> "FieldSpec":
        """Create a FieldSpec from its dict form.

        Raises:
            SchemaDefinitionError: If the dict does not describe a valid field spec
        """
        candidate = dict(data)
        if isinstance(candidate.get("rules"), tuple):
            candidate["rules"] = list(candidate["rules"])
        problems = []
        for error in _field_spec_validator.iter_errors(candidate):
            location = ".".join(str(p) for p in error.path)
            problems.append(f"{location}: {error.message}" if location else error.message)
        if problems:
            where = f" for field '{path}'" if path else ""
            raise SchemaDefinitionError(
                f"Invalid field spec{where}: {'; '.join(problems)}",
                path=path,
                problems=problems,
            )

        return cls(
            type=FieldType(data["type"]),
            required=data.get("required", False),
            nullable=data.get("nullable", False),
            rules=tuple(data.get("rules", ())),
            transform=data.get("transform"),
            default=data.get("default", MISSING),
            fields=data.get("fields"),
            items=data.get("items"),
        )


Schema: TypeAlias = Dict[str, FieldSpec]


def parse_schema(definition: Mapping[str, Any]) -> Schema:
    """Normalize a schema definition into ``{name: FieldSpec}``.

    Values may already be FieldSpec instances or dict-form field specs.
    Field order is preserved.

    Raises:
        SchemaDefinitionError: If the definition is not a mapping or any
            field spec is malformed
    """
    if not isinstance(definition, Mapping):
        raise SchemaDefinitionError(
            f"Schema must be a mapping of field names to field specs, got {type(definition).__name__}"
        )

    schema: Schema = {}
    for name, spec in definition.items():
        if isinstance(spec, FieldSpec):
            schema[name] = spec
        elif isinstance(spec, Mapping):
            try:
                schema[name] = FieldSpec.from_dict(spec, path=name)
            except SchemaDefinitionError as exc:
                if exc.path is None or exc.path == name:
                    raise
                # Re-root errors raised from nested fields/items.
                raise SchemaDefinitionError(
                    exc.message, path=f"{name}.{exc.path}", problems=exc.problems
                ) from exc
        else:
            raise SchemaDefinitionError(
                f"Field '{name}' must be a FieldSpec or a dict, got {type(spec).__name__}",
                path=name,
            )
    return schema


def _coerce_rule(rule: Any) -> Rule:
    if isinstance(rule, Rule):
        return rule
    if isinstance(rule, Mapping) and "validate" in rule and "message" in rule:
        return Rule(validate=rule["validate"], message=rule["message"])
    if hasattr(rule, "validate") and hasattr(rule, "message"):
        return Rule(validate=rule.validate, message=rule.message)
    raise SchemaDefinitionError(
        f"Rules must provide 'validate' and 'message', got {type(rule).__name__}"
    )


_OPTION_KEYS = {
    "transformEnabled": "transform_enabled",
    "transform_enabled": "transform_enabled",
    "strictMode": "strict_mode",
    "strict_mode": "strict_mode",
    "errorCollectionMode": "error_collection_mode",
    "error_collection_mode": "error_collection_mode",
}


@dataclass(frozen=True)
class ValidatorOptions:
    """Configuration flags for a SmartValidator.

    Attributes:
        transform_enabled: Apply field transforms to the output (default True)
        strict_mode: Reject and drop keys not declared in the schema (default False)
        error_collection_mode: Stop at the first error or collect all (default all)

    Examples:
        >>> opts = ValidatorOptions.from_dict({"strictMode": True, "errorCollectionMode": "first"})
        >>> opts.error_collection_mode
        <ErrorCollectionMode.FIRST: 'first'>
    """
    transform_enabled: bool = True
    strict_mode: bool = False
    error_collection_mode: Union[ErrorCollectionMode, ErrorCollectionModeName] = field(
        default=ErrorCollectionMode.ALL
    )

    def __post_init__(self) -> None:
        if not isinstance(self.error_collection_mode, ErrorCollectionMode):
            try:
                mode = ErrorCollectionMode(self.error_collection_mode)
            except ValueError:
                raise ConfigurationError(
                    f"errorCollectionMode must be 'first' or 'all', got {self.error_collection_mode!r}"
                ) from None
            object.__setattr__(self, "error_collection_mode", mode)

    @property
    def stop_at_first(self) -> bool:
        return self.error_collection_mode == ErrorCollectionMode.FIRST

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "transformEnabled": self.transform_enabled,
            "strictMode": self.strict_mode,
            "errorCollectionMode": self.error_collection_mode.value,
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ValidatorOptions":
        """Create ValidatorOptions from a dict with camelCase or snake_case keys.

        Raises:
            ConfigurationError: If the dict holds unknown keys or an invalid mode
        """
        if not data:
            return cls()
        unknown: List[str] = [key for key in data if key not in _OPTION_KEYS]
        if unknown:
            raise ConfigurationError(f"Unknown validator options: {', '.join(sorted(unknown))}")
        return cls(**{_OPTION_KEYS[key]: value for key, value in data.items()})


__all__ = [
    "Rule",
    "FieldSpec",
    "Schema",
    "ValidatorOptions",
    "FIELD_SPEC_META_SCHEMA",
    "MessageFactory",
    "ErrorCollectionModeName",
    "parse_schema",
]
