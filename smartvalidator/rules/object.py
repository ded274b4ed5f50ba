"""Rules for object values."""

from collections.abc import Mapping
from typing import Sequence

from smartvalidator.rules._checks import join_options
from smartvalidator.schema import Rule


def has_keys(keys: Sequence[str]) -> Rule:
    required = list(keys)
    return Rule(
        validate=lambda value: isinstance(value, Mapping) and all(k in value for k in required),
        message=lambda value, field: f"{field} must have the following keys: {join_options(required)}",
    )
