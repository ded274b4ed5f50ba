"""Rules for numeric values."""

from typing import Sequence, Union

from smartvalidator.rules._checks import is_number, join_options
from smartvalidator.schema import Rule

Number = Union[int, float]


def min(limit: Number) -> Rule:
    return Rule(
        validate=lambda value: is_number(value) and value >= limit,
        message=lambda value, field: f"{field} must be at least {limit}",
    )


def max(limit: Number) -> Rule:
    return Rule(
        validate=lambda value: is_number(value) and value <= limit,
        message=lambda value, field: f"{field} must be at most {limit}",
    )


def positive() -> Rule:
    return Rule(
        validate=lambda value: is_number(value) and value > 0,
        message=lambda value, field: f"{field} must be positive",
    )


def negative() -> Rule:
    return Rule(
        validate=lambda value: is_number(value) and value < 0,
        message=lambda value, field: f"{field} must be negative",
    )


def _is_integer(value: object) -> bool:
    if isinstance(value, float):
        return value.is_integer()
    return is_number(value)


def integer() -> Rule:
    """Accept whole numbers, including floats such as ``3.0``."""
    return Rule(
        validate=_is_integer,
        message=lambda value, field: f"{field} must be an integer",
    )


def one_of(options: Sequence[Number]) -> Rule:
    allowed = list(options)
    return Rule(
        validate=lambda value: is_number(value) and value in allowed,
        message=lambda value, field: f"{field} must be one of: {join_options(allowed)}",
    )
