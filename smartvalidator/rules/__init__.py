"""Catalog of ready-made rules.

Every constructor is a pure factory returning a Rule record, grouped by the
kind of value it checks:

    >>> from smartvalidator import rules
    >>> rules.string.min(3).format_message("ab", "username")
    'username must be at least 3 characters long'

The engine does not depend on this catalog. Any Rule (or any object exposing
``validate`` and ``message``) can be placed in a field's rule chain.

The group modules and some constructors are named after the kind of check
(``object``, ``string``, ``min``, ``max``, ``datetime``), so inside this package those
names refer to the rules, not the builtins or standard-library modules.
"""

from typing import Any, Callable, Union

from smartvalidator.rules import array, number, object, string
from smartvalidator.rules.jsonschema_rule import json_schema
from smartvalidator.schema import MessageFactory, Rule


def custom(
    predicate: Callable[[Any], bool],
    message: Union[str, MessageFactory],
) -> Rule:
    """Build a rule from an arbitrary predicate and message."""
    return Rule(validate=predicate, message=message)


__all__ = [
    "array",
    "number",
    "object",
    "string",
    "custom",
    "json_schema",
]
