"""Rules for array values."""

import json
from typing import Any, Callable, Optional

from smartvalidator.rules._checks import is_sequence
from smartvalidator.schema import Rule


def min(length: int) -> Rule:
    return Rule(
        validate=lambda value: is_sequence(value) and len(value) >= length,
        message=lambda value, field: f"{field} must contain at least {length} items",
    )


def max(length: int) -> Rule:
    return Rule(
        validate=lambda value: is_sequence(value) and len(value) <= length,
        message=lambda value, field: f"{field} must contain at most {length} items",
    )


# Tags serialized unhashable keys so they never equal a hashable key.
_UNHASHABLE = object()


def _serialize(item: Any) -> str:
    return json.dumps(item, default=repr)


def unique(key: Optional[Callable[[Any], Any]] = None) -> Rule:
    """Require distinct items.

    Without ``key`` items are compared by their JSON serialization, so equal
    dicts and lists count as duplicates. With ``key`` the keys it returns are
    compared instead; unhashable keys such as lists or dicts are compared by
    their JSON serialization too.
    """
    extract = key or _serialize

    def validate(value: Any) -> bool:
        if not is_sequence(value):
            return False
        seen = set()
        for item in value:
            item_key = extract(item)
            try:
                hash(item_key)
            except TypeError:
                item_key = (_UNHASHABLE, _serialize(item_key))
            if item_key in seen:
                return False
            seen.add(item_key)
        return True

    return Rule(
        validate=validate,
        message=lambda value, field: f"{field} must contain unique items",
    )
