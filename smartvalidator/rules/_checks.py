"""Value category checks shared by the rule constructors."""

from typing import Any


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def join_options(options: Any) -> str:
    return ", ".join(str(option) for option in options)
