"""Rules for string values."""

import re
from typing import Optional, Sequence, Union
from urllib.parse import urlsplit

from dateutil.parser import isoparse

from smartvalidator.rules._checks import join_options
from smartvalidator.schema import Rule

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
_SCHEME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*$")


def min(length: int) -> Rule:
    return Rule(
        validate=lambda value: isinstance(value, str) and len(value) >= length,
        message=lambda value, field: f"{field} must be at least {length} characters long",
    )


def max(length: int) -> Rule:
    return Rule(
        validate=lambda value: isinstance(value, str) and len(value) <= length,
        message=lambda value, field: f"{field} must be at most {length} characters long",
    )


def pattern(regex: Union[str, "re.Pattern[str]"], message: Optional[str] = None) -> Rule:
    """Match the value against a regular expression (``re.search`` semantics)."""
    compiled = re.compile(regex) if isinstance(regex, str) else regex
    return Rule(
        validate=lambda value: isinstance(value, str) and compiled.search(value) is not None,
        message=message or (lambda value, field: f"{field} does not match the required pattern"),
    )


def email() -> Rule:
    return Rule(
        validate=lambda value: isinstance(value, str) and EMAIL_PATTERN.match(value) is not None,
        message=lambda value, field: f"{field} must be a valid email address",
    )


def _is_url(value: object) -> bool:
    if not isinstance(value, str) or not value or value != value.strip():
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    if not parts.scheme or not _SCHEME_PATTERN.match(parts.scheme):
        return False
    return bool(parts.netloc or parts.path)


def url() -> Rule:
    """Accept absolute URLs: a scheme followed by an authority or a path."""
    return Rule(
        validate=_is_url,
        message=lambda value, field: f"{field} must be a valid URL",
    )


def one_of(options: Sequence[str]) -> Rule:
    allowed = list(options)
    return Rule(
        validate=lambda value: value in allowed,
        message=lambda value, field: f"{field} must be one of: {join_options(allowed)}",
    )


def _is_datetime(value: object) -> bool:
    if not isinstance(value, str):
        return False
    try:
        isoparse(value)
    except (ValueError, OverflowError):
        return False
    return True


def datetime() -> Rule:
    """Accept ISO 8601 dates and timestamps, e.g. ``2024-05-01T12:30:00Z``."""
    return Rule(
        validate=_is_datetime,
        message=lambda value, field: f"{field} must be a valid ISO 8601 datetime",
    )
