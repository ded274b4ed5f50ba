"""Unit tests for the rule catalog.

Tests cover:
- String, number, array and object rule constructors
- Message wording for each rule
- Custom rules and JSON Schema backed rules
"""

import re

import pytest

from smartvalidator import SmartValidator, rules
from smartvalidator.errors import SchemaDefinitionError
from smartvalidator.schema import Rule


class TestStringRules:
    """Test rules.string constructors."""

    def test_min_and_max_length(self):
        """Should bound string length inclusively."""
        assert rules.string.min(3).check("abc") is True
        assert rules.string.min(3).check("ab") is False
        assert rules.string.max(3).check("abc") is True
        assert rules.string.max(3).check("abcd") is False
        assert rules.string.min(1).check(5) is False

    def test_length_messages(self):
        """Should name the field and the limit."""
        assert rules.string.min(3).format_message("ab", "username") == (
            "username must be at least 3 characters long"
        )
        assert rules.string.max(20).format_message("x" * 21, "username") == (
            "username must be at most 20 characters long"
        )

    def test_pattern(self):
        """Should search the value with the given regex."""
        rule = rules.string.pattern(r"^[A-Z]{3}$")

        assert rule.check("ABC") is True
        assert rule.check("abc") is False
        assert rule.format_message("abc", "code") == "code does not match the required pattern"

    def test_pattern_with_compiled_regex_and_message(self):
        """Should accept compiled patterns and custom messages."""
        rule = rules.string.pattern(re.compile(r"\d"), "must contain a digit")

        assert rule.check("a1") is True
        assert rule.format_message("a", "pw") == "must contain a digit"

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("john@example.com", True),
            ("first.last+tag@sub.example.org", True),
            ("invalid-email", False),
            ("a@b.c", False),
            ("@example.com", False),
            (None, False),
        ],
    )
    def test_email(self, value, expected):
        """Should accept common email addresses only."""
        assert rules.string.email().check(value) is expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("https://example.com", True),
            ("http://localhost:8080/path?q=1", True),
            ("mailto:team@example.com", True),
            ("example.com", False),
            ("http://", False),
            ("not a url", False),
            (" https://example.com", False),
            (42, False),
        ],
    )
    def test_url(self, value, expected):
        """Should accept absolute URLs only."""
        assert rules.string.url().check(value) is expected

    def test_url_message(self):
        """Should describe the expected URL."""
        assert rules.string.url().format_message("x", "site") == "site must be a valid URL"

    def test_one_of(self):
        """Should accept only listed options and list them in the message."""
        rule = rules.string.one_of(["red", "green"])

        assert rule.check("red") is True
        assert rule.check("blue") is False
        assert rule.format_message("blue", "color") == "color must be one of: red, green"

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2024-05-01", True),
            ("2024-05-01T12:30:00Z", True),
            ("2024-05-01T12:30:00+02:00", True),
            ("2024-13-01", False),
            ("yesterday", False),
            (20240501, False),
        ],
    )
    def test_datetime(self, value, expected):
        """Should accept ISO 8601 dates and timestamps."""
        assert rules.string.datetime().check(value) is expected


class TestNumberRules:
    """Test rules.number constructors."""

    def test_min_and_max(self):
        """Should bound numbers inclusively."""
        assert rules.number.min(18).check(18) is True
        assert rules.number.min(18).check(17.9) is False
        assert rules.number.max(10).check(10) is True
        assert rules.number.max(10).check(11) is False
        assert rules.number.min(0).check("5") is False

    def test_messages(self):
        """Should name the field and the limit."""
        assert rules.number.min(18).format_message(3, "age") == "age must be at least 18"
        assert rules.number.max(99).format_message(100, "age") == "age must be at most 99"
        assert rules.number.positive().format_message(0, "n") == "n must be positive"
        assert rules.number.negative().format_message(0, "n") == "n must be negative"
        assert rules.number.integer().format_message(1.5, "n") == "n must be an integer"

    def test_sign(self):
        """Should exclude zero from both positive and negative."""
        assert rules.number.positive().check(0.1) is True
        assert rules.number.positive().check(0) is False
        assert rules.number.negative().check(-1) is True
        assert rules.number.negative().check(0) is False

    @pytest.mark.parametrize(
        "value, expected",
        [(3, True), (3.0, True), (-2, True), (3.5, False), (True, False), ("3", False)],
    )
    def test_integer(self, value, expected):
        """Should accept whole numbers regardless of representation."""
        assert rules.number.integer().check(value) is expected

    def test_one_of(self):
        """Should accept only listed numbers."""
        rule = rules.number.one_of([1, 2, 3])

        assert rule.check(2) is True
        assert rule.check(4) is False
        assert rule.check(True) is False
        assert rule.format_message(4, "level") == "level must be one of: 1, 2, 3"


class TestArrayRules:
    """Test rules.array constructors."""

    def test_min_and_max_items(self):
        """Should bound the item count inclusively."""
        assert rules.array.min(1).check([1]) is True
        assert rules.array.min(1).check([]) is False
        assert rules.array.max(2).check((1, 2)) is True
        assert rules.array.max(2).check([1, 2, 3]) is False
        assert rules.array.min(0).check("abc") is False

    def test_messages(self):
        """Should describe the item bounds."""
        assert rules.array.min(2).format_message([], "tags") == "tags must contain at least 2 items"
        assert rules.array.max(2).format_message([], "tags") == "tags must contain at most 2 items"
        assert rules.array.unique().format_message([], "tags") == "tags must contain unique items"

    def test_unique_compares_structurally(self):
        """Should treat equal dicts and lists as duplicates."""
        rule = rules.array.unique()

        assert rule.check(["a", "b"]) is True
        assert rule.check(["a", "a"]) is False
        assert rule.check([{"id": 1}, {"id": 1}]) is False
        assert rule.check([[1, 2], [2, 1]]) is True
        assert rule.check("aa") is False

    def test_unique_with_key(self):
        """Should compare extracted keys when a key function is given."""
        rule = rules.array.unique(key=lambda item: item["id"])

        assert rule.check([{"id": 1, "n": "a"}, {"id": 2, "n": "a"}]) is True
        assert rule.check([{"id": 1, "n": "a"}, {"id": 1, "n": "b"}]) is False

    def test_unique_with_unhashable_keys(self):
        """Should compare list- and dict-valued keys by content."""
        rule = rules.array.unique(key=lambda item: item["tags"])

        assert rule.check([{"tags": ["a"]}, {"tags": ["b"]}]) is True
        assert rule.check([{"tags": ["a"]}, {"tags": ["a"]}]) is False
        assert rule.check([{"tags": {"k": 1}}, {"tags": {"k": 1}}]) is False

    def test_unique_unhashable_key_differs_from_its_serialization(self):
        """Should not treat a list key as equal to a string that looks like it."""
        rule = rules.array.unique(key=lambda item: item)

        assert rule.check([["a"], '["a"]']) is True

    def test_unique_with_unhashable_keys_in_validator(self):
        """Should report duplicates through the engine instead of raising."""
        schema = {"groups": {"type": "array", "rules": [rules.array.unique(lambda g: g["members"])]}}
        result = SmartValidator(schema).validate(
            {"groups": [{"members": [1, 2]}, {"members": [1, 2]}]}
        )

        assert [e.message for e in result.errors] == ["groups must contain unique items"]


class TestObjectRules:
    """Test rules.object constructors."""

    def test_has_keys(self):
        """Should require every listed key."""
        rule = rules.object.has_keys(["id", "name"])

        assert rule.check({"id": 1, "name": "x", "extra": True}) is True
        assert rule.check({"id": 1}) is False
        assert rule.check(["id", "name"]) is False
        assert rule.format_message({}, "user") == "user must have the following keys: id, name"


class TestCustomRules:
    """Test rules.custom and rules.json_schema."""

    def test_custom(self):
        """Should wrap an arbitrary predicate and message."""
        rule = rules.custom(lambda v: v % 2 == 0, lambda v, f: f"{f} must be even")

        assert isinstance(rule, Rule)
        assert rule.check(4) is True
        assert rule.format_message(3, "n") == "n must be even"

    def test_json_schema(self):
        """Should validate values against a JSON Schema fragment."""
        rule = rules.json_schema({"type": "string", "format": "date", "maxLength": 10})

        assert rule.check("2024-01-01") is True
        assert rule.check("01/01/2024") is False
        assert rule.format_message("x", "due") == "due does not match the expected JSON schema"

    def test_json_schema_custom_message(self):
        """Should use a provided message."""
        rule = rules.json_schema({"enum": ["a", "b"]}, "pick a or b")

        assert rule.format_message("c", "choice") == "pick a or b"

    def test_invalid_json_schema_fragment(self):
        """Should reject invalid fragments when the rule is built."""
        with pytest.raises(SchemaDefinitionError, match="Invalid JSON schema fragment"):
            rules.json_schema({"type": "strang"})


class TestRulesInValidator:
    """Test catalog rules through the engine."""

    def test_rule_chain_in_schema(self):
        """Should report every failing catalog rule for a field."""
        schema = {
            "ports": {
                "type": "array",
                "rules": [rules.array.min(1), rules.array.unique()],
                "items": {"type": "number", "rules": [rules.number.integer(), rules.number.positive()]},
            }
        }
        result = SmartValidator(schema).validate({"ports": [80, -1.5, 80]})

        assert [(e.field, e.message) for e in result.errors] == [
            ("ports[1]", "ports[1] must be an integer"),
            ("ports[1]", "ports[1] must be positive"),
            ("ports", "ports must contain unique items"),
        ]
