"""
Tests for snapshot redaction.
"""

import copy

from helpdesk.audit.redaction import (
    redact,
    REDACTED,
    TRUNCATION_MARKER,
    CIRCULAR,
)


class TestSensitiveKeys:

    def test_top_level_key_is_redacted(self):
        result = redact({"password": "hunter2", "name": "Bob"})
        assert result == {"password": REDACTED, "name": "Bob"}

    def test_match_is_case_insensitive_and_key_kept(self):
        result = redact({"PassWord": "x", "TOKEN": "y", "Ssn": "z"})
        assert result == {"PassWord": REDACTED, "TOKEN": REDACTED, "Ssn": REDACTED}

    def test_redacted_at_any_depth(self):
        value = {
            "user": {"profile": {"ssn": 123456789, "city": "Oslo"}},
            "sessions": [{"token": {"value": "abc", "exp": 1}}],
        }
        assert redact(value) == {
            "user": {"profile": {"ssn": REDACTED, "city": "Oslo"}},
            "sessions": [{"token": REDACTED}],
        }

    def test_value_of_any_type_is_replaced(self):
        result = redact({"token": None, "password": [1, 2], "ssn": {"a": 1}})
        assert result == {"token": REDACTED, "password": REDACTED, "ssn": REDACTED}

    def test_custom_denylist(self):
        result = redact({"email": "a@b.c", "password": "x"}, redact_keys=["Email"])
        assert result == {"email": REDACTED, "password": "x"}

    def test_input_is_not_mutated(self):
        value = {"password": "x", "nested": {"token": "y"}}
        original = copy.deepcopy(value)
        redact(value)
        assert value == original


class TestStrings:

    def test_long_string_truncated(self):
        result = redact("a" * 10001)
        assert result == "a" * 10000 + TRUNCATION_MARKER
        assert len(result) == 10000 + len(TRUNCATION_MARKER)

    def test_string_at_limit_unchanged(self):
        value = "a" * 10000
        assert redact(value) == value

    def test_custom_limit_inside_structure(self):
        result = redact({"description": "abcdefgh"}, max_string_length=5)
        assert result == {"description": "abcde" + TRUNCATION_MARKER}


class TestOtherValues:

    def test_scalars_pass_through(self):
        for value in (None, 0, 42, 1.5, True, False, ""):
            assert redact(value) == value

    def test_list_order_and_length_preserved(self):
        assert redact([3, "b", None, {"token": 1}]) == [3, "b", None, {"token": REDACTED}]

    def test_tuple_becomes_list(self):
        assert redact((1, 2)) == [1, 2]

    def test_cycle_is_cut(self):
        value = {"name": "loop"}
        value["self"] = value
        assert redact(value) == {"name": "loop", "self": CIRCULAR}

    def test_shared_reference_is_not_a_cycle(self):
        shared = [1, 2]
        assert redact({"a": shared, "b": shared}) == {"a": [1, 2], "b": [1, 2]}
