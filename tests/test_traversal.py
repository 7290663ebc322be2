from datetime import datetime

import pytest

from sieve.engine.value import NOT_FOUND, Validator
from sieve.errors import UnknownRuleError

DATA = {
    "user": {
        "name": "Jane",
        "emails": ["jane@gmail.com", "not-an-email"],
        "address": {"zip": "252 52"},
    },
    "count": 3,
}


class Profile:
    def __init__(self):
        self.nickname = "jd"


def v(value):
    return Validator(value, now=datetime(2024, 6, 1))


def test_traverse_returns_new_holder():
    holder = v(DATA)
    found = holder.traverse("user.name")
    assert found is not holder
    assert found.get_value() == "Jane"
    assert found.get_length() == 4
    assert holder.get_value() is DATA


def test_traverse_list_index_and_object_attribute():
    assert v(DATA).traverse("user.emails.0").get_value() == "jane@gmail.com"
    assert v({"p": Profile()}).eq("p.nickname").get_value() == "jd"


def test_missing_segment_is_not_found():
    assert v(DATA).traverse("user.phone").get_value() is NOT_FOUND
    assert v(DATA).traverse("user.emails.9").get_value() is NOT_FOUND
    assert v(DATA).traverse("count.deeper").get_value() is NOT_FOUND


def test_scalar_is_returned_unchanged():
    holder = v("plain")
    found = holder.traverse("a.b")
    assert found is not holder
    assert found.get_value() == "plain"


def test_mutating_traverse_replaces_value():
    holder = v(DATA)
    result = holder.traverse("user.address.zip", mutate=True)
    assert result is holder
    assert holder.get_value() == "252 52"
    assert holder.get_length() == 6


def test_mutating_traverse_miss_leaves_value():
    holder = v(DATA)
    result = holder.traverse("user.missing", mutate=True)
    assert result is not holder
    assert holder.get_value() is DATA


def test_validate_in_data():
    assert v(DATA).validate_in_data("user.emails.0", "isEmail")
    assert not v(DATA).validate_in_data("user.emails.1", "isEmail")
    assert v(DATA).validate_in_data("user.emails.1", "!isEmail")
    assert v(DATA).validate_in_data("user.name", "length", [1, 10])
    assert not v(DATA).validate_in_data("user.nothing", "isRequired")


def test_validate_in_data_unknown_rule():
    with pytest.raises(UnknownRuleError):
        v(DATA).validate_in_data("user.name", "isNothing")


class TestCombinators:
    RULES = {"length": [120, 200], "isString": []}

    def test_one_of(self):
        assert v("Lorem ipsum").one_of(self.RULES)

    def test_all_of(self):
        assert not v("Lorem ipsum").all_of(self.RULES)
        assert v("Lorem ipsum").allOf({"length": [1, 11], "isString": []})

    def test_one_of_evaluates_every_rule(self):
        with pytest.raises(UnknownRuleError):
            v("Lorem ipsum").one_of({"isString": [], "isNothing": []})

    def test_mutating_rule_does_not_leak(self):
        holder = v("252 52")
        assert holder.oneOf({"isZip": [5], "isPhone": []})
        assert holder.get_value() == "252 52"

    def test_negated_rule_inside(self):
        assert v("abc").all_of({"!isInt": [], "isString": []})

    def test_scalar_argument(self):
        assert v("abc").one_of({"isLengthEqualTo": 3})


@pytest.mark.parametrize("path", ["²", "a.²", "-", "1.5"])
def test_non_ascii_digit_keys_are_not_found(path):
    assert v({"a": {"b": 1}, 1: "one"}).traverse(path).get_value() is NOT_FOUND


def test_numeric_key_falls_back_to_int():
    assert v({1: "one"}).traverse("1").get_value() == "one"
    assert v({-1: "minus"}).traverse("-1").get_value() == "minus"
