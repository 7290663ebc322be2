import pytest

from sieve.engine.chain import ValidationChain
from sieve.errors import UnknownRuleError, UnsupportedInChainError


def test_fluent_chain_records_two_failures():
    chain = ValidationChain("john.doe@gmail.com")
    chain.isEmail().length(1, 16).isEmail().notIsPhone().endsWith(".net")
    assert chain.get_failed_validations() == {
        1: {"length": [1, 16]},
        4: {"endsWith": [".net"]},
    }
    assert chain.has_error()
    assert not chain.is_valid()


def test_all_passing_chain_is_valid():
    chain = ValidationChain.value("john.doe@gmail.com")
    chain.is_email().length(1, 200)
    assert chain.is_valid()
    assert chain.get_failed_validations() == {}


def test_validate_with_returns_bool():
    chain = ValidationChain("abc")
    assert chain.validate_with("isString") is True
    assert chain.validate_with("isInt") is False


def test_rule_and_negation_record_opposite_outcomes():
    plain = ValidationChain("070-283 27 12")
    negated = ValidationChain("070-283 27 12")
    assert plain.validate_with("isPhone") != negated.validate_with("!isPhone")
    assert plain.is_valid()
    assert negated.get_failed_validations() == {0: {"notIsPhone": []}}


def test_zero_argument_failure_survives_filter():
    chain = ValidationChain("abc")
    chain.isInt()
    assert chain.get_failed_validations() == {0: {"isInt": []}}


def test_key_groups_failures():
    chain = ValidationChain("x")
    chain.validate_with("isInt", key="field")
    chain.validate_with("length", [2, 5], key="field")
    chain.validate_with("isString", key="field")
    assert chain.get_failed_validations() == {
        "field": {"isInt": [], "length": [2, 5]},
    }


def test_one_shot_overrides():
    chain = ValidationChain("x")
    chain.map_error_to_key("name").map_error_validation_name("tooShort").length(3)
    chain.isEmail()
    failures = chain.get_failed_validations()
    assert failures["name"] == {"tooShort": [3]}
    assert failures[0] == {"isEmail": []}


def test_explicit_display_name():
    chain = ValidationChain("x")
    chain.validate_with("isInt", display_name="mustBeNumber")
    assert chain.get_failed_validations() == {0: {"mustBeNumber": []}}


def test_anonymous_slots_skip_used_keys():
    chain = ValidationChain("x")
    chain.validate_with("isInt", key=0)
    chain.validate_with("isFloat")
    assert chain.get_failed_validations() == {0: {"isInt": []}, 1: {"isFloat": []}}


def test_chain_does_not_mutate_its_value():
    chain = ValidationChain("252 52")
    chain.isZip(5)
    assert chain.get_value() == "252 52"
    assert chain.is_valid()


def test_structured_result_counts_as_pass():
    chain = ValidationChain("2024-01-01 10:00 - 2024-01-02 12:00")
    chain.dateRange()
    assert chain.is_valid()


def test_unknown_rule_raises():
    chain = ValidationChain("x")
    with pytest.raises(UnknownRuleError):
        chain.isNothing()
    with pytest.raises(UnknownRuleError):
        chain.validate_with("notNothing")


@pytest.mark.parametrize("name", ["traverse", "eq"])
def test_traversal_not_allowed(name):
    chain = ValidationChain({"a": 1})
    with pytest.raises(UnsupportedInChainError, match="validate_in_data"):
        chain.validate_with(name, ["a"])


def test_reads_are_repeatable():
    chain = ValidationChain("x")
    chain.isInt().isString()
    first = chain.get_failed_validations()
    first[0]["extra"] = [1]
    assert chain.get_failed_validations() == {0: {"isInt": []}}
