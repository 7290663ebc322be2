import pytest

from sieve.engine.registry import (
    RuleKind,
    RuleRef,
    canonical_name,
    catalog,
    get_rule,
    parse_rule,
    rule_names,
    to_snake,
)
from sieve.errors import UnknownRuleError


@pytest.mark.parametrize(
    "name,expected",
    [
        ("isEmail", "is_email"),
        ("isARecord", "is_a_record"),
        ("isHttp200", "is_http_200"),
        ("isLooselyInArray", "is_loosely_in_array"),
        ("length", "length"),
    ],
)
def test_to_snake(name, expected):
    assert to_snake(name) == expected


def test_snake_case_resolves_to_catalog_name():
    assert canonical_name("is_email") == "isEmail"
    assert canonical_name("is_a_record") == "isARecord"
    assert canonical_name("nope") is None


@pytest.mark.parametrize("name", ["!isPhone", "notIsPhone", "not_is_phone", "!is_phone"])
def test_negation_markers(name):
    assert parse_rule(name) == RuleRef("isPhone", negated=True)


def test_exact_alias_beats_negation():
    # notEqual is an alias of isNotEqualTo, not a negated "equal"
    assert parse_rule("notEqual") == RuleRef("notEqual")


def test_display_name():
    assert RuleRef("isPhone", negated=True).display_name == "notIsPhone"
    assert RuleRef("length").display_name == "length"


@pytest.mark.parametrize("name", ["isNothing", "!isNothing", "notavalidrule", "note"])
def test_unknown_names_raise(name):
    with pytest.raises(UnknownRuleError) as exc:
        parse_rule(name)
    assert isinstance(exc.value, AttributeError)


def test_kinds():
    assert get_rule("isEmail").kind is RuleKind.PREDICATE
    assert get_rule("dateRange").kind is RuleKind.STRUCTURED
    assert get_rule("dnsRecord").kind is RuleKind.STRUCTURED
    assert get_rule("traverse").kind is RuleKind.TRAVERSAL
    assert get_rule("eq").kind is RuleKind.TRAVERSAL


def test_aliases_share_one_function():
    assert get_rule("email").func is get_rule("isEmail").func
    assert get_rule("isHexColor").func is get_rule("isHex").func


def test_catalog_rows():
    rows = {name: (aliases, kind) for name, aliases, kind in catalog()}
    assert rows["isSocialNumber"][0] == ["socialNumber", "personalNumber"]
    assert "isEmail" in rule_names()
    assert "email" in rule_names()
