"""Rule registry, value holder and validation chain."""

from .chain import ValidationChain
from .registry import RuleKind, RuleRef, catalog, get_rule, parse_rule, rule_names
from .value import NOT_FOUND, Validator

__all__ = [
    "ValidationChain",
    "RuleKind",
    "RuleRef",
    "catalog",
    "get_rule",
    "parse_rule",
    "rule_names",
    "NOT_FOUND",
    "Validator",
]
