"""
Name -> rule registry.

What this does
--------------
- `@rule("isEmail", "email")` registers a `Validator` method under one or more
  catalog names while the class body is executed, so the table is complete as
  soon as `sieve.engine.value` has been imported.
- Each catalog name is also reachable in snake_case (`is_email`), which is how
  the methods are spelled in Python.
- `parse_rule()` turns a caller-supplied name into a `RuleRef`, recognising the
  negation markers `!isPhone`, `notIsPhone` and `not_is_phone`.

Unknown names raise `UnknownRuleError` at lookup time.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple
import re

from ..errors import UnknownRuleError


class RuleKind(str, Enum):
    PREDICATE = "predicate"    # returns bool
    STRUCTURED = "structured"  # returns a structured value or False
    TRAVERSAL = "traversal"    # returns a new Validator


@dataclass(frozen=True)
class Rule:
    name: str
    func: Callable[..., Any]
    kind: RuleKind = RuleKind.PREDICATE

    def invoke(self, holder: Any, *args: Any) -> Any:
        return self.func(holder, *args)


@dataclass(frozen=True)
class RuleRef:
    """A resolved rule name plus whether its result is inverted."""
    name: str
    negated: bool = False

    @property
    def display_name(self) -> str:
        if not self.negated:
            return self.name
        return "not" + self.name[:1].upper() + self.name[1:]


# Catalog name -> Rule
_RULES: Dict[str, Rule] = {}
# snake_case spelling -> catalog name
_SNAKE: Dict[str, str] = {}

_CAMEL_BOUNDARY_RE = re.compile(
    r"(?<=[a-z0-9])(?=[A-Z])"      # isEmail   -> is_Email
    r"|(?<=[A-Z])(?=[A-Z][a-z])"   # isARecord -> is_A_Record
    r"|(?<=[A-Za-z])(?=[0-9])"     # isHttp200 -> is_Http_200
)


def to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY_RE.sub("_", name).lower()


def rule(*names: str, kind: RuleKind = RuleKind.PREDICATE) -> Callable:
    """Register the decorated method under each of `names`."""
    def decorator(func: Callable) -> Callable:
        for name in names:
            if name in _RULES:
                raise ValueError(f"Rule {name!r} registered twice")
            _RULES[name] = Rule(name=name, func=func, kind=kind)
            _SNAKE.setdefault(to_snake(name), name)
        return func
    return decorator


def _ensure_loaded() -> None:
    # Rules are registered by the Validator class body.
    from . import value  # noqa: F401


def canonical_name(name: str) -> Optional[str]:
    _ensure_loaded()
    if name in _RULES:
        return name
    return _SNAKE.get(name)


def get_rule(name: str) -> Rule:
    found = canonical_name(name)
    if found is None:
        raise UnknownRuleError(name)
    return _RULES[found]


def parse_rule(name: str) -> RuleRef:
    """
    Resolve `name` to a `RuleRef`.

    Exact catalog names win over negation parsing, so an alias such as
    `notEqual` stays a rule of its own.
    """
    found = canonical_name(name)
    if found is not None:
        return RuleRef(found)

    if name.startswith("!"):
        base = name[1:]
    elif name.startswith("not_"):
        base = name[4:]
    elif name.startswith("not") and name[3:4].isupper():
        base = name[3].lower() + name[4:]
    else:
        raise UnknownRuleError(name)

    found = canonical_name(base)
    if found is None:
        raise UnknownRuleError(name)
    return RuleRef(found, negated=True)


def rule_names() -> List[str]:
    _ensure_loaded()
    return sorted(_RULES)


def catalog() -> List[Tuple[str, List[str], RuleKind]]:
    """
    One row per distinct rule: (primary name, aliases, kind).

    The primary name is the first name passed to `@rule`.
    """
    _ensure_loaded()
    rows: Dict[Callable, Tuple[str, List[str], RuleKind]] = {}
    for name, entry in _RULES.items():
        if entry.func in rows:
            rows[entry.func][1].append(name)
        else:
            rows[entry.func] = (name, [], entry.kind)
    return list(rows.values())
