"""
Runs many rules over one value and records which of them failed.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Union
import logging

from ..config import SieveConfig
from ..errors import UnsupportedInChainError
from .registry import RuleKind, RuleRef, get_rule, parse_rule
from .value import Validator

logger = logging.getLogger(__name__)

Key = Union[str, int]
Failures = Dict[Key, Dict[str, Any]]


class ValidationChain:
    """
    Fluent accumulator over a single value.

        chain = ValidationChain("john.doe@gmail.com")
        chain.isEmail().length(1, 16).notIsPhone().endsWith(".net")
        chain.is_valid()                 # False
        chain.get_failed_validations()   # {1: {"length": [1, 16]}, 3: {"endsWith": [".net"]}}

    Every dispatch records `False` (passed) or the argument list (failed) under
    a group key. Without a key each call gets its own integer slot. Reads drop
    the passed entries.
    """

    def __init__(self, value: Any, config: Optional[SieveConfig] = None) -> None:
        self._holder = Validator(value, config=config)
        self._failures: Failures = {}
        self._next_slot = 0
        self._key: Optional[Key] = None
        self._display_name: Optional[str] = None

    @classmethod
    def value(cls, value: Any, config: Optional[SieveConfig] = None) -> "ValidationChain":
        return cls(value, config=config)

    def get_value(self) -> Any:
        return self._holder.get_value()

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        ref = parse_rule(name)

        def invoke(*args: Any) -> "ValidationChain":
            self.validate_with(ref, args)
            return self

        return invoke

    # ---------------- One-shot overrides ----------------

    def map_error_to_key(self, key: Key) -> "ValidationChain":
        """Group the next recorded outcome under `key`."""
        self._key = key
        return self

    def map_error_validation_name(self, name: str) -> "ValidationChain":
        """Record the next outcome under `name` instead of the rule name."""
        self._display_name = name
        return self

    # ---------------- Dispatch ----------------

    def _allocate_slot(self) -> int:
        while self._next_slot in self._failures:
            self._next_slot += 1
        slot = self._next_slot
        self._next_slot += 1
        return slot

    def validate_with(
        self,
        name: Union[str, RuleRef],
        arguments: Sequence[Any] = (),
        *,
        key: Optional[Key] = None,
        display_name: Optional[str] = None,
    ) -> bool:
        """
        Run one rule against the chain's value and record the outcome.

        Raises:
            UnknownRuleError: the rule name is not registered.
            UnsupportedInChainError: the rule is a traversal (traverse/eq).
        """
        ref = parse_rule(name) if isinstance(name, str) else name
        entry = get_rule(ref.name)
        if entry.kind is RuleKind.TRAVERSAL:
            raise UnsupportedInChainError(ref.display_name)

        args = list(arguments or ())
        holder = self._holder.with_value(self._holder.get_value())
        valid = bool(entry.invoke(holder, *args))
        if ref.negated:
            valid = not valid

        label = display_name or self._display_name or ref.display_name
        group = key if key is not None else self._key
        if group is None:
            group = self._allocate_slot()

        self._failures.setdefault(group, {})[label] = False if valid else args
        self._key = None
        self._display_name = None

        logger.debug("rule=%s group=%r valid=%s", label, group, valid)
        return valid

    # ---------------- Reads ----------------

    def get_failed_validations(self) -> Failures:
        """Failed rules per group; passed entries and empty groups are dropped."""
        filtered: Failures = {}
        for group, outcomes in self._failures.items():
            failed = {label: args for label, args in outcomes.items() if args is not False}
            if failed:
                filtered[group] = failed
        self._failures = {group: dict(outcomes) for group, outcomes in filtered.items()}
        return {group: dict(outcomes) for group, outcomes in filtered.items()}

    def has_error(self) -> bool:
        return bool(self.get_failed_validations())

    def is_valid(self) -> bool:
        return not self.has_error()
