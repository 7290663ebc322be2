"""
Programmer errors raised by rule dispatch.

A rule that legitimately fails is *data* (it lands in the chain's failure map).
These exceptions are for calls that can never succeed, and they always
propagate to the caller.
"""

from __future__ import annotations


class UnknownRuleError(AttributeError):
    """No rule with this name exists in the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No validation rule named {name!r}.")
        self.name = name


class UnsupportedInChainError(TypeError):
    """The rule returns a new value holder (traversal) and cannot be recorded."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"The rule {name!r} is not supported in a validation chain. "
            "Use validate_in_data() instead."
        )
        self.name = name
