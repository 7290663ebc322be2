"""sieve: composable input validation."""

__version__ = "0.1.0"

from .checks import DnsLookup, LuhnIdentifier, VatNumber
from .config import SieveConfig, load_config
from .engine import NOT_FOUND, ValidationChain, Validator, get_rule, parse_rule, rule_names
from .errors import UnknownRuleError, UnsupportedInChainError

__all__ = [
    "__version__",
    "DnsLookup",
    "LuhnIdentifier",
    "VatNumber",
    "SieveConfig",
    "load_config",
    "NOT_FOUND",
    "ValidationChain",
    "Validator",
    "get_rule",
    "parse_rule",
    "rule_names",
    "UnknownRuleError",
    "UnsupportedInChainError",
]
