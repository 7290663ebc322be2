"""Checksum, format and DNS checks used by the validator."""

from .hosts import DnsLookup
from .luhn import LuhnIdentifier, PersonalNumberParts, luhn_checksum, luhn_ok
from .vat import VAT_PATTERNS, VatNumber

__all__ = [
    "DnsLookup",
    "LuhnIdentifier",
    "PersonalNumberParts",
    "luhn_checksum",
    "luhn_ok",
    "VAT_PATTERNS",
    "VatNumber",
]
