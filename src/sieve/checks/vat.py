"""
EU VAT number formats.

Only the *shape* of a VAT number is checked here (country prefix plus the
per-country pattern published by the VIES service). Whether a number was
actually issued is out of scope.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional
import re


# Country code -> pattern for the part after the 2-letter prefix.
# Greece uses "EL", not its ISO code.
VAT_PATTERNS: Dict[str, str] = {
    "AT": r"U[A-Z\d]{8}",
    "BE": r"(0\d{9}|\d{10})",
    "BG": r"\d{9,10}",
    "CY": r"\d{8}[A-Z]",
    "CZ": r"\d{8,10}",
    "DE": r"\d{9}",
    "DK": r"(\d{2} ?){3}\d{2}",
    "EE": r"\d{9}",
    "EL": r"\d{9}",
    "ES": r"([A-Z]\d{7}[A-Z]|\d{8}[A-Z]|[A-Z]\d{8})",
    "FI": r"\d{8}",
    "FR": r"[A-Z\d]{2}\d{9}",
    "GB": r"(\d{9}|\d{12}|(GD|HA)\d{3})",
    "HR": r"\d{11}",
    "HU": r"\d{8}",
    "IE": r"([A-Z\d]{8}|[A-Z\d]{9})",
    "IT": r"\d{11}",
    "LT": r"(\d{9}|\d{12})",
    "LU": r"\d{8}",
    "LV": r"\d{11}",
    "MT": r"\d{8}",
    "NL": r"\d{9}B\d{2}",
    "PL": r"\d{10}",
    "PT": r"\d{9}",
    "RO": r"\d{2,10}",
    "SE": r"\d{12}",
    "SI": r"\d{8}",
    "SK": r"\d{10}",
}

_COMPILED: Dict[str, re.Pattern] = {
    country: re.compile(pattern) for country, pattern in VAT_PATTERNS.items()
}


@dataclass(frozen=True)
class VatNumber:
    """
    A VAT number split into its country prefix and national part.

    Build it from an already normalized string (uppercase, separators removed),
    e.g. `VatNumber.parse("SE556036079301")`.
    """
    country: str
    number: str

    @classmethod
    def parse(cls, vat: str) -> "VatNumber":
        return cls(country=vat[:2], number=vat[2:])

    @property
    def pattern(self) -> Optional[re.Pattern]:
        return _COMPILED.get(self.country)

    def is_known_country(self) -> bool:
        return self.country in _COMPILED

    def is_valid_format(self) -> bool:
        """True if the country is known and the national part matches its pattern."""
        pattern = self.pattern
        if pattern is None:
            return False
        return pattern.fullmatch(self.number) is not None
