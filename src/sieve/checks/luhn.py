"""
Luhn checksum engine.

What this covers
----------------
- The Luhn ("mod 10") check digit itself.
- Swedish personal identity numbers (personnummer), including coordination
  numbers (samordningsnummer, day + 60) and century inference for the short
  10-digit form.
- Swedish organisation numbers.
- Credit card numbers: issuer prefix table gated by Luhn.
- EU VAT numbers: format per country, plus the organisation number check for
  Sweden.

Malformed input is never an error here. Anything that cannot be parsed into the
expected shape simply fails its check.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from functools import cached_property
from typing import Any, Optional, Tuple
import math
import re

from .validators import as_text, digits_only
from .vat import VatNumber


# (CC)YYMMDD[-+]NNNC, applied to the compact form (digits plus separators).
_PARTS_RE = re.compile(r"^(\d{2})?(\d{2})(\d{2})(\d{2})([-+]?)(\d{3})(\d)$")
_COMPACT_RE = re.compile(r"[^\d+\-]")
_NON_ALNUM_RE = re.compile(r"[^A-Z\d]")

# Order matters: prefixes overlap, so the narrow ones must come before "visa".
CARD_PREFIXES: Tuple[Tuple[str, re.Pattern], ...] = (
    ("visaelectron", re.compile(r"^4(026|17500|405|508|844|91[37])")),
    ("maestro", re.compile(r"^(5(018|0[23]|[68])|6(39|7))")),
    ("forbrugsforeningen", re.compile(r"^600")),
    ("dankort", re.compile(r"^5019")),
    ("visa", re.compile(r"^4")),
    ("mastercard", re.compile(r"^(5[0-5]|2[2-7])")),
    ("amex", re.compile(r"^3[47]")),
    ("dinersclub", re.compile(r"^3[0689]")),
    ("discover", re.compile(r"^6([045]|22)")),
    ("unionpay", re.compile(r"^(62|88)")),
    ("jcb", re.compile(r"^35")),
)

# Shortest (Maestro) and longest card numbers in circulation.
CARD_MIN_DIGITS = 12
CARD_MAX_DIGITS = 19


def luhn_checksum(digits: str) -> int:
    """
    Check digit that would make `digits` sum to a multiple of 10.

    Weights run from the left: the digit at 0-based index i is multiplied by
    `2 - (i % 2)`; products above 9 have 9 subtracted. The result is
    `ceil(sum / 10) * 10 - sum`, so a string that already ends in its correct
    check digit (and has even length) returns 0.

    Args:
        digits: ASCII digits only.

    Returns:
        An int in 0..9.
    """
    total = 0
    for i, ch in enumerate(digits):
        d = (ord(ch) - 48) * (2 - (i % 2))  # '0' -> 48
        if d > 9:
            d -= 9
        total += d
    return math.ceil(total / 10) * 10 - total


def luhn_ok(digits: str) -> bool:
    """
    Classic right-aligned Luhn validation of a checksum-inclusive number.

    A leading zero does not change the sum, so padding odd-length input to an
    even length aligns the left-based weights of `luhn_checksum` with the
    rightmost digit.
    """
    if not digits:
        return False
    if len(digits) % 2:
        digits = "0" + digits
    return luhn_checksum(digits) == 0


def _calendar_ok(year: int, month: int, day: int) -> bool:
    try:
        date(year, month, day)
    except ValueError:
        return False
    return True


@dataclass(frozen=True)
class PersonalNumberParts:
    """
    Decomposed Swedish personal number.

    All fields are the literal digit strings; `century` and `separator` are
    inferred when the input did not carry them.
    """
    century: str
    year: str
    month: str
    day: str
    separator: str
    serial: str
    check: str

    @property
    def full_year(self) -> int:
        return int(self.century + self.year)


class LuhnIdentifier:
    """
    Normalized view of an identifier for checksum work.

    Attributes:
        digits: input with every non-digit removed.
        alnum:  input uppercased with every non [A-Z0-9] removed (VAT numbers).
        now:    reference time for century inference.
    """

    def __init__(self, value: Any, now: Optional[datetime] = None) -> None:
        self.raw = as_text(value) or ""
        self.digits = digits_only(self.raw)
        self.alnum = _NON_ALNUM_RE.sub("", self.raw.upper())
        self.now = now or datetime.now()

    # -- Personal numbers -----------------------------------------------------------------

    @cached_property
    def parts(self) -> Optional[PersonalNumberParts]:
        """
        Split the number into date, serial and check digit, or None if it does not
        have the (CC)YYMMDD[-+]NNNC shape.

        Century inference, when the input has no century:
          - no explicit separator: "-" if the person would be under 100, else "+"
          - "+" means born a century before the "-" reading
        """
        match = _PARTS_RE.fullmatch(_COMPACT_RE.sub("", self.raw))
        if match is None:
            return None

        century, year, month, day, sep, serial, check = match.groups()
        century = century or ""

        if sep not in ("-", "+"):
            if not century or self.now.year - int(century + year) < 100:
                sep = "-"
            else:
                sep = "+"

        if not century:
            base = self.now.year - 100 if sep == "+" else self.now.year
            century = str(base - ((base - int(year)) % 100))[:2]

        return PersonalNumberParts(
            century=century,
            year=year,
            month=month,
            day=day,
            separator=sep,
            serial=serial,
            check=check,
        )

    def is_date(self) -> bool:
        """The date part is a real calendar date."""
        p = self.parts
        if p is None:
            return False
        return _calendar_ok(p.full_year, int(p.month), int(p.day))

    def is_coordination_number(self) -> bool:
        """The day field minus 60 is a real calendar date (samordningsnummer)."""
        p = self.parts
        if p is None:
            return False
        return _calendar_ok(p.full_year, int(p.month), int(p.day) - 60)

    def social_number(self) -> bool:
        """Valid Swedish personal or coordination number."""
        p = self.parts
        if p is None:
            return False
        if not self.is_date() and not self.is_coordination_number():
            return False
        return luhn_checksum(p.year + p.month + p.day + p.serial) == int(p.check)

    personal_number = social_number

    def is_male(self) -> bool:
        """Odd second-to-last digit. False when the number cannot be parsed."""
        p = self.parts
        return p is not None and int(p.serial[-1]) % 2 == 1

    def is_female(self) -> bool:
        p = self.parts
        return p is not None and int(p.serial[-1]) % 2 == 0

    # -- Organisation numbers -------------------------------------------------------------

    def org_number(self) -> bool:
        """The first 10 digits carry a correct trailing check digit."""
        if len(self.digits) < 10:
            return False
        return luhn_checksum(self.digits[:10]) == 0

    # -- Cards ----------------------------------------------------------------------------

    def card_type(self) -> Optional[str]:
        """Issuer name of the first matching prefix, or None."""
        for card, pattern in CARD_PREFIXES:
            if pattern.match(self.digits):
                return card
        return None

    def credit_card(self) -> bool:
        if not (CARD_MIN_DIGITS <= len(self.digits) <= CARD_MAX_DIGITS):
            return False
        if self.card_type() is None:
            return False
        return luhn_ok(self.digits)

    # -- VAT ------------------------------------------------------------------------------

    def vat_number(self) -> bool:
        vat = VatNumber.parse(self.alnum)
        if not vat.is_valid_format():
            return False
        if vat.country == "SE":
            return self.org_number()
        return True
