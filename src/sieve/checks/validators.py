"""
Pure predicate helpers shared by the value holder.

Why this file exists
--------------------
Most catalog rules are thin wrappers over a parsing step ("does this string
read as an integer?", "is this a hostname?"). Keeping those steps here as plain
functions lets `Validator` stay a dispatch surface while the actual checks stay
easy to test in isolation.

Design principles
-----------------
- **Pure functions**: no state, no I/O.
- **Never raise on bad input**: anything unparsable is `None` / `False`.
- **Locale-free**: numbers are read the same way regardless of environment.
"""

from __future__ import annotations

from decimal import Decimal
from html.parser import HTMLParser
from typing import Any, Iterable, Optional, Set, Union
from urllib.parse import urlparse
import json
import math
import re

from email_validator import EmailNotValidError, validate_email


Number = Union[int, float, Decimal]

# Characters removed before zip validation (space, hyphen, em dash, en dash).
ZIP_SEPARATORS = (" ", "-", "—", "–")
# Phone numbers also drop parentheses around area codes.
PHONE_SEPARATORS = ZIP_SEPARATORS + ("(", ")")

HTTP_STATUS_CODES = frozenset({
    100, 101, 102, 103,
    200, 201, 202, 203, 204, 205, 206, 207, 208, 226,
    300, 301, 302, 303, 304, 305, 307, 308,
    400, 401, 402, 403, 404, 405, 406, 407, 408, 409,
    410, 411, 412, 413, 414, 415, 416, 417, 418, 421,
    422, 423, 424, 425, 426, 428, 429, 431, 451,
    500, 501, 502, 503, 504, 505, 506, 507, 508, 510, 511,
})

REQUEST_METHODS = frozenset({
    "GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS", "CONNECT", "TRACE",
})

_INT_RE = re.compile(r"^[+-]?(0|[1-9][0-9]*)$")
_DIGITS_RE = re.compile(r"^[+-]?[0-9]+$")
_FLOAT_RE = re.compile(r"^[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?$")
_HOST_LABEL_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?$")
_URL_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")

_TRUE_WORDS = {"1", "true", "on", "yes"}
_FALSE_WORDS = {"0", "false", "off", "no", ""}


# ---- Normalizers ---------------------------------------------------------------------------

def digits_only(s: str) -> str:
    """
    Return only the ASCII digit characters from a string.

    "4111-1111 1111-1111" -> "4111111111111111"
    """
    return "".join(ch for ch in s if "0" <= ch <= "9")


def strip_chars(s: str, chars: Iterable[str]) -> str:
    """Remove every occurrence of each string in `chars` from `s`."""
    for ch in chars:
        s = s.replace(ch, "")
    return s


# ---- Type helpers --------------------------------------------------------------------------

def is_real_number(value: Any) -> bool:
    """True for int/float/Decimal, but not for bool (which subclasses int)."""
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def is_finite(value: Number) -> bool:
    if isinstance(value, int):
        return True
    if isinstance(value, Decimal):
        return value.is_finite()
    return math.isfinite(value)


def as_text(value: Any) -> Optional[str]:
    """
    String view of a string-like value.

    Strings are returned as-is, real numbers are rendered with `str()`;
    everything else (None, bool, containers, objects) has no string view.
    """
    if isinstance(value, str):
        return value
    if is_real_number(value):
        return str(value)
    return None


def filter_int(value: Any) -> Optional[int]:
    """
    Read `value` as an integer, the way form input is usually validated.

    Accepts ints, integral floats, `True` (as 1) and strings holding an optionally
    signed integer without leading zeros (surrounding whitespace is ignored).
    Returns None when the value is not an integer.
    """
    if isinstance(value, bool):
        return 1 if value else None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, Decimal):
        if not value.is_finite():
            return None
        return int(value) if value == value.to_integral_value() else None
    if isinstance(value, str):
        text = value.strip()
        if _INT_RE.fullmatch(text):
            return int(text)
    return None


def filter_float(value: Any) -> Optional[float]:
    """
    Read `value` as a float.

    Accepts real numbers, `True` (as 1.0) and decimal / scientific notation
    strings. `inf` and `nan` spellings are rejected.
    """
    if isinstance(value, bool):
        return 1.0 if value else None
    if is_real_number(value):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if _FLOAT_RE.fullmatch(text):
            return float(text)
    return None


def filter_bool(value: Any) -> Optional[bool]:
    """
    Interpret boolean-ish input.

    True for True/1/"1"/"true"/"on"/"yes", False for False/0/""/"0"/"false"/
    "off"/"no" (case-insensitive), None for anything else.
    """
    if isinstance(value, bool):
        return value
    if is_real_number(value):
        if value == 1:
            return True
        if value == 0:
            return False
        return None
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_WORDS:
            return True
        if text in _FALSE_WORDS:
            return False
    return None


def to_number(value: Any) -> Optional[Number]:
    """
    Numeric reading of `value`, or None if it is not numeric.

    Numeric strings keep their integer-ness: "12" -> 12, "1.5" -> 1.5.
    Infinite and NaN readings ("1e999", float("nan")) are not numbers here.
    """
    if is_real_number(value):
        return value if is_finite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if _DIGITS_RE.fullmatch(text):
            return int(text)
        if _FLOAT_RE.fullmatch(text):
            number = float(text)
            return number if math.isfinite(number) else None
    return None


def loosely_equal(a: Any, b: Any) -> bool:
    """
    Equality after coercion.

    - bool / None on either side: compare truthiness
    - both sides numeric (numbers or numeric strings): compare numerically
    - otherwise plain `==`
    """
    if isinstance(a, bool) or isinstance(b, bool) or a is None or b is None:
        return bool(a) == bool(b)
    na, nb = to_number(a), to_number(b)
    if na is not None and nb is not None:
        return na == nb
    return a == b


def strictly_equal(a: Any, b: Any) -> bool:
    """Type and value equality (`1 == 1.0` is not enough)."""
    return type(a) is type(b) and a == b


# ---- Format checks -------------------------------------------------------------------------

def is_email(value: Any) -> bool:
    """
    Syntax-only email check.

    Deliverability (MX lookup) is not part of this check; the DNS
    collaborator handles it for `isDeliverableEmail`.
    """
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_url(value: Any) -> bool:
    """Absolute URL with a scheme and a network location, no whitespace."""
    if not isinstance(value, str) or not value or any(ch.isspace() for ch in value):
        return False
    try:
        parts = urlparse(value)
    except ValueError:
        return False
    return bool(_URL_SCHEME_RE.fullmatch(parts.scheme or "")) and bool(parts.netloc)


def is_domain(value: Any, strict: bool = True) -> bool:
    """
    Domain name syntax.

    Always enforces overall length (253) and label length (1..63). In strict mode
    each label must also be a valid hostname label: letters, digits and inner
    hyphens only.
    """
    text = as_text(value)
    if not text or len(text) > 253:
        return False
    if text.endswith("."):
        text = text[:-1]
    for label in text.split("."):
        if not label or len(label) > 63:
            return False
        if strict and not _HOST_LABEL_RE.fullmatch(label):
            return False
    return True


def is_json(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        json.loads(value)
    except (ValueError, RecursionError):
        return False
    return True


class _HtmlOutline(HTMLParser):
    """Collects the doctype and the set of start tags seen in a document."""

    def __init__(self) -> None:
        super().__init__()
        self.doctype: Optional[str] = None
        self.tags: Set[str] = set()

    def handle_decl(self, decl: str) -> None:
        words = decl.split()
        if len(words) >= 2 and words[0].lower() == "doctype":
            self.doctype = words[1].lower()

    def handle_starttag(self, tag: str, attrs) -> None:
        self.tags.add(tag.lower())


def is_full_html(value: Any) -> bool:
    """A complete document: `<!DOCTYPE html>` plus html, head and body elements."""
    if not isinstance(value, str) or not value.strip():
        return False
    outline = _HtmlOutline()
    outline.feed(value)
    outline.close()
    return outline.doctype == "html" and {"html", "head", "body"} <= outline.tags
