"""
The value holder and its predicate catalog.

`Validator` wraps one input value and keeps the state derived from it (string
view, codepoint length, Luhn/DNS helpers) consistent with the current value.
Every predicate is a method registered in the rule registry, so the same check
can be called directly (`Validator(v).is_email()`), by catalog name
(`Validator(v).dispatch("isEmail")`, `Validator(v).isEmail()`), or through a
`ValidationChain`.

Predicates never raise for unsuitable input: a value of the wrong type, an
unparsable date or a failed DNS lookup is simply `False`. Two predicates mutate
the holder and say so in their docstrings: `is_zip` and `traverse(mutate=True)`.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Sequence, Union
import copy
import io
import logging
import operator
import os
import re
import socket

from packaging.version import InvalidVersion, Version

from ..checks.hosts import DnsLookup
from ..checks.luhn import LuhnIdentifier
from ..checks.validators import (
    HTTP_STATUS_CODES,
    PHONE_SEPARATORS,
    REQUEST_METHODS,
    ZIP_SEPARATORS,
    as_text,
    filter_bool,
    filter_float,
    filter_int,
    is_domain,
    is_email,
    is_full_html,
    is_json,
    is_real_number,
    is_url,
    loosely_equal,
    strictly_equal,
    strip_chars,
    to_number,
)
from ..config import SieveConfig
from .registry import RuleKind, RuleRef, get_rule, parse_rule, rule

logger = logging.getLogger(__name__)


class _NotFound:
    """Result of a traversal into a missing key. Falsy, but not None/False."""

    _instance: Optional["_NotFound"] = None

    def __new__(cls) -> "_NotFound":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND = _NotFound()

# Comparison operators accepted by version_compare.
VERSION_OPERATORS = {
    "==": operator.eq, "=": operator.eq, "eq": operator.eq,
    "!=": operator.ne, "<>": operator.ne, "ne": operator.ne,
    "<": operator.lt, "lt": operator.lt,
    "<=": operator.le, "le": operator.le,
    ">": operator.gt, "gt": operator.gt,
    ">=": operator.ge, "ge": operator.ge,
}

_MIN_VERSION = Version("0.0.1")
_STRICT_VERSION_RE = re.compile(r"^(\d?\d)\.(\d?\d)\.(\d?\d)$")
_PHONE_LOOSE_RE = re.compile(r"^[0-9]{7,14}$")
_PHONE_STRICT_RE = re.compile(r"^\+[0-9]{1,2}[0-9]{6,13}$")
_ZIP_RE = re.compile(r"^[0-9]+$")
_ALPHA_RE = re.compile(r"^[a-zA-Z]+$")
_LOWER_ALPHA_RE = re.compile(r"^[a-z]+$")
_UPPER_ALPHA_RE = re.compile(r"^[A-Z]+$")
_HEX_COLOR_RE = re.compile(r"^#([0-9A-F]{3}){1,2}$", re.I)
_PASSWORD_CHARS = r"[a-zA-Z\d$@!%*?&]"
_STRICT_PASSWORD_LOOKAHEADS = r"(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[$@!%*?&])"
_BOOL_WORDS = {"on", "off", "yes", "no", "1", "0", "true", "false"}
_INDEX_RE = re.compile(r"-?[0-9]+")

# Values that are not "objects" in the catalog's sense.
_PLAIN_TYPES = (
    str, bytes, bytearray, int, float, Decimal, bool, list, tuple, dict, set, frozenset, type(None),
)


def _is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if is_real_number(value):
        return value == 0
    if isinstance(value, str):
        return value in ("", "0")
    if isinstance(value, (bytes, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    return False


def _is_object(value: Any) -> bool:
    return not isinstance(value, _PLAIN_TYPES) and not isinstance(value, type)


def _step(node: Any, key: str) -> Any:
    """Descend one path segment into a mapping, sequence or object."""
    if isinstance(node, Mapping):
        if key in node:
            return node[key]
        if _INDEX_RE.fullmatch(key) and int(key) in node:
            return node[int(key)]
        return NOT_FOUND
    if isinstance(node, (list, tuple)):
        try:
            return node[int(key)]
        except (ValueError, IndexError):
            return NOT_FOUND
    if _is_object(node):
        return getattr(node, key, NOT_FOUND)
    return NOT_FOUND


def _walk(data: Any, path: str) -> Any:
    current = data
    for segment in str(path).split("."):
        current = _step(current, segment)
        if current is NOT_FOUND:
            break
    return current


def _normalize_args(args: Any) -> Sequence[Any]:
    if args is None:
        return ()
    if isinstance(args, (list, tuple)):
        return args
    return (args,)


class Validator:
    """
    Holds the value under validation.

    Args:
        value:  anything; strings and real numbers get a string view and a length.
        config: date formats and DNS settings, defaults to `SieveConfig()`.
        now:    reference time for age and century checks. Captured once here and
                never re-read, so every check on this holder agrees on "today".
    """

    def __init__(self, value: Any = None, config: Optional[SieveConfig] = None,
                 now: Optional[datetime] = None) -> None:
        self.config = config or SieveConfig()
        self._now = now or datetime.now()
        self._value = value
        self._derive()

    @classmethod
    def value(cls, value: Any, config: Optional[SieveConfig] = None) -> "Validator":
        return cls(value, config=config)

    def _derive(self) -> None:
        """Recompute everything that depends on the current value."""
        self._text: Optional[str] = as_text(self._value)
        self._length = len(self._text) if self._text is not None else 0
        self._luhn: Optional[LuhnIdentifier] = None
        self._dns: Optional[DnsLookup] = None

    def __repr__(self) -> str:
        return f"Validator({self._value!r})"

    def __getattr__(self, name: str) -> Any:
        # Catalog names that are not Python method names: isEmail, notIsPhone, ...
        if name.startswith("_"):
            raise AttributeError(name)
        ref = parse_rule(name)
        return lambda *args: self.dispatch(ref, args)

    # ---------------- Holder API ----------------

    def with_value(self, value: Any) -> "Validator":
        """Copy of this holder wrapping `value`; self is left untouched."""
        inst = copy.copy(self)
        inst._value = value
        inst._derive()
        return inst

    def get_value(self) -> Any:
        return self._value

    def get_length(self) -> int:
        """Codepoint length of the string view (0 when there is none)."""
        return self._length

    @staticmethod
    def length_of(text: str) -> int:
        return len(text)

    def luhn(self) -> LuhnIdentifier:
        if self._luhn is None:
            self._luhn = LuhnIdentifier(self._value, now=self._now)
        return self._luhn

    def dns(self) -> DnsLookup:
        if self._dns is None:
            self._dns = DnsLookup(
                self._value,
                timeout=self.config.dns.timeout,
                nameservers=self.config.dns.nameservers,
            )
        return self._dns

    def dispatch(self, name: Union[str, RuleRef], args: Any = ()) -> Any:
        """
        Run a catalog rule by name against this holder.

        Raises:
            UnknownRuleError: the name (after removing a negation marker) is not
            registered.
        """
        ref = parse_rule(name) if isinstance(name, str) else name
        result = get_rule(ref.name).invoke(self, *_normalize_args(args))
        if ref.negated:
            return not result
        return result

    # ---------------- Traversal ----------------

    @rule("traverse", "eq", kind=RuleKind.TRAVERSAL)
    def traverse(self, path: str, mutate: bool = False) -> "Validator":
        """
        Follow a dotted path ("user.emails.0") into nested dicts, lists and objects.

        A missing segment yields `NOT_FOUND`, never an exception. With
        `mutate=True` and a successful lookup this holder's value is *replaced* by
        the found value (length etc. re-derived) and self is returned; in every
        other case a new holder is returned and self is left alone.
        """
        found = self._value
        if isinstance(found, (Mapping, list, tuple)) or _is_object(found):
            found = _walk(self._value, path)
            if mutate and found is not NOT_FOUND:
                self._value = found
                self._derive()
                return self
        return self.with_value(found)

    @rule("validateInData")
    def validate_in_data(self, path: str, rule_name: str, args: Any = ()) -> bool:
        """validate_in_data("user.name", "length", [1, 200])"""
        return bool(self.traverse(path, mutate=True).dispatch(rule_name, args))

    # ---------------- Presence ----------------

    @rule("isRequired", "required")
    def is_required(self) -> bool:
        """Non-empty string view and not an "empty" value (0, "", "0", None, False, [], {})."""
        return self.length(1) and not _is_empty(self._value)

    @rule("hasValue")
    def has_value(self) -> bool:
        return self.length(1)

    # ---------------- Booleans ----------------

    @rule("isTrue")
    def is_true(self) -> bool:
        return self._value is True

    @rule("isFalse")
    def is_false(self) -> bool:
        return self._value is False

    @rule("isTruthy")
    def is_truthy(self) -> bool:
        return filter_bool(self._value) is True

    @rule("isFalsy")
    def is_falsy(self) -> bool:
        return filter_bool(self._value) is False

    @rule("isBoolVal")
    def is_bool_val(self) -> bool:
        """Value reads as a boolean word: on/off, yes/no, 1/0, true/false."""
        if isinstance(self._value, bool):
            return True
        if self._text is None:
            return False
        return self._text.strip().lower() in _BOOL_WORDS

    # ---------------- Membership ----------------

    @rule("isInArray")
    def is_in_array(self, haystack: Sequence[Any]) -> bool:
        return any(strictly_equal(self._value, item) for item in haystack)

    @rule("isLooselyInArray")
    def is_loosely_in_array(self, haystack: Sequence[Any]) -> bool:
        return any(loosely_equal(self._value, item) for item in haystack)

    @rule("keyExists")
    def key_exists(self, key: Any) -> bool:
        if isinstance(self._value, Mapping):
            return key in self._value
        if isinstance(self._value, (list, tuple)) and isinstance(key, int):
            return -len(self._value) <= key < len(self._value)
        return False

    # ---------------- Types ----------------

    @rule("isString", "isStr")
    def is_string(self) -> bool:
        return isinstance(self._value, str)

    @rule("isInt")
    def is_int(self) -> bool:
        """Integer or integer string ("42", "-7"); True counts as 1."""
        return filter_int(self._value) is not None

    @rule("isFloat")
    def is_float(self) -> bool:
        return filter_float(self._value) is not None

    @rule("isArray")
    def is_array(self) -> bool:
        return isinstance(self._value, (list, tuple, dict))

    @rule("isObject")
    def is_object(self) -> bool:
        return _is_object(self._value)

    @rule("isBool")
    def is_bool(self) -> bool:
        return isinstance(self._value, bool)

    @rule("isNull")
    def is_null(self) -> bool:
        return self._value is None

    @rule("isResource")
    def is_resource(self) -> bool:
        """Open file objects, streams and sockets."""
        return isinstance(self._value, (io.IOBase, socket.socket))

    @rule("isNumber", "number")
    def is_number(self) -> bool:
        return self.is_float() or self.is_int()

    @rule("isNumbery", "numeric")
    def is_numbery(self) -> bool:
        """Loosely numeric: numbers and numeric strings, including "1e3"."""
        return to_number(self._value) is not None

    # ---------------- Numbers ----------------

    @rule("isPositive", "positive")
    def is_positive(self) -> bool:
        n = to_number(self._value)
        return n is not None and n >= 0

    @rule("isNegative", "negative")
    def is_negative(self) -> bool:
        n = to_number(self._value)
        return n is not None and n < 0

    @rule("min", "minimum")
    def min(self, minimum: float) -> bool:
        n = to_number(self._value)
        return n is not None and n >= minimum

    @rule("max", "maximum")
    def max(self, maximum: float) -> bool:
        n = to_number(self._value)
        return n is not None and n <= maximum

    @rule("isLessThan", "lessThan")
    def is_less_than(self, num: float) -> bool:
        n = to_number(self._value)
        return n is not None and n < num

    @rule("isMoreThan", "moreThan")
    def is_more_than(self, num: float) -> bool:
        n = to_number(self._value)
        return n is not None and n > num

    @rule("toIntEqual")
    def to_int_equal(self, value: int) -> bool:
        n = to_number(self._value)
        return n is not None and int(n) == value

    # ---------------- Equality ----------------

    @rule("isEqualTo", "equal")
    def is_equal_to(self, expected: Any) -> bool:
        return strictly_equal(self._value, expected)

    @rule("isNotEqualTo", "notEqual")
    def is_not_equal_to(self, value: Any) -> bool:
        return not strictly_equal(self._value, value)

    @rule("isLooselyEqualTo")
    def is_loosely_equal_to(self, expected: Any) -> bool:
        return loosely_equal(self._value, expected)

    @rule("isLooselyNotEqualTo")
    def is_loosely_not_equal_to(self, value: Any) -> bool:
        return not loosely_equal(self._value, value)

    # ---------------- Length / collections ----------------

    @rule("length")
    def length(self, min_length: int, max_length: Optional[int] = None) -> bool:
        """Derived length within [min_length, max_length]; no upper bound when None."""
        return self._length >= min_length and (max_length is None or self._length <= max_length)

    @rule("isLengthEqualTo", "equalLength")
    def is_length_equal_to(self, length: int) -> bool:
        return self._length == length

    def _count(self) -> Optional[int]:
        if isinstance(self._value, (list, tuple, dict)):
            return len(self._value)
        return None

    @rule("isArrayEmpty")
    def is_array_empty(self) -> bool:
        return self._count() == 0

    @rule("isCountEqualTo")
    def is_count_equal_to(self, length: int) -> bool:
        count = self._count()
        return count is not None and count == length

    @rule("isCountMoreThan")
    def is_count_more_than(self, length: int) -> bool:
        count = self._count()
        return count is not None and count > length

    @rule("isCountLessThan")
    def is_count_less_than(self, length: int) -> bool:
        count = self._count()
        return count is not None and count < length

    def _items(self) -> Optional[Sequence[Any]]:
        if isinstance(self._value, Mapping):
            return list(self._value.values())
        if isinstance(self._value, (list, tuple)):
            return self._value
        return None

    @rule("itemsAreTruthy")
    def items_are_truthy(self, key: Any) -> bool:
        """Every item has a truthy value at `key` (a dotted path is allowed)."""
        items = self._items()
        if items is None:
            return False
        return all(bool(_walk(item, str(key))) for item in items)

    @rule("hasTruthyItem")
    def has_truthy_item(self, key: Any) -> bool:
        items = self._items()
        if items is None:
            return False
        return any(bool(_walk(item, str(key))) for item in items)

    # ---------------- Strings ----------------

    @rule("contains")
    def contains(self, needle: str) -> bool:
        return self._text is not None and needle in self._text

    @rule("startsWith")
    def starts_with(self, needle: str) -> bool:
        return self._text is not None and self._text.startswith(needle)

    @rule("endsWith")
    def ends_with(self, needle: str) -> bool:
        return self._text is not None and self._text.endswith(needle)

    @rule("findInString")
    def find_in_string(self, match: str, pos: Optional[int] = None) -> bool:
        """`match` occurs anywhere, or exactly at `pos` when given."""
        if self._text is None:
            return False
        if pos is None:
            return match in self._text
        return self._text.find(match) == pos

    @rule("isMatchingPattern", "pregMatch")
    def is_matching_pattern(self, char_class: str) -> bool:
        """
        Whole value made of characters from a regex character class body,
        e.g. "a-z0-9_" checks `^[a-z0-9_]+$`.
        """
        if self._text is None:
            return False
        try:
            return re.fullmatch(f"[{char_class}]+", self._text) is not None
        except re.error as exc:
            logger.warning("invalid character class %r: %s", char_class, exc)
            return False

    @rule("isAlpha", "atoZ")
    def is_alpha(self) -> bool:
        return self._text is not None and _ALPHA_RE.fullmatch(self._text) is not None

    @rule("isLowerAlpha", "lowerAtoZ")
    def is_lower_alpha(self) -> bool:
        return self._text is not None and _LOWER_ALPHA_RE.fullmatch(self._text) is not None

    @rule("isUpperAlpha", "upperAtoZ")
    def is_upper_alpha(self) -> bool:
        return self._text is not None and _UPPER_ALPHA_RE.fullmatch(self._text) is not None

    @rule("isHex", "hex", "isHexColor")
    def is_hex(self) -> bool:
        """CSS hex color: #RGB or #RRGGBB."""
        return self._text is not None and _HEX_COLOR_RE.fullmatch(self._text) is not None

    # ---------------- Formats ----------------

    @rule("isEmail", "email")
    def is_email(self) -> bool:
        return is_email(self._value)

    @rule("isDeliverableEmail")
    def is_deliverable_email(self) -> bool:
        """Valid syntax and the domain has an MX record."""
        return self.is_email() and self.dns().is_mx_record()

    @rule("isUrl", "url")
    def is_url(self) -> bool:
        return is_url(self._value)

    @rule("isDomain", "domain")
    def is_domain(self, strict: bool = True) -> bool:
        return is_domain(self._value, strict)

    @rule("isPhone", "phone")
    def is_phone(self) -> bool:
        """
        Phone number after dropping spaces, dashes and parentheses.

        Either 7-14 plain digits or "+" with a 1-2 digit country code followed by
        6-13 digits. The held value is not modified.
        """
        if self._text is None:
            return False
        val = strip_chars(self._text, PHONE_SEPARATORS)
        return bool(_PHONE_STRICT_RE.fullmatch(val) or _PHONE_LOOSE_RE.fullmatch(val))

    @rule("isZip", "zip")
    def is_zip(self, min_length: int, max_length: Optional[int] = None) -> bool:
        """
        Postal code of `min_length`..`max_length` digits.

        Mutates the holder: spaces and dashes are stripped from the value, and the
        stripped string becomes the held value ("252 52" -> "25252") before the
        digits and length are checked.
        """
        if self._text is None:
            return False
        self._value = strip_chars(self._text, ZIP_SEPARATORS)
        self._derive()
        return _ZIP_RE.fullmatch(self._value) is not None and self.length(min_length, max_length)

    @rule("isJson")
    def is_json(self) -> bool:
        return is_json(self._value)

    @rule("isFullHtml")
    def is_full_html(self) -> bool:
        return is_full_html(self._value)

    @rule("isRequestMethod")
    def is_request_method(self) -> bool:
        return isinstance(self._value, str) and self._value.upper() in REQUEST_METHODS

    # ---------------- Passwords ----------------

    @rule("isLossyPassword", "lossyPassword")
    def is_lossy_password(self, length: int = 1) -> bool:
        """Only letters, digits and $@!%*?&, at least `length` characters."""
        if self._text is None:
            return False
        return re.fullmatch(rf"^{_PASSWORD_CHARS}{{{int(length)},}}$", self._text) is not None

    @rule("isStrictPassword", "strictPassword")
    def is_strict_password(self, length: int = 1) -> bool:
        """
        Same alphabet as the lossy password, but requires at least one lowercase
        letter, one uppercase letter, one digit and one special character.
        Combine with `length(8, 60)` for a real length policy.
        """
        if self._text is None:
            return False
        pattern = rf"^{_STRICT_PASSWORD_LOOKAHEADS}{_PASSWORD_CHARS}{{{int(length)},}}$"
        return re.fullmatch(pattern, self._text) is not None

    # ---------------- Dates ----------------

    def _strptime(self, text: Optional[str], fmt: str) -> Optional[datetime]:
        if text is None:
            return None
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            return None

    @rule("isDate", "date")
    def is_date(self, fmt: Optional[str] = None) -> bool:
        """Value parses with `fmt` (strftime syntax), default from config ("%Y-%m-%d")."""
        return self._strptime(self._text, fmt or self.config.formats.date) is not None

    @rule("isDateWithTime", "dateTime")
    def is_date_with_time(self) -> bool:
        return self._strptime(self._text, self.config.formats.date_time) is not None

    @rule("isTime", "time")
    def is_time(self, with_seconds: bool = False) -> bool:
        formats = self.config.formats
        fmt = formats.time_with_seconds if with_seconds else formats.time
        return self._strptime(self._text, fmt) is not None

    def _birth_date(self) -> Optional[date]:
        if self._text is None:
            return None
        try:
            return date.fromisoformat(self._text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(self._text).date()
        except ValueError:
            pass
        parsed = self._strptime(self._text, self.config.formats.date)
        return parsed.date() if parsed else None

    @rule("isAge", "age")
    def is_age(self, years: int) -> bool:
        """At least `years` old by calendar year, measured against this holder's "now"."""
        born = self._birth_date()
        if born is None:
            return False
        return self._now.year - born.year >= years

    @rule("dateRange", kind=RuleKind.STRUCTURED)
    def date_range(self, fmt: Optional[str] = None) -> Union[Dict[str, str], bool]:
        """
        "2024-01-01 10:00 - 2024-01-02 12:00" -> {"t1": ..., "t2": ...}

        Returns False unless both ends parse and the start is not after the end.
        """
        if self._text is None:
            return False
        bounds = self._text.split(" - ")
        if len(bounds) != 2:
            return False
        fmt = fmt or self.config.formats.date_range
        t1, t2 = bounds[0].strip(), bounds[1].strip()
        start, end = self._strptime(t1, fmt), self._strptime(t2, fmt)
        if start is not None and end is not None and start <= end:
            return {"t1": t1, "t2": t2}
        return False

    # ---------------- Versions ----------------

    def _version(self, text: Optional[str]) -> Optional[Version]:
        if text is None:
            return None
        try:
            return Version(text)
        except InvalidVersion:
            return None

    @rule("isValidVersion", "validVersion")
    def is_valid_version(self, strict: bool = False) -> bool:
        """A version >= 0.0.1; `strict` also requires the plain MAJOR.MINOR.PATCH form."""
        if self._text is None:
            return False
        if strict and not _STRICT_VERSION_RE.fullmatch(self._text):
            return False
        version = self._version(self._text)
        return version is not None and version >= _MIN_VERSION

    @rule("versionCompare")
    def version_compare(self, with_version: str, op: str = "==") -> bool:
        """
        Compare the held version with `with_version`.

        `op` must be one of VERSION_OPERATORS; anything else is False, as is an
        unparsable version on either side.
        """
        compare = VERSION_OPERATORS.get(op)
        if compare is None:
            return False
        mine, other = self._version(self._text), self._version(str(with_version))
        if mine is None or other is None:
            return False
        return compare(mine, other)

    # ---------------- Identity numbers ----------------

    @rule("isSocialNumber", "socialNumber", "personalNumber")
    def is_social_number(self) -> bool:
        """Swedish personal identity number (or coordination number)."""
        return self.luhn().social_number()

    @rule("isOrgNumber", "orgNumber")
    def is_org_number(self) -> bool:
        return self.luhn().org_number()

    @rule("isCreditCard", "creditCard")
    def is_credit_card(self) -> bool:
        return self.luhn().credit_card()

    @rule("isVatNumber", "vatNumber")
    def is_vat_number(self) -> bool:
        return self.luhn().vat_number()

    @rule("isMale")
    def is_male(self) -> bool:
        return self.luhn().is_male()

    @rule("isFemale")
    def is_female(self) -> bool:
        return self.luhn().is_female()

    # ---------------- DNS ----------------

    @rule("isResolvableHost", "isDns")
    def is_resolvable_host(self) -> bool:
        """Host (or email domain) has an MX, A or AAAA record."""
        return self.dns().is_resolvable_host()

    @rule("isMxRecord")
    def is_mx_record(self) -> bool:
        return self.dns().is_mx_record()

    @rule("isAddressRecord")
    def is_address_record(self) -> bool:
        return self.dns().is_address_record()

    @rule("isARecord")
    def is_a_record(self) -> bool:
        return self.dns().is_a_record()

    @rule("isAaaaRecord")
    def is_aaaa_record(self) -> bool:
        return self.dns().is_aaaa_record()

    @rule("isCnameRecord")
    def is_cname_record(self) -> bool:
        return self.dns().is_cname_record()

    @rule("isNsRecord")
    def is_ns_record(self) -> bool:
        return self.dns().is_ns_record()

    @rule("isSoaRecord")
    def is_soa_record(self) -> bool:
        return self.dns().is_soa_record()

    @rule("isTxtRecord")
    def is_txt_record(self) -> bool:
        return self.dns().is_txt_record()

    @rule("isSrvRecord")
    def is_srv_record(self) -> bool:
        return self.dns().is_srv_record()

    @rule("isNaptrRecord")
    def is_naptr_record(self) -> bool:
        return self.dns().is_naptr_record()

    @rule("isCaaRecord")
    def is_caa_record(self) -> bool:
        return self.dns().is_caa_record()

    @rule("isPtrRecord")
    def is_ptr_record(self) -> bool:
        return self.dns().is_ptr_record()

    @rule("isHinfoRecord")
    def is_hinfo_record(self) -> bool:
        return self.dns().is_hinfo_record()

    @rule("dnsRecord", kind=RuleKind.STRUCTURED)
    def dns_record(self, rdtype: str) -> Any:
        """Records of `rdtype` ("MX", "TXT", ...) or False."""
        return self.dns().records(rdtype)

    # ---------------- HTTP status codes ----------------

    def _status(self) -> Optional[int]:
        n = to_number(self._value)
        return int(n) if n is not None else None

    @rule("isHttpStatusCode")
    def is_http_status_code(self) -> bool:
        return self._status() in HTTP_STATUS_CODES

    @rule("isHttp200")
    def is_http_200(self) -> bool:
        return self._status() == 200

    @rule("isHttpSuccess")
    def is_http_success(self) -> bool:
        status = self._status()
        return status is not None and 200 <= status < 300

    @rule("isHttpClientError")
    def is_http_client_error(self) -> bool:
        status = self._status()
        return status is not None and 400 <= status < 500

    @rule("isHttpServerError")
    def is_http_server_error(self) -> bool:
        status = self._status()
        return status is not None and 500 <= status < 600

    # ---------------- Filesystem ----------------

    def _path(self) -> Optional[Union[str, os.PathLike]]:
        if isinstance(self._value, (str, os.PathLike)) and str(self._value):
            return self._value
        return None

    def _path_check(self, check) -> bool:
        path = self._path()
        if path is None:
            return False
        try:
            return bool(check(path))
        except (OSError, ValueError) as exc:
            logger.debug("filesystem check failed path=%r error=%s", path, exc)
            return False

    @rule("isFile")
    def is_file(self) -> bool:
        return self._path_check(os.path.isfile)

    @rule("isDir")
    def is_dir(self) -> bool:
        return self._path_check(os.path.isdir)

    @rule("isFileOrDirectory")
    def is_file_or_directory(self) -> bool:
        return self._path_check(os.path.exists)

    @rule("isWritable")
    def is_writable(self) -> bool:
        return self._path_check(lambda p: os.path.exists(p) and os.access(p, os.W_OK))

    @rule("isReadable")
    def is_readable(self) -> bool:
        return self._path_check(lambda p: os.path.exists(p) and os.access(p, os.R_OK))

    # ---------------- Combinators ----------------

    def _probe(self, name: str, args: Any) -> bool:
        return bool(self.with_value(self._value).dispatch(name, args))

    @rule("oneOf")
    def one_of(self, rules: Mapping[str, Any]) -> bool:
        """
        True if at least one rule passes.

        Each rule runs on its own copy of the value, so a mutating rule (isZip)
        cannot influence the others. All rules are evaluated, which means an
        unknown rule name always raises.
        """
        results = [self._probe(name, args) for name, args in rules.items()]
        return any(results)

    @rule("allOf")
    def all_of(self, rules: Mapping[str, Any]) -> bool:
        """True if every rule passes; stops at the first failure."""
        return all(self._probe(name, args) for name, args in rules.items())
