from unittest.mock import MagicMock, patch

import dns.resolver
import pytest

from sieve.checks.hosts import DnsLookup, normalize_host
from sieve.config import DnsConfig, SieveConfig
from sieve.engine.value import Validator


def _answer(*values, ttl=300):
    rdatas = []
    for value in values:
        rdata = MagicMock()
        rdata.to_text.return_value = value
        rdatas.append(rdata)
    answer = MagicMock()
    answer.__len__.return_value = len(rdatas)
    answer.__iter__.side_effect = lambda: iter(rdatas)
    answer.rrset.ttl = ttl
    return answer


def _resolver_for(records):
    """Resolver mock answering from {rdtype: answer}; anything else is NoAnswer."""
    resolver = MagicMock()

    def resolve(host, rdtype):
        if rdtype in records:
            return records[rdtype]
        raise dns.resolver.NoAnswer()

    resolver.resolve.side_effect = resolve
    return resolver


@pytest.mark.parametrize(
    "value,expected",
    [
        ("example.se", "example.se."),
        ("info@example.se", "example.se."),
        ("example.se.", "example.se."),
        ("exämple.se", "xn--exmple-cua.se."),
        ("", None),
        (None, None),
    ],
)
def test_normalize_host(value, expected):
    assert normalize_host(value) == expected


def test_mx_record_found():
    resolver = _resolver_for({"MX": _answer("10 mail.example.se.")})
    with patch("dns.resolver.Resolver", return_value=resolver):
        lookup = DnsLookup("info@example.se")
        assert lookup.is_mx_record()
        assert lookup.is_resolvable_host()
        assert not lookup.is_txt_record()
    resolver.resolve.assert_any_call("example.se.", "MX")


def test_address_record_fallback():
    resolver = _resolver_for({"AAAA": _answer("2001:db8::1")})
    with patch("dns.resolver.Resolver", return_value=resolver):
        lookup = DnsLookup("example.se")
        assert not lookup.is_a_record()
        assert lookup.is_address_record()
        assert lookup.is_resolvable_host()


def test_nxdomain_is_false():
    resolver = MagicMock()
    resolver.resolve.side_effect = dns.resolver.NXDOMAIN()
    with patch("dns.resolver.Resolver", return_value=resolver):
        assert not DnsLookup("nope.invalid").is_resolvable_host()


def test_records():
    resolver = _resolver_for({"TXT": _answer('"v=spf1 -all"', ttl=60)})
    with patch("dns.resolver.Resolver", return_value=resolver):
        lookup = DnsLookup("example.se")
        assert lookup.records("txt") == [
            {"host": "example.se.", "type": "TXT", "ttl": 60, "value": '"v=spf1 -all"'},
        ]
        assert lookup.records("MX") is False


def test_records_rejects_unknown_type():
    with pytest.raises(ValueError):
        DnsLookup("example.se").records("BOGUS")


def test_timeout_and_nameservers_applied():
    resolver = _resolver_for({})
    with patch("dns.resolver.Resolver", return_value=resolver) as factory:
        DnsLookup("example.se", timeout=2.0, nameservers=["9.9.9.9"]).is_a_record()
    factory.assert_called_once_with(configure=False)
    assert resolver.lifetime == 2.0
    assert resolver.nameservers == ["9.9.9.9"]


def test_no_host_skips_lookup():
    with patch("dns.resolver.Resolver") as factory:
        assert not DnsLookup(42).is_mx_record()
    factory.assert_not_called()


def test_validator_uses_config():
    cfg = SieveConfig(dns=DnsConfig(timeout=1.5))
    resolver = _resolver_for({"MX": _answer("10 mx.gmail.com.")})
    with patch("dns.resolver.Resolver", return_value=resolver):
        holder = Validator("john.doe@gmail.com", config=cfg)
        assert holder.isDeliverableEmail()
        assert holder.isDns()
        assert holder.dns_record("MX")[0]["value"] == "10 mx.gmail.com."
    assert resolver.lifetime == 1.5


def test_deliverable_email_needs_valid_syntax():
    with patch("dns.resolver.Resolver") as factory:
        assert not Validator("john.doe-gmail.com").is_deliverable_email()
    factory.assert_not_called()
