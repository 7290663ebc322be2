"""
DNS lookups for host / email validation.

Every check is a blocking resolver call bounded by `timeout` seconds. Lookup
failures of any kind (NXDOMAIN, no answer, timeout, no resolver configured)
read as "record not present" and are logged at debug level.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Union
import logging

import dns.exception
import dns.resolver

logger = logging.getLogger(__name__)

# Record types a caller may ask for explicitly.
RECORD_TYPES = (
    "A", "AAAA", "A6", "CAA", "CNAME", "HINFO", "MX", "NAPTR",
    "NS", "PTR", "SOA", "SRV", "TXT", "ANY",
)

DEFAULT_TIMEOUT = 5.0


def normalize_host(value: Any) -> Optional[str]:
    """
    Turn a host name or email address into an absolute ASCII host name.

    'info@exämple.se' -> 'xn--exmple-cua.se.'
    Returns None when there is nothing usable to look up.
    """
    if not isinstance(value, str):
        return None
    host = value.rsplit("@", 1)[-1].strip().rstrip(".")
    if not host:
        return None
    try:
        ascii_host = host.encode("idna").decode("ascii")
    except UnicodeError:
        return None
    return ascii_host + "."


class DnsLookup:
    """
    Resolver-backed record checks for a single host.

    Args:
        value: host name or email address (the domain part is used).
        timeout: overall resolver lifetime per query, in seconds.
        nameservers: optional explicit nameserver IPs; system config otherwise.
    """

    def __init__(
        self,
        value: Any,
        timeout: float = DEFAULT_TIMEOUT,
        nameservers: Optional[Sequence[str]] = None,
    ) -> None:
        self.host = normalize_host(value)
        self.timeout = timeout
        self.nameservers = list(nameservers or [])

    # -- Internals ------------------------------------------------------------------------

    def _resolver(self) -> dns.resolver.Resolver:
        resolver = dns.resolver.Resolver(configure=not self.nameservers)
        if self.nameservers:
            resolver.nameservers = self.nameservers
        resolver.timeout = self.timeout
        resolver.lifetime = self.timeout
        return resolver

    def _resolve(self, rdtype: str) -> Optional[dns.resolver.Answer]:
        if self.host is None:
            return None
        try:
            return self._resolver().resolve(self.host, rdtype)
        except dns.exception.DNSException as exc:
            logger.debug("dns lookup failed host=%s type=%s error=%s", self.host, rdtype, exc)
            return None

    # -- Generic API ----------------------------------------------------------------------

    def has_record(self, rdtype: str) -> bool:
        answer = self._resolve(rdtype)
        return answer is not None and len(answer) > 0

    def records(self, rdtype: str) -> Union[List[Dict[str, Any]], bool]:
        """
        Fetch the records of one type.

        Returns:
            A list of {"host", "type", "ttl", "value"} dicts, or False when none
            were found.

        Raises:
            ValueError: `rdtype` is not one of RECORD_TYPES (a caller bug, not a
            lookup failure).
        """
        rdtype = rdtype.upper()
        if rdtype not in RECORD_TYPES:
            raise ValueError(f"Invalid DNS type {rdtype!r}. Use one of {', '.join(RECORD_TYPES)}.")
        answer = self._resolve(rdtype)
        if answer is None or len(answer) == 0:
            return False
        ttl = answer.rrset.ttl if answer.rrset is not None else None
        return [
            {"host": self.host, "type": rdtype, "ttl": ttl, "value": rdata.to_text()}
            for rdata in answer
        ]

    # -- Named checks ---------------------------------------------------------------------

    def is_resolvable_host(self) -> bool:
        """MX, A or AAAA present."""
        return self.is_mx_record() or self.is_address_record()

    def is_address_record(self) -> bool:
        return self.is_a_record() or self.is_aaaa_record()

    def is_mx_record(self) -> bool:
        return self.has_record("MX")

    def is_a_record(self) -> bool:
        return self.has_record("A")

    def is_aaaa_record(self) -> bool:
        return self.has_record("AAAA")

    def is_cname_record(self) -> bool:
        return self.has_record("CNAME")

    def is_ns_record(self) -> bool:
        return self.has_record("NS")

    def is_soa_record(self) -> bool:
        return self.has_record("SOA")

    def is_txt_record(self) -> bool:
        return self.has_record("TXT")

    def is_srv_record(self) -> bool:
        return self.has_record("SRV")

    def is_naptr_record(self) -> bool:
        return self.has_record("NAPTR")

    def is_caa_record(self) -> bool:
        return self.has_record("CAA")

    def is_ptr_record(self) -> bool:
        return self.has_record("PTR")

    def is_hinfo_record(self) -> bool:
        return self.has_record("HINFO")
