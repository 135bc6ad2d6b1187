"""
DNS client, types and helpers for Gandi LiveDNS
"""

from .dns import DNSClient
from .livedns import LIVEDNS_URL, RRSET_TTL, GandiLiveDNSClient
from .types import (
    AddressesT,
    IPVersion,
    RecordTypeT,
    RecordValuesT,
    RRSetT,
)
from .utils import build_ipify_url, build_record_url, parse_ip, parse_rrset_values

__all__ = [
    "DNSClient",
    "GandiLiveDNSClient",
    "LIVEDNS_URL",
    "RRSET_TTL",
    "AddressesT",
    "IPVersion",
    "RecordTypeT",
    "RecordValuesT",
    "RRSetT",
    "build_ipify_url",
    "build_record_url",
    "parse_ip",
    "parse_rrset_values",
]
