"""
DNS utility functions for URL building and response parsing
"""

from typing import Any, Optional
from urllib.parse import quote

from .types import IPVersion, RecordValuesT


def build_record_url(base_url: str, domain: str, name: str, record_type: str) -> str:
    """
    Build the LiveDNS URL addressing one rrset.

    Args:
        base_url: LiveDNS API root, with or without a trailing slash
        domain: Zone the record lives in (e.g. "example.com")
        name: Record label relative to the zone (e.g. "home", "@" or "*")
        record_type: Record type tag ("A" or "AAAA")

    Returns:
        Fully formed URL, e.g. "https://api.gandi.net/v5/livedns/domains/example.com/records/home/A"
    """
    base_url = base_url.rstrip("/")
    return (
        f"{base_url}/domains/{quote(domain, safe='')}"
        f"/records/{quote(name, safe='@*')}/{quote(record_type, safe='')}"
    )


def build_ipify_url(version: IPVersion) -> str:
    return f"https://{version.ipify_host}/?format=json"


def parse_ip(payload: Any) -> Optional[str]:
    """Extract the "ip" field of an echo response, None if it is missing or not a string"""
    if not isinstance(payload, dict):
        return None
    ip = payload.get("ip")
    if not isinstance(ip, str):
        return None
    return ip.strip()


def parse_rrset_values(payload: Any) -> RecordValuesT:
    """
    Extract "rrset_values" from a LiveDNS record response.

    A missing or non-array field means the provider did not describe a record,
    which is reported as None rather than as an empty list.
    """
    if not isinstance(payload, dict):
        return None
    values = payload.get("rrset_values")
    if not isinstance(values, list):
        return None
    return [value if isinstance(value, str) else str(value) for value in values]
