"""
DNS type definitions for the DNS module
"""

from enum import Enum
from typing import Literal, TypedDict

RecordTypeT = Literal["A", "AAAA"]
# None: the record does not exist at the provider
RecordValuesT = list[str] | None


class IPVersion(Enum):
    """Address family handled by the synchronizer"""

    V4 = "v4"
    V6 = "v6"

    @property
    def record_type(self) -> RecordTypeT:
        return "A" if self is IPVersion.V4 else "AAAA"

    @property
    def ipify_host(self) -> str:
        return "api4.ipify.org" if self is IPVersion.V4 else "api6.ipify.org"


class RRSetT(TypedDict):
    """Body of a LiveDNS rrset replacement request"""

    rrset_ttl: int
    rrset_values: list[str]


AddressesT = dict[IPVersion, str | None]
