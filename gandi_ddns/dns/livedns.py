"""
Gandi LiveDNS Client

Reads and replaces single rrsets through the LiveDNS v5 REST API.
"""

import asyncio
import json as jsonlib
from typing import Literal, Optional

import aiohttp

from ..errors import ReadError, WriteTransportError
from ..logger import logger
from .dns import DNSClient
from .types import RecordTypeT, RecordValuesT, RRSetT
from .utils import build_record_url, parse_rrset_values

LIVEDNS_URL = "https://api.gandi.net/v5/livedns"
RRSET_TTL = 1800

AuthSchemeT = Literal["Bearer", "Apikey"]

_TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, ValueError)


class GandiLiveDNSClient(DNSClient):
    """
    DNS client for Gandi LiveDNS.

    The authorization header is attached to the session once and never changes
    afterwards, so the client can be shared by every call of a run.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = LIVEDNS_URL,
        auth_scheme: AuthSchemeT = "Bearer",
        timeout: float = 10,
    ) -> None:
        self._session = aiohttp.ClientSession(
            headers={"Authorization": f"{auth_scheme} {api_key}"},
            timeout=aiohttp.ClientTimeout(total=timeout),
        )
        self._base_url = base_url

    async def _send_request(
        self,
        method: Literal["GET", "PUT"],
        url: str,
        json: Optional[RRSetT] = None,
    ) -> tuple[int, str]:
        async with self._session.request(method, url, json=json) as response:
            return response.status, await response.text()

    async def get_record(
        self, domain: str, name: str, record_type: RecordTypeT
    ) -> RecordValuesT:
        url = build_record_url(self._base_url, domain, name, record_type)
        try:
            status, response_str = await self._send_request("GET", url)
        except _TRANSPORT_ERRORS as e:
            logger.error(
                f"Unable to retrieve the {record_type} record for {name}@{domain}: {e}"
            )
            raise ReadError(
                f"failed to read {record_type} record {name}@{domain}: {e}"
            ) from e

        if status == 404:
            return None

        if not 200 <= status < 300:
            logger.error(
                f"Unable to retrieve the {record_type} record for {name}@{domain} from Gandi! "
                f"Status Code: {status}"
            )
            raise ReadError(
                f"failed to read {record_type} record {name}@{domain}: HTTP {status}",
                status=status,
            )

        try:
            payload = jsonlib.loads(response_str) if response_str else None
        except ValueError as e:
            logger.error(
                f"Unreadable {record_type} record for {name}@{domain} from Gandi! "
                f"Status Code: {status}"
            )
            raise ReadError(
                f"failed to read {record_type} record {name}@{domain}: {e}",
                status=status,
            ) from e

        return parse_rrset_values(payload)

    async def update_record(
        self, domain: str, name: str, record_type: RecordTypeT, value: str
    ) -> bool:
        url = build_record_url(self._base_url, domain, name, record_type)
        payload = RRSetT(rrset_ttl=RRSET_TTL, rrset_values=[value])
        try:
            status, _ = await self._send_request("PUT", url, json=payload)
        except _TRANSPORT_ERRORS as e:
            logger.error(
                f"Unable to update the {record_type} record for {name}@{domain}: {e}"
            )
            raise WriteTransportError(
                f"failed to update {record_type} record {name}@{domain}: {e}"
            ) from e

        # LiveDNS answers 201 when the rrset was created or replaced
        if status != 201:
            logger.warning(f"{record_type} -> {name}@{domain}: {status}")
            return False

        return True

    async def close(self):
        await self._session.close()
