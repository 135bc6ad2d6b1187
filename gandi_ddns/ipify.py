"""
Public IP discovery through the ipify echo service.
"""

import asyncio
import json as jsonlib

import aiohttp

from .dns.types import IPVersion
from .dns.utils import build_ipify_url, parse_ip
from .errors import DiscoveryError
from .logger import logger


class IPResolver:
    """
    abstract class for public ip discovery
    """

    async def resolve(self, version: IPVersion) -> str: ...

    async def close(self): ...

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


class PublicIPResolver(IPResolver):
    def __init__(self, timeout: float = 10) -> None:
        self._session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=timeout)
        )

    async def _get(self, url: str) -> tuple[int, str]:
        async with self._session.get(url) as response:
            return response.status, await response.text()

    async def resolve(self, version: IPVersion) -> str:
        """
        Ask the echo service which address this host reaches it from.

        Raises:
            DiscoveryError: the service was unreachable, answered with a non-2xx
                status or did not return an address
        """
        url = build_ipify_url(version)
        try:
            status, body = await self._get(url)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"Critical Error: Unable to get public IP{version.value}! {e}")
            raise DiscoveryError(f"IP{version.value} discovery failed: {e}") from e

        if not 200 <= status < 300:
            logger.error(
                f"Critical Error: Unable to get public IP{version.value}! Status Code: {status}"
            )
            raise DiscoveryError(
                f"IP{version.value} discovery failed: HTTP {status}", status=status
            )

        try:
            ip = parse_ip(jsonlib.loads(body))
        except ValueError:
            ip = None

        if not ip:
            logger.error(f"Critical Error: no IP{version.value} address in response")
            raise DiscoveryError(
                f"IP{version.value} discovery failed: no address in response",
                status=status,
            )

        logger.info(f"Public IP{version.value}: {ip}")
        return ip

    async def close(self):
        await self._session.close()
