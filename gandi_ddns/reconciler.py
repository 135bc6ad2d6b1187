"""
Reconciler

Compares the public addresses of this host with the A/AAAA records stored at
the DNS provider and rewrites only the records that have drifted.
"""

from typing import Iterable, Literal, NamedTuple

from .dns.dns import DNSClient
from .dns.types import AddressesT, IPVersion
from .errors import DiscoveryError, ReadError
from .ipify import IPResolver
from .logger import logger

FailurePolicyT = Literal["abort", "skip"]


class ReconcileResult(NamedTuple):
    """Outcome of one reconciliation run"""

    changed: int
    unchanged: int
    skipped: int
    rejected: int


class Reconciler:
    """
    One pass of the synchronizer over the configured records.

    Records are handled in configuration order, IPv4 before IPv6 within a
    record. Every remote call is awaited before the next one is issued.

    The failure policy decides what a DiscoveryError or ReadError does:
    "abort" lets it end the run, "skip" drops the address family (discovery)
    or the (record, family) pair (read) and carries on. A WriteTransportError
    always ends the run.
    """

    def __init__(
        self,
        dns_client: DNSClient,
        resolver: IPResolver,
        domain: str,
        records: Iterable[str],
        ip_versions: Iterable[IPVersion] = (IPVersion.V4, IPVersion.V6),
        on_failure: FailurePolicyT = "abort",
    ) -> None:
        self._dns_client = dns_client
        self._resolver = resolver
        self._domain = domain
        self._records = list(records)
        self._ip_versions = sorted(set(ip_versions), key=lambda v: v.value)
        self._on_failure = on_failure

    async def discover_addresses(self) -> AddressesT:
        addresses = AddressesT()
        for version in self._ip_versions:
            try:
                addresses[version] = await self._resolver.resolve(version)
            except DiscoveryError as e:
                if self._on_failure == "abort":
                    raise
                logger.warning(
                    f"Skipping every {version.record_type} record for this run: {e}"
                )
                addresses[version] = None
        return addresses

    async def run(self) -> ReconcileResult:
        logger.info(f"Updating the records of {self._domain} ...")

        addresses = await self.discover_addresses()

        changed = unchanged = skipped = rejected = 0
        for record in self._records:
            logger.info(f"Updating the entries of {record}@{self._domain} ...")

            for version in self._ip_versions:
                ip = addresses.get(version)
                if ip is None:
                    continue

                outcome = await self._reconcile_one(record, version, ip)
                if outcome == "changed":
                    changed += 1
                elif outcome == "unchanged":
                    unchanged += 1
                elif outcome == "rejected":
                    rejected += 1
                else:
                    skipped += 1

        return ReconcileResult(
            changed=changed, unchanged=unchanged, skipped=skipped, rejected=rejected
        )

    async def _reconcile_one(
        self, record: str, version: IPVersion, ip: str
    ) -> Literal["changed", "unchanged", "rejected", "skipped"]:
        record_type = version.record_type

        try:
            values = await self._dns_client.get_record(self._domain, record, record_type)
        except ReadError as e:
            if self._on_failure == "abort":
                raise
            logger.warning(f"Skipping {record}/{record_type}: {e}")
            return "skipped"

        if values is None:
            logger.warning(
                f"Warning! The record {record}/{record_type} does not exist, "
                "and thus cannot be updated!"
            )
            return "skipped"

        if not values:
            logger.warning(
                f"Warning! The record {record}/{record_type} is empty, "
                "and thus cannot be updated!"
            )
            return "skipped"

        # only the first stored value is managed
        if values[0] == ip:
            logger.info(f"{record}/{record_type} is up to date ({ip})")
            return "unchanged"

        if await self._dns_client.update_record(self._domain, record, record_type, ip):
            logger.info(f"{record}/{record_type}: {values[0]} -> {ip}")
            return "changed"

        return "rejected"
