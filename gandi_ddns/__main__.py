import asyncio
import sys

from .config import Settings, load_settings
from .dns.livedns import GandiLiveDNSClient
from .errors import ConfigurationError, DDNSError
from .ipify import PublicIPResolver
from .logger import logger, setup_logging
from .reconciler import ReconcileResult, Reconciler


async def run(settings: Settings) -> ReconcileResult:
    async with (
        PublicIPResolver(timeout=settings.gandi.timeout) as resolver,
        GandiLiveDNSClient(
            settings.gandi.key,
            base_url=settings.gandi.api_url,
            auth_scheme=settings.gandi.auth_scheme,
            timeout=settings.gandi.timeout,
        ) as dns_client,
    ):
        reconciler = Reconciler(
            dns_client,
            resolver,
            settings.dns.domain,
            settings.dns.records,
            ip_versions=settings.dns.ip_versions,
            on_failure=settings.on_failure,
        )
        return await reconciler.run()


def main() -> int:
    setup_logging()

    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error(f"Invalid Configuration File! {e}")
        return 1

    setup_logging(settings.log_level, settings.log_file)

    try:
        result = asyncio.run(run(settings))
    except DDNSError as e:
        logger.error(f"Run aborted: {e}")
        return 1
    except Exception as e:
        logger.critical(f"Unhandled {type(e).__name__}: {e}", exc_info=True)
        return 1

    logger.info(f"Success! {result.changed} DNS records were changed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
