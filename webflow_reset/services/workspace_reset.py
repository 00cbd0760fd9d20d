"""
Workspace Reset Workflow
========================

Wires the scanner, the bulk deletion pipeline and the republisher around
ONE shared RequestPacer and runs the full "empty Webflow" workflow:

1. Resolve sites (all or by ID) and republish them
2. Optionally remove their webhooks
3. Resolve collections (all or by ID)
4. Fetch every item, clear references, delete
5. Republish the sites again
"""

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Sequence

from webflow_reset.config import Settings, settings as default_settings
from webflow_reset.models import RateLimitStatus, Site
from webflow_reset.services.api_quota import RequestPacer
from webflow_reset.services.bulk_mutation import BulkMutationPipeline
from webflow_reset.services.professional_logger import ResetStats, get_professional_logger
from webflow_reset.services.record_scanner import RecordScanner
from webflow_reset.services.site_republisher import SiteRepublisher
from webflow_reset.utils.data_validation import (
    parse_collection_ids,
    parse_site_ids,
    validate_collection_ids,
)

logger = logging.getLogger(__name__)
plog = get_professional_logger(__name__)


class WorkspaceReset:
    """Empty out Webflow sites and collections"""

    def __init__(
        self,
        client,
        pacer: Optional[RequestPacer] = None,
        settings: Optional[Settings] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        stats: Optional[ResetStats] = None
    ):
        """
        Initialize the workflow

        Args:
            client: WebflowClient (or any object with the same coroutine methods)
            pacer: Pacer shared by every request of this run (created from
                settings when omitted)
            settings: Timing/pagination settings (defaults to the global settings)
            sleep: Coroutine used for rate limit pauses
            stats: Run statistics
        """
        self.settings = settings or default_settings
        self.client = client
        self.pacer = pacer or RequestPacer(min_interval=self.settings.REQUEST_INTERVAL_SECONDS)
        self.stats = stats if stats is not None else ResetStats()

        self.scanner = RecordScanner(
            client,
            self.pacer,
            page_size=self.settings.PAGE_SIZE,
            retry_delay=self.settings.RATE_LIMIT_RETRY_SECONDS,
            max_retries=self.settings.RATE_LIMIT_MAX_RETRIES,
            sleep=sleep,
            stats=self.stats
        )
        self.pipeline = BulkMutationPipeline(
            client,
            self.pacer,
            retry_delay=self.settings.RATE_LIMIT_RETRY_SECONDS,
            max_retries=self.settings.RATE_LIMIT_MAX_RETRIES,
            sleep=sleep,
            stats=self.stats
        )
        self.republisher = SiteRepublisher(
            client,
            self.pacer,
            publish_interval=self.settings.PUBLISH_INTERVAL_SECONDS,
            stats=self.stats
        )

    # Discovery

    async def list_sites(self) -> List[Site]:
        """Get every site the API key can see"""
        await self.pacer.consume_quota()
        return await self.client.list_sites()

    async def resolve_sites(self, site_ids: Optional[Sequence[str]]) -> List[Site]:
        """All sites for None, otherwise the sites whose ID was requested"""
        all_sites = await self.list_sites()
        if site_ids is None:
            return all_sites

        sites = [site for site in all_sites if site.id in site_ids]
        missing = set(site_ids) - {site.id for site in sites}
        if missing:
            plog.warning(f"Unknown site IDs ignored: {', '.join(sorted(missing))}")
        return sites

    async def resolve_collection_ids(
        self,
        sites: Sequence[Site],
        collection_ids: Optional[Sequence[str]]
    ) -> List[str]:
        """All collections of the given sites for None, otherwise the given IDs"""
        if collection_ids is not None:
            return list(collection_ids)

        resolved = []
        for site in sites:
            await self.pacer.consume_quota()
            collections = await self.client.list_collections(site.id)
            logger.info(f"📚 Found {len(collections)} collections in site {site.id}")
            resolved.extend(collection.id for collection in collections)
        return resolved

    async def check_rate_limit(self, collection_id: str) -> RateLimitStatus:
        """Spend one request to read the remaining Webflow quota"""
        await self.pacer.consume_quota()
        status = await self.client.get_rate_limit(collection_id)
        logger.info(f"🚦 Rate limit: {status.remaining}/{status.limit} remaining")
        return status

    # Core operations

    async def empty_collections(self, collection_ids: Sequence[str]):
        """
        Delete every item of the given collections

        Raises:
            ValidationError: An ID is malformed (nothing was sent)
            RemoteOperationError: A remote call failed (run aborted)
        """
        validate_collection_ids(collection_ids)
        records = await self.scanner.scan_all(collection_ids)
        await self.pipeline.delete_all(records)

    async def republish_sites(self, sites: Sequence[Site]):
        """Republish the given sites"""
        await self.republisher.republish(sites)

    async def remove_webhooks(self, sites: Sequence[Site]):
        """Delete every webhook registered on the given sites"""
        for site in sites:
            await self.pacer.consume_quota()
            webhooks = await self.client.list_webhooks(site.id)
            plog.success(f"Found {len(webhooks)} webhooks")

            for webhook in webhooks:
                await self.pacer.consume_quota()
                logger.info(f"🪝 Deleting webhook ({webhook.id})")
                await self.client.delete_webhook(site.id, webhook.id)
                self.stats.webhooks_removed += 1

    # Full workflow

    async def empty_webflow(
        self,
        site_ids: Sequence[str],
        collection_ids: Sequence[str],
        remove_webhooks: bool = False
    ):
        """
        Remove all items from the selected Webflow sites/collections

        Args:
            site_ids: Site IDs, or ["all"]
            collection_ids: Collection IDs, or ["all"]
            remove_webhooks: Also delete the webhooks of the selected sites
        """
        parsed_site_ids = parse_site_ids(site_ids)
        parsed_collection_ids = parse_collection_ids(collection_ids)

        plog.header("Resetting Webflow")

        sites = await self.resolve_sites(parsed_site_ids)
        await self.republish_sites(sites)

        if remove_webhooks:
            await self.remove_webhooks(sites)

        resolved_ids = await self.resolve_collection_ids(sites, parsed_collection_ids)
        await self.empty_collections(resolved_ids)
        await self.republish_sites(sites)
