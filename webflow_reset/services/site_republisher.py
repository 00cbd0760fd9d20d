"""
Site Republisher
Republishes Webflow sites to their webflow.io staging domain.
"""

import logging
from typing import Iterable, Optional

from webflow_reset.exceptions import RemoteOperationError
from webflow_reset.models import Site
from webflow_reset.services.api_quota import RequestPacer
from webflow_reset.services.professional_logger import ResetStats, get_professional_logger

logger = logging.getLogger(__name__)
plog = get_professional_logger(__name__)

# Webflow's publish site endpoint has a **1 minute rate limit**
PUBLISH_INTERVAL_SECONDS = 60.0


def staging_domains(site: Site):
    return [f"{site.short_name}.webflow.io"]


class SiteRepublisher:
    """Publish a list of sites, one per publish interval"""

    def __init__(
        self,
        client,
        pacer: RequestPacer,
        publish_interval: float = PUBLISH_INTERVAL_SECONDS,
        stats: Optional[ResetStats] = None
    ):
        self.client = client
        self.pacer = pacer
        self.publish_interval = publish_interval
        self.stats = stats if stats is not None else ResetStats()

    async def republish(self, sites: Iterable[Site]):
        """
        Republish every site

        Raises:
            RemoteOperationError: Webflow did not queue a publish
        """
        for site in sites:
            domains = staging_domains(site)
            logger.info(
                f"🚀 Publishing your Webflow site. Webflow's publish site endpoint has a "
                f"{self.publish_interval:g}s rate limit. Sleeping for {self.publish_interval:g}s..."
            )
            await self.pacer.consume_quota(custom_delay=self.publish_interval)
            logger.info("Sleep finished.")

            response = await self.client.publish_site(site.id, domains)
            if response.queued is not True:
                raise RemoteOperationError(
                    f"Problem republishing site {site.id}! {response.model_dump()}"
                )

            self.stats.sites_republished += 1
            plog.success(f"Republished {', '.join(domains)}")
