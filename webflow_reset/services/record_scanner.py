"""
Collection Item Scanner
Pages through Webflow collections (offset pagination) and yields every item
as a Record tagged with its collection ID.
"""

import asyncio
import logging
from functools import partial
from typing import AsyncIterator, Awaitable, Callable, Iterable, List, Optional

from webflow_reset.exceptions import RemoteOperationError
from webflow_reset.models import Page, Record
from webflow_reset.services.api_quota import RequestPacer
from webflow_reset.services.bulk_mutation import RATE_LIMIT_RETRY_SECONDS, retry_on_rate_limit
from webflow_reset.services.professional_logger import ResetStats, get_professional_logger

logger = logging.getLogger(__name__)
plog = get_professional_logger(__name__)

PAGE_SIZE = 100  # Webflow max page size


class RecordScanner:
    """Fetch all items of one or more collections"""

    def __init__(
        self,
        client,
        pacer: RequestPacer,
        page_size: int = PAGE_SIZE,
        retry_delay: float = RATE_LIMIT_RETRY_SECONDS,
        max_retries: Optional[int] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        stats: Optional[ResetStats] = None
    ):
        self.client = client
        self.pacer = pacer
        self.page_size = page_size
        self.retry_delay = retry_delay
        self.max_retries = max_retries
        self._sleep = sleep
        self.stats = stats if stats is not None else ResetStats()

    async def _fetch_page(self, collection_id: str, offset: int) -> Page:
        await self.pacer.consume_quota()
        return await self.client.list_items(collection_id, limit=self.page_size, offset=offset)

    async def scan(self, collection_id: str) -> AsyncIterator[Record]:
        """
        Yield every item of a collection, starting from offset 0

        Each page costs one pacer quota unit. A rate limited page is
        requested again at the same offset after the retry delay.
        Scanning stops once the offset reaches the total reported by the
        last page, or when a page makes no progress.
        """
        offset = 0
        while True:
            page = await retry_on_rate_limit(
                partial(self._fetch_page, collection_id, offset),
                delay=self.retry_delay,
                max_retries=self.max_retries,
                sleep=self._sleep,
                stats=self.stats
            )

            for item in page.items:
                if "_id" not in item:
                    raise RemoteOperationError(f"Item without '_id' in collection {collection_id}: {item}")
                yield Record(collection_id=collection_id, item_id=item["_id"], fields=dict(item))

            offset += page.count
            logger.info(f"📦 Found {len(page.items)} items in collection {collection_id}, offset = {offset}")

            if offset >= page.total:
                break

            if page.count == 0:
                logger.warning(
                    f"⚠️  Collection {collection_id} returned an empty page at offset {offset} "
                    f"(total = {page.total}) - stopping"
                )
                break

    async def scan_all(self, collection_ids: Iterable[str]) -> List[Record]:
        """Scan collections one after another and concatenate their records"""
        records: List[Record] = []
        for collection_id in collection_ids:
            async for record in self.scan(collection_id):
                records.append(record)

        self.stats.items_found += len(records)
        plog.success(f"Found a total of {len(records)} items")
        return records
