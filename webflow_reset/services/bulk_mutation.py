"""
Bulk Item Deletion Pipeline
===========================

Deletes a batch of Webflow items in two strictly ordered phases:

1. CLEAR  - patch every item so its reference fields are empty
2. DELETE - remove every item

Phase 1 runs over the WHOLE batch before phase 2 starts: an item may
reference a sibling that is deleted later in the same batch.

Every request goes through the shared RequestPacer. A 429 response
pauses for a fixed delay and retries the same item; any other error
aborts the run.
"""

import asyncio
import logging
from functools import partial
from typing import Awaitable, Callable, List, Optional, TypeVar

from webflow_reset.exceptions import RateLimitError, RemoteOperationError
from webflow_reset.models import Record
from webflow_reset.services.api_quota import RequestPacer
from webflow_reset.services.professional_logger import ResetStats, get_professional_logger
from webflow_reset.services.reference_scrubber import scrub_record

logger = logging.getLogger(__name__)
plog = get_professional_logger(__name__)

T = TypeVar("T")

RATE_LIMIT_RETRY_SECONDS = 30.0


async def retry_on_rate_limit(
    operation: Callable[[], Awaitable[T]],
    *,
    delay: float = RATE_LIMIT_RETRY_SECONDS,
    max_retries: Optional[int] = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    stats: Optional[ResetStats] = None
) -> T:
    """
    Run `operation` until it stops raising RateLimitError

    Args:
        operation: Zero-argument coroutine factory, called once per attempt
        delay: Fixed pause (seconds) after each rate limit error
        max_retries: Give up after this many retries (None = never)
        sleep: Coroutine used for the pause
        stats: Optional run statistics (rate_limits_hit is incremented)

    Raises:
        RemoteOperationError: max_retries exhausted, or raised by operation
    """
    retries = 0
    while True:
        try:
            return await operation()
        except RateLimitError as e:
            if stats is not None:
                stats.rate_limits_hit += 1
            if max_retries is not None and retries >= max_retries:
                raise RemoteOperationError(
                    f"Still rate limited after {retries} retries: {e}",
                    status_code=e.status_code
                ) from e
            retries += 1
            logger.warning(f"🚦 Hit a rate limit error. Waiting for {delay:g} seconds...")
            await sleep(delay)


class BulkMutationPipeline:
    """Clear references, then delete, for a batch of records"""

    def __init__(
        self,
        client,
        pacer: RequestPacer,
        retry_delay: float = RATE_LIMIT_RETRY_SECONDS,
        max_retries: Optional[int] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        stats: Optional[ResetStats] = None
    ):
        self.client = client
        self.pacer = pacer
        self.retry_delay = retry_delay
        self.max_retries = max_retries
        self._sleep = sleep
        self.stats = stats if stats is not None else ResetStats()

    async def _with_retry(self, operation: Callable[[], Awaitable[T]]) -> T:
        return await retry_on_rate_limit(
            operation,
            delay=self.retry_delay,
            max_retries=self.max_retries,
            sleep=self._sleep,
            stats=self.stats
        )

    async def delete_all(self, records: List[Record]):
        """
        Empty out the given records

        Raises:
            RemoteOperationError: Any non rate limit failure (the run stops;
                items already patched or deleted stay that way)
        """
        await self.clear_references(records)
        await self.delete_records(records)
        plog.success(f"Deleted {len(records)} items")

    async def clear_references(self, records: List[Record]):
        """Phase 1: patch every record that has reference fields"""
        for record in records:
            result = scrub_record(record)
            if not result.modified:
                continue

            live = bool(record.fields.get("published-on"))
            record.fields = result.fields
            await self._with_retry(partial(self._patch, record, live))

            self.stats.references_cleared += 1
            logger.info(f"🔗 Cleared reference fields for item {record.item_id}")

    async def delete_records(self, records: List[Record]):
        """Phase 2: delete every record"""
        for record in records:
            await self._with_retry(partial(self._delete, record))

            self.stats.items_deleted += 1
            logger.info(f"🗑️  Deleted item {record.item_id}")

    async def _patch(self, record: Record, live: bool):
        await self.pacer.consume_quota()
        response = await self.client.patch_item(record.collection_id, record.item_id, record.fields, live=live)
        # Webflow answers a successful patch with the updated item
        if not isinstance(response, dict) or response.get("_id") != record.item_id:
            raise RemoteOperationError(
                f"Couldn't clear references of item {record.item_id} in collection {record.collection_id}: "
                f"{response}"
            )

    async def _delete(self, record: Record):
        await self.pacer.consume_quota()
        response = await self.client.delete_item(record.collection_id, record.item_id)
        if not response.deleted or response.deleted < 1:
            raise RemoteOperationError(
                f"Couldn't delete item {record.item_id} in collection {record.collection_id}: "
                f"{response.model_dump()}"
            )
