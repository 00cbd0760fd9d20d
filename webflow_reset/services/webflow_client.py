"""
Webflow CMS API Client
======================

Thin async wrapper around the Webflow REST API (v1).
See: https://developers.webflow.com/reference/list-items

Every method issues exactly one HTTP request and does NOT pace itself;
callers are expected to await `RequestPacer.consume_quota()` first.

HTTP 429 is raised as RateLimitError, every other failure as
RemoteOperationError.
"""

import httpx
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from webflow_reset.exceptions import RateLimitError, RemoteOperationError
from webflow_reset.models import (
    Collection,
    DeleteResponse,
    Page,
    PublishResponse,
    RateLimitStatus,
    Site,
    Webhook,
)

logger = logging.getLogger(__name__)


class WebflowClient:
    """Async HTTP client for the Webflow CMS"""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.webflow.com",
        api_version: str = "1.0.0",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize Webflow client

        Args:
            api_key: Webflow site or workspace API token
            base_url: API root URL
            api_version: Value of the `accept-version` header
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip('/')
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {api_key}",
                "accept-version": api_version,
                "Content-Type": "application/json"
            }
        )

    async def __aenter__(self) -> "WebflowClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def aclose(self):
        """Close the underlying HTTP connection pool"""
        await self.client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        """
        Execute one API request

        Raises:
            RateLimitError: Webflow answered 429
            RemoteOperationError: Network failure or any other non-2xx status
        """
        logger.debug(f"🌐 {method} {path}")
        try:
            response = await self.client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            raise RemoteOperationError(f"{method} {path} failed: {e}") from e

        if response.status_code == 429:
            raise RateLimitError(f"{method} {path} was rate limited")

        if response.status_code >= 400:
            raise RemoteOperationError(
                f"{method} {path} failed ({response.status_code}): {response.text}",
                status_code=response.status_code
            )

        return response

    async def _request_json(self, method: str, path: str, **kwargs) -> Any:
        response = await self._request(method, path, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            raise RemoteOperationError(
                f"{method} {path} returned invalid JSON: {response.text[:200]}",
                status_code=response.status_code
            ) from e

    @staticmethod
    def _parse(model, data: Any, what: str, many: bool = False):
        """Validate a response payload, turning shape errors into RemoteOperationError"""
        if many and not isinstance(data, list):
            raise RemoteOperationError(
                f"Unexpected {what} response: expected a list, got {type(data).__name__}"
            )
        try:
            if many:
                return [model.model_validate(entry) for entry in data]
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise RemoteOperationError(f"Unexpected {what} response: {e}") from e

    async def list_sites(self) -> List[Site]:
        """List every site the API key has access to"""
        data = await self._request_json("GET", "/sites")
        return self._parse(Site, data, "list sites", many=True)

    async def list_collections(self, site_id: str) -> List[Collection]:
        """List the CMS collections of a site"""
        data = await self._request_json("GET", f"/sites/{site_id}/collections")
        return self._parse(Collection, data, "list collections", many=True)

    async def get_rate_limit(self, collection_id: str) -> RateLimitStatus:
        """
        Fetch a collection purely to read the rate limit headers

        Returns:
            RateLimitStatus with limit/remaining (None if headers are absent)
        """
        response = await self._request("GET", f"/collections/{collection_id}")

        def _header_int(name: str) -> Optional[int]:
            value = response.headers.get(name)
            return int(value) if value and value.isdigit() else None

        return RateLimitStatus(
            limit=_header_int("X-RateLimit-Limit"),
            remaining=_header_int("X-RateLimit-Remaining")
        )

    async def list_items(self, collection_id: str, limit: int = 100, offset: int = 0) -> Page:
        """Get one page of items from a collection"""
        data = await self._request_json(
            "GET",
            f"/collections/{collection_id}/items",
            params={"limit": limit, "offset": offset}
        )
        return self._parse(Page, data, "list items")

    async def patch_item(
        self,
        collection_id: str,
        item_id: str,
        fields: Dict[str, Any],
        live: bool = False
    ) -> Dict[str, Any]:
        """
        Patch the given fields of an item

        Args:
            live: Also update the published version of the item
        """
        params = {"live": "true"} if live else None
        return await self._request_json(
            "PATCH",
            f"/collections/{collection_id}/items/{item_id}",
            params=params,
            json={"fields": fields}
        )

    async def delete_item(self, collection_id: str, item_id: str) -> DeleteResponse:
        """Remove an item from a collection"""
        data = await self._request_json("DELETE", f"/collections/{collection_id}/items/{item_id}")
        return self._parse(DeleteResponse, data, "delete item")

    async def publish_site(self, site_id: str, domains: List[str]) -> PublishResponse:
        """Queue a publish of the site to the given domains"""
        data = await self._request_json(
            "POST",
            f"/sites/{site_id}/publish",
            json={"domains": domains}
        )
        return self._parse(PublishResponse, data, "publish site")

    async def list_webhooks(self, site_id: str) -> List[Webhook]:
        """List the webhooks registered on a site"""
        data = await self._request_json("GET", f"/sites/{site_id}/webhooks")
        return self._parse(Webhook, data, "list webhooks", many=True)

    async def delete_webhook(self, site_id: str, webhook_id: str) -> DeleteResponse:
        """Remove a webhook from a site"""
        data = await self._request_json("DELETE", f"/sites/{site_id}/webhooks/{webhook_id}")
        return self._parse(DeleteResponse, data, "delete webhook")
