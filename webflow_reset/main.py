"""
webflow-reset command line
==========================

Usage:
    webflow-reset list-sites --api-key KEY
    webflow-reset empty-webflow --api-key KEY --site-ids all --collection-ids all
    webflow-reset empty-webflow --api-key KEY --site-ids SITE_ID \\
        --collection-ids COLLECTION_ID [COLLECTION_ID ...] [--remove-webhooks]
    webflow-reset check-rate-limit --api-key KEY --collection-id COLLECTION_ID

The API key may also come from WEBFLOW_API_KEY (environment or .env).
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv
load_dotenv()

from webflow_reset.config import settings
from webflow_reset.exceptions import WebflowResetError
from webflow_reset.services.api_quota import RequestPacer
from webflow_reset.services.professional_logger import get_professional_logger
from webflow_reset.services.webflow_client import WebflowClient
from webflow_reset.services.workspace_reset import WorkspaceReset
from webflow_reset.utils import validate_collection_ids

logger = logging.getLogger(__name__)
plog = get_professional_logger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="webflow-reset",
        description="Remove all items from your Webflow CMS."
    )
    parser.add_argument("--log-level", default=settings.LOG_LEVEL, type=str.upper, choices=LOG_LEVELS,
                        help="Logging level (default: %(default)s)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_sites = subparsers.add_parser("list-sites", help="Get the site IDs for your Webflow sites.")
    list_sites.add_argument("--api-key", "--apiKey", dest="api_key", default=settings.WEBFLOW_API_KEY,
                            help="Webflow API key (default: $WEBFLOW_API_KEY)")

    empty = subparsers.add_parser("empty-webflow", help="Remove all items from your Webflow base!")
    empty.add_argument("--api-key", "--apiKey", dest="api_key", default=settings.WEBFLOW_API_KEY,
                       help="Webflow API key (default: $WEBFLOW_API_KEY)")
    empty.add_argument("--site-ids", "--siteIds", dest="site_ids", nargs="+", required=True,
                       metavar="all|SITE_ID",
                       help='A space-separated list of site IDs to empty out, or "all" to empty all of them')
    empty.add_argument("--collection-ids", "--collectionIds", dest="collection_ids", nargs="+", required=True,
                       metavar="all|COLLECTION_ID",
                       help='A space-separated list of collection IDs to empty out, or "all" to empty all of them')
    empty.add_argument("--remove-webhooks", action="store_true",
                       help="Also delete every webhook registered on the selected sites")

    quota = subparsers.add_parser("check-rate-limit", help="Show how many Webflow API requests are left.")
    quota.add_argument("--api-key", "--apiKey", dest="api_key", default=settings.WEBFLOW_API_KEY,
                       help="Webflow API key (default: $WEBFLOW_API_KEY)")
    quota.add_argument("--collection-id", "--collectionId", dest="collection_id", required=True,
                       help="Any collection ID the API key can read")

    return parser


def _make_client(api_key: str) -> WebflowClient:
    return WebflowClient(
        api_key,
        base_url=settings.WEBFLOW_API_URL,
        api_version=settings.WEBFLOW_API_VERSION,
        timeout=settings.REQUEST_TIMEOUT
    )


async def list_sites(api_key: str):
    """Print `name: id` for every site"""
    plog.header("Looking for your Webflow sites")
    async with _make_client(api_key) as client:
        reset = WorkspaceReset(client, RequestPacer(settings.REQUEST_INTERVAL_SECONDS))
        for site in await reset.list_sites():
            print(f"{site.name}: {site.id}")


async def empty_webflow(api_key: str, site_ids: List[str], collection_ids: List[str], remove_webhooks: bool = False):
    """Run the full reset workflow and print the run statistics"""
    async with _make_client(api_key) as client:
        reset = WorkspaceReset(client, RequestPacer(settings.REQUEST_INTERVAL_SECONDS))
        await reset.empty_webflow(site_ids, collection_ids, remove_webhooks=remove_webhooks)
        plog.print_stats(reset.stats)


async def check_rate_limit(api_key: str, collection_id: str):
    """Print the remaining request quota of the API key"""
    validate_collection_ids([collection_id])
    async with _make_client(api_key) as client:
        reset = WorkspaceReset(client, RequestPacer(settings.REQUEST_INTERVAL_SECONDS))
        status = await reset.check_rate_limit(collection_id)
        print(f"{status.remaining}/{status.limit} requests remaining")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(message)s")

    if not args.api_key:
        plog.error("Webflow API key must be specified (--api-key or WEBFLOW_API_KEY)")
        return 1

    try:
        if args.command == "list-sites":
            asyncio.run(list_sites(args.api_key))
        elif args.command == "check-rate-limit":
            asyncio.run(check_rate_limit(args.api_key, args.collection_id))
        else:
            asyncio.run(empty_webflow(
                args.api_key,
                args.site_ids,
                args.collection_ids,
                remove_webhooks=args.remove_webhooks
            ))
    except WebflowResetError as e:
        plog.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
