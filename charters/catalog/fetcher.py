"""
Catalog and itinerary fetching from the automation backend.

Both webhooks are called with an empty JSON body. These read paths
degrade to an empty list: an unconfigured URL, a non-2xx upstream, an
unparseable body or a transport failure that survives the retries all
yield no data rather than an error.
"""

import json
import logging
from typing import Any, List, Optional

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from charters.catalog.normalizer import extract_items, normalize, normalize_itineraries
from charters.catalog.schemas import CatalogItem, Itinerary


logger = logging.getLogger(__name__)


class CatalogClient:
    """
    Client for the catalog and itinerary webhooks.

    Args:
        catalog_url: Catalog webhook URL (None -> empty catalog)
        itineraries_url: Itinerary webhook URL (None -> no itineraries)
        timeout_seconds: Transport timeout handed to httpx
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        catalog_url: Optional[str] = None,
        itineraries_url: Optional[str] = None,
        timeout_seconds: Optional[float] = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.catalog_url = catalog_url
        self.itineraries_url = itineraries_url
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
    )
    async def _post(self, url: str) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self.timeout_seconds,
            transport=self.transport,
        ) as client:
            response = await client.post(
                url,
                json={},
                headers={"cache-control": "no-store"},
            )
            return response

    async def post_json(self, url: str) -> Any:
        """
        POST an empty JSON body and decode the JSON reply.

        Args:
            url: Webhook URL

        Returns:
            Decoded JSON, or None on non-2xx, empty/invalid body or transport failure
        """
        try:
            response = await self._post(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"webhook request failed url={url}: {e}")
            return None

        text = response.text
        if not response.is_success:
            logger.warning(f"webhook error status={response.status_code} body={text[:300]}")
            return None

        if not text:
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            logger.warning(f"webhook returned non-JSON body url={url}")
            return None

    async def fetch_catalog(self) -> List[CatalogItem]:
        """Fetch and normalize the vessel catalog."""
        if not self.catalog_url:
            logger.info("Catalog webhook not configured; returning empty catalog")
            return []

        data = await self.post_json(self.catalog_url)
        items = [normalize(raw) for raw in extract_items(data)]
        logger.info(f"Fetched catalog | items={len(items)}")
        return items

    async def fetch_itineraries(self) -> List[Itinerary]:
        """Fetch itineraries, dropping entries without id or title."""
        if not self.itineraries_url:
            logger.info("Itinerary webhook not configured; returning no itineraries")
            return []

        data = await self.post_json(self.itineraries_url)
        itineraries = normalize_itineraries(data)
        logger.info(f"Fetched itineraries | itineraries={len(itineraries)}")
        return itineraries
