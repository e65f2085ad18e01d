"""
FastAPI endpoints for the vessel catalog.

Read-through views of the catalog and itinerary webhooks, normalized.
"""

import logging
from typing import List, Sequence

from fastapi import APIRouter, Depends

from charters.catalog.fetcher import CatalogClient
from charters.catalog.normalizer import build_catalog
from charters.catalog.schemas import (
    CatalogEntry,
    CatalogItemView,
    CatalogResponse,
    ItinerariesResponse,
    stars,
)
from charters.shared.dependencies import catalog_client_dependency


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


def to_item_views(catalog: Sequence[CatalogEntry]) -> List[CatalogItemView]:
    """Render keyed catalog entries for API responses."""
    return [
        CatalogItemView(
            key=entry.key,
            stars=stars(entry.item.rating),
            item=entry.item.to_dict(),
        )
        for entry in catalog
    ]


@router.get("/boats", response_model=CatalogResponse)
async def list_boats(
    catalog_client: CatalogClient = Depends(catalog_client_dependency),
) -> CatalogResponse:
    """
    List the current vessel catalog.

    Returns:
        Normalized items with their selection keys
    """
    items = await catalog_client.fetch_catalog()
    return CatalogResponse(items=to_item_views(build_catalog(items)))


@router.get("/itineraries", response_model=ItinerariesResponse)
async def list_itineraries(
    catalog_client: CatalogClient = Depends(catalog_client_dependency),
) -> ItinerariesResponse:
    """List itineraries that can be attached to a proposal."""
    itineraries = await catalog_client.fetch_itineraries()
    return ItinerariesResponse(itineraries=itineraries)
