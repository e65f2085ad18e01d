"""
Vessel catalog.

Normalizes heterogeneous upstream records into CatalogItem and keys each
catalog snapshot for selection.
"""

from charters.catalog.normalizer import build_catalog, extract_items, normalize
from charters.catalog.schemas import CatalogEntry, CatalogItem, Itinerary

__all__ = [
    "CatalogEntry",
    "CatalogItem",
    "Itinerary",
    "build_catalog",
    "extract_items",
    "normalize",
]
