"""
Schemas for the vessel catalog.

Defines the canonical catalog item produced by the normalizer, the
itinerary reference model, and the API response models for the catalog
endpoints.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# =============================================================================
# Canonical catalog records
# =============================================================================


@dataclass(frozen=True)
class CatalogItem:
    """
    A normalized vessel record.

    Display fields are carried exactly as the upstream sent them. Only
    ``id`` is canonicalized (to a string) because every downstream
    consumer keys on it.
    """

    id: Optional[str] = None
    name: Any = None
    model: Any = None
    service_type: Any = None
    boat_type: Any = None
    base: Any = None
    country: Any = None
    rating: Any = None
    length_ft: Any = None
    image: Any = None
    pdf_photos_url: Any = None
    web_url: Any = None

    # Pricing hints (reserved, not consumed by the proposal pipeline)
    default_currency: Any = None
    default_price: Any = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the camelCase names the UI expects."""
        return {
            "id": self.id,
            "name": self.name,
            "model": self.model,
            "serviceType": self.service_type,
            "boatType": self.boat_type,
            "base": self.base,
            "country": self.country,
            "rating": self.rating,
            "lengthFt": self.length_ft,
            "image": self.image,
            "pdfPhotosUrl": self.pdf_photos_url,
            "webUrl": self.web_url,
            "defaultCurrency": self.default_currency,
            "defaultPrice": self.default_price,
        }


def stars(rating: Any) -> int:
    """
    Number of filled stars to display for a raw rating.

    Args:
        rating: Rating as received from upstream (number, numeric string, None...)

    Returns:
        Integer in [0, 5]; unparseable ratings show as 0
    """
    if rating is None:
        return 0
    if isinstance(rating, bool):
        value = float(rating)
    elif isinstance(rating, (int, float)):
        value = float(rating)
    elif isinstance(rating, str):
        try:
            value = float(rating.strip()) if rating.strip() else 0.0
        except ValueError:
            return 0
    else:
        return 0

    if not math.isfinite(value):
        return 0
    # half-up, not banker's rounding
    return max(0, min(5, math.floor(value + 0.5)))


@dataclass(frozen=True)
class CatalogEntry:
    """A catalog item paired with its key in the current snapshot."""

    key: str
    item: CatalogItem


class Itinerary(BaseModel):
    """An itinerary that can be attached to a proposal by id."""

    id: str = Field(description="Itinerary identifier")
    title: str = Field(description="Human-readable itinerary title")


# =============================================================================
# API Response Models
# =============================================================================


class CatalogItemView(BaseModel):
    """Catalog item as returned by the API, with its selection key."""

    key: str = Field(description="Selection key within this catalog snapshot")
    stars: int = Field(ge=0, le=5, description="Display rating")
    item: Dict[str, Any] = Field(description="Normalized item fields")


class CatalogResponse(BaseModel):
    """Response for the catalog listing endpoint."""

    items: List[CatalogItemView] = Field(default_factory=list)


class ItinerariesResponse(BaseModel):
    """Response for the itinerary listing endpoint."""

    itineraries: List[Itinerary] = Field(default_factory=list)
