"""
Record normalizer for upstream catalog data.

The automation backend returns records under several key-naming
conventions (human-readable column labels from spreadsheets, camelCase,
snake_case). This module maps any of them onto CatalogItem and never
raises, whatever the input shape.
"""

import logging
import math
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from charters.catalog.schemas import CatalogEntry, CatalogItem, Itinerary


logger = logging.getLogger(__name__)


# Accepted upstream spellings per canonical field, in probe order.
# Human-readable labels come first. "Lenght (ft)" is a typo that exists
# in production sheets and must keep working.
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "id": ("Id", "id"),
    "name": ("Boat Name", "name"),
    "rating": ("Rating", "rating"),
    "model": ("Model", "model"),
    "service_type": ("Service Type", "serviceType"),
    "boat_type": ("Boat Type", "boatType"),
    "base": ("Base", "base"),
    "country": ("Country", "country"),
    "length_ft": ("Lenght (ft)", "Length (ft)", "lengthFt", "length_ft"),
    "image": ("Image", "Main Image", "image"),
    "pdf_photos_url": ("PDF Photos URL", "pdfPhotosUrl"),
    "web_url": ("Web URL", "webUrl"),
    "default_currency": ("Currency", "currency"),
    "default_price": ("Default Price", "defaultPrice"),
}

ITINERARY_ID_ALIASES: Tuple[str, ...] = ("id", "Id")
ITINERARY_TITLE_ALIASES: Tuple[str, ...] = ("title", "Title", "Name")

FALLBACK_KEY_PREFIX = "idx-"


def first_present(record: Mapping[str, Any], keys: Sequence[str]) -> Any:
    """
    Return the first non-null value among the given keys.

    Args:
        record: Upstream record
        keys: Candidate key spellings, in priority order

    Returns:
        The first value that is present and not None, else None
    """
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def as_key(value: Any) -> Optional[str]:
    """
    Canonicalize an upstream identifier to a string.

    Integral floats lose their ".0" so that 7 and 7.0 map to the same key.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def normalize(raw: Any) -> CatalogItem:
    """
    Map an arbitrary upstream record onto a CatalogItem.

    Absent fields stay None; values are passed through untouched except for
    the id. Non-mapping input produces an empty item.

    Args:
        raw: One upstream record (normally a dict)

    Returns:
        Normalized CatalogItem
    """
    if not isinstance(raw, Mapping):
        return CatalogItem()

    fields = {name: first_present(raw, keys) for name, keys in FIELD_ALIASES.items()}
    fields["id"] = as_key(fields["id"])
    return CatalogItem(**fields)


def extract_items(payload: Any) -> List[Any]:
    """
    Flatten an upstream catalog response into a list of records.

    Envelope fields (``items``, then ``data``) are checked before the
    single-object fallback so that an envelope is unwrapped rather than
    treated as one record.

    Args:
        payload: Parsed JSON value returned by the catalog webhook

    Returns:
        Ordered list of record-like values (possibly empty)
    """
    if isinstance(payload, (list, tuple)):
        return list(payload)

    if isinstance(payload, Mapping):
        for envelope_key in ("items", "data"):
            inner = payload.get(envelope_key)
            if isinstance(inner, (list, tuple)):
                return list(inner)
        return [payload]

    return []


def normalize_itinerary(raw: Any) -> Optional[Itinerary]:
    """
    Map an upstream itinerary record to an Itinerary.

    Returns:
        Itinerary, or None when the id or title is missing
    """
    if not isinstance(raw, Mapping):
        return None

    itinerary_id = as_key(first_present(raw, ITINERARY_ID_ALIASES))
    title = first_present(raw, ITINERARY_TITLE_ALIASES)
    if not itinerary_id or title is None or not str(title):
        return None

    return Itinerary(id=itinerary_id, title=str(title))


def normalize_itineraries(payload: Any) -> List[Itinerary]:
    """Extract and normalize itineraries, dropping incomplete entries."""
    itineraries = []
    for raw in extract_items(payload):
        itinerary = normalize_itinerary(raw)
        if itinerary is not None:
            itineraries.append(itinerary)
    return itineraries


def build_catalog(items: Sequence[CatalogItem]) -> Tuple[CatalogEntry, ...]:
    """
    Assign a selection key to every item in a catalog snapshot.

    Items with an id are keyed by it. Items without one get a positional
    key (``idx-<n>``) that is unique within the snapshot.

    Args:
        items: Normalized items in upstream order

    Returns:
        Keyed entries, same order as ``items``
    """
    real_ids = {item.id for item in items if item.id is not None}
    entries = []

    for index, item in enumerate(items):
        if item.id is not None:
            key = item.id
        else:
            key = f"{FALLBACK_KEY_PREFIX}{index}"
            suffix = 1
            while key in real_ids:
                key = f"{FALLBACK_KEY_PREFIX}{index}-{suffix}"
                suffix += 1
        entries.append(CatalogEntry(key=key, item=item))

    missing = sum(1 for item in items if item.id is None)
    if missing:
        logger.warning(f"Catalog snapshot has {missing} item(s) without id; using positional keys")

    return tuple(entries)
