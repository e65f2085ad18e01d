"""
FastAPI dependencies shared by the routers.

Tests swap these out through ``app.dependency_overrides``.
"""

from fastapi import Depends

from charters.catalog.fetcher import CatalogClient
from charters.relay.correlation import new_correlation_id
from charters.relay.relay import UpstreamRelay
from charters.shared.config import Settings, get_settings


def settings_dependency() -> Settings:
    return get_settings()


def relay_dependency(settings: Settings = Depends(settings_dependency)) -> UpstreamRelay:
    """Relay bound to the process-wide correlation id factory."""
    return UpstreamRelay(
        new_id=new_correlation_id,
        timeout_seconds=settings.http_timeout_seconds,
    )


def catalog_client_dependency(
    settings: Settings = Depends(settings_dependency),
) -> CatalogClient:
    return CatalogClient(
        catalog_url=settings.catalog_webhook_url,
        itineraries_url=settings.itineraries_webhook_url,
        timeout_seconds=settings.http_timeout_seconds,
    )
