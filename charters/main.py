"""
FastAPI application entry point.

Wires the catalog, draft and relay routers into one app. Logging is
configured here, once, from Settings.
"""

import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from charters.catalog.catalog_api import router as catalog_router
from charters.proposal.proposal_api import router as drafts_router
from charters.relay.relay_api import router as relay_router
from charters.shared.config import Settings, get_settings
from charters.shared.logging.config import setup_logging


SERVICE_NAME = "Charter Proposals"
SERVICE_VERSION = "0.1.0"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-35s | %(message)s"

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("httpcore", "httpx")


def configure_logging(settings: Settings) -> None:
    """Install the text or JSON log format chosen by LOG_FORMAT."""
    level = getattr(logging, settings.log_level, logging.INFO)

    if settings.log_format == "json":
        setup_logging(level=level, logger_name="charters")
    else:
        logging.basicConfig(
            level=level,
            format=LOG_FORMAT,
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=[logging.StreamHandler(sys.stdout)],
            force=True,
        )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


configure_logging(get_settings())

app = FastAPI(
    title=SERVICE_NAME,
    description="Build and submit yacht charter proposals from an automation-backed catalog",
    version=SERVICE_VERSION,
)

# Broker UI is served from another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for _router in (catalog_router, drafts_router, relay_router):
    app.include_router(_router)


@app.get("/")
async def root():
    """Service name, version and route prefixes."""
    return {
        "name": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "endpoints": {
            "catalog": "/api/catalog",
            "drafts": "/api/drafts",
            "proposals": "/api/proposals",
            "selection": "/api/boats/selected",
        },
    }


@app.get("/health")
async def health():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
