"""FastAPI application factory."""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fundingos import __version__
from fundingos.config import Settings, load_config

logger = logging.getLogger(__name__)


def _origins(allowed: str) -> list[str]:
    if not allowed or allowed.strip() == "*":
        return ["*"]
    return [o.strip() for o in allowed.split(",") if o.strip()]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to serve with (loaded from config/env if not provided)
    """
    settings = settings or load_config()

    app = FastAPI(
        title="FundingOS",
        description="Funding opportunity fit scoring and assistant intent routing",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_origins(settings.allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from fundingos.web.api.v1 import router as api_router
    app.include_router(api_router)

    logger.info("FundingOS API ready (origins=%s)", settings.allowed_origins)
    return app


# Create default app instance
app = create_app()
