"""Configuration endpoints."""

import time
from dataclasses import asdict

from fastapi import APIRouter, Depends

from fundingos.config import Settings
from fundingos.web.api.v1.deps import get_settings
from fundingos.web.api.v1.models import ConfigResponse, HealthResponse

router = APIRouter()

_start_time = time.time()

# Weight fields only; keyword sets and synonyms are large and not JSON friendly
_HIDDEN_SCORING_FIELDS = {"primary_keywords", "secondary_keywords", "category_synonyms"}


@router.get("/config", response_model=ConfigResponse)
async def get_config(settings: Settings = Depends(get_settings)):
    """Get the effective configuration."""
    from fundingos import __version__

    scoring = {k: v for k, v in asdict(settings.scoring).items() if k not in _HIDDEN_SCORING_FIELDS}
    return ConfigResponse(
        version=__version__,
        high_match_threshold=settings.high_match_threshold,
        medium_match_threshold=settings.medium_match_threshold,
        urgent_deadline_days=settings.urgent_deadline_days,
        intent_window_seconds=settings.intent.recency_window_seconds,
        follow_up_max_length=settings.intent.max_follow_up_length,
        scoring=scoring,
    )


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    from fundingos import __version__

    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=int(time.time() - _start_time),
    )
