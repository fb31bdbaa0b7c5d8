"""API v1 router."""

from fastapi import APIRouter

from fundingos.web.api.v1 import assistant, config, scoring

router = APIRouter(prefix="/api/v1")

router.include_router(scoring.router, tags=["scoring"])
router.include_router(assistant.router, tags=["assistant"])
router.include_router(config.router, tags=["config"])
