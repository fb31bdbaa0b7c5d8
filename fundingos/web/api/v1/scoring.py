"""Fit scoring endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from fundingos.api import analyze_opportunities, rank_opportunities, score_opportunity
from fundingos.config import Settings
from fundingos.web.api.v1.deps import get_settings
from fundingos.web.api.v1.models import AnalyzeRequest, RankRequest, ScoreRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/score")
async def score(request: ScoreRequest, settings: Settings = Depends(get_settings)):
    """
    Score one opportunity against one project.

    Returns the explainable score. Fails with 400 only when both the
    opportunity and the project are missing.
    """
    result = score_opportunity(
        request.opportunity,
        request.project,
        request.profile,
        settings=settings,
        as_of=request.as_of,
    )
    if not result.ok:
        raise HTTPException(status_code=400, detail=result.to_dict())
    return result.to_dict()


@router.post("/score/rank")
async def rank(request: RankRequest, settings: Settings = Depends(get_settings)):
    """Rank opportunities for a project, eligible and best fit first."""
    matches = rank_opportunities(
        request.opportunities,
        request.project,
        request.profile,
        min_score=request.min_score,
        limit=request.limit,
        settings=settings,
        as_of=request.as_of,
    )
    return {
        "total": len(request.opportunities),
        "count": len(matches),
        "matches": [m.to_dict() for m in matches],
    }


@router.post("/analyze")
async def analyze(request: AnalyzeRequest, settings: Settings = Depends(get_settings)):
    """Portfolio summary across every project/opportunity pair."""
    analysis = analyze_opportunities(
        request.projects,
        request.opportunities,
        request.profile,
        settings=settings,
        as_of=request.as_of,
    )
    return analysis.to_dict()
