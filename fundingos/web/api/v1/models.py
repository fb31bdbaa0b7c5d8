"""Pydantic models for API v1."""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

Record = Dict[str, Any]


class ScoreRequest(BaseModel):
    """Score one opportunity against one project."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "opportunity": {
                    "title": "AI Innovation Grant",
                    "description": "Funding for artificial intelligence research platforms",
                    "organization_types": "nonprofit; forprofit",
                    "amount_min": 50000,
                    "amount_max": 250000,
                    "deadline": "2026-12-01",
                },
                "project": {
                    "name": "AI Research Platform",
                    "description": "An artificial intelligence platform for research teams",
                    "category": "technology",
                    "funding_request_amount": 150000,
                },
                "profile": {"organization_type": "nonprofit"},
            }
        }
    )

    opportunity: Optional[Record] = None
    project: Optional[Record] = None
    profile: Optional[Record] = None
    as_of: Optional[date] = None


class RankRequest(BaseModel):
    """Rank a list of opportunities for one project."""
    opportunities: List[Record] = Field(default_factory=list)
    project: Record
    profile: Optional[Record] = None
    min_score: int = Field(default=0, ge=0, le=100)
    limit: Optional[int] = Field(default=None, ge=1, le=500)
    as_of: Optional[date] = None


class AnalyzeRequest(BaseModel):
    """Analyze every project against every opportunity."""
    projects: List[Record] = Field(default_factory=list)
    opportunities: List[Record] = Field(default_factory=list)
    profile: Optional[Record] = None
    as_of: Optional[date] = None


class IntentRequest(BaseModel):
    """Classify a chat message."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "yes",
                "history": [
                    {
                        "role": "assistant",
                        "content": "Would you like me to analyze opportunities?",
                        "timestamp": "2026-10-19T12:00:00Z",
                        "metadata": {"context_type": "opportunity_analysis"},
                    }
                ],
            }
        }
    )

    message: str = ""
    history: List[Record] = Field(default_factory=list)
    now: Optional[datetime] = None


class IntentResponse(BaseModel):
    """Classified intent."""
    intent: str
    follow_up: bool


class ConfigResponse(BaseModel):
    """Effective configuration."""
    version: str
    high_match_threshold: int
    medium_match_threshold: int
    urgent_deadline_days: int
    intent_window_seconds: int
    follow_up_max_length: int
    scoring: Dict[str, Any]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    uptime_seconds: int
