"""Data models for opportunities, projects, scores and conversation turns."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional, Union

from .validation import (
    StringOrList,
    normalize_list,
    parse_amount,
    parse_date,
    parse_flag,
    parse_timestamp,
)


def _first(record: dict, *keys: str) -> Any:
    """Return the first non-empty value among aliased keys."""
    for key in keys:
        value = record.get(key)
        if value not in (None, ""):
            return value
    return None


def _text(value: Any) -> str:
    return str(value).strip() if value is not None else ""


@dataclass
class Opportunity:
    """A fundable program, grant or investment listing."""

    id: Optional[str] = None
    title: str = ""
    description: str = ""
    sponsor: str = ""
    source: str = ""
    amount_min: Optional[float] = None
    amount_max: Optional[float] = None
    organization_types: StringOrList = None
    project_types: StringOrList = None
    focus_areas: StringOrList = None
    eligibility_criteria: StringOrList = None
    geography: StringOrList = None
    deadline: Optional[date] = None

    # Preference programs
    small_business_only: bool = False
    minority_business: bool = False
    woman_owned_business: bool = False
    veteran_owned_business: bool = False

    @classmethod
    def from_record(cls, record: dict) -> "Opportunity":
        """Build from a database row or JSON payload, accepting known aliases."""
        record = record or {}
        opp_id = record.get("id")
        return cls(
            id=str(opp_id) if opp_id is not None else None,
            title=_text(_first(record, "title", "name")),
            description=_text(record.get("description")),
            sponsor=_text(_first(record, "sponsor", "agency")),
            source=_text(record.get("source")),
            amount_min=parse_amount(record.get("amount_min")),
            amount_max=parse_amount(_first(record, "amount_max", "fundingAmount", "funding_amount")),
            organization_types=record.get("organization_types"),
            project_types=record.get("project_types"),
            focus_areas=_first(record, "focus_areas", "industry_focus", "category"),
            eligibility_criteria=_first(record, "eligibility_criteria", "eligibility"),
            geography=record.get("geography"),
            deadline=parse_date(_first(record, "deadline", "deadline_date", "close_date")),
            small_business_only=parse_flag(record.get("small_business_only")),
            minority_business=parse_flag(record.get("minority_business")),
            woman_owned_business=parse_flag(record.get("woman_owned_business")),
            veteran_owned_business=parse_flag(record.get("veteran_owned_business")),
        )

    def focus_terms(self) -> list[str]:
        """Declared focus areas and project types, normalized."""
        terms = normalize_list(self.focus_areas, separators=";,")
        for term in normalize_list(self.project_types, separators=";,"):
            if term not in terms:
                terms.append(term)
        return terms


@dataclass
class Project:
    """An applicant's proposed initiative seeking funding."""

    id: Optional[str] = None
    name: str = ""
    description: str = ""
    category: str = ""
    funding_request_amount: Optional[float] = None
    location: str = ""

    @classmethod
    def from_record(cls, record: dict) -> "Project":
        record = record or {}
        project_id = record.get("id")
        return cls(
            id=str(project_id) if project_id is not None else None,
            name=_text(_first(record, "name", "title")),
            description=_text(record.get("description")),
            category=_text(_first(record, "category", "project_category", "project_type")),
            funding_request_amount=parse_amount(_first(
                record,
                "funding_request_amount",
                "funding_needed",
                "amount_requested",
                "total_project_budget",
                "budget",
            )),
            location=_text(record.get("location")),
        )


@dataclass
class OrganizationProfile:
    """Metadata about the applicant entity."""

    organization_type: str = ""
    focus_areas: StringOrList = None
    location: str = ""
    annual_revenue: Optional[float] = None
    small_business: bool = False
    minority_owned: bool = False
    woman_owned: bool = False
    veteran_owned: bool = False

    @classmethod
    def from_record(cls, record: dict) -> "OrganizationProfile":
        record = record or {}
        return cls(
            organization_type=_text(_first(record, "organization_type", "organizationType")),
            focus_areas=_first(record, "focus_areas", "primary_focus_areas", "industry"),
            location=_text(_first(record, "location", "state")),
            annual_revenue=parse_amount(_first(record, "annual_revenue", "annual_budget", "revenue")),
            small_business=parse_flag(record.get("small_business")),
            minority_owned=parse_flag(record.get("minority_owned")),
            woman_owned=parse_flag(record.get("woman_owned")),
            veteran_owned=parse_flag(record.get("veteran_owned")),
        )


@dataclass
class ScoreResult:
    """Explainable fit score between one opportunity and one project."""

    overall_score: int
    eligible: bool
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)
    confidence: float = 0.0
    components: list[dict] = field(default_factory=list)
    matched_keywords: dict = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return True

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "overallScore": self.overall_score,
            "eligible": self.eligible,
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
            "confidence": self.confidence,
            "components": [dict(c) for c in self.components],
            "matchedKeywords": {k: list(v) for k, v in self.matched_keywords.items()},
        }


@dataclass
class ScoreError:
    """Typed scoring failure, returned instead of raised."""

    error: str = "invalid_input"
    message: str = ""

    @property
    def ok(self) -> bool:
        return False

    def to_dict(self) -> dict:
        return {"error": self.error, "message": self.message}


ScoreOutcome = Union[ScoreResult, ScoreError]


class Intent(str, Enum):
    """Closed set of canned assistant handlers."""

    ANALYZE_OPPORTUNITIES = "analyze_opportunities"
    WEB_SEARCH = "web_search"
    CHECK_DEADLINES = "check_deadlines"
    CHECK_STATUS = "check_status"
    CONTINUE_ANALYSIS = "continue_analysis"
    CONTINUE_PREVIOUS = "continue_previous"
    EXPAND_OPPORTUNITY_ANALYSIS = "expand_opportunity_analysis"
    EXPAND_DEADLINE_INFO = "expand_deadline_info"
    EXPAND_PREVIOUS = "expand_previous"
    DECLINE = "decline"
    NONE = "none"


@dataclass
class ConversationTurn:
    """One message in a chat session."""

    role: str
    content: str = ""
    timestamp: Optional[datetime] = None
    metadata: dict = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Union[dict, "ConversationTurn"]) -> "ConversationTurn":
        if isinstance(record, ConversationTurn):
            return record
        if record is None:
            record = {}
        if not isinstance(record, dict):
            raise TypeError(f"Expected ConversationTurn or dict, got {type(record).__name__}")
        metadata = record.get("metadata")
        return cls(
            role=_text(record.get("role")).lower(),
            content=_text(record.get("content")),
            timestamp=parse_timestamp(_first(record, "timestamp", "created_at")),
            metadata=metadata if isinstance(metadata, dict) else {},
        )

    @property
    def context_type(self) -> Optional[str]:
        return self.metadata.get("context_type")


def coerce_record(value, cls):
    """Accept a model instance, a raw record dict, or None (empty model)."""
    if value is None:
        return cls()
    if isinstance(value, cls):
        return value
    if isinstance(value, dict):
        return cls.from_record(value)
    raise TypeError(f"Expected {cls.__name__} or dict, got {type(value).__name__}")
