"""
Programmatic API for the FundingOS matching core.

Usage:
    from fundingos import rank_opportunities

    matches = rank_opportunities(opportunities, project, profile)
    strong = [m for m in matches if m.score >= 70]
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, List, Optional

from fundingos.assistant import classify_intent
from fundingos.config import Settings
from fundingos.models import (
    Intent,
    OrganizationProfile,
    Opportunity,
    Project,
    ScoreOutcome,
    ScoreResult,
    coerce_record,
)
from fundingos.scoring import (
    calculate_fit_score,
    generate_match_notes,
    generate_reasoning,
    get_recommendation,
)
from fundingos.scoring.fit import ProfileInput
from fundingos.scoring.notes import days_until_deadline

logger = logging.getLogger(__name__)


@dataclass
class OpportunityMatch:
    """One scored project/opportunity pair."""

    opportunity: Opportunity
    project: Project
    result: ScoreResult
    days_until_deadline: Optional[int]
    recommendation: str
    reasoning: str
    notes: str

    @property
    def score(self) -> int:
        return self.result.overall_score

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "opportunity_id": self.opportunity.id,
            "opportunity_title": self.opportunity.title,
            "sponsor": self.opportunity.sponsor,
            "project_id": self.project.id,
            "project_name": self.project.name,
            "fit_score": self.score,
            "eligible": self.result.eligible,
            "confidence": self.result.confidence,
            "days_until_deadline": self.days_until_deadline,
            "recommendation": self.recommendation,
            "reasoning": self.reasoning,
            "notes": self.notes,
            "strengths": list(self.result.strengths),
            "weaknesses": list(self.result.weaknesses),
        }


@dataclass
class OpportunityAnalysis:
    """Portfolio view across every project/opportunity pair."""

    total_analyzed: int = 0
    high_matches: int = 0
    medium_matches: int = 0
    urgent_deadlines: int = 0
    top_matches: List[OpportunityMatch] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "summary": {
                "totalAnalyzed": self.total_analyzed,
                "highMatches": self.high_matches,
                "mediumMatches": self.medium_matches,
                "urgentDeadlines": self.urgent_deadlines,
            },
            "topMatches": [m.to_dict() for m in self.top_matches],
        }


def score_opportunity(
    opportunity,
    project,
    profile: ProfileInput = None,
    settings: Optional[Settings] = None,
    as_of: Optional[date] = None,
) -> ScoreOutcome:
    """Score one opportunity against one project. Accepts models or raw records."""
    settings = settings or Settings()
    return calculate_fit_score(opportunity, project, profile, settings.scoring, as_of)


def _match(
    opportunity: Opportunity,
    project: Project,
    profile: OrganizationProfile,
    settings: Settings,
    as_of: Optional[date],
) -> OpportunityMatch:
    result = calculate_fit_score(opportunity, project, profile, settings.scoring, as_of)
    days_left = days_until_deadline(opportunity, as_of)
    return OpportunityMatch(
        opportunity=opportunity,
        project=project,
        result=result,
        days_until_deadline=days_left,
        recommendation=get_recommendation(result.overall_score, days_left, result.eligible),
        reasoning=generate_reasoning(project, opportunity, result),
        notes=generate_match_notes(result),
    )


def rank_opportunities(
    opportunities: Iterable,
    project,
    profile: ProfileInput = None,
    min_score: int = 0,
    limit: Optional[int] = None,
    settings: Optional[Settings] = None,
    as_of: Optional[date] = None,
) -> List[OpportunityMatch]:
    """
    Score a list of opportunities against one project.

    Args:
        opportunities: Opportunities (models or raw records)
        project: The project seeking funding
        profile: The applicant organization (optional)
        min_score: Drop matches scoring below this
        limit: Maximum number of matches to return
        settings: Settings to score with (defaults if not provided)
        as_of: Reference date for deadlines (defaults to today)

    Returns:
        Matches sorted eligible-first, then by fit score descending
    """
    settings = settings or Settings()
    project = coerce_record(project, Project)
    profile = coerce_record(profile, OrganizationProfile)

    matches = []
    for raw in opportunities or []:
        if raw is None:
            logger.debug("Skipping empty opportunity record")
            continue
        matches.append(_match(coerce_record(raw, Opportunity), project, profile, settings, as_of))

    matches.sort(key=lambda m: (m.result.eligible, m.score), reverse=True)

    if min_score:
        matches = [m for m in matches if m.score >= min_score]
    if limit is not None:
        matches = matches[:limit]
    return matches


def analyze_opportunities(
    projects: Iterable,
    opportunities: Iterable,
    profile: ProfileInput = None,
    settings: Optional[Settings] = None,
    as_of: Optional[date] = None,
) -> OpportunityAnalysis:
    """
    Score every project against every opportunity and summarize.

    High matches (>= high_match_threshold) are returned as top matches,
    best first. An urgent deadline is one within urgent_deadline_days and
    not yet passed; each opportunity is counted once.

    Example:
        analysis = analyze_opportunities(projects, opportunities, profile)
        print(analysis.high_matches, analysis.urgent_deadlines)
    """
    settings = settings or Settings()
    profile = coerce_record(profile, OrganizationProfile)
    opportunities = [coerce_record(o, Opportunity) for o in opportunities or [] if o is not None]
    projects = [coerce_record(p, Project) for p in projects or [] if p is not None]

    analysis = OpportunityAnalysis(total_analyzed=len(opportunities))

    for opportunity in opportunities:
        days_left = days_until_deadline(opportunity, as_of)
        if days_left is not None and 0 <= days_left <= settings.urgent_deadline_days:
            analysis.urgent_deadlines += 1

    for project in projects:
        for opportunity in opportunities:
            match = _match(opportunity, project, profile, settings, as_of)
            if not match.result.eligible:
                continue
            if match.score >= settings.high_match_threshold:
                analysis.top_matches.append(match)
                analysis.high_matches += 1
            elif match.score >= settings.medium_match_threshold:
                analysis.medium_matches += 1

    analysis.top_matches.sort(key=lambda m: m.score, reverse=True)
    logger.info(
        "Analyzed %d opportunities x %d projects: %d high, %d medium",
        analysis.total_analyzed, len(projects), analysis.high_matches, analysis.medium_matches,
    )
    return analysis


def classify_message(
    message: str,
    history: Optional[Iterable] = None,
    settings: Optional[Settings] = None,
    now: Optional[datetime] = None,
) -> Intent:
    """Classify a chat message using the configured intent settings."""
    settings = settings or Settings()
    return classify_intent(message, history, settings.intent, now)
