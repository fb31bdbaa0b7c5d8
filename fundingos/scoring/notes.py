"""Generate plain-English notes and recommendations for scored matches."""

from datetime import date
from typing import Optional

from ..models import Opportunity, Project, ScoreResult


def days_until_deadline(opportunity: Opportunity, as_of: Optional[date] = None) -> Optional[int]:
    """Days from as_of (default today) to the deadline, negative once passed."""
    if opportunity.deadline is None:
        return None
    return (opportunity.deadline - (as_of or date.today())).days


def get_recommendation(
    score: int,
    days_left: Optional[int] = None,
    eligible: bool = True,
) -> str:
    """
    Map a fit score and deadline to a recommendation tier.

    Args:
        score: Fit score 0-100
        days_left: Days until the deadline, if known
        eligible: Whether the organization passed the eligibility gate

    Returns:
        One of NOT_ELIGIBLE, APPLY_IMMEDIATELY, HIGHLY_RECOMMENDED,
        CONSIDER_URGENT, GOOD_MATCH, MODERATE_FIT, LOW_PRIORITY
    """
    if not eligible:
        return "NOT_ELIGIBLE"
    if score >= 80:
        if days_left is not None and 0 <= days_left <= 7:
            return "APPLY_IMMEDIATELY"
        return "HIGHLY_RECOMMENDED"
    if score >= 60:
        if days_left is not None and 0 <= days_left <= 14:
            return "CONSIDER_URGENT"
        return "GOOD_MATCH"
    if score >= 40:
        return "MODERATE_FIT"
    return "LOW_PRIORITY"


def generate_match_notes(result: ScoreResult) -> str:
    """
    Generate a one-line summary of a scored match.

    Args:
        result: The score to describe

    Returns:
        Human-readable string, e.g. "Strong match (83%): Strong thematic ..."
    """
    if not result.eligible:
        reason = result.weaknesses[0] if result.weaknesses else "eligibility requirements not met"
        return f"Not eligible: {reason}"

    if result.overall_score >= 70:
        label = "Strong match"
    elif result.overall_score >= 50:
        label = "Possible match"
    else:
        label = "Weak match"

    notes = [f"{label} ({result.overall_score}%)"]
    if result.strengths:
        notes.append("+ " + result.strengths[0])
    if result.weaknesses:
        notes.append("- " + result.weaknesses[0])
    return "; ".join(notes)


def generate_reasoning(project: Project, opportunity: Opportunity, result: ScoreResult) -> str:
    """
    Explain why a match was ranked where it was.

    Args:
        project: The project that was scored
        opportunity: The opportunity it was scored against
        result: The score

    Returns:
        A short paragraph, empty when there is nothing notable to say
    """
    reasons = []

    if not result.eligible:
        reasons.append("Your organization type is not among the eligible applicants")
        return ". ".join(reasons)

    if result.overall_score >= 80:
        project_label = project.category or project.name or "project"
        sponsor = opportunity.sponsor or "the sponsor"
        reasons.append(f"Strong alignment between your {project_label} project and {sponsor}'s funding priorities")

    requested = project.funding_request_amount
    if requested and opportunity.amount_max and requested <= opportunity.amount_max:
        reasons.append(f"Funding amount matches your need (${requested:,.0f})")

    primary = result.matched_keywords.get("primary") or []
    if primary:
        reasons.append("Shared focus on " + ", ".join(primary[:3]))

    return ". ".join(reasons)
