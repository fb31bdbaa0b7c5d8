"""Fit score calculation - How well does this opportunity suit this project?"""

import logging
import re
from datetime import date
from typing import Optional, Union

from ..config import ScoringConfig
from ..constants import NATIONWIDE_TERMS, NOTES, QUALIFICATION_FLAGS, UNRESTRICTED_ORG_TYPES
from ..models import (
    OrganizationProfile,
    Opportunity,
    Project,
    ScoreError,
    ScoreOutcome,
    ScoreResult,
    coerce_record,
)
from ..validation import canonical_org_type, normalize_list, tokenize

logger = logging.getLogger(__name__)

OpportunityInput = Union[Opportunity, dict, None]
ProjectInput = Union[Project, dict, None]
ProfileInput = Union[OrganizationProfile, dict, None]


def _contains_term(term: str, text: str) -> bool:
    return re.search(rf"\b{re.escape(term)}\b", text) is not None


def theme_phrase(term: str) -> str:
    """Spell a category as words: "affordable_housing" -> "affordable housing"."""
    return re.sub(r"[\s_\-]+", " ", term).strip()


def _synonym_groups(term: str, synonyms: dict) -> set:
    return {
        group
        for group, members in synonyms.items()
        if term == theme_phrase(group) or term in {theme_phrase(m) for m in members}
    }


def categories_align(categories: list[str], focus: list[str], synonyms: dict) -> list[str]:
    """
    Return the focus terms that thematically match any of the categories.

    Terms are compared as words, so snake_case and hyphenated values match
    their spaced forms. A category matches a focus term when they are equal,
    when one contains the other as whole words, or when both belong to the
    same synonym group.
    """
    categories = [theme_phrase(c) for c in categories]
    matched = []
    for focus_term in (theme_phrase(f) for f in focus):
        focus_groups = _synonym_groups(focus_term, synonyms)
        for category in categories:
            if (
                category == focus_term
                or _contains_term(category, focus_term)
                or _contains_term(focus_term, category)
                or focus_groups & _synonym_groups(category, synonyms)
            ):
                matched.append(focus_term)
                break
    return matched


def _format_terms(terms: list[str], limit: int = 4) -> str:
    shown = ", ".join(terms[:limit])
    if len(terms) > limit:
        shown += f" +{len(terms) - limit} more"
    return shown


def _confidence(opportunity: Opportunity, project: Project, profile: OrganizationProfile, config: ScoringConfig) -> float:
    present = [
        bool(opportunity.title),
        bool(opportunity.description),
        bool(normalize_list(opportunity.organization_types)),
        bool(opportunity.focus_terms()),
        opportunity.amount_min is not None or opportunity.amount_max is not None,
        opportunity.deadline is not None,
        bool(project.name),
        bool(project.description),
        bool(project.category),
        project.funding_request_amount is not None,
        bool(profile.organization_type),
        bool(normalize_list(profile.focus_areas)),
        bool(profile.location or project.location),
    ]
    ratio = sum(present) / len(present)
    confidence = config.min_confidence + (config.max_confidence - config.min_confidence) * ratio
    return round(max(0.0, min(confidence, 1.0)), 2)


def get_fit_breakdown(
    opportunity: OpportunityInput,
    project: ProjectInput,
    profile: ProfileInput = None,
    config: Optional[ScoringConfig] = None,
    as_of: Optional[date] = None,
) -> dict:
    """
    Get a detailed breakdown of fit score components.

    Missing records are treated as empty; use calculate_fit_score() for the
    checked version that rejects an entirely empty pair.

    Args:
        opportunity: Opportunity or raw record
        project: Project or raw record
        profile: Organization profile or raw record (optional)
        config: Scoring configuration (uses defaults if not provided)
        as_of: Reference date for deadline notes (defaults to today)

    Returns:
        Dictionary with total, eligibility, components, notes and confidence
    """
    config = config or ScoringConfig()
    opportunity = coerce_record(opportunity, Opportunity)
    project = coerce_record(project, Project)
    profile = coerce_record(profile, OrganizationProfile)
    as_of = as_of or date.today()

    breakdown = {
        "total": 0,
        "eligible": True,
        "components": [{"factor": "Base score", "points": config.base_score}],
        "strengths": [],
        "weaknesses": [],
        "matched_keywords": {"primary": [], "secondary": [], "other": []},
        "confidence": 0.0,
    }
    total = config.base_score

    def add(factor: str, points: int) -> None:
        nonlocal total
        breakdown["components"].append({"factor": factor, "points": points})
        total += points

    # Keyword overlap
    opp_tokens = tokenize(opportunity.title, opportunity.description)
    project_tokens = tokenize(project.name, project.description)
    shared = opp_tokens & project_tokens
    primary = sorted(shared & config.primary_keywords)
    secondary = sorted((shared & config.secondary_keywords) - set(primary))
    other = sorted(shared - set(primary) - set(secondary))
    breakdown["matched_keywords"] = {"primary": primary, "secondary": secondary, "other": other}

    keyword_points = min(
        len(primary) * config.primary_keyword_weight
        + len(secondary) * config.secondary_keyword_weight
        + len(other) * config.other_keyword_weight,
        config.keyword_max,
    )
    add("Keyword overlap", keyword_points)

    if len(primary) >= 2:
        breakdown["strengths"].append(NOTES["strong_keywords"].format(terms=_format_terms(primary)))
    elif primary:
        breakdown["strengths"].append(NOTES["some_keywords"].format(terms=_format_terms(primary + secondary)))
    elif secondary or other:
        breakdown["weaknesses"].append(NOTES["generic_keywords"].format(terms=_format_terms(secondary + other)))
    else:
        breakdown["weaknesses"].append(NOTES["no_keywords"])

    # Thematic alignment
    focus = opportunity.focus_terms()
    categories = normalize_list(project.category, separators=";,")
    if categories and focus:
        if categories_align(categories, focus, config.category_synonyms):
            add("Category alignment", config.category_match_weight)
            breakdown["strengths"].append(NOTES["category_aligned"].format(category=project.category))
        else:
            add("Thematic mismatch", -config.thematic_mismatch_penalty)
            breakdown["weaknesses"].append(NOTES["category_mismatch"].format(
                category=project.category, focus=_format_terms(focus, limit=3),
            ))

    org_focus = normalize_list(profile.focus_areas, separators=";,")
    if org_focus and focus:
        aligned = categories_align(org_focus, focus, config.category_synonyms)
        if aligned:
            add("Organization focus", config.focus_area_weight)
            breakdown["strengths"].append(NOTES["focus_aligned"].format(terms=_format_terms(aligned)))

    # Eligibility gate
    allowed = {canonical_org_type(t) for t in normalize_list(opportunity.organization_types, separators=";,")}
    org_type = canonical_org_type(profile.organization_type)
    restricted = bool(allowed) and not (allowed & UNRESTRICTED_ORG_TYPES)
    if restricted:
        if not org_type:
            breakdown["weaknesses"].append(NOTES["org_unverified"])
        elif org_type in allowed:
            add("Organization type eligible", config.eligible_org_weight)
            breakdown["strengths"].append(NOTES["org_eligible"].format(org_type=profile.organization_type))
        else:
            breakdown["eligible"] = False
            breakdown["weaknesses"].append(NOTES["org_ineligible"].format(org_type=profile.organization_type))

    criteria = normalize_list(opportunity.eligibility_criteria)
    if criteria and org_type and breakdown["eligible"]:
        joined = re.sub(r"[\s\-_]+", "", " ".join(criteria))
        if org_type in joined:
            breakdown["strengths"].append(NOTES["eligibility_mentions_org"])

    # Preference programs
    qualified = [
        label
        for opp_flag, (profile_flag, label) in QUALIFICATION_FLAGS.items()
        if getattr(opportunity, opp_flag) and getattr(profile, profile_flag)
    ]
    if qualified:
        add("Special qualifications", config.qualification_weight * len(qualified))
        breakdown["strengths"].append(NOTES["qualification_match"].format(labels=", ".join(qualified)))

    # Amount fit
    requested = project.funding_request_amount
    low, high = opportunity.amount_min, opportunity.amount_max
    if requested is not None and (low is not None or high is not None):
        within_low = low is None or requested >= low
        within_high = high is None or requested <= high
        factor = config.amount_far_outside_factor
        if within_low and within_high:
            add("Amount within range", config.amount_in_range_weight)
            breakdown["strengths"].append(NOTES["amount_in_range"])
        elif within_low and requested <= high * config.amount_near_range_factor:
            add("Amount near range", config.amount_near_range_weight)
            breakdown["weaknesses"].append(NOTES["amount_near_range"])
        elif (high is not None and requested > high * factor) or (low is not None and requested < low / factor):
            add("Amount far outside range", -config.amount_far_outside_penalty)
            breakdown["weaknesses"].append(NOTES["amount_far_outside"])
        else:
            breakdown["weaknesses"].append(NOTES["amount_outside"])

    if requested is not None and profile.annual_revenue and requested > profile.annual_revenue:
        breakdown["weaknesses"].append(NOTES["exceeds_revenue"])

    # Geography
    geography = normalize_list(opportunity.geography, separators=";,")
    location = (profile.location or project.location).lower()
    if geography:
        if set(geography) & NATIONWIDE_TERMS or (
            location and any(_contains_term(g, location) or _contains_term(location, g) for g in geography)
        ):
            add("Geography match", config.geography_match_weight)
            breakdown["strengths"].append(NOTES["geography_match"])
        elif location:
            breakdown["weaknesses"].append(NOTES["geography_mismatch"].format(
                location=profile.location or project.location,
            ))

    # Deadline notes (no effect on the score)
    if opportunity.deadline is not None:
        days_left = (opportunity.deadline - as_of).days
        if days_left < 0:
            breakdown["weaknesses"].append(NOTES["deadline_passed"])
        elif days_left <= config.deadline_soon_days:
            breakdown["weaknesses"].append(NOTES["deadline_soon"].format(days=days_left))
        elif days_left > config.deadline_ample_days:
            breakdown["strengths"].append(NOTES["deadline_ample"])

    total = max(0, min(total, 100))
    if not breakdown["eligible"]:
        total = min(total, config.ineligible_score_cap)

    breakdown["total"] = int(round(total))
    breakdown["confidence"] = _confidence(opportunity, project, profile, config)
    return breakdown


def calculate_fit_score(
    opportunity: OpportunityInput,
    project: ProjectInput,
    profile: ProfileInput = None,
    config: Optional[ScoringConfig] = None,
    as_of: Optional[date] = None,
) -> ScoreOutcome:
    """
    Calculate the fit score between an opportunity and a project.

    Fit score represents how well the opportunity suits the applicant.
    Higher score = stronger thematic, eligibility and budget alignment.

    Args:
        opportunity: The opportunity to score
        project: The project seeking funding
        profile: The applicant organization (optional)
        config: Scoring configuration (uses defaults if not provided)
        as_of: Reference date for deadline notes (defaults to today)

    Returns:
        ScoreResult with a 0-100 score, or ScoreError when both the
        opportunity and the project are missing
    """
    if opportunity is None and project is None:
        logger.warning("Fit scoring called without opportunity or project")
        return ScoreError(
            error="invalid_input",
            message="Both opportunity and project are missing",
        )

    breakdown = get_fit_breakdown(opportunity, project, profile, config, as_of)
    logger.debug(
        "Fit score %s (eligible=%s, confidence=%s)",
        breakdown["total"], breakdown["eligible"], breakdown["confidence"],
    )

    return ScoreResult(
        overall_score=breakdown["total"],
        eligible=breakdown["eligible"],
        strengths=breakdown["strengths"],
        weaknesses=breakdown["weaknesses"],
        confidence=breakdown["confidence"],
        components=breakdown["components"],
        matched_keywords=breakdown["matched_keywords"],
    )
