"""
Keyword tables and note templates used by the fit scorer.

Tables are plain module-level data so they can be overridden through
ScoringConfig without touching the scoring code.
"""

# Domain/category terms. A shared primary term is strong evidence that the
# project and the opportunity are about the same thing.
PRIMARY_KEYWORDS = frozenset({
    # Technology
    "ai", "artificial", "intelligence", "machine", "learning", "software",
    "data", "analytics", "cybersecurity", "technology", "digital", "robotics",
    "semiconductor", "quantum", "biotech", "biotechnology",
    # Health
    "health", "healthcare", "medical", "clinical", "patient", "patients",
    "telemedicine", "mental", "disease", "nutrition", "wellness",
    # Housing / community
    "housing", "homeless", "homelessness", "shelter", "affordable",
    "neighborhood", "rural", "urban",
    # Education / youth
    "education", "educational", "school", "schools", "students", "youth",
    "literacy", "stem", "workforce", "training",
    # Environment / energy
    "climate", "environmental", "environment", "energy", "renewable",
    "solar", "conservation", "water", "agriculture", "sustainability",
    # Arts / humanities
    "arts", "art", "music", "culture", "cultural", "humanities", "museum",
    # Social services
    "veterans", "seniors", "disability", "disabilities", "food", "hunger",
    "justice", "immigrants", "refugees",
})

# Generic funding vocabulary. Overlap here is weak evidence.
SECONDARY_KEYWORDS = frozenset({
    "research", "development", "innovation", "innovative", "community",
    "program", "programs", "project", "projects", "capacity", "support",
    "services", "outreach", "pilot", "planning", "infrastructure",
    "equipment", "operations", "evaluation", "partnership", "partnerships",
    "public", "national", "regional", "local", "economic", "impact",
    "small", "business", "startup", "nonprofit", "platform",
})

STOPWORDS = frozenset({
    "a", "an", "and", "are", "as", "at", "be", "by", "for", "from", "has",
    "have", "in", "into", "is", "it", "its", "of", "on", "or", "that", "the",
    "their", "this", "to", "with", "will", "we", "our", "your", "you", "who",
    "which", "these", "those", "such", "other", "more", "most", "also",
    "can", "may", "must", "new", "all", "any", "each", "per", "about",
    "over", "under", "through", "between", "within", "across", "focusing",
    "focused", "grant", "grants", "funding", "fund", "funds", "opportunity",
    "opportunities", "award", "awards", "applicants", "applicant", "eligible",
})

# Categories that should be treated as the same theme. Matching is done on
# lowercased phrases after list normalization.
CATEGORY_SYNONYMS = {
    "technology": {
        "technology", "tech", "artificial intelligence", "ai",
        "machine learning", "software", "data science", "cybersecurity",
        "digital", "information technology", "it", "computing", "robotics",
    },
    "healthcare": {
        "healthcare", "health", "medical", "public health", "mental health",
        "telemedicine", "clinical", "biomedical", "wellness",
    },
    "housing": {
        "housing", "affordable housing", "homelessness", "shelter",
        "real estate", "community development",
    },
    "education": {
        "education", "k-12", "higher education", "literacy", "stem",
        "youth development", "workforce development", "training",
    },
    "environment": {
        "environment", "environmental", "climate", "clean energy", "energy",
        "renewable energy", "conservation", "sustainability", "agriculture",
    },
    "arts": {
        "arts", "arts and culture", "culture", "humanities", "music",
        "museums", "creative",
    },
    "social_services": {
        "social services", "human services", "food security", "hunger",
        "veterans", "seniors", "disability services", "family services",
    },
    "research": {
        "research", "scientific research", "basic research", "r&d",
    },
}

# Organization type values meaning "no restriction".
UNRESTRICTED_ORG_TYPES = frozenset({"all", "any", "anyone", "unrestricted"})

# Geography values meaning "available everywhere".
NATIONWIDE_TERMS = frozenset({"nationwide", "national", "all states", "united states", "us", "usa"})

# Canonical organization types keyed by their alias (already canonicalized).
ORG_TYPE_ALIASES = {
    "501c3": "nonprofit",
    "501(c)(3)": "nonprofit",
    "notforprofit": "nonprofit",
    "npo": "nonprofit",
    "charity": "nonprofit",
    "business": "forprofit",
    "company": "forprofit",
    "smallbusiness": "forprofit",
    "startup": "forprofit",
    "gov": "government",
    "governmentagency": "government",
    "localgovernment": "government",
    "university": "education",
    "college": "education",
    "school": "education",
    "highereducation": "education",
}

# Preference programs: opportunity flag -> (profile flag, label)
QUALIFICATION_FLAGS = {
    "small_business_only": ("small_business", "small business"),
    "minority_business": ("minority_owned", "minority-owned business"),
    "woman_owned_business": ("woman_owned", "woman-owned business"),
    "veteran_owned_business": ("veteran_owned", "veteran-owned business"),
}

# Strength/weakness templates
NOTES = {
    "strong_keywords": "Strong thematic keyword overlap ({terms})",
    "some_keywords": "Some keyword overlap ({terms})",
    "generic_keywords": "Only generic funding terms in common ({terms})",
    "no_keywords": "Little keyword overlap between project and opportunity",
    "category_aligned": "Project category '{category}' aligns with the opportunity focus",
    "category_mismatch": "Project category '{category}' does not match the opportunity focus ({focus})",
    "focus_aligned": "Organization focus areas align with the opportunity ({terms})",
    "org_eligible": "Organization type '{org_type}' is eligible",
    "org_ineligible": "Organization type '{org_type}' is not eligible for this opportunity",
    "org_unverified": "Organization type not provided; eligibility could not be verified",
    "amount_in_range": "Funding request fits the award range",
    "amount_far_outside": "Funding request is far outside the award range",
    "amount_near_range": "Funding request slightly exceeds the award maximum",
    "amount_outside": "Funding request falls outside the award range",
    "exceeds_revenue": "Funding request exceeds the organization's annual revenue",
    "geography_match": "Opportunity covers the organization's location",
    "geography_mismatch": "Opportunity geography may not include '{location}'",
    "deadline_passed": "Application deadline has passed",
    "deadline_soon": "Limited time remaining ({days} days to deadline)",
    "deadline_ample": "Adequate time for application preparation",
    "eligibility_mentions_org": "Eligibility criteria mention your organization type",
    "qualification_match": "Qualifies for {labels} preference",
}
