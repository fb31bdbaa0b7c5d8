"""
FundingOS - Funding opportunity matching core.

Score how well grants, investors and donor programs fit a project, and
decide which assistant handler should answer a chat message.

CLI Usage:
    fundingos score opportunity.json project.json --profile org.json
    fundingos rank opportunities.json project.json -f table
    fundingos intent "yes" --history history.json
    fundingos web  # Start HTTP API

Library Usage:
    from fundingos import rank_opportunities, classify_message

    matches = rank_opportunities(opportunities, project, profile)
    for m in matches:
        print(f"{m.opportunity.title}: {m.score} ({m.recommendation})")
"""

__version__ = "1.0.0"
__author__ = "FundingOS"

# Semantic versioning
# MAJOR.MINOR.PATCH
# - MAJOR: Breaking changes
# - MINOR: New features (backward compatible)
# - PATCH: Bug fixes (backward compatible)
VERSION_INFO = {
    "major": 1,
    "minor": 0,
    "patch": 0,
    "release": "stable",  # stable, beta, alpha
}


def get_version() -> str:
    """Get full version string."""
    version = f"{VERSION_INFO['major']}.{VERSION_INFO['minor']}.{VERSION_INFO['patch']}"
    if VERSION_INFO["release"] != "stable":
        version += f"-{VERSION_INFO['release']}"
    return version


from fundingos.api import (
    OpportunityAnalysis,
    OpportunityMatch,
    analyze_opportunities,
    classify_message,
    rank_opportunities,
    score_opportunity,
)

__all__ = [
    "analyze_opportunities",
    "classify_message",
    "rank_opportunities",
    "score_opportunity",
    "OpportunityAnalysis",
    "OpportunityMatch",
    "__version__",
    "get_version",
    "VERSION_INFO",
]
