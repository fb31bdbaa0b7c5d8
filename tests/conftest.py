"""Shared records for matching and classifier tests."""

import pytest


@pytest.fixture
def ai_grant():
    """AI research grant open to nonprofits and businesses."""
    return {
        "id": "opp-ai",
        "title": "AI Innovation Grant",
        "description": "Funding for artificial intelligence research and development platforms",
        "sponsor": "National Science Foundation",
        "focus_areas": "technology; artificial intelligence",
        "organization_types": "nonprofit; forprofit",
        "amount_min": 50000,
        "amount_max": 250000,
        "deadline": "2026-12-31",
    }


@pytest.fixture
def housing_grant():
    """Affordable housing grant restricted to nonprofits."""
    return {
        "id": "opp-housing",
        "title": "Affordable Housing Development Grant",
        "description": "Support for affordable housing construction and rehabilitation",
        "sponsor": "HUD",
        "focus_areas": ["Affordable Housing"],
        "organization_types": '["nonprofit"]',
        "amount_min": 50000,
        "amount_max": 500000,
        "deadline": "2026-12-18",
    }


@pytest.fixture
def ai_project():
    return {
        "id": "proj-ai",
        "name": "AI Research Platform",
        "description": "An artificial intelligence platform that helps research teams analyze data",
        "category": "technology",
        "funding_request_amount": 150000,
    }


@pytest.fixture
def housing_project():
    return {
        "id": "proj-housing",
        "name": "Affordable Housing Initiative",
        "description": "Build affordable housing units for low-income families",
        "category": "housing",
        "funding_request_amount": 150000,
    }


@pytest.fixture
def nonprofit():
    return {"organization_type": "Non-Profit", "location": "Austin, Texas"}


@pytest.fixture
def analysis_prompt():
    """Recent assistant turn offering an opportunity analysis."""
    return {
        "role": "assistant",
        "content": "Would you like me to analyze opportunities?",
        "timestamp": "2026-10-19T11:55:00Z",
        "metadata": {"context_type": "opportunity_analysis"},
    }
