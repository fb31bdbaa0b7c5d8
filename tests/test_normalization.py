"""Tests for record normalization: lists, amounts, dates, tokens and models."""

from datetime import date, datetime, timezone

import pytest

from fundingos.models import ConversationTurn, Opportunity, OrganizationProfile, Project, coerce_record
from fundingos.validation import (
    canonical_org_type,
    normalize_list,
    parse_amount,
    parse_date,
    parse_flag,
    parse_timestamp,
    tokenize,
)


class TestNormalizeList:
    """Test string-or-list normalization."""

    def test_delimited_string(self):
        """Semicolon-delimited strings should split, trim and lowercase."""
        assert normalize_list("A; B; C") == ["a", "b", "c"]

    def test_list(self):
        """Lists should be trimmed and lowercased."""
        assert normalize_list(["A", "B", "C"]) == ["a", "b", "c"]

    def test_json_array_string(self):
        """JSON-encoded arrays should be parsed."""
        assert normalize_list('["A","B","C"]') == ["a", "b", "c"]

    def test_postgres_array_literal(self):
        """Postgres array literals should be parsed."""
        assert normalize_list("{startup,Technology}") == ["startup", "technology"]

    def test_empty_values(self):
        """Missing and placeholder values should become an empty list."""
        assert normalize_list(None) == []
        assert normalize_list("") == []
        assert normalize_list("   ") == []
        assert normalize_list("N/A") == []
        assert normalize_list("[]") == []
        assert normalize_list([]) == []

    def test_dedupes_preserving_order(self):
        """Duplicates differing only by case should collapse."""
        assert normalize_list(["Health", "AI", "health"]) == ["health", "ai"]

    def test_drops_empty_items(self):
        """Empty segments between separators should be dropped."""
        assert normalize_list("a;;b; ") == ["a", "b"]

    def test_custom_separators(self):
        """Commas only split when requested."""
        assert normalize_list("tech, health") == ["tech, health"]
        assert normalize_list("tech, health", separators=";,") == ["tech", "health"]

    def test_strips_quotes(self):
        """Quoted items should be unquoted."""
        assert normalize_list(['"nonprofit"', "'tribal'"]) == ["nonprofit", "tribal"]


class TestParseAmount:
    """Test funding amount parsing."""

    def test_numbers(self):
        assert parse_amount(5000) == 5000.0
        assert parse_amount(2500.5) == 2500.5

    def test_currency_string(self):
        """Currency formatting should be ignored."""
        assert parse_amount("$10,000") == 10000.0
        assert parse_amount("Up to $250,000.00") == 250000.0

    def test_invalid_values(self):
        """Non-amounts should become None."""
        assert parse_amount(None) is None
        assert parse_amount(True) is None
        assert parse_amount(0) is None
        assert parse_amount(-100) is None
        assert parse_amount("TBD") is None
        assert parse_amount([100]) is None

    def test_magnitude_suffixes(self):
        """Shorthand like $1.5M or 250k should scale the number."""
        assert parse_amount("$1.5M") == 1_500_000.0
        assert parse_amount("250k") == 250_000.0
        assert parse_amount("2 million") == 2_000_000.0
        assert parse_amount("$3bn") == 3_000_000_000.0

    def test_suffix_needs_word_boundary(self):
        """A word that merely starts with a suffix letter should not scale."""
        assert parse_amount("500 members") == 500.0

    def test_negative_strings_rejected(self):
        assert parse_amount("-500") is None
        assert parse_amount("-$1,000") is None
        assert parse_amount("$0") is None


class TestParseFlag:
    """Test yes/no field parsing."""

    @pytest.mark.parametrize("value,expected", [
        (True, True),
        ("yes", True),
        (" TRUE ", True),
        ("1", True),
        (1, True),
        (False, False),
        ("no", False),
        ("false", False),
        ("", False),
        (0, False),
        (None, False),
    ])
    def test_values(self, value, expected):
        assert parse_flag(value) is expected


class TestParseDates:
    """Test timestamp and date parsing."""

    def test_zulu_timestamp(self):
        """Trailing Z should be read as UTC."""
        parsed = parse_timestamp("2026-10-19T12:00:00Z")
        assert parsed == datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

    def test_naive_timestamp_is_utc(self):
        """Naive timestamps should be treated as UTC."""
        parsed = parse_timestamp("2026-10-19T12:00:00")
        assert parsed.tzinfo is not None
        assert parsed == datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

    def test_offset_timestamp_converted(self):
        """Offsets should be converted to UTC."""
        parsed = parse_timestamp("2026-10-19T14:00:00+02:00")
        assert parsed == datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

    def test_unparseable_timestamp(self):
        assert parse_timestamp("yesterday") is None
        assert parse_timestamp("") is None
        assert parse_timestamp(12345) is None

    def test_parse_date(self):
        """Dates should be accepted from strings, datetimes and dates."""
        assert parse_date("2026-12-01") == date(2026, 12, 1)
        assert parse_date("2026-12-01T17:00:00Z") == date(2026, 12, 1)
        assert parse_date(datetime(2026, 12, 1, 9, 30)) == date(2026, 12, 1)
        assert parse_date(date(2026, 12, 1)) == date(2026, 12, 1)

    def test_parse_date_invalid(self):
        assert parse_date("rolling") is None
        assert parse_date(None) is None


class TestTokenize:
    """Test keyword tokenization."""

    def test_lowercases_and_strips_punctuation(self):
        """Punctuation and stopwords should be removed."""
        assert tokenize("The AI grant for Artificial-Intelligence, 2026!") == {
            "ai", "artificial", "intelligence",
        }

    def test_multiple_texts(self):
        assert tokenize("Housing", None, "Health") == {"housing", "health"}

    def test_drops_single_characters(self):
        assert tokenize("a b c data") == {"data"}


class TestCanonicalOrgType:
    """Test organization type canonicalization."""

    @pytest.mark.parametrize("value,expected", [
        ("Nonprofit", "nonprofit"),
        ("Non-Profit", "nonprofit"),
        ("501(c)(3)", "nonprofit"),
        ("501c3", "nonprofit"),
        ("for_profit", "forprofit"),
        ("Small Business", "forprofit"),
        ("University", "education"),
        ("tribal", "tribal"),
    ])
    def test_aliases(self, value, expected):
        assert canonical_org_type(value) == expected

    def test_empty(self):
        assert canonical_org_type(None) == ""
        assert canonical_org_type("") == ""


class TestModels:
    """Test record to model conversion."""

    def test_opportunity_aliases(self):
        """Alternative field names from different sources should map."""
        opp = Opportunity.from_record({
            "id": 42,
            "name": "Community Health Fund",
            "agency": "CDC",
            "fundingAmount": "$100,000",
            "deadline_date": "2026-12-01",
            "eligibility": "Must be a 501(c)(3)",
            "industry_focus": "{health,wellness}",
        })
        assert opp.id == "42"
        assert opp.title == "Community Health Fund"
        assert opp.sponsor == "CDC"
        assert opp.amount_max == 100000.0
        assert opp.deadline == date(2026, 12, 1)
        assert opp.eligibility_criteria == "Must be a 501(c)(3)"
        assert opp.focus_terms() == ["health", "wellness"]

    def test_focus_terms_include_project_types(self):
        opp = Opportunity(focus_areas="Health", project_types=["research", "Health"])
        assert opp.focus_terms() == ["health", "research"]

    def test_project_aliases(self):
        project = Project.from_record({"title": "Clinic", "funding_needed": "75,000", "project_type": "healthcare"})
        assert project.name == "Clinic"
        assert project.funding_request_amount == 75000.0
        assert project.category == "healthcare"

    def test_profile_aliases(self):
        profile = OrganizationProfile.from_record({"organizationType": "nonprofit", "state": "TX", "annual_budget": 1e6})
        assert profile.organization_type == "nonprofit"
        assert profile.location == "TX"
        assert profile.annual_revenue == 1e6

    def test_conversation_turn_created_at(self):
        """created_at should be accepted as the timestamp."""
        turn = ConversationTurn.from_record({"role": "Assistant", "content": "Hi", "created_at": "2026-10-19T12:00:00Z"})
        assert turn.role == "assistant"
        assert turn.timestamp == datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
        assert turn.context_type is None

    def test_coerce_record(self):
        """Dicts, instances and None should all coerce."""
        project = Project(name="X")
        assert coerce_record(project, Project) is project
        assert coerce_record({"name": "Y"}, Project).name == "Y"
        assert coerce_record(None, Project) == Project()

    def test_coerce_record_rejects_other_types(self):
        with pytest.raises(TypeError):
            coerce_record(["not", "a", "record"], Project)

    def test_preference_flags(self):
        """Preference flags should accept booleans and yes/no strings."""
        opportunity = Opportunity.from_record({"small_business_only": "Yes", "veteran_owned_business": 1})
        assert opportunity.small_business_only is True
        assert opportunity.veteran_owned_business is True
        assert opportunity.minority_business is False

        profile = OrganizationProfile.from_record({"woman_owned": "true", "minority_owned": "no"})
        assert profile.woman_owned is True
        assert profile.minority_owned is False

    def test_conversation_turn_rejects_other_types(self):
        with pytest.raises(TypeError):
            ConversationTurn.from_record("hello")
        assert ConversationTurn.from_record(None).role == ""
