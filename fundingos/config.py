"""Configuration settings for the FundingOS matching core."""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

from .constants import CATEGORY_SYNONYMS, PRIMARY_KEYWORDS, SECONDARY_KEYWORDS

load_dotenv()

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a configuration file or override is invalid."""


@dataclass
class ScoringConfig:
    """Configuration for fit scoring weights."""

    # Starting point before any component is applied
    base_score: int = 30

    # Keyword overlap (points per shared term, capped)
    primary_keyword_weight: int = 12
    secondary_keyword_weight: int = 4
    other_keyword_weight: int = 2
    keyword_max: int = 60

    # Thematic alignment
    category_match_weight: int = 15
    thematic_mismatch_penalty: int = 25  # Subtracted when categories are known and disjoint
    focus_area_weight: int = 5

    # Eligibility
    eligible_org_weight: int = 10
    ineligible_score_cap: int = 20

    # Amount fit
    amount_in_range_weight: int = 10
    amount_far_outside_penalty: int = 10
    amount_far_outside_factor: float = 3.0
    amount_near_range_weight: int = 5  # Partial credit up to the near-range factor over the maximum
    amount_near_range_factor: float = 1.5

    # Preference programs (per matched flag)
    qualification_weight: int = 5

    # Geography
    geography_match_weight: int = 5

    # Deadline notes (days)
    deadline_soon_days: int = 14
    deadline_ample_days: int = 30

    # Confidence range
    min_confidence: float = 0.2
    max_confidence: float = 0.95

    primary_keywords: frozenset = field(default_factory=lambda: PRIMARY_KEYWORDS)
    secondary_keywords: frozenset = field(default_factory=lambda: SECONDARY_KEYWORDS)
    category_synonyms: dict = field(default_factory=lambda: dict(CATEGORY_SYNONYMS))

    def validate(self) -> None:
        if not 0 <= self.ineligible_score_cap <= 100:
            raise ConfigError("ineligible_score_cap must be 0-100")
        if self.thematic_mismatch_penalty < 0 or self.amount_far_outside_penalty < 0:
            raise ConfigError("penalties are subtracted and must not be negative")
        if self.amount_far_outside_factor <= 1:
            raise ConfigError("amount_far_outside_factor must be greater than 1")
        if not 1 <= self.amount_near_range_factor <= self.amount_far_outside_factor:
            raise ConfigError("amount_near_range_factor must be between 1 and amount_far_outside_factor")
        if not 0 <= self.min_confidence <= self.max_confidence <= 1:
            raise ConfigError("confidence bounds must satisfy 0 <= min <= max <= 1")


@dataclass
class IntentConfig:
    """Configuration for the conversational intent classifier."""

    # Follow-ups longer than this are treated as new requests
    max_follow_up_length: int = 25

    # The previous assistant turn must be at most this old (seconds)
    recency_window_seconds: int = 600

    # Optional replacement for the follow-up pattern table: {kind: [regex, ...]}
    follow_up_patterns: Optional[dict] = None

    def validate(self) -> None:
        if self.max_follow_up_length <= 0:
            raise ConfigError("max_follow_up_length must be positive")
        if self.recency_window_seconds <= 0:
            raise ConfigError("recency_window_seconds must be positive")
        if self.follow_up_patterns is None:
            return
        if not isinstance(self.follow_up_patterns, dict) or not all(
            isinstance(patterns, (list, tuple)) for patterns in self.follow_up_patterns.values()
        ):
            raise ConfigError("follow_up_patterns must map a kind to a list of patterns")


@dataclass
class Settings:
    """Unified settings with YAML override support."""

    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    intent: IntentConfig = field(default_factory=IntentConfig)

    # Opportunity analysis thresholds
    high_match_threshold: int = 70
    medium_match_threshold: int = 50
    urgent_deadline_days: int = 14

    # Web
    allowed_origins: str = field(default_factory=lambda: os.environ.get("ALLOWED_ORIGINS", "*"))


def _apply_section(target, data: dict, section: str) -> None:
    if not isinstance(data, dict):
        raise ConfigError(f"'{section}' section must be a mapping")

    known = {f.name for f in fields(target)}
    for key, value in data.items():
        if key not in known:
            logger.debug("Ignoring unknown %s option: %s", section, key)
            continue
        if key in ("primary_keywords", "secondary_keywords"):
            value = frozenset(str(v).lower() for v in value or [])
        elif key == "category_synonyms":
            value = {str(k).lower(): {str(v).lower() for v in vs} for k, vs in (value or {}).items()}
        setattr(target, key, value)


def _env_int(name: str) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e


def load_config(path: Optional[str] = None) -> Settings:
    """
    Load settings from YAML file with environment overrides.

    Priority: environment > config file > defaults

    Args:
        path: Path to YAML config file (optional, falls back to FUNDINGOS_CONFIG)

    Returns:
        Settings instance with merged configuration
    """
    settings = Settings()

    path = path or os.environ.get("FUNDINGOS_CONFIG")
    if path:
        config_path = Path(path).expanduser()
        if config_path.exists():
            with open(config_path) as f:
                try:
                    data = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

            if not isinstance(data, dict):
                raise ConfigError(f"{config_path} must contain a mapping")

            for key, value in data.items():
                if key == "scoring":
                    _apply_section(settings.scoring, value, "scoring")
                elif key == "intent":
                    _apply_section(settings.intent, value, "intent")
                elif hasattr(settings, key):
                    setattr(settings, key, value)
                else:
                    logger.debug("Ignoring unknown config option: %s", key)
        else:
            logger.warning("Config file not found: %s (using defaults)", config_path)

    # Environment overrides (always win)
    window = _env_int("FUNDINGOS_INTENT_WINDOW_SECONDS")
    if window is not None:
        settings.intent.recency_window_seconds = window
    max_length = _env_int("FUNDINGOS_FOLLOW_UP_MAX_LENGTH")
    if max_length is not None:
        settings.intent.max_follow_up_length = max_length
    if os.environ.get("ALLOWED_ORIGINS"):
        settings.allowed_origins = os.environ["ALLOWED_ORIGINS"]

    settings.scoring.validate()
    settings.intent.validate()
    return settings
