"""Normalization utilities for loosely-typed opportunity and project records."""

import json
import logging
import re
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional, Union

from .constants import ORG_TYPE_ALIASES, STOPWORDS

logger = logging.getLogger(__name__)

# A field that callers send either as one delimited string or as a list
StringOrList = Union[str, Iterable[str], None]

# String values that mean "nothing here"
EMPTY_MARKERS = {"", '""', "''", "{}", "[]", "null", "none", "n/a", "not specified"}

TOKEN_PATTERN = re.compile(r"[a-z0-9]+")
AMOUNT_PATTERN = re.compile(
    r"(?P<sign>-\s*)?\$?\s*(?P<number>\d[\d,]*(?:\.\d+)?)\s*"
    r"(?:(?P<suffix>k|mm|m|bn|b|thousand|million|billion)\b)?",
    re.IGNORECASE,
)
AMOUNT_SUFFIXES = {
    "k": 1e3, "thousand": 1e3,
    "m": 1e6, "mm": 1e6, "million": 1e6,
    "b": 1e9, "bn": 1e9, "billion": 1e9,
}

TRUE_MARKERS = {"true", "yes", "y", "1", "t"}


def _clean_item(item) -> str:
    if item is None:
        return ""
    text = str(item).strip().strip('"').strip("'").strip()
    return text.lower()


def _dedupe(items: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for item in items:
        if item and item not in EMPTY_MARKERS and item not in seen:
            seen.add(item)
            result.append(item)
    return result


def normalize_list(value: StringOrList, separators: str = ";") -> List[str]:
    """
    Normalize a string-or-list field to a list of trimmed, lowercased strings.

    Args:
        value: A list, a JSON array string, a Postgres array literal, or a
            delimited string
        separators: Characters a plain string is split on

    Returns:
        List of unique normalized items, original order preserved

    Examples:
        "A; B; C" -> ["a", "b", "c"]
        ["A", "B", "C"] -> ["a", "b", "c"]
        '["A","B","C"]' -> ["a", "b", "c"]
        "{startup,technology}" -> ["startup", "technology"]
        None -> []
    """
    if value is None:
        return []

    if isinstance(value, (list, tuple, set, frozenset)):
        items = value if not isinstance(value, (set, frozenset)) else sorted(value, key=str)
        return _dedupe(_clean_item(item) for item in items)

    if not isinstance(value, str):
        return _dedupe([_clean_item(value)])

    text = value.strip()
    if text.lower() in EMPTY_MARKERS:
        return []

    if text.startswith("["):
        try:
            parsed = json.loads(text)
        except ValueError:
            logger.debug("Value looks like a JSON array but does not parse: %r", text)
        else:
            if isinstance(parsed, list):
                return _dedupe(_clean_item(item) for item in parsed)

    # Postgres array literal
    if text.startswith("{") and text.endswith("}"):
        return _dedupe(_clean_item(item) for item in text[1:-1].split(","))

    pattern = "[" + re.escape(separators) + "]"
    return _dedupe(_clean_item(item) for item in re.split(pattern, text))


def parse_amount(value) -> Optional[float]:
    """
    Parse a funding amount.

    Numbers pass through, strings like "$10,000" or "$1.5M" are parsed,
    anything else (including booleans, negative and zero values) becomes None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if value > 0 else None
    if isinstance(value, str):
        match = AMOUNT_PATTERN.search(value)
        if not match or match.group("sign"):
            return None
        amount = float(match.group("number").replace(",", ""))
        suffix = (match.group("suffix") or "").lower()
        amount *= AMOUNT_SUFFIXES.get(suffix, 1)
        return amount if amount > 0 else None
    return None


def parse_flag(value) -> bool:
    """Read a yes/no field that may arrive as a bool, number or string."""
    if isinstance(value, str):
        return value.strip().lower() in TRUE_MARKERS
    return bool(value)


def parse_timestamp(value) -> Optional[datetime]:
    """Parse a datetime or ISO-8601 string into an aware UTC datetime."""
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            logger.debug("Unparseable timestamp: %r", value)
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_date(value) -> Optional[date]:
    """Parse a date, datetime, or ISO string into a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            parsed = parse_timestamp(text)
            return parsed.date() if parsed else None
    return None


def tokenize(*texts: Optional[str], stopwords: frozenset = STOPWORDS) -> set:
    """
    Split text into a set of lowercase words.

    Punctuation is stripped and stopwords dropped. Single characters are
    ignored, two-letter terms such as "ai" are kept.
    """
    tokens = set()
    for text in texts:
        if not text:
            continue
        for token in TOKEN_PATTERN.findall(str(text).lower()):
            if len(token) < 2 or token in stopwords or token.isdigit():
                continue
            tokens.add(token)
    return tokens


def canonical_org_type(value: Optional[str]) -> str:
    """
    Reduce an organization type to a comparable key.

    Examples:
        "Non-Profit" -> "nonprofit"
        "for_profit" -> "forprofit"
        "501(c)(3)" -> "nonprofit"
    """
    if not value:
        return ""
    text = str(value).strip().lower()
    if text in ORG_TYPE_ALIASES:
        return ORG_TYPE_ALIASES[text]
    key = re.sub(r"[\s\-_]+", "", text)
    return ORG_TYPE_ALIASES.get(key, key)
