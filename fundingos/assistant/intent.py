"""Decide which canned assistant handler should answer a chat message."""

import logging
import re
from datetime import datetime, timezone
from typing import Iterable, Optional, Union

from ..config import IntentConfig
from ..models import ConversationTurn, Intent
from ..validation import parse_timestamp
from .patterns import CONTEXT_RULES, DIRECT_INTENT_RULES, FALLBACK_INTENTS, FOLLOW_UP_PATTERNS

logger = logging.getLogger(__name__)

TurnInput = Union[ConversationTurn, dict]


def normalize_message(message: Optional[str]) -> str:
    """Lowercase, collapse whitespace and drop trailing punctuation."""
    if not message:
        return ""
    text = " ".join(str(message).lower().split())
    return text.strip("\"'").rstrip(".!?,;: ").strip()


def _follow_up_table(config: IntentConfig) -> dict:
    table = {kind: list(patterns) for kind, patterns in FOLLOW_UP_PATTERNS.items()}
    for kind, patterns in (config.follow_up_patterns or {}).items():
        if kind not in FALLBACK_INTENTS:
            logger.warning("Ignoring follow-up patterns for unknown kind: %s", kind)
            continue
        if isinstance(patterns, str):
            patterns = [patterns]
        table[kind] = [str(p) for p in patterns or []]
    return table


def follow_up_kind(message: str, config: Optional[IntentConfig] = None) -> Optional[str]:
    """
    Classify a message as a canonical short response.

    Returns the kind ("affirmative", "negative", "more_info",
    "continuation") or None when the message is too long or matches no
    pattern. History is not considered here.
    """
    config = config or IntentConfig()
    text = normalize_message(message)
    if not text or len(text) > config.max_follow_up_length:
        return None

    for kind, patterns in _follow_up_table(config).items():
        for pattern in patterns:
            try:
                if re.fullmatch(pattern, text):
                    return kind
            except re.error as e:
                logger.warning("Skipping invalid follow-up pattern %r: %s", pattern, e)
    return None


def previous_assistant_turn(history: Optional[Iterable[TurnInput]]) -> Optional[ConversationTurn]:
    """Return the last turn of the history if it came from the assistant."""
    entries = list(history or [])
    turns = [t for t in entries if isinstance(t, (dict, ConversationTurn))]
    if len(turns) != len(entries):
        logger.debug("Skipped %d history entries that are not turns", len(entries) - len(turns))
    if not turns:
        return None
    last = ConversationTurn.from_record(turns[-1])
    return last if last.role == "assistant" else None


def is_recent(turn: ConversationTurn, now: Optional[datetime] = None, window_seconds: int = 600) -> bool:
    """True when the turn has a timestamp no older than the window."""
    timestamp = parse_timestamp(turn.timestamp)
    if timestamp is None:
        return False
    now = parse_timestamp(now) if now is not None else datetime.now(timezone.utc)
    age = (now - timestamp).total_seconds()
    return 0 <= age <= window_seconds


def is_follow_up(
    message: str,
    history: Optional[Iterable[TurnInput]] = None,
    config: Optional[IntentConfig] = None,
    now: Optional[datetime] = None,
) -> bool:
    """
    Check whether a message continues the immediately preceding assistant turn.

    All three conditions must hold: the message is short, it matches a
    canonical short-response pattern, and the last turn is a recent
    assistant message.
    """
    config = config or IntentConfig()
    if follow_up_kind(message, config) is None:
        return False
    previous = previous_assistant_turn(history)
    return previous is not None and is_recent(previous, now, config.recency_window_seconds)


def map_follow_up_intent(
    message: str,
    previous: Optional[ConversationTurn],
    config: Optional[IntentConfig] = None,
) -> Intent:
    """Choose the handler a follow-up refers to, from the prior assistant turn."""
    kind = follow_up_kind(message, config)
    if kind is None or previous is None:
        return Intent.NONE

    content = previous.content.lower()
    context_type = previous.context_type
    for rule in CONTEXT_RULES.get(kind, []):
        if rule.matches(content, context_type):
            return rule.intent
    return FALLBACK_INTENTS[kind]


def detect_message_intents(message: str) -> list[Intent]:
    """Every direct keyword intent found in the message, in priority order."""
    text = normalize_message(message)
    return [
        intent
        for intent, patterns in DIRECT_INTENT_RULES
        if any(re.search(pattern, text) for pattern in patterns)
    ]


def classify_intent(
    message: str,
    history: Optional[Iterable[TurnInput]] = None,
    config: Optional[IntentConfig] = None,
    now: Optional[datetime] = None,
) -> Intent:
    """
    Classify a chat message into one intent.

    Args:
        message: The user's current message
        history: Prior turns, most recent last (dicts or ConversationTurn)
        config: Classifier configuration (uses defaults if not provided)
        now: Reference time for the recency window (defaults to current UTC)

    Returns:
        The matching Intent, or Intent.NONE
    """
    config = config or IntentConfig()
    history = list(history or [])

    if is_follow_up(message, history, config, now):
        intent = map_follow_up_intent(message, previous_assistant_turn(history), config)
        logger.debug("Follow-up %r mapped to %s", message, intent.value)
        return intent

    intents = detect_message_intents(message)
    if intents:
        logger.debug("Message %r matched direct intents %s", message, [i.value for i in intents])
        return intents[0]
    return Intent.NONE
