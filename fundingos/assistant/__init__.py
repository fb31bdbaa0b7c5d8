"""Conversational intent classification for the funding assistant."""

from .intent import (
    classify_intent,
    detect_message_intents,
    follow_up_kind,
    is_follow_up,
    map_follow_up_intent,
)

__all__ = [
    "classify_intent",
    "detect_message_intents",
    "follow_up_kind",
    "is_follow_up",
    "map_follow_up_intent",
]
