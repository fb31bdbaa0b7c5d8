"""
Pattern tables for the conversational intent classifier.

The classifier's control flow never names a phrase or a topic; everything it
matches lives here so new phrasings can be added (or overridden through
IntentConfig.follow_up_patterns) without touching classification logic.
"""

from dataclasses import dataclass

from ..models import Intent

# Canonical short responses, by kind. Each pattern must match the whole
# (normalized) message. Kinds are tried in this order.
FOLLOW_UP_PATTERNS = {
    "affirmative": [
        r"yes", r"yeah", r"yep", r"yup", r"sure", r"okay", r"ok",
        r"absolutely", r"definitely", r"please do", r"go for it",
        r"that sounds good", r"sounds good", r"sounds great", r"i'?m interested",
    ],
    "negative": [
        r"no", r"nope", r"nah", r"not really", r"no thanks",
        r"skip", r"pass", r"maybe later", r"not now",
    ],
    "more_info": [
        r"tell me more", r"more info", r"more details", r"details",
        r"elaborate", r"explain", r"help", r"assist", r"guide me",
    ],
    "continuation": [
        r"continue", r"proceed", r"go ahead", r"next", r"keep going",
    ],
}


@dataclass(frozen=True)
class ContextRule:
    """Maps a follow-up to an intent when the prior assistant turn matches."""

    intent: Intent
    cues: tuple = ()           # Substrings of the prior assistant message
    context_types: tuple = ()  # Values of the prior turn's metadata.context_type

    def matches(self, content: str, context_type) -> bool:
        if context_type and context_type in self.context_types:
            return True
        return any(cue in content for cue in self.cues)


# Priority lists per follow-up kind: first matching rule wins
CONTEXT_RULES = {
    "affirmative": [
        ContextRule(Intent.ANALYZE_OPPORTUNITIES, cues=("analy", "opportunit")),
        ContextRule(Intent.WEB_SEARCH, cues=("search", "find more")),
        ContextRule(Intent.CHECK_DEADLINES, cues=("deadline", "urgent")),
        ContextRule(Intent.CONTINUE_ANALYSIS, context_types=("opportunity_analysis",)),
    ],
    "more_info": [
        ContextRule(Intent.EXPAND_OPPORTUNITY_ANALYSIS, context_types=("opportunity_analysis",)),
        ContextRule(Intent.EXPAND_DEADLINE_INFO, cues=("deadline",), context_types=("deadline_check",)),
    ],
    "continuation": [],
    "negative": [],
}

# Used when no context rule matches
FALLBACK_INTENTS = {
    "affirmative": Intent.CONTINUE_PREVIOUS,
    "more_info": Intent.EXPAND_PREVIOUS,
    "continuation": Intent.CONTINUE_PREVIOUS,
    "negative": Intent.DECLINE,
}

# Keyword rules over the message alone, in priority order
DIRECT_INTENT_RULES = [
    (Intent.CHECK_DEADLINES, [r"deadline", r"\bdue\b"]),
    (Intent.ANALYZE_OPPORTUNITIES, [r"analy[sz]", r"recommend", r"should i apply", r"opportunit"]),
    (Intent.CHECK_STATUS, [r"\bstatus\b", r"\bprogress\b"]),
]
