"""Scoring module for opportunity/project fit."""

from .fit import calculate_fit_score, get_fit_breakdown
from .notes import generate_match_notes, generate_reasoning, get_recommendation

__all__ = [
    "calculate_fit_score",
    "get_fit_breakdown",
    "generate_match_notes",
    "generate_reasoning",
    "get_recommendation",
]
