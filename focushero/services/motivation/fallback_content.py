"""Fallback quotes for when LLM generation fails"""
import random
from typing import Optional

DEFAULT_QUOTE = "Stay focused, you're doing amazing!"

FALLBACK_QUOTES = [
    DEFAULT_QUOTE,
    "Every moment of concentration brings you closer to your goals.",
    "Focus is the bridge between thought and accomplishment.",
    "You have the power to create extraordinary results through focused effort.",
    "Deep work creates deep rewards. Keep going!",
]


def get_fallback_quote(rng: Optional[random.Random] = None) -> str:
    """Return one of the canned quotes, picked pseudo-randomly"""
    return (rng or random).choice(FALLBACK_QUOTES)
