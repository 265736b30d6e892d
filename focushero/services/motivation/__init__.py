from .motivation_service import generate_motivational_quote
from .fallback_content import FALLBACK_QUOTES, get_fallback_quote

__all__ = ["generate_motivational_quote", "FALLBACK_QUOTES", "get_fallback_quote"]
