"""Motivational quote generation service"""
import logging

from focushero.services.llm import get_llm_service
from .fallback_content import DEFAULT_QUOTE, get_fallback_quote
from .prompts import build_messages

logger = logging.getLogger(__name__)


async def generate_motivational_quote() -> str:
    """
    Generate a short motivational quote for a focus session.

    Never raises for upstream problems: network errors, quota errors and
    missing credentials all degrade to a canned quote.

    Returns:
        A non-empty quote string
    """
    try:
        quote = await get_llm_service().invoke(build_messages())
        return quote or DEFAULT_QUOTE

    except Exception as e:
        logger.error(f"Failed to generate motivational quote: {e}")
        # Return fallback content (don't raise exception)
        return get_fallback_quote()
