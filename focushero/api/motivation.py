"""Motivational quote endpoint"""
import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from focushero.services.motivation import generate_motivational_quote

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/motivation", tags=["motivation"])


class MotivationResponse(BaseModel):
    quote: str


@router.get("", response_model=MotivationResponse)
async def get_motivation():
    """Return a motivational quote (generated, or canned when the generator is down)"""
    try:
        quote = await generate_motivational_quote()
        return {"quote": quote}

    except Exception as e:
        logger.error(f"Error generating motivation: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate motivational quote")
