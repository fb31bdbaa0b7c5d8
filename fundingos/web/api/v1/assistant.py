"""Assistant intent endpoint."""

from fastapi import APIRouter, Depends

from fundingos.api import classify_message
from fundingos.assistant import is_follow_up
from fundingos.config import Settings
from fundingos.web.api.v1.deps import get_settings
from fundingos.web.api.v1.models import IntentRequest, IntentResponse

router = APIRouter()


@router.post("/intent", response_model=IntentResponse)
async def classify(request: IntentRequest, settings: Settings = Depends(get_settings)):
    """Decide which handler should answer the message."""
    intent = classify_message(request.message, request.history, settings=settings, now=request.now)
    return IntentResponse(
        intent=intent.value,
        follow_up=is_follow_up(request.message, request.history, settings.intent, request.now),
    )
