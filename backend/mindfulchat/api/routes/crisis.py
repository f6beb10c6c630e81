"""
Crisis support resources shown by the client's crisis modal.
"""
from fastapi import APIRouter
from typing import List
from mindfulchat.schemas.crisis import CrisisResourceResponse
from mindfulchat.services.responder.templates import CRISIS_RESOURCES

router = APIRouter(prefix="/crisis-resources", tags=["crisis"])


@router.get("", response_model=List[CrisisResourceResponse])
async def list_crisis_resources():
    """Hotlines to contact in an emergency."""
    return [CrisisResourceResponse(label=r.label, href=r.href) for r in CRISIS_RESOURCES]
