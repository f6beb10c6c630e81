"""
Chat turn route.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from mindfulchat.db.session import get_db
from mindfulchat.models.user import User
from mindfulchat.schemas.chat import ChatRequest, ChatTurnResponse
from mindfulchat.schemas.conversation import MessageResponse
from mindfulchat.api.dependencies import get_current_user
from mindfulchat.services.chat_service import handle_chat_turn
from mindfulchat.services.responder import Responder, get_responder

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatTurnResponse)
async def chat(
    chat_data: ChatRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    responder: Responder = Depends(get_responder)
):
    """Send a message and receive the companion's reply."""
    result = await handle_chat_turn(
        db,
        user_id=current_user.id,
        conversation_id=chat_data.conversation_id,
        message=chat_data.message,
        responder=responder
    )
    return ChatTurnResponse(
        user_message=MessageResponse.model_validate(result.user_message),
        assistant_message=MessageResponse.model_validate(result.assistant_message),
        analysis=result.analysis
    )
