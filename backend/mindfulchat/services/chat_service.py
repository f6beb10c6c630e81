"""
Chat service: one request/response turn of the conversation.
"""
import logging
from dataclasses import dataclass
from typing import Optional
from sqlalchemy.orm import Session
from mindfulchat.core.config import settings
from mindfulchat.core.errors import NotFoundError, ValidationError
from mindfulchat.models.conversation import Message, MessageRole, Sentiment
from mindfulchat.schemas.chat import ChatAnalysis
from mindfulchat.services import storage
from mindfulchat.services.responder import HistoryTurn, Responder

logger = logging.getLogger(__name__)


@dataclass
class ChatTurnResult:
    """Both persisted messages plus the analysis shown to the client."""
    user_message: Message
    assistant_message: Message
    analysis: ChatAnalysis


async def handle_chat_turn(
    db: Session,
    user_id: str,
    conversation_id: Optional[int],
    message: Optional[str],
    responder: Responder
) -> ChatTurnResult:
    """
    Persist the user's message, generate and persist the reply.

    Steps run strictly in order. Nothing is rolled back if a later step
    fails, so the user message may be stored without a reply.
    """
    if not message or not message.strip() or not conversation_id:
        raise ValidationError("Message and conversation ID required")

    conversation = storage.get_conversation(db, conversation_id, user_id=user_id)
    if not conversation:
        raise NotFoundError("Conversation not found")

    analysis = await responder.analyze_sentiment(message)

    user_message = storage.create_message(
        db,
        conversation_id=conversation.id,
        content=message,
        role=MessageRole.USER,
        sentiment=Sentiment(analysis.sentiment),
        stress_indicators=analysis.stress_indicators
    )

    conversation_messages = storage.get_conversation_messages(db, conversation.id)
    history = [
        HistoryTurn(role=msg.role.value, content=msg.content)
        for msg in conversation_messages[-settings.HISTORY_CONTEXT_LIMIT:]
    ]
    user_context = storage.build_user_context(db, user_id)

    ai_response = await responder.generate_response(message, history, user_context)

    # Assistant turns are supportive by construction
    assistant_message = storage.create_message(
        db,
        conversation_id=conversation.id,
        content=ai_response.message,
        role=MessageRole.ASSISTANT,
        sentiment=Sentiment.POSITIVE,
        stress_indicators=[]
    )
    storage.touch_conversation(db, conversation)

    if ai_response.requires_immediate:
        logger.warning(f"Crisis language detected in conversation {conversation.id}")

    return ChatTurnResult(
        user_message=user_message,
        assistant_message=assistant_message,
        analysis=ChatAnalysis(
            sentiment=analysis.sentiment,
            stress_indicators=analysis.stress_indicators,
            suggested_exercises=ai_response.suggested_exercises,
            requires_immediate=ai_response.requires_immediate
        )
    )
