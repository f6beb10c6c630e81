"""
Pydantic schemas for the chat turn endpoint.
"""
from typing import List, Optional
from mindfulchat.models.conversation import Sentiment
from mindfulchat.schemas.base import CamelModel
from mindfulchat.schemas.conversation import MessageResponse


class ChatRequest(CamelModel):
    """
    Schema for a chat turn.

    Both fields are optional at the schema level so that a missing value is
    reported as a plain 400 by the chat service.
    """
    message: Optional[str] = None
    conversation_id: Optional[int] = None


class ChatAnalysis(CamelModel):
    """Derived analysis returned alongside the persisted messages."""
    sentiment: Sentiment
    stress_indicators: List[str] = []
    suggested_exercises: List[str] = []
    requires_immediate: bool = False


class ChatTurnResponse(CamelModel):
    """Schema for chat turn response."""
    user_message: MessageResponse
    assistant_message: MessageResponse
    analysis: ChatAnalysis
