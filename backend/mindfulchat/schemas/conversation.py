"""
Pydantic schemas for Conversation and Message entities.
"""
from typing import List, Optional
from datetime import datetime
from mindfulchat.models.conversation import MessageRole, Sentiment
from mindfulchat.schemas.base import CamelModel


class ConversationCreate(CamelModel):
    """Schema for conversation creation."""
    title: Optional[str] = None


class ConversationResponse(CamelModel):
    """Schema for conversation response."""
    id: int
    user_id: str
    title: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class MessageResponse(CamelModel):
    """Schema for message response."""
    id: int
    conversation_id: int
    content: str
    role: MessageRole
    sentiment: Optional[Sentiment] = None
    stress_indicators: Optional[List[str]] = None
    timestamp: datetime
