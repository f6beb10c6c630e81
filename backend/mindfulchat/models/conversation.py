"""
Conversation and message models for the chat history.
"""
from sqlalchemy import Column, String, Text, DateTime, Enum as SQLEnum, ForeignKey, Integer, JSON
from sqlalchemy.orm import relationship
from mindfulchat.db.base import Base, BaseModel
from mindfulchat.core.utils import utcnow
import enum


class MessageRole(str, enum.Enum):
    """Author of a chat message."""
    USER = "user"
    ASSISTANT = "assistant"


class Sentiment(str, enum.Enum):
    """Sentiment label attached to a message."""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class Conversation(BaseModel):
    """A chat thread owned by one user."""
    __tablename__ = "conversations"

    user_id = Column(String(255), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=True)

    # Relationships
    user = relationship("User", back_populates="conversations")
    messages = relationship("Message", back_populates="conversation", order_by="Message.timestamp")


class Message(Base):
    """A single chat turn; immutable once written."""
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    conversation_id = Column(Integer, ForeignKey("conversations.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    role = Column(SQLEnum(MessageRole), nullable=False)
    sentiment = Column(SQLEnum(Sentiment), nullable=True)
    stress_indicators = Column(JSON, nullable=True)  # Ordered list of strings
    timestamp = Column(DateTime, default=utcnow, nullable=False, index=True)

    # Relationships
    conversation = relationship("Conversation", back_populates="messages")
