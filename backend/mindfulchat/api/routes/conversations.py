"""
Conversation management routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from mindfulchat.core.errors import NotFoundError
from mindfulchat.db.session import get_db
from mindfulchat.models.user import User
from mindfulchat.schemas.conversation import ConversationCreate, ConversationResponse, MessageResponse
from mindfulchat.api.dependencies import get_current_user
from mindfulchat.services import storage

router = APIRouter(prefix="/conversations", tags=["conversations"])


@router.get("", response_model=List[ConversationResponse])
async def list_conversations(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List conversations for current user, most recent first."""
    return storage.get_user_conversations(db, current_user.id)


@router.post("", response_model=ConversationResponse, status_code=status.HTTP_201_CREATED)
async def create_conversation(
    conversation_data: ConversationCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Start a new conversation."""
    return storage.create_conversation(db, current_user.id, title=conversation_data.title)


@router.get("/{conversation_id}/messages", response_model=List[MessageResponse])
async def list_messages(
    conversation_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a conversation's messages in timestamp order."""
    conversation = storage.get_conversation(db, conversation_id, user_id=current_user.id)
    if not conversation:
        raise NotFoundError("Conversation not found")
    return storage.get_conversation_messages(db, conversation.id)
