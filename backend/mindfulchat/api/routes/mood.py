"""
Mood tracking routes.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List
from mindfulchat.core.config import settings
from mindfulchat.db.session import get_db
from mindfulchat.models.user import User
from mindfulchat.schemas.mood import MoodEntryCreate, MoodEntryResponse
from mindfulchat.api.dependencies import get_current_user
from mindfulchat.services import storage

router = APIRouter(prefix="/mood", tags=["mood"])


@router.post("", response_model=MoodEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_mood_entry(
    mood_data: MoodEntryCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Record a mood check-in."""
    return storage.create_mood_entry(
        db,
        user_id=current_user.id,
        mood=mood_data.mood,
        mood_score=mood_data.mood_score,
        energy=mood_data.energy,
        anxiety=mood_data.anxiety,
        notes=mood_data.notes
    )


@router.get("", response_model=List[MoodEntryResponse])
async def list_mood_entries(
    limit: int = Query(settings.DEFAULT_MOOD_LIMIT, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get recent mood entries, most recent first."""
    return storage.get_user_mood_entries(db, current_user.id, limit=limit)
