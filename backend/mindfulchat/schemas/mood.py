"""
Pydantic schemas for Mood entity.
"""
from pydantic import field_validator
from typing import Optional
from datetime import datetime
from mindfulchat.core.utils import clamp
from mindfulchat.models.mood import Mood
from mindfulchat.schemas.base import CamelModel

SCORE_MIN = 1
SCORE_MAX = 10


class MoodEntryBase(CamelModel):
    """Base mood entry schema."""
    mood: Mood
    mood_score: int = 5
    energy: int = 5
    anxiety: int = 5
    notes: Optional[str] = None


class MoodEntryCreate(MoodEntryBase):
    """Schema for mood entry creation. Scores are clamped to 1-10."""

    @field_validator("mood_score", "energy", "anxiety", mode="after")
    @classmethod
    def clamp_score(cls, v: int) -> int:
        return int(clamp(v, SCORE_MIN, SCORE_MAX))


class MoodEntryResponse(MoodEntryBase):
    """Schema for mood entry response."""
    id: int
    user_id: str
    timestamp: datetime
    created_at: datetime
