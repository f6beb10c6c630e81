"""
Pydantic schemas for Exercise and ExerciseCompletion entities.
"""
from pydantic import Field
from typing import Optional
from datetime import datetime
from mindfulchat.models.exercise import ExerciseCategory
from mindfulchat.schemas.base import CamelModel


class ExerciseBase(CamelModel):
    """Base exercise schema."""
    title: str
    description: str
    category: ExerciseCategory
    duration: Optional[int] = None
    instructions: str
    icon: str


class ExerciseCreate(ExerciseBase):
    """Schema for exercise creation (seeding)."""
    pass


class ExerciseResponse(ExerciseBase):
    """Schema for exercise response."""
    id: int
    created_at: datetime


class ExerciseCompletionCreate(CamelModel):
    """Schema for recording a completed exercise."""
    exercise_id: int
    rating: Optional[int] = Field(default=None, ge=1, le=5)


class ExerciseCompletionResponse(CamelModel):
    """Schema for exercise completion response."""
    id: int
    user_id: str
    exercise_id: int
    completed_at: datetime
    rating: Optional[int] = None
