"""
Exercise catalog and completion routes.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from mindfulchat.db.session import get_db
from mindfulchat.db.seed import seed_exercises
from mindfulchat.models.exercise import ExerciseCategory
from mindfulchat.models.user import User
from mindfulchat.schemas.exercise import (
    ExerciseResponse, ExerciseCompletionCreate, ExerciseCompletionResponse
)
from mindfulchat.api.dependencies import get_current_user
from mindfulchat.services import storage

router = APIRouter(prefix="/exercises", tags=["exercises"])
seed_router = APIRouter(tags=["exercises"])


@router.get("", response_model=List[ExerciseResponse])
async def list_exercises(
    category: Optional[ExerciseCategory] = Query(None),
    db: Session = Depends(get_db)
):
    """List the exercise catalog, optionally filtered by category."""
    if category:
        return storage.get_exercises_by_category(db, category)
    return storage.get_all_exercises(db)


@router.post("/complete", response_model=ExerciseCompletionResponse, status_code=status.HTTP_201_CREATED)
async def complete_exercise(
    completion_data: ExerciseCompletionCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Record that the current user finished an exercise."""
    return storage.record_exercise_completion(
        db,
        user_id=current_user.id,
        exercise_id=completion_data.exercise_id,
        rating=completion_data.rating
    )


@seed_router.post("/seed-exercises")
async def seed_default_exercises(db: Session = Depends(get_db)):
    """Insert the default catalog entries that are missing."""
    created = seed_exercises(db)
    return {"message": "Default exercises seeded successfully", "created": len(created)}
