"""
Authentication routes.
"""
from fastapi import APIRouter, Depends
from mindfulchat.schemas.user import UserResponse
from mindfulchat.models.user import User
from mindfulchat.api.dependencies import get_current_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/user", response_model=UserResponse)
async def get_auth_user(current_user: User = Depends(get_current_user)):
    """Get the authenticated user's profile."""
    return current_user
