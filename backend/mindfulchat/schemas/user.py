"""
Pydantic schemas for User entity.
"""
from typing import Optional
from datetime import datetime
from mindfulchat.schemas.base import CamelModel


class UserResponse(CamelModel):
    """Schema for user response."""
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime
