"""
User model mirrored from identity-provider claims.
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from mindfulchat.db.base import Base, TimestampMixin


class User(TimestampMixin, Base):
    """User keyed by the identity provider's stable subject id."""
    __tablename__ = "users"

    id = Column(String(255), primary_key=True)
    email = Column(String(255), unique=True, nullable=True, index=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    profile_image_url = Column(String(500), nullable=True)

    # Relationships
    conversations = relationship("Conversation", back_populates="user")
    exercise_completions = relationship("ExerciseCompletion", back_populates="user")
    mood_entries = relationship("MoodEntry", back_populates="user")
