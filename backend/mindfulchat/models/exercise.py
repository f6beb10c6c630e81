"""
Exercise catalog and completion models.
"""
from sqlalchemy import Column, String, Text, DateTime, Enum as SQLEnum, ForeignKey, Integer
from sqlalchemy.orm import relationship
from mindfulchat.db.base import Base
from mindfulchat.core.utils import utcnow
import enum


class ExerciseCategory(str, enum.Enum):
    """Exercise category enumeration."""
    BREATHING = "breathing"
    JOURNALING = "journaling"
    MINDFULNESS = "mindfulness"
    MOVEMENT = "movement"


class Exercise(Base):
    """Guided exercise in the static catalog. Never deleted."""
    __tablename__ = "exercises"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    title = Column(String(200), nullable=False, unique=True)
    description = Column(Text, nullable=False)
    category = Column(SQLEnum(ExerciseCategory), nullable=False, index=True)
    duration = Column(Integer, nullable=True)  # Minutes
    instructions = Column(Text, nullable=False)
    icon = Column(String(100), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    completions = relationship("ExerciseCompletion", back_populates="exercise")


class ExerciseCompletion(Base):
    """Record of a user finishing an exercise."""
    __tablename__ = "exercise_completions"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(String(255), ForeignKey("users.id"), nullable=False, index=True)
    exercise_id = Column(Integer, ForeignKey("exercises.id", ondelete="RESTRICT"), nullable=False, index=True)
    completed_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    rating = Column(Integer, nullable=True)  # 1-5, how helpful it was

    # Relationships
    user = relationship("User", back_populates="exercise_completions")
    exercise = relationship("Exercise", back_populates="completions")
