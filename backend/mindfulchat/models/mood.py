"""
Mood model for check-in tracking.
"""
from sqlalchemy import Column, String, Text, DateTime, Enum as SQLEnum, ForeignKey, Integer
from sqlalchemy.orm import relationship
from mindfulchat.db.base import Base
from mindfulchat.core.utils import utcnow
import enum


class Mood(str, enum.Enum):
    """Self-reported mood."""
    GREAT = "great"
    GOOD = "good"
    OKAY = "okay"
    TOUGH = "tough"
    CRISIS = "crisis"


class MoodEntry(Base):
    """Append-only mood check-in. Scores are on a 1-10 scale."""
    __tablename__ = "mood_entries"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(String(255), ForeignKey("users.id"), nullable=False, index=True)
    mood = Column(SQLEnum(Mood), nullable=False)
    mood_score = Column(Integer, nullable=False, default=5)
    energy = Column(Integer, nullable=False, default=5)
    anxiety = Column(Integer, nullable=False, default=5)
    notes = Column(Text, nullable=True)
    timestamp = Column(DateTime, default=utcnow, nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="mood_entries")
