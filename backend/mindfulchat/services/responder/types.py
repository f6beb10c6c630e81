"""
Value types exchanged with the response generators.
"""
from typing import List, Literal
from pydantic import BaseModel, Field

SentimentLabel = Literal["positive", "neutral", "negative"]
Role = Literal["user", "assistant"]


class HistoryTurn(BaseModel):
    """One prior message as seen by the generator."""
    role: Role
    content: str


class MoodSample(BaseModel):
    """Scores from a single mood check-in."""
    mood_score: int
    energy: int
    anxiety: int


class UserContext(BaseModel):
    """Recent activity used to personalize delegated responses."""
    recent_moods: List[MoodSample] = Field(default_factory=list)
    recent_exercises: List[str] = Field(default_factory=list)
    themes: List[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.recent_moods or self.recent_exercises or self.themes)


class ChatResponse(BaseModel):
    """Reply text plus the classification of the user's message."""
    message: str
    sentiment: SentimentLabel = "neutral"
    stress_indicators: List[str] = Field(default_factory=list)
    suggested_exercises: List[str] = Field(default_factory=list)
    requires_immediate: bool = False


class SentimentAnalysis(BaseModel):
    """Sentiment of a single message; confidence is within [0, 1]."""
    sentiment: SentimentLabel = "neutral"
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)
    stress_indicators: List[str] = Field(default_factory=list)
