"""Models package - Import all models for SQLAlchemy registration."""
from mindfulchat.models.user import User
from mindfulchat.models.conversation import Conversation, Message, MessageRole, Sentiment
from mindfulchat.models.exercise import Exercise, ExerciseCompletion, ExerciseCategory
from mindfulchat.models.mood import MoodEntry, Mood

__all__ = [
    "User",
    "Conversation",
    "Message",
    "MessageRole",
    "Sentiment",
    "Exercise",
    "ExerciseCompletion",
    "ExerciseCategory",
    "MoodEntry",
    "Mood",
]
