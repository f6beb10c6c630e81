"""
Storage service: typed accessors over the relational store.

Writes are committed immediately. SQLAlchemy failures on write are rolled
back and re-raised as PersistenceError.
"""
import logging
from typing import List, Optional, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from mindfulchat.core.errors import NotFoundError, PersistenceError
from mindfulchat.core.utils import clamp, utcnow
from mindfulchat.models.user import User
from mindfulchat.models.conversation import Conversation, Message, MessageRole, Sentiment
from mindfulchat.models.exercise import Exercise, ExerciseCompletion, ExerciseCategory
from mindfulchat.models.mood import Mood, MoodEntry
from mindfulchat.services.responder.templates import THEME_KEYWORDS
from mindfulchat.services.responder.types import MoodSample, UserContext

logger = logging.getLogger(__name__)

SCORE_MIN = 1
SCORE_MAX = 10
THEME_MESSAGE_WINDOW = 20
MAX_THEMES = 5


def _save(db: Session, instance, action: str):
    """Add, commit and refresh one instance."""
    try:
        db.add(instance)
        db.commit()
        db.refresh(instance)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to {action}: {e}", exc_info=True)
        raise PersistenceError(f"Failed to {action}") from e
    return instance


# User operations

def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def upsert_user(
    db: Session,
    user_id: str,
    email: Optional[str] = None,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    profile_image_url: Optional[str] = None
) -> User:
    """
    Create the user on first authentication, refresh profile claims afterwards.

    Claims that are None leave the stored value untouched. Nothing is written
    when the stored profile already matches.
    """
    claims = {
        "email": email,
        "first_name": first_name,
        "last_name": last_name,
        "profile_image_url": profile_image_url,
    }
    user = get_user(db, user_id)
    if user is None:
        return _save(db, User(id=user_id, **claims), "create user")

    changed = False
    for field, value in claims.items():
        if value is not None and getattr(user, field) != value:
            setattr(user, field, value)
            changed = True
    if changed:
        user.updated_at = utcnow()
        _save(db, user, "update user")
    return user


# Conversation operations

def create_conversation(db: Session, user_id: str, title: Optional[str] = None) -> Conversation:
    return _save(db, Conversation(user_id=user_id, title=title), "create conversation")


def get_user_conversations(db: Session, user_id: str) -> List[Conversation]:
    """Conversations for a user, most recently active first."""
    return db.query(Conversation).filter(
        Conversation.user_id == user_id
    ).order_by(Conversation.updated_at.desc(), Conversation.id.desc()).all()


def get_conversation(db: Session, conversation_id: int, user_id: Optional[str] = None) -> Optional[Conversation]:
    """Fetch a conversation; when user_id is given it must own the conversation."""
    query = db.query(Conversation).filter(Conversation.id == conversation_id)
    if user_id is not None:
        query = query.filter(Conversation.user_id == user_id)
    return query.first()


def touch_conversation(db: Session, conversation: Conversation) -> Conversation:
    conversation.updated_at = utcnow()
    return _save(db, conversation, "update conversation")


# Message operations

def create_message(
    db: Session,
    conversation_id: int,
    content: str,
    role: MessageRole,
    sentiment: Optional[Sentiment] = None,
    stress_indicators: Optional[List[str]] = None
) -> Message:
    message = Message(
        conversation_id=conversation_id,
        content=content,
        role=role,
        sentiment=sentiment,
        stress_indicators=list(stress_indicators) if stress_indicators is not None else None
    )
    return _save(db, message, "save message")


def get_conversation_messages(db: Session, conversation_id: int) -> List[Message]:
    """Messages in timestamp ascending order; id breaks ties."""
    return db.query(Message).filter(
        Message.conversation_id == conversation_id
    ).order_by(Message.timestamp.asc(), Message.id.asc()).all()


# Exercise operations

def get_all_exercises(db: Session) -> List[Exercise]:
    return db.query(Exercise).order_by(Exercise.id).all()


def get_exercises_by_category(db: Session, category: ExerciseCategory) -> List[Exercise]:
    return db.query(Exercise).filter(
        Exercise.category == category
    ).order_by(Exercise.id).all()


def get_exercise(db: Session, exercise_id: int) -> Optional[Exercise]:
    return db.query(Exercise).filter(Exercise.id == exercise_id).first()


def create_exercise(
    db: Session,
    title: str,
    description: str,
    category: ExerciseCategory,
    instructions: str,
    icon: str,
    duration: Optional[int] = None
) -> Exercise:
    exercise = Exercise(
        title=title,
        description=description,
        category=category,
        duration=duration,
        instructions=instructions,
        icon=icon
    )
    return _save(db, exercise, "create exercise")


def record_exercise_completion(
    db: Session,
    user_id: str,
    exercise_id: int,
    rating: Optional[int] = None
) -> ExerciseCompletion:
    if get_exercise(db, exercise_id) is None:
        raise NotFoundError("Exercise not found")
    completion = ExerciseCompletion(user_id=user_id, exercise_id=exercise_id, rating=rating)
    return _save(db, completion, "record exercise completion")


def get_user_recent_exercise_completions(
    db: Session,
    user_id: str,
    limit: int = 10
) -> List[Tuple[ExerciseCompletion, Optional[str]]]:
    """Recent completions paired with the exercise title, newest first."""
    rows = db.query(ExerciseCompletion, Exercise.title).outerjoin(
        Exercise, ExerciseCompletion.exercise_id == Exercise.id
    ).filter(
        ExerciseCompletion.user_id == user_id
    ).order_by(
        ExerciseCompletion.completed_at.desc(), ExerciseCompletion.id.desc()
    ).limit(limit).all()
    return [(completion, title) for completion, title in rows]


# Mood operations

def create_mood_entry(
    db: Session,
    user_id: str,
    mood: Mood,
    mood_score: int = 5,
    energy: int = 5,
    anxiety: int = 5,
    notes: Optional[str] = None
) -> MoodEntry:
    entry = MoodEntry(
        user_id=user_id,
        mood=mood,
        mood_score=int(clamp(mood_score, SCORE_MIN, SCORE_MAX)),
        energy=int(clamp(energy, SCORE_MIN, SCORE_MAX)),
        anxiety=int(clamp(anxiety, SCORE_MIN, SCORE_MAX)),
        notes=notes
    )
    return _save(db, entry, "save mood entry")


def get_user_mood_entries(db: Session, user_id: str, limit: int = 10) -> List[MoodEntry]:
    """Mood entries, most recent first."""
    return db.query(MoodEntry).filter(
        MoodEntry.user_id == user_id
    ).order_by(MoodEntry.timestamp.desc(), MoodEntry.id.desc()).limit(limit).all()


# Context for the delegated responder

def get_user_conversation_themes(db: Session, user_id: str) -> List[str]:
    """
    Recurring themes from the user's recent messages.

    Scans the last 20 user-authored messages across all of the user's
    conversations, newest first. Stored stress indicators and any theme
    keyword found in the text are collected in first-seen order; at most
    five are returned.
    """
    recent_messages = db.query(Message.content, Message.stress_indicators).join(
        Conversation, Message.conversation_id == Conversation.id
    ).filter(
        Conversation.user_id == user_id,
        Message.role == MessageRole.USER
    ).order_by(Message.timestamp.desc(), Message.id.desc()).limit(THEME_MESSAGE_WINDOW).all()

    themes = []
    for content, stress_indicators in recent_messages:
        for indicator in stress_indicators or []:
            if isinstance(indicator, str) and indicator not in themes:
                themes.append(indicator)
        lower_content = (content or "").lower()
        for keyword in THEME_KEYWORDS:
            if keyword in lower_content and keyword not in themes:
                themes.append(keyword)

    return themes[:MAX_THEMES]


def build_user_context(db: Session, user_id: str, limit: int = 10) -> UserContext:
    moods = get_user_mood_entries(db, user_id, limit=limit)
    completions = get_user_recent_exercise_completions(db, user_id, limit=limit)

    exercise_titles = []
    for _, title in completions:
        if title and title not in exercise_titles:
            exercise_titles.append(title)

    return UserContext(
        recent_moods=[
            MoodSample(mood_score=entry.mood_score, energy=entry.energy, anxiety=entry.anxiety)
            for entry in moods
        ],
        recent_exercises=exercise_titles,
        themes=get_user_conversation_themes(db, user_id)
    )
