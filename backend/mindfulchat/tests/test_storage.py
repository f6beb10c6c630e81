"""
Tests for the storage service.
"""
from datetime import timedelta
import pytest
from mindfulchat.core.errors import NotFoundError
from mindfulchat.core.utils import utcnow
from mindfulchat.db.seed import DEFAULT_EXERCISES, seed_exercises
from mindfulchat.models.conversation import Message, MessageRole, Sentiment
from mindfulchat.models.exercise import ExerciseCategory
from mindfulchat.models.mood import Mood
from mindfulchat.services import storage


@pytest.fixture
def user(db):
    return storage.upsert_user(db, "user-1", email="demo@example.com", first_name="Demo")


@pytest.fixture
def conversation(db, user):
    return storage.create_conversation(db, user.id, title="Evening check-in")


def test_upsert_user_creates_then_updates(db):
    """First sight creates the row; later claims update it."""
    created = storage.upsert_user(db, "abc", email="a@example.com")
    assert created.first_name is None

    updated = storage.upsert_user(db, "abc", first_name="Ada")
    assert updated.id == "abc"
    assert updated.first_name == "Ada"
    assert updated.email == "a@example.com"
    assert storage.get_user(db, "abc").first_name == "Ada"


def test_message_round_trip_in_timestamp_order(db, conversation):
    """Listed messages are ascending by timestamp with identical content."""
    contents = ["first 💙", "second\nline", "third  with  spaces "]
    for content in contents:
        storage.create_message(db, conversation.id, content, MessageRole.USER)

    messages = storage.get_conversation_messages(db, conversation.id)

    assert [m.content for m in messages] == contents
    timestamps = [m.timestamp for m in messages]
    assert timestamps == sorted(timestamps)


def test_messages_ordered_by_timestamp_not_insert_order(db, conversation):
    """An older timestamp sorts first even if inserted later."""
    now = utcnow()
    db.add(Message(conversation_id=conversation.id, content="later", role=MessageRole.USER, timestamp=now))
    db.add(Message(
        conversation_id=conversation.id, content="earlier", role=MessageRole.ASSISTANT,
        timestamp=now - timedelta(minutes=5)
    ))
    db.commit()

    assert [m.content for m in storage.get_conversation_messages(db, conversation.id)] == ["earlier", "later"]


def test_message_fields_persist(db, conversation):
    """Sentiment and stress indicators survive a round trip."""
    storage.create_message(
        db, conversation.id, "so worried", MessageRole.USER,
        sentiment=Sentiment.NEGATIVE, stress_indicators=["worried", "anxiety"]
    )
    message = storage.get_conversation_messages(db, conversation.id)[0]

    assert message.role == MessageRole.USER
    assert message.sentiment == Sentiment.NEGATIVE
    assert message.stress_indicators == ["worried", "anxiety"]


def test_conversation_ownership(db, user, conversation):
    """Ownership filter hides other users' conversations."""
    assert storage.get_conversation(db, conversation.id, user_id=user.id).id == conversation.id
    assert storage.get_conversation(db, conversation.id, user_id="someone-else") is None


def test_conversations_most_recent_first(db, user):
    """Touching a conversation moves it to the front."""
    older = storage.create_conversation(db, user.id, title="older")
    newer = storage.create_conversation(db, user.id, title="newer")
    older.updated_at = utcnow() - timedelta(hours=1)
    db.commit()
    assert [c.title for c in storage.get_user_conversations(db, user.id)] == ["newer", "older"]

    older.updated_at = utcnow() - timedelta(hours=2)
    db.commit()
    storage.touch_conversation(db, older)
    assert storage.get_user_conversations(db, user.id)[0].id == older.id
    assert newer.id != older.id


def test_seed_is_idempotent(db):
    """Seeding twice leaves one copy of each exercise."""
    first = seed_exercises(db)
    second = seed_exercises(db)

    assert len(first) == len(DEFAULT_EXERCISES)
    assert second == []
    assert len(storage.get_all_exercises(db)) == len(DEFAULT_EXERCISES)


def test_catalog_fetch_is_stable(db):
    """Two fetches without seeding in between return the same set."""
    seed_exercises(db)
    first = {(e.id, e.title) for e in storage.get_all_exercises(db)}
    second = {(e.id, e.title) for e in storage.get_all_exercises(db)}
    assert first == second


def test_exercises_by_category(db):
    """Category filter returns only that category."""
    seed_exercises(db)
    breathing = storage.get_exercises_by_category(db, ExerciseCategory.BREATHING)
    assert [e.title for e in breathing] == ["4-7-8 Breathing"]


def test_record_completion_requires_exercise(db, user):
    """Unknown exercises are rejected."""
    with pytest.raises(NotFoundError):
        storage.record_exercise_completion(db, user.id, exercise_id=999)


def test_recent_completions_include_titles(db, user):
    """Completions are joined with exercise titles, newest first."""
    seed_exercises(db)
    exercises = storage.get_all_exercises(db)
    first = storage.record_exercise_completion(db, user.id, exercises[0].id, rating=4)
    first.completed_at = utcnow() - timedelta(days=1)
    db.commit()
    storage.record_exercise_completion(db, user.id, exercises[2].id)

    rows = storage.get_user_recent_exercise_completions(db, user.id)
    assert [title for _, title in rows] == ["Body Scan Meditation", "4-7-8 Breathing"]
    assert rows[1][0].rating == 4


def test_mood_scores_are_clamped(db, user):
    """Scores outside 1-10 are clamped on write."""
    entry = storage.create_mood_entry(db, user.id, Mood.TOUGH, mood_score=0, energy=42, anxiety=-3)
    assert (entry.mood_score, entry.energy, entry.anxiety) == (1, 10, 1)


def test_mood_entries_most_recent_first_with_limit(db, user):
    """Mood listing is newest first and honours the limit."""
    base = utcnow()
    for offset, mood in enumerate([Mood.GREAT, Mood.GOOD, Mood.OKAY]):
        entry = storage.create_mood_entry(db, user.id, mood)
        entry.timestamp = base - timedelta(hours=offset)
    db.commit()

    entries = storage.get_user_mood_entries(db, user.id, limit=2)
    assert [e.mood for e in entries] == [Mood.GREAT, Mood.GOOD]


def test_conversation_themes(db, user, conversation):
    """Themes merge stored indicators and keywords, capped at five."""
    base = utcnow()
    rows = [
        ("Work has been brutal", None, MessageRole.USER),
        ("I keep thinking about family", ["overwhelmed"], MessageRole.USER),
        ("stress and sleep problems", ["anxiety"], MessageRole.USER),
        ("assistant mentions depression", None, MessageRole.ASSISTANT),
    ]
    for offset, (content, indicators, role) in enumerate(rows):
        db.add(Message(
            conversation_id=conversation.id, content=content, role=role,
            stress_indicators=indicators, timestamp=base + timedelta(seconds=offset)
        ))
    db.commit()

    themes = storage.get_user_conversation_themes(db, user.id)

    assert themes == ["anxiety", "stress", "sleep", "overwhelmed", "family"]
    assert "depression" not in themes


def test_build_user_context(db, user):
    """Context bundles moods, exercise titles and themes."""
    seed_exercises(db)
    storage.create_mood_entry(db, user.id, Mood.OKAY, mood_score=6, energy=4, anxiety=7)
    storage.record_exercise_completion(db, user.id, storage.get_all_exercises(db)[1].id)

    context = storage.build_user_context(db, user.id)

    assert context.recent_moods[0].mood_score == 6
    assert context.recent_exercises == ["Gratitude Journal"]
    assert context.themes == []
