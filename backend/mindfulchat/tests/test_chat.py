"""
Tests for the chat turn endpoint and orchestration.
"""
import json
import random
import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session
from mindfulchat.core.errors import NotFoundError, PersistenceError, ValidationError
from mindfulchat.main import app
from mindfulchat.models.conversation import MessageRole
from mindfulchat.services import storage
from mindfulchat.services.chat_service import handle_chat_turn
from mindfulchat.services.responder import DelegatedResponder, TemplateResponder, get_responder
from mindfulchat.services.responder.templates import RESPONSE_TEMPLATES


@pytest.fixture
def conversation_id(client, auth_headers):
    return client.post("/api/conversations", json={"title": "Chat"}, headers=auth_headers).json()["id"]


def test_chat_turn_persists_both_messages(client, auth_headers, conversation_id):
    """A turn stores the user and assistant messages and returns the analysis."""
    response = client.post(
        "/api/chat",
        json={"message": "I feel anxious and can't sleep", "conversationId": conversation_id},
        headers=auth_headers
    )
    assert response.status_code == 200
    data = response.json()

    assert data["userMessage"]["role"] == "user"
    assert data["userMessage"]["content"] == "I feel anxious and can't sleep"
    assert data["userMessage"]["sentiment"] == "negative"
    assert data["userMessage"]["stressIndicators"] == ["anxiety", "worried", "stress"]

    assert data["assistantMessage"]["role"] == "assistant"
    assert data["assistantMessage"]["sentiment"] == "positive"
    assert data["assistantMessage"]["stressIndicators"] == []
    assert data["assistantMessage"]["content"] in RESPONSE_TEMPLATES[0].responses

    assert data["analysis"] == {
        "sentiment": "negative",
        "stressIndicators": ["anxiety", "worried", "stress"],
        "suggestedExercises": ["breathing", "mindfulness"],
        "requiresImmediate": False,
    }

    messages = client.get(f"/api/conversations/{conversation_id}/messages", headers=auth_headers).json()
    assert [m["role"] for m in messages] == ["user", "assistant"]


def test_chat_crisis_flag(client, auth_headers, conversation_id):
    """Crisis language is flagged for the client."""
    response = client.post(
        "/api/chat",
        json={"message": "I want to end it all", "conversationId": conversation_id},
        headers=auth_headers
    )
    assert response.json()["analysis"]["requiresImmediate"] is True


@pytest.mark.parametrize("body", [
    {"conversationId": 1},
    {"message": "hello"},
    {"message": "   ", "conversationId": 1},
    {},
])
def test_chat_requires_message_and_conversation(client, auth_headers, body):
    """Missing fields are a 400 with no side effects."""
    response = client.post("/api/chat", json=body, headers=auth_headers)
    assert response.status_code == 400
    assert response.json() == {"message": "Message and conversation ID required"}


def test_chat_unknown_conversation(client, auth_headers):
    """Unknown or foreign conversations are 404."""
    response = client.post("/api/chat", json={"message": "hi", "conversationId": 404}, headers=auth_headers)
    assert response.status_code == 404


def test_chat_requires_auth(client):
    """Chat is gated by authentication."""
    response = client.post("/api/chat", json={"message": "hi", "conversationId": 1})
    assert response.status_code == 401


def test_chat_with_delegated_responder(client, auth_headers, conversation_id, fake_llm):
    """Upstream garbage still yields a supportive reply and a 200."""
    llm = fake_llm(
        json.dumps({"sentiment": "negative", "confidence": 0.9, "stressIndicators": ["panic"]}),
        "Draft reply",
        "this is not json",
    )
    app.dependency_overrides[get_responder] = lambda: DelegatedResponder(client=llm.client())

    response = client.post(
        "/api/chat",
        json={"message": "panic everywhere", "conversationId": conversation_id},
        headers=auth_headers
    )
    assert response.status_code == 200
    data = response.json()
    assert data["userMessage"]["stressIndicators"] == ["panic"]
    assert data["analysis"]["sentiment"] == "negative"
    assert data["analysis"]["suggestedExercises"] == []
    assert data["analysis"]["requiresImmediate"] is False
    assert "technical difficulties" in data["assistantMessage"]["content"]


@pytest.mark.asyncio
async def test_handle_chat_turn_validation(db):
    """Validation runs before anything is written."""
    responder = TemplateResponder()
    with pytest.raises(ValidationError):
        await handle_chat_turn(db, "user-1", None, "hello", responder)
    with pytest.raises(ValidationError):
        await handle_chat_turn(db, "user-1", 1, "", responder)
    with pytest.raises(NotFoundError):
        await handle_chat_turn(db, "user-1", 1, "hello", responder)


@pytest.mark.asyncio
async def test_handle_chat_turn_passes_recent_history(db):
    """The generator sees at most the last ten stored messages."""
    user = storage.upsert_user(db, "user-1")
    conversation = storage.create_conversation(db, user.id)
    for i in range(12):
        role = MessageRole.USER if i % 2 == 0 else MessageRole.ASSISTANT
        storage.create_message(db, conversation.id, f"message {i}", role)

    seen = {}

    class RecordingResponder(TemplateResponder):
        async def generate_response(self, user_message, history=(), user_context=None):
            seen["history"] = list(history)
            seen["context"] = user_context
            return self.respond(user_message)

    result = await handle_chat_turn(db, user.id, conversation.id, "I'm happy", RecordingResponder(rng=random.Random(0)))

    assert len(seen["history"]) == 10
    assert seen["history"][-1].content == "I'm happy"
    assert seen["history"][0].content == "message 3"
    assert result.analysis.sentiment == "positive"
    assert len(storage.get_conversation_messages(db, conversation.id)) == 14


def test_chat_write_failure_is_generic_500(client, auth_headers, conversation_id, monkeypatch):
    """A failed commit is rolled back and reported without database details."""
    def failing_commit(self):
        raise OperationalError("INSERT INTO messages", {}, Exception("database is locked"))

    monkeypatch.setattr(Session, "commit", failing_commit)

    response = client.post(
        "/api/chat",
        json={"message": "hello", "conversationId": conversation_id},
        headers=auth_headers
    )
    assert response.status_code == 500
    assert response.json() == {"message": "Something went wrong. Please try again."}


def test_chat_read_failure_is_generic_500(client, auth_headers, conversation_id, monkeypatch):
    """Database errors outside a write also become a generic 500."""
    def failing_lookup(*args, **kwargs):
        raise OperationalError("SELECT conversations", {}, Exception("connection lost"))

    monkeypatch.setattr(storage, "get_conversation", failing_lookup)

    response = client.post(
        "/api/chat",
        json={"message": "hello", "conversationId": conversation_id},
        headers=auth_headers
    )
    assert response.status_code == 500
    assert response.json() == {"message": "Something went wrong. Please try again."}


@pytest.mark.asyncio
async def test_user_message_kept_when_generation_fails(db):
    """The user's message stays stored if the reply cannot be produced."""
    user = storage.upsert_user(db, "user-1")
    conversation = storage.create_conversation(db, user.id)

    class BrokenResponder(TemplateResponder):
        async def generate_response(self, user_message, history=(), user_context=None):
            raise RuntimeError("generator crashed")

    with pytest.raises(RuntimeError):
        await handle_chat_turn(db, user.id, conversation.id, "is anyone there?", BrokenResponder())

    messages = storage.get_conversation_messages(db, conversation.id)
    assert [(m.role, m.content) for m in messages] == [(MessageRole.USER, "is anyone there?")]


@pytest.mark.asyncio
async def test_user_message_kept_when_reply_write_fails(db, monkeypatch):
    """A failed assistant write leaves the earlier user message in place."""
    user = storage.upsert_user(db, "user-1")
    conversation = storage.create_conversation(db, user.id)
    create_message = storage.create_message

    def create_user_message_only(db, conversation_id, content, role, **kwargs):
        if role == MessageRole.ASSISTANT:
            raise PersistenceError("Failed to save message")
        return create_message(db, conversation_id, content, role, **kwargs)

    monkeypatch.setattr(storage, "create_message", create_user_message_only)

    with pytest.raises(PersistenceError):
        await handle_chat_turn(db, user.id, conversation.id, "hello", TemplateResponder())

    messages = storage.get_conversation_messages(db, conversation.id)
    assert [m.role for m in messages] == [MessageRole.USER]
