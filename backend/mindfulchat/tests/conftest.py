"""
Shared fixtures: in-memory database, API client and a fake language model.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["OPENAI_API_KEY"] = ""
os.environ["RESPONSE_STRATEGY"] = "template"

import json
import random
import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from mindfulchat.core.security import create_access_token
from mindfulchat.db.session import get_db, init_db
from mindfulchat.main import app
from mindfulchat.services.responder import TemplateResponder, get_responder
from mindfulchat.services.responder.openai_client import OpenAIChatClient


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_responder] = lambda: TemplateResponder(rng=random.Random(0))
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_auth_headers(user_id: str, **claims) -> dict:
    token = create_access_token({"sub": user_id, **claims})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers():
    return make_auth_headers("user-1", email="demo@example.com", first_name="Demo", last_name="User")


@pytest.fixture
def other_auth_headers():
    return make_auth_headers("user-2", email="other@example.com")


def completion(content: str) -> httpx.Response:
    """A Chat Completions response carrying `content`."""
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


class FakeLLM:
    """
    Scripted stand-in for the Chat Completions endpoint.

    Each queued item is either a string (returned as the message content),
    an httpx.Response, or an exception to raise.
    """

    def __init__(self, *replies):
        self.replies = list(replies)
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, httpx.Response):
            return reply
        return completion(reply)

    def client(self) -> OpenAIChatClient:
        return OpenAIChatClient(
            api_key="test-key",
            api_url="https://llm.test/v1/chat/completions",
            model="test-model",
            timeout=1.0,
            transport=httpx.MockTransport(self.handler)
        )


@pytest.fixture
def fake_llm():
    return FakeLLM
