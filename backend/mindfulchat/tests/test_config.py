"""
Tests for settings validation and responder selection.
"""
import pytest
from pydantic import ValidationError
from mindfulchat.core.config import Settings, settings
from mindfulchat.services.responder import DelegatedResponder, TemplateResponder, get_responder


def test_unknown_response_strategy_rejected(monkeypatch):
    """A mistyped strategy fails at startup instead of picking a responder."""
    with pytest.raises(ValidationError):
        Settings(RESPONSE_STRATEGY="templte")

    monkeypatch.setenv("RESPONSE_STRATEGY", "openai")
    with pytest.raises(ValidationError):
        Settings()


def test_known_response_strategies_accepted():
    assert Settings(RESPONSE_STRATEGY="template").RESPONSE_STRATEGY == "template"
    assert Settings(RESPONSE_STRATEGY="delegated").RESPONSE_STRATEGY == "delegated"


def test_get_responder_follows_settings(monkeypatch):
    """Template when asked for or when no API key is set; delegated otherwise."""
    monkeypatch.setattr(settings, "RESPONSE_STRATEGY", "template")
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-test")
    assert isinstance(get_responder(), TemplateResponder)

    monkeypatch.setattr(settings, "RESPONSE_STRATEGY", "delegated")
    assert isinstance(get_responder(), DelegatedResponder)

    monkeypatch.setattr(settings, "OPENAI_API_KEY", "")
    assert isinstance(get_responder(), TemplateResponder)
