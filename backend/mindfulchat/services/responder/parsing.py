"""
Defensive decoding of classifier output.

Each field is read independently; a missing or malformed field takes its
default without invalidating the rest of the payload.
"""
import math
from typing import Any, List, Optional
from mindfulchat.core.utils import clamp
from mindfulchat.services.responder.templates import DEFAULT_REPLY_MESSAGE, EXERCISE_CATEGORIES
from mindfulchat.services.responder.types import ChatResponse, SentimentAnalysis, SentimentLabel

SENTIMENT_LABELS = ("positive", "neutral", "negative")
DEFAULT_CONFIDENCE = 0.5


def parse_sentiment_label(value: Any) -> SentimentLabel:
    if isinstance(value, str) and value.strip().lower() in SENTIMENT_LABELS:
        return value.strip().lower()
    return "neutral"


def parse_string_list(value: Any) -> List[str]:
    """Non-empty strings from a JSON array, order kept, duplicates dropped."""
    if not isinstance(value, list):
        return []
    items = []
    for item in value:
        if isinstance(item, str) and item.strip() and item.strip() not in items:
            items.append(item.strip())
    return items


def parse_exercises(value: Any) -> List[str]:
    """Known exercise categories, lower-cased, first occurrence kept."""
    categories = []
    for item in parse_string_list(value):
        category = item.lower()
        if category in EXERCISE_CATEGORIES and category not in categories:
            categories.append(category)
    return categories


def parse_confidence(value: Any) -> float:
    if isinstance(value, bool):
        return DEFAULT_CONFIDENCE
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return DEFAULT_CONFIDENCE
    if not isinstance(value, (int, float)) or math.isnan(value):
        return DEFAULT_CONFIDENCE
    return clamp(float(value), 0.0, 1.0)


def _stress_indicators_for(sentiment: SentimentLabel, value: Any) -> List[str]:
    # Positive messages never carry stress indicators
    if sentiment == "positive":
        return []
    return parse_string_list(value)


def parse_chat_response(raw: Any, default_message: Optional[str] = None) -> ChatResponse:
    """Decode a classification; a missing reply falls back to default_message."""
    if not isinstance(raw, dict):
        raw = {}
    sentiment = parse_sentiment_label(raw.get("sentiment"))

    message = raw.get("message")
    if not isinstance(message, str) or not message.strip():
        message = default_message if default_message and default_message.strip() else DEFAULT_REPLY_MESSAGE

    return ChatResponse(
        message=message,
        sentiment=sentiment,
        stress_indicators=_stress_indicators_for(sentiment, raw.get("stressIndicators")),
        suggested_exercises=parse_exercises(raw.get("suggestedExercises")),
        requires_immediate=raw.get("requiresImmediate") is True
    )


def parse_sentiment(raw: Any) -> SentimentAnalysis:
    if not isinstance(raw, dict):
        raw = {}
    sentiment = parse_sentiment_label(raw.get("sentiment"))

    return SentimentAnalysis(
        sentiment=sentiment,
        confidence=parse_confidence(raw.get("confidence")),
        stress_indicators=_stress_indicators_for(sentiment, raw.get("stressIndicators"))
    )
