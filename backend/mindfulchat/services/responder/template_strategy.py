"""
Keyword-matching responder used offline, in demo mode and as the timeout
fallback for the delegated responder.
"""
import random
from typing import Optional, Sequence
from mindfulchat.services.responder.base import Responder
from mindfulchat.services.responder.templates import (
    CRISIS_PHRASES,
    DEFAULT_RESPONSE,
    DEFAULT_SUGGESTED_EXERCISES,
    POSITIVE_KEYWORDS,
    POSITIVE_RESPONSE,
    POSITIVE_SUGGESTED_EXERCISES,
    RESPONSE_TEMPLATES,
    ResponseTemplate,
)
from mindfulchat.services.responder.types import ChatResponse, HistoryTurn, SentimentAnalysis, UserContext


def detect_crisis(message: str) -> bool:
    """True if any self-harm phrase occurs in the message (case-insensitive)."""
    lower_message = message.lower()
    return any(phrase in lower_message for phrase in CRISIS_PHRASES)


def match_template(message: str) -> Optional[ResponseTemplate]:
    """First template whose trigger list has a substring match, in table order."""
    lower_message = message.lower()
    for template in RESPONSE_TEMPLATES:
        if any(trigger in lower_message for trigger in template.triggers):
            return template
    return None


def is_positive(message: str) -> bool:
    lower_message = message.lower()
    return any(keyword in lower_message for keyword in POSITIVE_KEYWORDS)


class TemplateResponder(Responder):
    """Responder backed by the static template tables."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def respond(self, user_message: str) -> ChatResponse:
        """Synchronous core of generate_response."""
        requires_immediate = detect_crisis(user_message)

        template = match_template(user_message)
        if template:
            return ChatResponse(
                message=self._rng.choice(template.responses),
                sentiment="negative",
                stress_indicators=list(template.stress_indicators),
                suggested_exercises=list(template.suggested_exercises),
                requires_immediate=requires_immediate
            )

        if is_positive(user_message):
            return ChatResponse(
                message=POSITIVE_RESPONSE,
                sentiment="positive",
                stress_indicators=[],
                suggested_exercises=list(POSITIVE_SUGGESTED_EXERCISES),
                requires_immediate=requires_immediate
            )

        return ChatResponse(
            message=DEFAULT_RESPONSE,
            sentiment="neutral",
            stress_indicators=[],
            suggested_exercises=list(DEFAULT_SUGGESTED_EXERCISES),
            requires_immediate=requires_immediate
        )

    def classify(self, message: str) -> SentimentAnalysis:
        """Keyword sentiment; confidence stays at the neutral 0.5."""
        template = match_template(message)
        if template:
            return SentimentAnalysis(
                sentiment="negative",
                confidence=0.5,
                stress_indicators=list(template.stress_indicators)
            )
        if detect_crisis(message):
            return SentimentAnalysis(sentiment="negative", confidence=0.5, stress_indicators=[])
        if is_positive(message):
            return SentimentAnalysis(sentiment="positive", confidence=0.5, stress_indicators=[])
        return SentimentAnalysis()

    async def generate_response(
        self,
        user_message: str,
        history: Sequence[HistoryTurn] = (),
        user_context: Optional[UserContext] = None
    ) -> ChatResponse:
        return self.respond(user_message)

    async def analyze_sentiment(self, message: str) -> SentimentAnalysis:
        return self.classify(message)
