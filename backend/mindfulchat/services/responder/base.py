"""
Interface shared by the template and delegated responders.
"""
from abc import ABC, abstractmethod
from typing import Optional, Sequence
from mindfulchat.services.responder.types import ChatResponse, HistoryTurn, SentimentAnalysis, UserContext


class Responder(ABC):
    """Produces an empathetic reply and a classification for a user message."""

    @abstractmethod
    async def generate_response(
        self,
        user_message: str,
        history: Sequence[HistoryTurn] = (),
        user_context: Optional[UserContext] = None
    ) -> ChatResponse:
        """Reply to user_message given prior turns. Must not raise."""

    @abstractmethod
    async def analyze_sentiment(self, message: str) -> SentimentAnalysis:
        """Classify a single message. Must not raise."""
