"""
Responder that delegates to an external language model.

A turn makes two sequential calls: a free-text reply with the conversation as
context, then a JSON classification of the user's message that also carries
the final reply text. Timeouts degrade to the template responder; any other
failure degrades to a fixed supportive reply. Nothing is raised to callers.
"""
import logging
from typing import Dict, List, Optional, Sequence
from mindfulchat.core.config import settings
from mindfulchat.core.errors import UpstreamError, UpstreamTimeout
from mindfulchat.services.responder.base import Responder
from mindfulchat.services.responder.openai_client import OpenAIChatClient
from mindfulchat.services.responder.parsing import parse_chat_response, parse_sentiment
from mindfulchat.services.responder.prompts import (
    build_analysis_prompt,
    build_sentiment_prompt,
    build_system_prompt,
)
from mindfulchat.services.responder.template_strategy import TemplateResponder, detect_crisis
from mindfulchat.services.responder.templates import FALLBACK_MESSAGE
from mindfulchat.services.responder.types import ChatResponse, HistoryTurn, SentimentAnalysis, UserContext

logger = logging.getLogger(__name__)


def fallback_response(user_message: str) -> ChatResponse:
    """Neutral defaults returned when the model output is unusable."""
    return ChatResponse(
        message=FALLBACK_MESSAGE,
        sentiment="neutral",
        stress_indicators=[],
        suggested_exercises=[],
        requires_immediate=detect_crisis(user_message)
    )


class DelegatedResponder(Responder):
    """Responder backed by an OpenAI-compatible chat completions API."""

    def __init__(
        self,
        client: Optional[OpenAIChatClient] = None,
        fallback: Optional[TemplateResponder] = None,
        history_limit: Optional[int] = None
    ):
        self.client = client or OpenAIChatClient()
        self.fallback = fallback or TemplateResponder()
        self.history_limit = history_limit or settings.PROMPT_HISTORY_LIMIT

    def _prompt_history(self, user_message: str, history: Sequence[HistoryTurn]) -> List[Dict[str, str]]:
        turns = list(history)
        # The chat route persists the new message before loading history
        if turns and turns[-1].role == "user" and turns[-1].content == user_message:
            turns = turns[:-1]
        return [{"role": turn.role, "content": turn.content} for turn in turns[-self.history_limit:]]

    async def generate_response(
        self,
        user_message: str,
        history: Sequence[HistoryTurn] = (),
        user_context: Optional[UserContext] = None
    ) -> ChatResponse:
        messages = [{"role": "system", "content": build_system_prompt(user_context)}]
        messages.extend(self._prompt_history(user_message, history))
        messages.append({"role": "user", "content": user_message})

        try:
            draft_reply = await self.client.complete(messages, temperature=0.7)
            raw = await self.client.complete_json(
                [{"role": "user", "content": build_analysis_prompt(user_message, draft_reply)}],
                temperature=0.3
            )
        except UpstreamTimeout:
            logger.warning("Response generation timed out. Using template responder.")
            return self.fallback.respond(user_message)
        except UpstreamError as e:
            logger.warning(f"Response generation failed: {e.message}. Using fallback reply.")
            return fallback_response(user_message)
        except Exception as e:
            logger.error(f"Unexpected error generating response: {e}", exc_info=True)
            return fallback_response(user_message)

        response = parse_chat_response(raw, default_message=draft_reply)
        if not response.requires_immediate and detect_crisis(user_message):
            response = response.model_copy(update={"requires_immediate": True})
        return response

    async def analyze_sentiment(self, message: str) -> SentimentAnalysis:
        try:
            raw = await self.client.complete_json(
                [{"role": "user", "content": build_sentiment_prompt(message)}],
                temperature=0.1
            )
        except UpstreamTimeout:
            logger.warning("Sentiment analysis timed out. Using keyword classification.")
            return self.fallback.classify(message)
        except UpstreamError as e:
            logger.warning(f"Sentiment analysis failed: {e.message}")
            return SentimentAnalysis()
        except Exception as e:
            logger.error(f"Unexpected error analyzing sentiment: {e}", exc_info=True)
            return SentimentAnalysis()

        return parse_sentiment(raw)
