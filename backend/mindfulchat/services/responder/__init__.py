"""
Response generators: keyword templates and the delegated language model.
"""
import logging
from mindfulchat.core.config import settings
from mindfulchat.services.responder.base import Responder
from mindfulchat.services.responder.delegated_strategy import DelegatedResponder
from mindfulchat.services.responder.template_strategy import TemplateResponder
from mindfulchat.services.responder.types import (
    ChatResponse,
    HistoryTurn,
    MoodSample,
    SentimentAnalysis,
    UserContext,
)

logger = logging.getLogger(__name__)


def get_responder() -> Responder:
    """Dependency returning the configured responder."""
    if settings.RESPONSE_STRATEGY == "template":
        return TemplateResponder()
    if not settings.OPENAI_API_KEY:
        logger.warning("OpenAI API key not configured. Using template responder.")
        return TemplateResponder()
    return DelegatedResponder()


__all__ = [
    "ChatResponse",
    "DelegatedResponder",
    "HistoryTurn",
    "MoodSample",
    "Responder",
    "SentimentAnalysis",
    "TemplateResponder",
    "UserContext",
    "get_responder",
]
