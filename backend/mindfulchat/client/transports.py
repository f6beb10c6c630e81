"""
Transports used by the chat view to obtain replies.
"""
import asyncio
import logging
import random
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
import httpx
from pydantic import BaseModel, Field, ValidationError
from mindfulchat.services.responder.template_strategy import TemplateResponder

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """The reply could not be obtained."""


class TransportReply(BaseModel):
    """What the view needs from one chat turn."""
    content: str
    sentiment: Optional[str] = None
    stress_indicators: List[str] = Field(default_factory=list)
    suggested_exercises: List[str] = Field(default_factory=list)
    requires_immediate: bool = False


class ChatTransport(ABC):

    @abstractmethod
    async def send(self, conversation_id: int, message: str) -> TransportReply:
        """Deliver message and return the assistant's reply."""


class DemoTransport(ChatTransport):
    """
    Offline transport answering from the template responder.

    Waits a random 1.5-2.5 seconds to mimic network latency.
    """

    def __init__(
        self,
        responder: Optional[TemplateResponder] = None,
        delay_range: Tuple[float, float] = (1.5, 2.5),
        rng: Optional[random.Random] = None
    ):
        self.rng = rng or random.Random()
        self.responder = responder or TemplateResponder(rng=self.rng)
        self.delay_range = delay_range

    async def send(self, conversation_id: int, message: str) -> TransportReply:
        await asyncio.sleep(self.rng.uniform(*self.delay_range))
        response = self.responder.respond(message)
        return TransportReply(
            content=response.message,
            sentiment=response.sentiment,
            stress_indicators=response.stress_indicators,
            suggested_exercises=response.suggested_exercises,
            requires_immediate=response.requires_immediate
        )


class ApiTransport(ChatTransport):
    """Transport posting to the backend's /api/chat endpoint."""

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._transport = transport

    async def send(self, conversation_id: int, message: str) -> TransportReply:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport
            ) as client:
                response = await client.post(
                    "/api/chat",
                    headers={"Authorization": f"Bearer {self.token}"},
                    json={"message": message, "conversationId": conversation_id}
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Chat API error {e.response.status_code}: {e.response.text}")
            raise TransportError(f"Chat API returned status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"Chat API unreachable: {e}")
            raise TransportError("Chat API unreachable") from e
        except ValueError as e:
            raise TransportError("Chat API returned invalid JSON") from e

        try:
            analysis = data.get("analysis") or {}
            return TransportReply(
                content=data["assistantMessage"]["content"],
                sentiment=analysis.get("sentiment"),
                stress_indicators=analysis.get("stressIndicators") or [],
                suggested_exercises=analysis.get("suggestedExercises") or [],
                requires_immediate=bool(analysis.get("requiresImmediate"))
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise TransportError("Chat API response is missing the assistant message") from e
        except ValidationError as e:
            logger.error(f"Chat API returned a malformed reply: {e}")
            raise TransportError("Chat API response is malformed") from e
