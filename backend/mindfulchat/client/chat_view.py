"""
Client-side chat view state.

Holds the message list and the compose/send state machine that the browser
view renders:

    IDLE -> COMPOSING -> SENDING -> AWAITING_RESPONSE -> IDLE

The crisis modal is an independent open/closed flag.
"""
import asyncio
import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional
from mindfulchat.client.transports import ChatTransport, TransportError
from mindfulchat.core.utils import utcnow
from mindfulchat.services.responder.templates import CRISIS_RESOURCES, GREETING_MESSAGE

logger = logging.getLogger(__name__)

QUICK_RESPONSES = ("I'm feeling anxious", "I need motivation", "Help me relax", "I can't sleep")

STRESS_NOTIFICATION = (
    "I noticed some stress indicators",
    "Would you like me to suggest some coping strategies?",
)
FAILURE_NOTIFICATION = (
    "I'm still here for you",
    "I couldn't reach the server just now. Please try sending your message again.",
)


class ChatViewState(str, enum.Enum):
    IDLE = "idle"
    COMPOSING = "composing"
    SENDING = "sending"
    AWAITING_RESPONSE = "awaiting-response"


@dataclass
class ViewMessage:
    id: int
    conversation_id: int
    content: str
    role: str
    sentiment: Optional[str] = None
    stress_indicators: Optional[List[str]] = None
    timestamp: datetime = field(default_factory=utcnow)


@dataclass
class Notification:
    title: str
    description: str


class ChatView:
    """State of one open conversation in the client."""

    def __init__(
        self,
        transport: ChatTransport,
        conversation_id: int = 1,
        on_notify: Optional[Callable[[Notification], None]] = None
    ):
        self.transport = transport
        self.conversation_id = conversation_id
        self.on_notify = on_notify
        self.state = ChatViewState.IDLE
        self.crisis_modal_open = False
        self.draft = ""
        self.notifications: List[Notification] = []
        self.messages: List[ViewMessage] = []
        self._append("assistant", GREETING_MESSAGE)

    @property
    def is_pending(self) -> bool:
        return self.state in (ChatViewState.SENDING, ChatViewState.AWAITING_RESPONSE)

    @property
    def can_send(self) -> bool:
        return not self.is_pending and bool(self.draft.strip())

    @property
    def crisis_resources(self):
        return CRISIS_RESOURCES

    def set_draft(self, text: str) -> None:
        self.draft = text
        if self.is_pending:
            return
        self.state = ChatViewState.COMPOSING if text else ChatViewState.IDLE

    async def send(self) -> Optional[ViewMessage]:
        """
        Send the current draft.

        Returns the assistant message, or None if sending was not allowed or
        the transport failed.
        """
        if not self.can_send:
            return None

        text = self.draft.strip()
        self.state = ChatViewState.SENDING
        self._append("user", text)
        self.draft = ""
        # Yield once so the optimistic message renders before the request starts
        await asyncio.sleep(0)

        self.state = ChatViewState.AWAITING_RESPONSE
        try:
            reply = await self.transport.send(self.conversation_id, text)
        except TransportError as e:
            logger.warning(f"Chat turn failed: {e}")
            self._notify(*FAILURE_NOTIFICATION)
            return None
        finally:
            self.state = ChatViewState.IDLE

        assistant_message = self._append(
            "assistant",
            reply.content,
            sentiment=reply.sentiment,
            stress_indicators=reply.stress_indicators
        )
        if reply.stress_indicators:
            self._notify(*STRESS_NOTIFICATION)
        if reply.requires_immediate:
            self.open_crisis_modal()
        return assistant_message

    async def send_quick_response(self, text: str) -> Optional[ViewMessage]:
        self.set_draft(text)
        return await self.send()

    def open_crisis_modal(self) -> None:
        self.crisis_modal_open = True

    def close_crisis_modal(self) -> None:
        self.crisis_modal_open = False

    def _append(self, role: str, content: str, **fields) -> ViewMessage:
        message = ViewMessage(
            id=len(self.messages) + 1,
            conversation_id=self.conversation_id,
            content=content,
            role=role,
            **fields
        )
        self.messages.append(message)
        return message

    def _notify(self, title: str, description: str) -> None:
        notification = Notification(title=title, description=description)
        self.notifications.append(notification)
        if self.on_notify:
            self.on_notify(notification)
