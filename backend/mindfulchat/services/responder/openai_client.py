"""
Minimal Chat Completions client for an OpenAI-compatible endpoint.
"""
import json
import logging
from typing import Dict, List, Optional
import httpx
from mindfulchat.core.config import settings
from mindfulchat.core.errors import UpstreamError, UpstreamTimeout

logger = logging.getLogger(__name__)


class OpenAIChatClient:
    """
    Posts chat messages and returns the first choice's content.

    Every call is bounded by `timeout` seconds. Failures are raised as
    UpstreamError (UpstreamTimeout for timeouts); callers decide how to degrade.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key if api_key is not None else settings.OPENAI_API_KEY
        self.api_url = api_url or settings.OPENAI_API_URL
        self.model = model or settings.OPENAI_MODEL
        self.timeout = timeout if timeout is not None else settings.OPENAI_TIMEOUT_SECONDS
        self._transport = transport

    async def complete(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.7,
        json_mode: bool = False
    ) -> str:
        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.api_url,
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json"
                    },
                    json=payload
                )
        except httpx.TimeoutException as e:
            logger.error(f"OpenAI API request timed out after {self.timeout}s")
            raise UpstreamTimeout("Language model request timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"OpenAI API transport error: {e}")
            raise UpstreamError("Language model request failed") from e

        if response.status_code != 200:
            logger.error(f"OpenAI API error {response.status_code}: {response.text}")
            raise UpstreamError(f"Language model returned status {response.status_code}")

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise UpstreamError("Unexpected completion payload") from e
        return content or ""

    async def complete_json(self, messages: List[Dict[str, str]], temperature: float = 0.3) -> dict:
        """Request a JSON object response and decode it."""
        content = await self.complete(messages, temperature=temperature, json_mode=True)
        try:
            data = json.loads(content)
        except ValueError as e:
            logger.warning(f"Model returned non-JSON content: {content[:200]!r}")
            raise UpstreamError("Model returned non-JSON content") from e
        if not isinstance(data, dict):
            raise UpstreamError("Model returned JSON that is not an object")
        return data
