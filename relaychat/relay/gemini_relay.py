"""Gemini relay service: turns one chat request into one model reply.

Core module for the backend's conversation handling.

Architecture Decisions:

1. **Stateless chats** - The relay keeps no session store. Every request
   opens a fresh chat seeded with the caller's history, so concurrent
   requests from different browsers never share mutable state.

2. **Singleton client** - Creating the genai client per request would
   rebuild its HTTP session each time. The singleton reuses one client
   across all requests; only the chat object is per request.

3. **Attachment before text** - The current turn's parts are ordered file
   first, then text, so the model reads the prompt as referring to the file.

4. **Bounded wait** - The SDK call is wrapped in ``asyncio.wait_for`` so a
   hung upstream surfaces as a timeout instead of holding the request open.
"""

import asyncio
import logging

from google import genai
from google.genai import types

from relaychat.errors import UpstreamError, UpstreamTimeoutError
from relaychat.models.schemas import ChatRequest
from relaychat.relay.config import RelayConfig, get_relay_config
from relaychat.relay.roles import to_api_history

logger = logging.getLogger(__name__)


class RelayService:
    """Service forwarding chat turns to the Gemini API.

    Wraps the genai client with:
    - Role mapping from the shared client vocabulary
    - Per-request chat sessions seeded with caller history
    - A deadline on the external call
    - Centralized error translation
    """

    def __init__(self, config: RelayConfig | None = None) -> None:
        """Initialize the relay service.

        Args:
            config: Optional relay configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_relay_config()
        self._client = self._create_client()

    def _create_client(self) -> genai.Client:
        return genai.Client(api_key=self._config.api_key)

    def _generation_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=self._config.system_instruction,
            max_output_tokens=self._config.max_output_tokens,
        )

    @staticmethod
    def build_parts(request: ChatRequest) -> list[types.Part]:
        """Build the current turn's parts: attachment first, then text.

        Args:
            request: Validated chat request.

        Returns:
            One or two parts, never empty for a non-empty request.
        """
        parts: list[types.Part] = []
        if request.file is not None:
            parts.append(
                types.Part.from_bytes(
                    data=request.file.decode(),
                    mime_type=request.file.mime_type,
                )
            )
        if request.message:
            parts.append(types.Part.from_text(text=request.message))
        return parts

    async def generate_reply(self, request: ChatRequest) -> str:
        """Send one turn with its history and return the model's reply.

        Args:
            request: Validated, non-empty chat request.

        Returns:
            The reply text.

        Raises:
            UpstreamTimeoutError: If the model does not answer within the deadline.
            UpstreamError: If the call fails or the model returns no text.
        """
        parts = self.build_parts(request)

        try:
            chat = self._client.aio.chats.create(
                model=self._config.model_name,
                config=self._generation_config(),
                history=to_api_history(request.history),
            )
            response = await asyncio.wait_for(
                chat.send_message(parts),
                timeout=self._config.request_timeout,
            )
        except TimeoutError as e:
            logger.error(
                f"Gemini call exceeded {self._config.request_timeout:.0f}s deadline"
            )
            raise UpstreamTimeoutError(
                "Timed out waiting for the model",
                details=f"No response within {self._config.request_timeout:g} seconds",
            ) from e
        except Exception as e:
            logger.exception("Error communicating with Gemini")
            raise UpstreamError("Failed to generate response", details=str(e)) from e

        text = response.text
        if not text:
            raise UpstreamError(
                "Failed to generate response",
                details="The model returned an empty response",
            )
        return text


# Module-level singleton instance
_relay_service: RelayService | None = None


def get_relay_service() -> RelayService:
    """Get or create the global relay service.

    Returns:
        The RelayService instance.

    Raises:
        ValueError: If the relay configuration is invalid.
    """
    global _relay_service
    if _relay_service is None:
        _relay_service = RelayService()
    return _relay_service
