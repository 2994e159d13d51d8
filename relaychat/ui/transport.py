"""HTTP transport between the chat UI and the relay.

``post_turn`` and ``ping`` do the I/O and return plain values; ``send_turn``
sequences a user action against the session store around one request.
"""

import asyncio
import base64
import logging
from enum import Enum

import httpx
from pydantic import BaseModel, ValidationError

from relaychat.models.schemas import FilePayload, HistoryEntry, Role
from relaychat.ui.session import Attachment, SessionStore, Turn

logger = logging.getLogger(__name__)

PING_TIMEOUT = 10.0


class ErrorKind(str, Enum):
    """Why a chat request produced no reply."""

    UNREACHABLE = "unreachable"
    TIMEOUT = "timeout"
    HTTP = "http"
    MALFORMED = "malformed"
    ATTACHMENT = "attachment"


class TurnOutcome(BaseModel):
    """Result of one chat request: a reply or an error, never both.

    Attributes:
        reply: Model reply text on success.
        error: User-facing failure message.
        kind: Failure category.
        status_code: HTTP status when the relay answered.
    """

    reply: str | None = None
    error: str | None = None
    kind: ErrorKind | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.reply is not None


def encode_attachment(attachment: Attachment) -> FilePayload:
    """Base64-encode an attachment for the wire."""
    return FilePayload(
        data=base64.b64encode(attachment.data).decode("ascii"),
        mime_type=attachment.mime_type,
    )


def build_chat_body(
    text: str,
    file: FilePayload | None,
    history: list[HistoryEntry],
) -> dict:
    return {
        "message": text,
        "file": file.model_dump(by_alias=True) if file is not None else None,
        "history": [entry.model_dump(mode="json") for entry in history],
    }


def _error_message(response: httpx.Response) -> str:
    """Prefer the relay's structured ``error``; fall back to the status line."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return f"Server error: {response.status_code} {response.reason_phrase}".strip()


class TransportClient:
    """Talks to the relay's ``/chat`` and ``/ping`` endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self, timeout: float | None = None) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=timeout if timeout is not None else self.timeout,
            transport=self._transport,
        )

    async def post_turn(
        self,
        text: str,
        file: FilePayload | None,
        history: list[HistoryEntry],
    ) -> TurnOutcome:
        """POST one turn to ``/chat``.

        Args:
            text: Message text.
            file: Encoded attachment, if any.
            history: Prior turns, oldest first.

        Returns:
            TurnOutcome with the reply, or the error and its kind.
        """
        body = build_chat_body(text, file, history)
        async with self._client() as client:
            try:
                response = await client.post(f"{self.base_url}/chat", json=body)
            except httpx.TimeoutException as e:
                logger.warning(f"Chat request timed out: {e!r}")
                return TurnOutcome(
                    error="The server took too long to respond. Please try again.",
                    kind=ErrorKind.TIMEOUT,
                )
            except httpx.RequestError as e:
                logger.warning(f"Chat request failed: {e!r}")
                return TurnOutcome(
                    error=(
                        f"Could not connect to the server at {self.base_url}. "
                        "It may still be starting up."
                    ),
                    kind=ErrorKind.UNREACHABLE,
                )

        if not response.is_success:
            message = _error_message(response)
            logger.warning(f"Chat request rejected ({response.status_code}): {message}")
            return TurnOutcome(
                error=message,
                kind=ErrorKind.HTTP,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            data = None
        reply = data.get("reply") if isinstance(data, dict) else None
        if not isinstance(reply, str):
            return TurnOutcome(
                error="The server sent a response that could not be read.",
                kind=ErrorKind.MALFORMED,
                status_code=response.status_code,
            )
        return TurnOutcome(reply=reply, status_code=response.status_code)

    async def ping(self) -> bool:
        """Return True once the relay's ``/ping`` reports ``ok``."""
        async with self._client(timeout=min(self.timeout, PING_TIMEOUT)) as client:
            try:
                response = await client.get(f"{self.base_url}/ping")
                data = response.json()
            except (httpx.HTTPError, ValueError) as e:
                logger.debug(f"Ping failed: {e!r}")
                return False
        return response.status_code == 200 and isinstance(data, dict) and data.get("status") == "ok"

    async def send_turn(
        self,
        store: SessionStore,
        text: str,
        attachment: Attachment | None = None,
    ) -> TurnOutcome | None:
        """Send a user turn and reconcile the outcome into the store.

        The user turn is appended before the request starts. The loading flag
        is held for the request's duration and cleared whatever happens.
        An attachment that cannot be encoded is dropped with an error banner
        and nothing is sent.

        Args:
            store: The session to update.
            text: Message text.
            attachment: Pending file, if any.

        Returns:
            The outcome, or None when there was nothing to send or a request
            was already in flight.
        """
        text = text.strip()
        if (not text and attachment is None) or store.state.loading:
            return None

        store.set_loading(True)
        try:
            history = store.state.history()
            try:
                file = (
                    await asyncio.to_thread(encode_attachment, attachment) if attachment else None
                )
            except ValidationError as e:
                logger.warning(f"Attachment could not be encoded: {e!r}")
                message = f"Could not attach {attachment.name}. Please choose another file."
                store.set_pending(None)
                store.set_error(message)
                return TurnOutcome(error=message, kind=ErrorKind.ATTACHMENT)

            store.clear_pending()
            store.set_error(None)
            store.append_turn(
                Turn(
                    role=Role.USER,
                    text=text,
                    attachment_name=attachment.name if attachment else None,
                )
            )
            outcome = await self.post_turn(text, file, history)
            if outcome.ok:
                store.append_turn(Turn(role=Role.ASSISTANT, text=outcome.reply))
            else:
                store.record_failure(outcome.error or "Request failed")
            return outcome
        finally:
            store.set_loading(False)
