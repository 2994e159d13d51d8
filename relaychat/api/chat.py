"""Chat relay endpoints.

Handles liveness probes and turn forwarding to the Gemini relay.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from relaychat.errors import MissingInputError, RelayError, UpstreamError
from relaychat.models.schemas import ChatReply, ChatRequest, ErrorResponse, PingResponse
from relaychat.relay.gemini_relay import get_relay_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

LIVENESS_TEXT = "Gemini Chatbot Server is Running"


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """Plain-text liveness string."""
    return LIVENESS_TEXT


@router.get("/ping", response_model=PingResponse)
async def ping() -> PingResponse:
    """Report readiness to the wake-up prober.

    Never touches the external API.
    """
    return PingResponse()


@router.post(
    "/chat",
    response_model=ChatReply,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
async def chat(request: ChatRequest) -> ChatReply:
    """Forward one turn and its history to the model.

    Args:
        request: Message text, optional file, and prior turns.

    Returns:
        ChatReply with the model's text.

    Raises:
        400: Neither message nor file supplied.
        500: The model call failed.
        504: The model call timed out.
    """
    if request.is_empty:
        raise MissingInputError("Message or file is required")

    logger.info(
        "Incoming chat: message_len=%s file=%s history_turns=%s",
        len(request.message),
        request.file.mime_type if request.file else None,
        len(request.history),
    )

    try:
        reply = await get_relay_service().generate_reply(request)
    except RelayError:
        raise
    except Exception as e:
        logger.exception("Chat processing failed")
        raise UpstreamError("Failed to generate response", details=str(e)) from e

    logger.info("Model responded with %s chars", len(reply))
    return ChatReply(reply=reply)
