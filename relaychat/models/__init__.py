"""Pydantic models for API requests and responses.

Shared by the relay and the UI transport so both tiers agree on the wire
format.

Models:
    - Role: Speaker enumeration (user, assistant)
    - HistoryEntry: One prior turn on the wire
    - FilePayload: Base64 attachment with its MIME type
    - ChatRequest: Incoming chat turn with history
    - ChatReply: Reply text
    - ErrorResponse: Structured error body
    - PingResponse: Liveness probe body
"""

from relaychat.models.schemas import (
    MAX_ATTACHMENT_SIZE,
    ChatReply,
    ChatRequest,
    ErrorResponse,
    FilePayload,
    HistoryEntry,
    PingResponse,
    Role,
)

__all__ = [
    "MAX_ATTACHMENT_SIZE",
    "ChatReply",
    "ChatRequest",
    "ErrorResponse",
    "FilePayload",
    "HistoryEntry",
    "PingResponse",
    "Role",
]
