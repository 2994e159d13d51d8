import base64
import binascii
from datetime import UTC, datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# 5MB cap shared by the UI attachment picker and the relay
MAX_ATTACHMENT_SIZE = 5 * 1024 * 1024

# Wire spellings accepted for the assistant role
ROLE_ALIASES = {"bot": "assistant"}


class Role(str, Enum):
    """Speaker of a turn, shared by the UI and the relay."""

    USER = "user"
    ASSISTANT = "assistant"


class HistoryEntry(BaseModel):
    """A prior turn as sent on the wire.

    Attributes:
        role: Speaker of the turn. ``bot`` is accepted for ``assistant``.
        text: Turn text.
    """

    role: Role
    text: str = ""

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v: object) -> object:
        """Map legacy role spellings onto the shared enumeration."""
        if isinstance(v, str):
            v = v.strip().lower()
            return ROLE_ALIASES.get(v, v)
        return v


class FilePayload(BaseModel):
    """Base64-encoded attachment for the current turn.

    Attributes:
        data: Base64 file content. A ``data:`` URL prefix is tolerated.
        mime_type: MIME type of the file (``mimeType`` on the wire).
    """

    model_config = ConfigDict(populate_by_name=True)

    data: str = Field(..., min_length=1)
    mime_type: str = Field(..., alias="mimeType", min_length=1)

    @field_validator("data", mode="before")
    @classmethod
    def strip_data_url(cls, v: object) -> object:
        """Drop a ``data:<mime>;base64,`` prefix if the caller sent one."""
        if isinstance(v, str) and v.startswith("data:") and "," in v:
            return v.split(",", 1)[1]
        return v

    @field_validator("data")
    @classmethod
    def validate_data(cls, v: str) -> str:
        """Check the payload decodes and respects the size cap."""
        try:
            raw = base64.b64decode(v, validate=True)
        except binascii.Error as e:
            raise ValueError(f"File data is not valid base64: {e}") from e
        if len(raw) > MAX_ATTACHMENT_SIZE:
            size_mb = len(raw) / (1024 * 1024)
            raise ValueError(f"File size ({size_mb:.1f}MB) exceeds maximum allowed (5MB)")
        return v

    def decode(self) -> bytes:
        return base64.b64decode(self.data)


class ChatRequest(BaseModel):
    """Request payload for the chat endpoint.

    Attributes:
        message: The user's text for this turn (may be empty with a file).
        file: Optional attachment for this turn.
        history: Every prior turn, oldest first.
    """

    message: str = ""
    file: FilePayload | None = None
    history: list[HistoryEntry] = Field(default_factory=list)

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: object) -> object:
        """Strip whitespace from message before validation."""
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip()
        return v

    @property
    def is_empty(self) -> bool:
        return not self.message and self.file is None


class ChatReply(BaseModel):
    """Successful chat response."""

    reply: str


class ErrorResponse(BaseModel):
    """Structured failure body.

    Attributes:
        error: Short human-readable message.
        details: Underlying cause, when there is one.
    """

    error: str
    details: str | None = None


class PingResponse(BaseModel):
    """Liveness probe response."""

    status: Literal["ok"] = "ok"
    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
