"""Session store: the chat UI's state and its transitions.

State is an immutable ``SessionState``. Each transition is a pure function
returning a new state; ``SessionStore`` holds the current state, applies
transitions and tells subscribed renderers to refresh. Network I/O lives in
``relaychat.ui.transport``.
"""

from collections.abc import Callable
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from relaychat.models.schemas import MAX_ATTACHMENT_SIZE, HistoryEntry, Role

GREETING = "Hello! I am your AI assistant. How can I help you today?"
ERROR_MARKER = "⚠️"


class Connectivity(str, Enum):
    """Relay reachability as seen by the UI."""

    UNKNOWN = "unknown"
    PROBING = "probing"
    READY = "ready"


class AttachmentRejectedError(ValueError):
    """Raised when a selected file cannot be attached."""


class AttachmentTooLargeError(AttachmentRejectedError):
    """Raised when a selected file exceeds the attachment cap."""


class EmptyAttachmentError(AttachmentRejectedError):
    """Raised when a selected file has no content."""


def _now() -> str:
    return datetime.now().strftime("%I:%M %p")


class Turn(BaseModel):
    """One message in the conversation.

    Attributes:
        role: Speaker of the turn.
        text: Message text; may be empty when an attachment was sent.
        attachment_name: Name of the file sent with the turn, display only.
        is_error: Whether the turn records a failed request.
        time: Display timestamp.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    text: str = ""
    attachment_name: str | None = None
    is_error: bool = False
    time: str = Field(default_factory=_now)

    def to_history_entry(self) -> HistoryEntry:
        """Wire form of the turn; attachment-only turns get a placeholder text."""
        text = self.text
        if not text and self.attachment_name:
            text = f"[Attached file: {self.attachment_name}]"
        return HistoryEntry(role=self.role, text=text)


class Attachment(BaseModel):
    """A pending file held by the input area until the next send."""

    model_config = ConfigDict(frozen=True)

    name: str
    mime_type: str
    data: bytes

    @classmethod
    def from_upload(cls, name: str, data: bytes, mime_type: str | None) -> "Attachment":
        """Build an attachment from a picked file.

        Raises:
            EmptyAttachmentError: If the file is empty.
            AttachmentTooLargeError: If the file exceeds 5MB.
        """
        if not data:
            raise EmptyAttachmentError(f"File {name!r} is empty")
        if len(data) > MAX_ATTACHMENT_SIZE:
            size_mb = len(data) / (1024 * 1024)
            raise AttachmentTooLargeError(
                f"File size ({size_mb:.1f}MB) exceeds maximum allowed (5MB)"
            )
        return cls(name=name, mime_type=mime_type or "application/octet-stream", data=data)


class SessionState(BaseModel):
    """Everything the chat view renders."""

    model_config = ConfigDict(frozen=True)

    turns: tuple[Turn, ...] = ()
    pending_text: str = ""
    attachment: Attachment | None = None
    loading: bool = False
    error: str | None = None
    connectivity: Connectivity = Connectivity.UNKNOWN

    def history(self) -> list[HistoryEntry]:
        return [turn.to_history_entry() for turn in self.turns]


def initial_state() -> SessionState:
    return SessionState(turns=(Turn(role=Role.ASSISTANT, text=GREETING),))


# Transitions


def append_turn(state: SessionState, turn: Turn) -> SessionState:
    return state.model_copy(update={"turns": (*state.turns, turn)})


def set_pending_text(state: SessionState, text: str) -> SessionState:
    return state.model_copy(update={"pending_text": text})


def set_attachment(state: SessionState, attachment: Attachment | None) -> SessionState:
    return state.model_copy(update={"attachment": attachment})


def clear_pending(state: SessionState) -> SessionState:
    return state.model_copy(update={"pending_text": "", "attachment": None})


def set_loading(state: SessionState, loading: bool) -> SessionState:
    return state.model_copy(update={"loading": loading})


def set_error(state: SessionState, message: str | None) -> SessionState:
    return state.model_copy(update={"error": message})


def set_connectivity(state: SessionState, connectivity: Connectivity) -> SessionState:
    return state.model_copy(update={"connectivity": connectivity})


class SessionStore:
    """Holds one browser session's state and notifies renderers on change."""

    def __init__(self, state: SessionState | None = None) -> None:
        self.state = state if state is not None else initial_state()
        self._listeners: list[Callable[[SessionState], None]] = []

    def subscribe(self, listener: Callable[[SessionState], None]) -> None:
        self._listeners.append(listener)

    def _apply(self, new_state: SessionState) -> None:
        self.state = new_state
        for listener in self._listeners:
            listener(new_state)

    @property
    def turns(self) -> tuple[Turn, ...]:
        return self.state.turns

    @property
    def can_send(self) -> bool:
        has_input = bool(self.state.pending_text.strip()) or self.state.attachment is not None
        return (
            has_input
            and not self.state.loading
            and self.state.connectivity is Connectivity.READY
        )

    def append_turn(self, turn: Turn) -> None:
        self._apply(append_turn(self.state, turn))

    def set_pending(self, value: str | Attachment | None) -> None:
        """Set the pending text, or the pending attachment (``None`` drops it)."""
        if isinstance(value, str):
            self._apply(set_pending_text(self.state, value))
        else:
            self._apply(set_attachment(self.state, value))

    def select_attachment(self, name: str, data: bytes, mime_type: str | None) -> bool:
        """Hold a picked file as the pending attachment.

        Returns:
            False if the file was rejected; the reason is set as the error.
        """
        try:
            attachment = Attachment.from_upload(name, data, mime_type)
        except AttachmentRejectedError as e:
            self._apply(set_error(self.state, str(e)))
            return False
        self._apply(set_error(set_attachment(self.state, attachment), None))
        return True

    def clear_pending(self) -> None:
        self._apply(clear_pending(self.state))

    def set_loading(self, loading: bool) -> None:
        self._apply(set_loading(self.state, loading))

    def set_error(self, message: str | None) -> None:
        self._apply(set_error(self.state, message))

    def set_connectivity(self, connectivity: Connectivity) -> None:
        self._apply(set_connectivity(self.state, connectivity))

    def record_failure(self, message: str) -> None:
        """Show a failure as a banner and keep it in the conversation."""
        self._apply(
            append_turn(
                set_error(self.state, message),
                Turn(role=Role.ASSISTANT, text=f"{ERROR_MARKER} {message}", is_error=True),
            )
        )
