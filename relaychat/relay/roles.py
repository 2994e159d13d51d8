"""Mapping between client roles and the Gemini API's role vocabulary."""

from google.genai import types

from relaychat.models.schemas import HistoryEntry, Role

API_ROLES: dict[Role, str] = {
    Role.USER: "user",
    Role.ASSISTANT: "model",
}


def to_api_role(role: Role) -> str:
    """Return the Gemini role for a client role.

    Raises:
        ValueError: If ``role`` is not a ``Role`` value.
    """
    return API_ROLES[Role(role)]


def to_api_history(history: list[HistoryEntry]) -> list[types.Content]:
    """Convert wire history into Gemini contents, one per entry, in order."""
    return [
        types.Content(
            role=to_api_role(entry.role),
            parts=[types.Part.from_text(text=entry.text)],
        )
        for entry in history
    ]
