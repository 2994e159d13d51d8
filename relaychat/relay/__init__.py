"""Gemini relay logic for the chat backend.

Forwards one turn plus caller-supplied history to the Gemini API.

Responsibilities:
    - Client role to Gemini role mapping
    - Per-request chat construction with system instruction and output cap
    - Multi-part turn assembly (attachment, then text)
    - Upstream error and timeout translation

Maintains clean separation from the HTTP layer.
"""

from relaychat.relay.config import RelayConfig, get_relay_config
from relaychat.relay.gemini_relay import RelayService, get_relay_service
from relaychat.relay.roles import to_api_history, to_api_role

__all__ = [
    "RelayConfig",
    "RelayService",
    "get_relay_config",
    "get_relay_service",
    "to_api_history",
    "to_api_role",
]
