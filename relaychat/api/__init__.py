"""FastAPI endpoints for the chat relay.

Endpoints:
    - GET /: Plain-text liveness string
    - GET /ping: Readiness probe for the UI's wake-up poller
    - POST /chat: Forward one turn plus history to the model
"""

from relaychat.api.app import app, create_app

__all__ = ["app", "create_app"]
