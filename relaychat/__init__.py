"""Relay Chat - a browser chat UI backed by a stateless Gemini relay.

Combines FastAPI for the relay endpoints, google-genai for generation,
NiceGUI for the chat interface, and Pydantic for data validation.

Components:
    - api: HTTP endpoints (/, /ping, /chat)
    - relay: Gemini chat relay with role mapping and configuration
    - ui: Session store, transport client, wake-up prober and pages
    - models: Request/response schemas shared by both tiers
"""

__version__ = "0.1.0"
