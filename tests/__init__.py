"""Test package for Relay Chat.

Structure:
    - unit/: Session store, transport, prober, schemas and relay logic
    - integration/: HTTP endpoints through the ASGI app

The external Gemini API is mocked everywhere except the live test, which is
skipped unless GEMINI_API_KEY is set.
"""
