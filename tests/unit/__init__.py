"""Unit tests for individual components in isolation.

Coverage:
    - models/: Wire schema validation
    - relay/: Role mapping, configuration and Gemini call assembly
    - ui/: Session store transitions, transport client and wake-up prober

Uses mocks and httpx.MockTransport for network and SDK boundaries.
"""
