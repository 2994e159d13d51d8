"""Integration tests for the relay's HTTP surface.

Drives the real FastAPI app through httpx's ASGI transport. The relay
service is stubbed, except in tests marked as needing GEMINI_API_KEY.
"""
