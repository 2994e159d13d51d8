"""UI client configuration with environment variable loading."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()


class ClientConfig(BaseModel):
    """Configuration for the chat UI's connection to the relay.

    Attributes:
        api_base_url: Base URL of the relay API.
        request_timeout: Seconds the UI waits for a chat reply.
        ping_interval: Seconds between wake-up probes.
        countdown_start: Starting value of the cosmetic wake-up countdown.
    """

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL", "http://localhost:8000"),
    )
    request_timeout: float = Field(default=120.0, gt=0)
    ping_interval: float = Field(
        default_factory=lambda: float(os.getenv("PING_INTERVAL", "10")),
        gt=0,
    )
    countdown_start: int = Field(default=15, ge=0)

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


def get_client_config() -> ClientConfig:
    return ClientConfig()
