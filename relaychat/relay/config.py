"""Relay configuration with environment variable loading.

Pydantic-based configuration for the Gemini chat relay.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_SYSTEM_INSTRUCTION = (
    "You are a simple, helpful chatbot. Respond clearly and concisely. Avoid hallucination."
)


class RelayConfig(BaseModel):
    """Configuration for the Gemini chat relay.

    Attributes:
        api_key: Gemini API key.
        model_name: Gemini model identifier.
        max_output_tokens: Upper bound on the generated reply.
        system_instruction: Persona and behaviour constraints for the model.
        request_timeout: Seconds to wait for the model before giving up.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", os.getenv("GOOGLE_API_KEY", "")),
        description="API key for the Gemini API",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        description="Model to use",
    )
    max_output_tokens: int = Field(
        default_factory=lambda: int(os.getenv("GEMINI_MAX_OUTPUT_TOKENS", "2048")),
        ge=1,
        le=65536,
        description="Maximum tokens in generated response",
    )
    system_instruction: str = Field(
        default_factory=lambda: os.getenv("GEMINI_SYSTEM_INSTRUCTION", DEFAULT_SYSTEM_INSTRUCTION),
        min_length=1,
        description="System instruction sent with every chat",
    )
    request_timeout: float = Field(
        default_factory=lambda: float(os.getenv("RELAY_REQUEST_TIMEOUT", "60")),
        gt=0,
        description="Deadline in seconds for a single generation call",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("API key required. Set GEMINI_API_KEY in .env")
        return v.strip()


def get_relay_config() -> RelayConfig:
    """Create relay configuration from environment.

    Returns:
        Configured RelayConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return RelayConfig()
