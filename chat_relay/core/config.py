import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    # App
    APP_NAME: str = "Chat Relay"
    DEBUG: bool = field(
        default_factory=lambda: os.getenv("DEBUG", "False").lower() == "true"
    )
    LOG_LEVEL: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # OpenAI
    OPENAI_API_KEY: str = field(default_factory=lambda: os.getenv("OPENAI_API_KEY", ""))
    OPENAI_BASE_URL: str = field(
        default_factory=lambda: os.getenv(
            "OPENAI_BASE_URL", "https://api.openai.com/v1"
        )
    )
    OPENAI_TIMEOUT: float = field(
        default_factory=lambda: float(os.getenv("OPENAI_TIMEOUT", "60"))
    )  # seconds

    # Inbound auth: unset or empty leaves /api/chat open to any caller
    ACCESS_TOKEN: str | None = field(
        default_factory=lambda: os.getenv("ACCESS_TOKEN") or None
    )


@lru_cache
def get_settings() -> Settings:
    """Process settings, read once from the environment."""
    return Settings()
