from functools import lru_cache

import httpx
from openai import AsyncOpenAI

from chat_relay.core.config import Settings


@lru_cache
def build_openai_client(
    settings: Settings, http_client: httpx.AsyncClient | None = None
) -> AsyncOpenAI:
    """
    OpenAI client for the given settings.

    SDK retries are disabled: every relayed request makes exactly one upstream call.
    The Authorization header is always set from OPENAI_API_KEY, so an empty key
    still reaches the upstream and its rejection is relayed to the caller.
    """
    return AsyncOpenAI(
        # The SDK refuses an empty key; the header below is what is sent
        api_key=settings.OPENAI_API_KEY or "unset",
        base_url=settings.OPENAI_BASE_URL,
        timeout=settings.OPENAI_TIMEOUT,
        max_retries=0,
        default_headers={"Authorization": f"Bearer {settings.OPENAI_API_KEY}"},
        http_client=http_client,
    )
