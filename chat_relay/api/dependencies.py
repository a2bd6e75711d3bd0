from fastapi import Depends
from openai import AsyncOpenAI

from chat_relay.core.config import Settings, get_settings
from chat_relay.llm.utils import build_openai_client


def get_openai_client(settings: Settings = Depends(get_settings)) -> AsyncOpenAI:
    return build_openai_client(settings)
