from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from loguru import logger
from openai import AsyncOpenAI

from chat_relay.api.dependencies import get_openai_client
from chat_relay.core.config import Settings, get_settings
from chat_relay.schemas.chat import RelayFailure
from chat_relay.services.relay_service import internal_error, relay_chat

router = APIRouter()


@router.post("/api/chat")
async def chat(
    request: Request,
    settings: Settings = Depends(get_settings),
    client: AsyncOpenAI = Depends(get_openai_client),
):
    """
    Relay a chat completion request to OpenAI.

    Body: `{messages: [...], model?, temperature?, max_tokens?}`. When ACCESS_TOKEN
    is configured the caller must send `Authorization: Bearer <ACCESS_TOKEN>`.

    Returns:
    - 200 with the upstream completion body, unmodified
    - 401 / 400 / upstream status / 500 with `{error, details?, message?}`
    """
    try:
        raw_body = await request.body()
        outcome = await relay_chat(
            raw_body, request.headers.get("Authorization"), settings, client
        )
    except Exception as e:
        logger.exception(f"Chat request error: {e}")
        outcome = internal_error(e)

    if isinstance(outcome, RelayFailure):
        return JSONResponse(status_code=outcome.status_code, content=outcome.body)
    return JSONResponse(status_code=200, content=outcome)
