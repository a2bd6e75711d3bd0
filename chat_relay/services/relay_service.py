"""
Chat relay: validate an inbound chat request and forward it to OpenAI.

Each step returns either its result or a RelayFailure; relay_chat stops at
the first failure. Nothing here raises for an expected error condition.
"""
import json
from typing import Any

import httpx
from loguru import logger
from openai import APIStatusError, AsyncOpenAI, OpenAIError

from chat_relay.core.config import Settings
from chat_relay.schemas.chat import ChatRequest, ErrorResponse, RelayFailure

UNKNOWN_ERROR = "Unknown error"


def internal_error(exc: Exception) -> RelayFailure:
    return RelayFailure(
        status_code=500,
        error=ErrorResponse(error="Internal server error", message=str(exc)),
    )


def authorize(authorization: str | None, settings: Settings) -> RelayFailure | None:
    """Require `Bearer <ACCESS_TOKEN>` when a token is configured."""
    if settings.ACCESS_TOKEN and authorization != f"Bearer {settings.ACCESS_TOKEN}":
        return RelayFailure(status_code=401, error=ErrorResponse(error="Unauthorized"))
    return None


def parse_payload(raw_body: bytes) -> Any:
    # Malformed JSON is reported as an internal error, not a 400
    try:
        return json.loads(raw_body)
    except ValueError as e:
        logger.error(f"Chat request error: {e}")
        return internal_error(e)


def validate_payload(payload: Any) -> ChatRequest | RelayFailure:
    """
    Check that `messages` is an array; every other field is forwarded as sent.

    A JSON `null` body has no fields to read and is an internal error.
    """
    if payload is None:
        e = TypeError("Cannot read properties of a null request body")
        logger.error(f"Chat request error: {e}")
        return internal_error(e)

    messages = payload.get("messages") if isinstance(payload, dict) else None
    if not isinstance(messages, list):
        return RelayFailure(
            status_code=400, error=ErrorResponse(error="Invalid messages format")
        )

    return ChatRequest.model_validate(payload)


def upstream_error_data(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {"error": UNKNOWN_ERROR}


def upstream_error_message(error_data: Any) -> str:
    """Pull `error.message` out of an upstream error body, if there is one."""
    error = error_data.get("error") if isinstance(error_data, dict) else None
    message = error.get("message") if isinstance(error, dict) else None
    return message or UNKNOWN_ERROR


async def forward(chat_request: ChatRequest, client: AsyncOpenAI) -> Any:
    """
    Send the request to OpenAI's chat completions endpoint.

    Returns the upstream JSON body unmodified on success. Upstream rejections
    keep the upstream status code; transport failures and timeouts become 500s.
    """
    try:
        raw = await client.chat.completions.with_raw_response.create(
            **chat_request.to_upstream()
        )
    except APIStatusError as e:
        error_data = upstream_error_data(e.response)
        logger.error(f"OpenAI API error ({e.status_code}): {error_data}")
        return RelayFailure(
            status_code=e.status_code,
            error=ErrorResponse(
                error="OpenAI API error", details=upstream_error_message(error_data)
            ),
        )
    except OpenAIError as e:
        logger.error(f"Chat request error: {e}")
        return internal_error(e)

    try:
        data = raw.http_response.json()
    except ValueError as e:
        logger.error(f"Chat request error: undecodable upstream body: {e}")
        return internal_error(e)

    logger.info(f"Relayed completion: model={chat_request.model} status={raw.status_code}")
    return data


async def relay_chat(
    raw_body: bytes,
    authorization: str | None,
    settings: Settings,
    client: AsyncOpenAI,
) -> Any:
    """Run one chat request through every relay step."""
    failure = authorize(authorization, settings)
    if failure is not None:
        return failure

    payload = parse_payload(raw_body)
    if isinstance(payload, RelayFailure):
        return payload

    chat_request = validate_payload(payload)
    if isinstance(chat_request, RelayFailure):
        return chat_request

    return await forward(chat_request, client)
