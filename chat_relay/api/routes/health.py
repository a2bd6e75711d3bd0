from datetime import datetime, timezone

from fastapi import APIRouter

from chat_relay.schemas.chat import HealthResponse

router = APIRouter()


def utc_timestamp() -> str:
    # e.g. 2024-05-01T12:00:00.000Z
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("/api/health", response_model=HealthResponse)
async def health():
    return HealthResponse(timestamp=utc_timestamp())
