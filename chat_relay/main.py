import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from chat_relay.api.routes import chat, health
from chat_relay.core.config import get_settings
from chat_relay.core.cors import CORS_HEADERS, CORSRelayMiddleware
from chat_relay.core.logging import setup_logging

settings = get_settings()
setup_logging("DEBUG" if settings.DEBUG else settings.LOG_LEVEL)

# No docs routes: anything not registered below answers 404.
# App debug mode stays off so unhandled errors still get the JSON 500 body.
app = FastAPI(
    title=settings.APP_NAME,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
    redirect_slashes=False,
)

# Preflight handling and CORS headers on every response
app.add_middleware(CORSRelayMiddleware)

# Include routers
app.include_router(chat.router, tags=["chat"])
app.include_router(health.router, tags=["health"])


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # A known path with the wrong method is still "not found" to callers
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"error": "Not found"})
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    # Runs outside the middleware stack, so CORS headers are set here
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "message": str(exc)},
        headers=CORS_HEADERS,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "chat_relay.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
