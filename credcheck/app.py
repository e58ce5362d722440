"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from credcheck.api.routers import api_router
from credcheck.config.settings import Settings, get_settings
from credcheck.infrastructure.llm.factory import close_shared_client
from credcheck.infrastructure.logging.logger import setup_logging

settings = get_settings()

setup_logging(
    level=settings.log_level,
    json_output=not settings.debug,
    silence_noisy_loggers=True,
)

logger = logging.getLogger(__name__)


def _validate_startup_config(settings: Settings) -> None:
    """Validate required configuration at startup."""
    if not settings.translation_api_key:
        logger.warning("No translation_api_key configured; /translate-analysis will return 500")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup and shutdown lifecycle."""
    logger.info("Starting %s %s", settings.app_name, settings.app_version)
    _validate_startup_config(settings)
    yield
    logger.info("Shutting down %s", settings.app_name)
    try:
        await close_shared_client()
        logger.info("Shared chat client closed")
    except Exception as e:
        logger.error("Error closing shared chat client: %s", e, exc_info=True)


def _invalid_field(exc: RequestValidationError) -> str:
    """Name of the first body field that failed validation."""
    for error in exc.errors():
        names = [str(part) for part in error.get("loc", ())[1:] if isinstance(part, str)]
        if names:
            return names[0]
    return "body"


app = FastAPI(
    title="Credcheck",
    description="Outbound link verification, link risk and analysis translation services",
    version=settings.app_version,
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are answered with 400 and a short message."""
    field = _invalid_field(exc)
    logger.info("Rejected request to %s: invalid '%s'", request.url.path, field)
    return JSONResponse(status_code=400, content={"error": f"Missing or invalid '{field}'"})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Error responses use an ``error`` key instead of FastAPI's ``detail``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials="*" not in settings.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

app.include_router(api_router, prefix="/api")
