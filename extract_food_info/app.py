from __future__ import annotations

# Standard library
import logging as _logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

# Third-party
import structlog
from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Local application imports
from extract_food_info.api.extract_food_info import router as extraction_router
from extract_food_info.domain.meal.core.exceptions import MissingInputError
from extract_food_info.domain.user.auth.ports.auth_provider import AuthenticationError
from extract_food_info.infrastructure import config

load_dotenv()


def configure_logging() -> None:
    """Root logging from LOG_LEVEL; structlog routed through stdlib."""
    level = getattr(_logging, config.get_log_level(), _logging.INFO)
    _logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


configure_logging()

APP_VERSION = config.get_app_version()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger = _logging.getLogger("startup")

    api_key = config.get_openai_api_key()
    masked_key = None
    if api_key:
        masked_key = api_key[:4] + "..." + api_key[-4:] if len(api_key) > 8 else "***"

    logger.info(
        "startup.config",
        extra={
            "version": APP_VERSION,
            "model_extractor_provider": config.get_model_extractor_provider(),
            "auth_provider": config.get_auth_provider(),
            "openai_key_present": bool(api_key),
            "openai_key_masked": masked_key,
            "fallback_name_boundary": config.get_fallback_name_boundary(),
            "degraded_status_code": config.get_degraded_status_code(),
        },
    )
    yield
    logger.info("lifespan.shutdown", extra={"status": "cleanup"})


app = FastAPI(
    title="Food Extraction Service",
    version=APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["POST", "OPTIONS", "GET"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)


@app.exception_handler(AuthenticationError)
async def authentication_error_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"error": exc.public_message},
    )


@app.exception_handler(MissingInputError)
async def missing_input_handler(request: Request, exc: MissingInputError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": str(exc)},
    )


@app.get("/health")
async def health() -> dict[str, Any]:
    return {"status": "ok", "version": APP_VERSION}


app.include_router(extraction_router)
