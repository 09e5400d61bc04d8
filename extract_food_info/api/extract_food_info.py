"""REST API endpoint for food extraction from meal descriptions.

POST /extract-food-info with a bearer token and `{"text": "..."}`;
answers `{"foodItems": [...]}`. Only authentication and a missing text
surface as errors; every other failure degrades to a structured body.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from extract_food_info.application.meal.orchestrators.extraction_orchestrator import (
    ExtractionOrchestrator,
)
from extract_food_info.domain.meal.core.exceptions import MissingInputError
from extract_food_info.domain.meal.extraction.entities.extracted_food import (
    DegradedResult,
)
from extract_food_info.domain.meal.extraction.services.fallback_parser import (
    FallbackParser,
)
from extract_food_info.domain.meal.extraction.services.pattern_extractor import (
    NameBoundary,
)
from extract_food_info.domain.user.auth.ports.auth_provider import (
    INVALID_TOKEN_MESSAGE,
    MISSING_HEADER_MESSAGE,
    AuthenticatedUser,
    AuthenticationError,
    IAuthProvider,
)
from extract_food_info.infrastructure import config
from extract_food_info.infrastructure.meal.providers.factory import get_model_extractor
from extract_food_info.infrastructure.user.auth_factory import get_auth_provider

logger = logging.getLogger(__name__)

router = APIRouter(tags=["extraction"])

_orchestrator: Optional[ExtractionOrchestrator] = None


def build_extraction_orchestrator() -> ExtractionOrchestrator:
    """Wire the orchestrator from environment configuration."""
    return ExtractionOrchestrator(
        model_extractor=get_model_extractor(),
        fallback_parser=FallbackParser(
            name_boundary=NameBoundary(config.get_fallback_name_boundary())
        ),
        model_timeout_s=config.get_model_timeout_s(),
        degraded_status_code=config.get_degraded_status_code(),
    )


def get_extraction_orchestrator() -> ExtractionOrchestrator:
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = build_extraction_orchestrator()
    return _orchestrator


def reset_extraction_orchestrator() -> None:
    global _orchestrator
    _orchestrator = None


def _extract_token(auth_header: Optional[str]) -> Optional[str]:
    """Extract the token from an Authorization header value.

    Examples:
        >>> _extract_token("Bearer eyJ...")
        'eyJ...'
        >>> _extract_token("eyJ...") is None
        True
    """
    if not auth_header:
        return None

    parts = auth_header.split()
    if len(parts) != 2:
        return None

    scheme, token = parts
    if scheme.lower() != "bearer":
        return None

    return token


def _is_missing_text(text: Any) -> bool:
    """Absent, null and falsy scalars ('', 0, false) count as no text.

    Empty arrays and objects are not missing: they reach the pipeline and
    degrade like any other non-string value.
    """
    if text is None:
        return True
    return isinstance(text, (str, int, float)) and not text


async def get_authenticated_user(
    request: Request,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> AuthenticatedUser:
    """Verify the bearer token before the pipeline runs.

    Raises:
        AuthenticationError: Missing header (own message) or any
            rejected / malformed credential ("Invalid token")
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise AuthenticationError("No Authorization header", MISSING_HEADER_MESSAGE)

    token = _extract_token(auth_header)
    if not token:
        raise AuthenticationError("Malformed Authorization header", INVALID_TOKEN_MESSAGE)

    try:
        return await auth_provider.verify_token(token)
    except AuthenticationError as e:
        logger.info("Token rejected", extra={"reason": e.reason})
        raise AuthenticationError(e.reason, INVALID_TOKEN_MESSAGE) from e


@router.post("/extract-food-info")
async def extract_food_info(
    request: Request,
    user: AuthenticatedUser = Depends(get_authenticated_user),
    orchestrator: ExtractionOrchestrator = Depends(get_extraction_orchestrator),
) -> JSONResponse:
    """Extract food items from a meal description.

    Returns:
        200 {"foodItems": [...]} on success or handled degradation;
        the DegradedResult status on the last-resort path

    Raises:
        MissingInputError: Missing, null, empty, 0 or false `text` (400)
    """
    try:
        payload: Any = await request.json()
    except ValueError as e:
        # body is not JSON: last resort with the text unavailable
        result = orchestrator.recover(None, e)
        return JSONResponse(
            status_code=result.status_code,
            content={"foodItems": result.to_dicts()},
        )

    text = payload.get("text") if isinstance(payload, dict) else None
    if _is_missing_text(text):
        raise MissingInputError()

    logger.info(
        "Food extraction requested",
        extra={
            "user_id": user.subject,
            "text_length": len(text) if isinstance(text, str) else None,
        },
    )

    result = await orchestrator.extract(text)
    status_code = result.status_code if isinstance(result, DegradedResult) else 200
    return JSONResponse(
        status_code=status_code,
        content={"foodItems": result.to_dicts()},
    )
