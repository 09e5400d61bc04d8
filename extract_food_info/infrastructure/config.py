"""Configuration utilities for infrastructure layer.

Every setting is read from the environment at call time, so tests can
patch os.environ without reloading modules.
"""

import os
from typing import Optional


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_app_version() -> str:
    return os.getenv("APP_VERSION", "0.0.0-dev")


def get_model_extractor_provider() -> str:
    """
    Get the tier-1 extractor provider name.

    Returns:
        "openai" or "stub" (default). Unknown values are rejected by the
        provider factory.
    """
    return os.getenv("MODEL_EXTRACTOR_PROVIDER", "stub").strip().lower()


def get_openai_api_key() -> Optional[str]:
    return os.getenv("OPENAI_API_KEY") or None


def get_openai_model() -> str:
    return os.getenv("OPENAI_MODEL", "gpt-4o-mini")


def get_openai_temperature() -> float:
    return _get_float("OPENAI_TEMPERATURE", 0.1)


def get_openai_max_attempts() -> int:
    """
    Get attempts per OpenAI call.

    Returns:
        Attempts (>= 1). Default 1 means no retries.
    """
    attempts = _get_int("OPENAI_MAX_ATTEMPTS", 1)
    if attempts < 1:
        raise ValueError(f"OPENAI_MAX_ATTEMPTS must be >= 1, got {attempts}")
    return attempts


def get_model_timeout_s() -> float:
    """
    Get the bound on the tier-1 model call, in seconds.

    Returns:
        Timeout from MODEL_TIMEOUT_S, defaults to 15
    """
    timeout = _get_float("MODEL_TIMEOUT_S", 15.0)
    if timeout <= 0:
        raise ValueError(f"MODEL_TIMEOUT_S must be positive, got {timeout}")
    return timeout


def get_fallback_name_boundary() -> str:
    return os.getenv("FALLBACK_NAME_BOUNDARY", "greedy").strip().lower()


def get_degraded_status_code() -> int:
    """
    Get the HTTP status used for last-resort (degraded) responses.

    Returns:
        200 by default; 500 reproduces the legacy behavior
    """
    return _get_int("DEGRADED_STATUS_CODE", 200)


def get_auth_provider() -> str:
    return os.getenv("AUTH_PROVIDER", "supabase").strip().lower()


def get_supabase_url() -> Optional[str]:
    url = os.getenv("SUPABASE_URL")
    return url.rstrip("/") if url else None


def get_supabase_anon_key() -> Optional[str]:
    return os.getenv("SUPABASE_ANON_KEY") or None


def get_supabase_jwt_secret() -> Optional[str]:
    return os.getenv("SUPABASE_JWT_SECRET") or None
