"""Shared test fixtures.

Every test starts from a clean environment for the settings the
service reads, empty metrics and fresh provider singletons.
"""

from __future__ import annotations

from typing import Generator

import pytest

from extract_food_info.metrics.food_extraction import reset_all

SERVICE_ENV_VARS = (
    "LOG_LEVEL",
    "APP_VERSION",
    "MODEL_EXTRACTOR_PROVIDER",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_TEMPERATURE",
    "OPENAI_MAX_ATTEMPTS",
    "MODEL_TIMEOUT_S",
    "FALLBACK_NAME_BOUNDARY",
    "DEGRADED_STATUS_CODE",
    "AUTH_PROVIDER",
    "SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "SUPABASE_JWT_SECRET",
)


@pytest.fixture(autouse=True)
def _clear_service_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop service settings (e.g. from a local .env) before each test.

    Tests that need a value set it with monkeypatch.setenv.
    """
    for name in SERVICE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_state() -> Generator[None, None, None]:
    """Reset metrics and provider singletons around each test."""
    from extract_food_info.api.extract_food_info import reset_extraction_orchestrator
    from extract_food_info.infrastructure.meal.providers.factory import reset_providers
    from extract_food_info.infrastructure.user.auth_factory import reset_auth_provider

    reset_all()
    reset_providers()
    reset_auth_provider()
    reset_extraction_orchestrator()
    yield
    reset_all()
    reset_providers()
    reset_auth_provider()
    reset_extraction_orchestrator()
