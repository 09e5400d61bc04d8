"""Provider Factory for the tier-1 model extractor.

Environment-based provider selection with graceful fallback to stubs.
Strategy:
- .env (runtime): MODEL_EXTRACTOR_PROVIDER=openai
- .env.test (pytest): MODEL_EXTRACTOR_PROVIDER=stub
- Default: stub (safe fallback if env vars not set)

Usage:
    from extract_food_info.infrastructure.meal.providers.factory import (
        get_model_extractor,
    )

    extractor = get_model_extractor()  # Returns stub or real based on env
"""

from typing import Optional

from extract_food_info.domain.meal.extraction.ports.model_extractor import (
    IModelExtractor,
)
from extract_food_info.infrastructure import config
from extract_food_info.infrastructure.ai.openai.client import OpenAIFoodExtractionClient
from extract_food_info.infrastructure.meal.providers.stub_model_extractor import (
    StubModelExtractor,
)


def create_model_extractor() -> IModelExtractor:
    """Create model extractor based on MODEL_EXTRACTOR_PROVIDER env var.

    Environment variable: MODEL_EXTRACTOR_PROVIDER
    Values:
        - "openai": OpenAI structured outputs (requires OPENAI_API_KEY)
        - "stub": Stub extractor (default, always empty -> rule-based tier)

    Returns:
        IModelExtractor: Model extractor instance

    Raises:
        ValueError: On unknown provider or missing API key
    """
    mode = config.get_model_extractor_provider()

    if mode == "openai":
        api_key = config.get_openai_api_key()
        if not api_key:
            raise ValueError(
                "MODEL_EXTRACTOR_PROVIDER=openai but OPENAI_API_KEY not set. "
                "Set OPENAI_API_KEY in .env or use MODEL_EXTRACTOR_PROVIDER=stub"
            )
        return OpenAIFoodExtractionClient(
            api_key=api_key,
            model=config.get_openai_model(),
            temperature=config.get_openai_temperature(),
            timeout_s=config.get_model_timeout_s(),
            max_attempts=config.get_openai_max_attempts(),
        )

    if mode != "stub":
        raise ValueError(f"Unknown MODEL_EXTRACTOR_PROVIDER: {mode!r}")

    return StubModelExtractor()


# Singleton instance (lazy initialization)
_model_extractor: Optional[IModelExtractor] = None


def get_model_extractor() -> IModelExtractor:
    """Get singleton model extractor instance.

    Returns:
        IModelExtractor: Cached model extractor instance
    """
    global _model_extractor
    if _model_extractor is None:
        _model_extractor = create_model_extractor()
    return _model_extractor


def reset_providers() -> None:
    """Reset the singleton provider instance.

    Useful for testing to force re-creation with different env vars.
    """
    global _model_extractor
    _model_extractor = None
