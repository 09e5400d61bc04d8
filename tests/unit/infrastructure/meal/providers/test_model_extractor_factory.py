"""Unit tests for model extractor provider factory and stub."""

from typing import Any

import pytest

from extract_food_info.domain.meal.extraction.entities import ExtractedFoodItem, MealType
from extract_food_info.infrastructure.ai.openai.client import OpenAIFoodExtractionClient
from extract_food_info.infrastructure.meal.providers.factory import (
    create_model_extractor,
    get_model_extractor,
    reset_providers,
)
from extract_food_info.infrastructure.meal.providers.stub_model_extractor import (
    StubModelExtractor,
)


class TestStubModelExtractor:
    """Deterministic tier-1 double."""

    @pytest.mark.asyncio
    async def test_returns_empty_by_default(self) -> None:
        stub = StubModelExtractor()

        assert await stub.extract("150g de arroz") == []
        assert stub.calls == ["150g de arroz"]

    @pytest.mark.asyncio
    async def test_returns_configured_items(self) -> None:
        item = ExtractedFoodItem(name="arroz", quantity=150, meal_type=MealType.LUNCH)
        stub = StubModelExtractor(items=[item])

        first = await stub.extract("a")
        first.clear()

        assert await stub.extract("b") == [item]


class TestCreateModelExtractor:
    """Environment-based provider selection."""

    def test_default_is_stub(self) -> None:
        assert isinstance(create_model_extractor(), StubModelExtractor)

    def test_openai_requires_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MODEL_EXTRACTOR_PROVIDER", "openai")

        with pytest.raises(ValueError, match="OPENAI_API_KEY not set"):
            create_model_extractor()

    def test_openai_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MODEL_EXTRACTOR_PROVIDER", "OpenAI")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("OPENAI_MODEL", "gpt-4o")
        monkeypatch.setenv("OPENAI_MAX_ATTEMPTS", "2")

        extractor: Any = create_model_extractor()

        assert isinstance(extractor, OpenAIFoodExtractionClient)
        assert extractor._model == "gpt-4o"
        assert extractor._max_attempts == 2

    def test_unknown_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MODEL_EXTRACTOR_PROVIDER", "llama")

        with pytest.raises(ValueError, match="Unknown MODEL_EXTRACTOR_PROVIDER"):
            create_model_extractor()

    def test_singleton_and_reset(self) -> None:
        first = get_model_extractor()

        assert get_model_extractor() is first
        reset_providers()
        assert get_model_extractor() is not first
