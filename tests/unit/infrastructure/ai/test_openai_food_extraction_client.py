"""Unit tests for OpenAI food extraction client.

Tests focus on:
- Client initialization
- Pydantic model mapping to domain entities
- Best-effort error handling (every failure -> [])
- Circuit breaker

Note: These are UNIT tests with mocked OpenAI API calls.
"""

from typing import Any, Iterator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from extract_food_info.domain.meal.extraction.entities import MealType
from extract_food_info.infrastructure.ai.openai.client import OpenAIFoodExtractionClient
from extract_food_info.infrastructure.ai.openai.models import (
    ExtractedFoodEntry,
    FoodExtractionResponse,
)


def _completion(parsed: Any, refusal: Any = None) -> Any:
    mock_response = MagicMock()
    mock_response.choices = [MagicMock(message=MagicMock(parsed=parsed, refusal=refusal))]
    mock_response.usage = MagicMock(total_tokens=300, prompt_tokens=250, completion_tokens=50)
    return mock_response


@pytest.fixture
def mock_openai_client() -> Iterator[Any]:
    """Fixture providing mocked OpenAI AsyncClient."""
    with patch("extract_food_info.infrastructure.ai.openai.client.AsyncOpenAI") as mock:
        yield mock


@pytest.fixture
def openai_client(mock_openai_client: Any) -> OpenAIFoodExtractionClient:
    """Fixture providing OpenAIFoodExtractionClient with mocked API."""
    return OpenAIFoodExtractionClient(api_key="test-key")


@pytest.fixture
def sample_response() -> Any:
    return _completion(
        FoodExtractionResponse(
            food_items=[
                ExtractedFoodEntry(name="arroz", quantity=150.0, unit="g", meal_type="almoço"),
                ExtractedFoodEntry(name="feijão", quantity=80.5, unit="g", meal_type="almoço"),
            ]
        )
    )


class TestOpenAIFoodExtractionClientInit:
    """Test client initialization."""

    def test_init_with_defaults(self, mock_openai_client: Any) -> None:
        client = OpenAIFoodExtractionClient(api_key="test-key")

        assert client._model == "gpt-4o-mini"
        assert client._temperature == 0.1
        assert client._max_attempts == 1
        mock_openai_client.assert_called_once_with(api_key="test-key", timeout=15.0, max_retries=0)

    def test_init_with_custom_params(self, mock_openai_client: Any) -> None:
        client = OpenAIFoodExtractionClient(
            api_key="test-key",
            model="gpt-4o",
            temperature=0.3,
            timeout_s=5.0,
            max_attempts=3,
        )

        assert client._model == "gpt-4o"
        assert client._temperature == 0.3
        assert client._max_attempts == 3


class TestExtract:
    """Test extraction and mapping."""

    @pytest.mark.asyncio
    async def test_maps_entries_to_domain_items(
        self, openai_client: OpenAIFoodExtractionClient, sample_response: Any
    ) -> None:
        openai_client._client.chat.completions.parse = AsyncMock(return_value=sample_response)

        items = await openai_client.extract("almocei 150g de arroz e feijão")

        assert [item.to_dict() for item in items] == [
            {"name": "arroz", "quantity": 150, "unit": "g", "mealType": "lunch"},
            {"name": "feijão", "quantity": 80.5, "unit": "g", "mealType": "lunch"},
        ]

    @pytest.mark.asyncio
    async def test_sends_structured_output_request(
        self, openai_client: OpenAIFoodExtractionClient, sample_response: Any
    ) -> None:
        openai_client._client.chat.completions.parse = AsyncMock(return_value=sample_response)

        await openai_client.extract("150g de arroz")

        kwargs = openai_client._client.chat.completions.parse.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["response_format"] is FoodExtractionResponse
        assert kwargs["temperature"] == 0.1
        assert kwargs["messages"][0]["role"] == "system"
        assert "150g de arroz" in kwargs["messages"][1]["content"]

    @pytest.mark.asyncio
    async def test_forces_grams_and_skips_invalid_entries(
        self, openai_client: OpenAIFoodExtractionClient
    ) -> None:
        response = _completion(
            FoodExtractionResponse(
                food_items=[
                    ExtractedFoodEntry(name="pão", quantity=50, unit="fatia", meal_type="lanche"),
                    ExtractedFoodEntry(name="ok", quantity=10, unit="g", meal_type="lanche"),
                    ExtractedFoodEntry(name="leite", quantity=0, unit="g", meal_type="lanche"),
                ]
            )
        )
        openai_client._client.chat.completions.parse = AsyncMock(return_value=response)

        items = await openai_client.extract("lanche")

        assert [(i.name, i.quantity, i.unit) for i in items] == [("pão", 50, "g")]

    @pytest.mark.asyncio
    async def test_unknown_label_uses_classifier(
        self, openai_client: OpenAIFoodExtractionClient
    ) -> None:
        entry = ExtractedFoodEntry.model_construct(
            name="sopa", quantity=300.0, unit="g", meal_type="ceia"
        )
        response = _completion(FoodExtractionResponse.model_construct(food_items=[entry]))
        openai_client._client.chat.completions.parse = AsyncMock(return_value=response)

        items = await openai_client.extract("no jantar tomei sopa")

        assert items[0].meal_type is MealType.DINNER

    @pytest.mark.asyncio
    async def test_mixed_labels_share_the_first_recognized_one(
        self, openai_client: OpenAIFoodExtractionClient
    ) -> None:
        ceia = ExtractedFoodEntry.model_construct(
            name="chá", quantity=200.0, unit="g", meal_type="ceia"
        )
        response = _completion(
            FoodExtractionResponse.model_construct(
                food_items=[
                    ceia,
                    ExtractedFoodEntry(name="arroz", quantity=150, unit="g", meal_type="jantar"),
                    ExtractedFoodEntry(name="feijão", quantity=80, unit="g", meal_type="almoço"),
                ]
            )
        )
        openai_client._client.chat.completions.parse = AsyncMock(return_value=response)

        items = await openai_client.extract("comi arroz com feijão")

        assert [i.meal_type for i in items] == [MealType.DINNER] * 3

    @pytest.mark.asyncio
    async def test_skips_non_finite_quantities(
        self, openai_client: OpenAIFoodExtractionClient
    ) -> None:
        huge = ExtractedFoodEntry.model_construct(
            name="arroz", quantity=float("inf"), unit="g", meal_type="almoço"
        )
        response = _completion(
            FoodExtractionResponse.model_construct(
                food_items=[
                    huge,
                    ExtractedFoodEntry(name="feijão", quantity=80, unit="g", meal_type="almoço"),
                ]
            )
        )
        openai_client._client.chat.completions.parse = AsyncMock(return_value=response)

        items = await openai_client.extract("almocei arroz e feijão")

        assert [(i.name, i.quantity) for i in items] == [("feijão", 80)]

    @pytest.mark.asyncio
    async def test_empty_response(self, openai_client: OpenAIFoodExtractionClient) -> None:
        openai_client._client.chat.completions.parse = AsyncMock(
            return_value=_completion(FoodExtractionResponse(food_items=[]))
        )

        assert await openai_client.extract("oi") == []


class TestErrorHandling:
    """Every failure is absorbed and reported as no items."""

    @pytest.mark.asyncio
    async def test_network_error_returns_empty(
        self, openai_client: OpenAIFoodExtractionClient
    ) -> None:
        openai_client._client.chat.completions.parse = AsyncMock(
            side_effect=ConnectionError("network down")
        )

        assert await openai_client.extract("150g de arroz") == []

    @pytest.mark.asyncio
    async def test_missing_parsed_returns_empty(
        self, openai_client: OpenAIFoodExtractionClient
    ) -> None:
        openai_client._client.chat.completions.parse = AsyncMock(return_value=_completion(None))

        assert await openai_client.extract("150g de arroz") == []

    @pytest.mark.asyncio
    async def test_refusal_returns_empty(self, openai_client: OpenAIFoodExtractionClient) -> None:
        openai_client._client.chat.completions.parse = AsyncMock(
            return_value=_completion(None, refusal="I can't help with that")
        )

        assert await openai_client.extract("150g de arroz") == []

    @pytest.mark.asyncio
    async def test_single_attempt_by_default(
        self, openai_client: OpenAIFoodExtractionClient
    ) -> None:
        parse = AsyncMock(side_effect=TimeoutError("deadline"))
        openai_client._client.chat.completions.parse = parse

        assert await openai_client.extract("150g de arroz") == []
        assert parse.await_count == 1

    @pytest.mark.asyncio
    async def test_circuit_opens_after_repeated_failures(
        self, openai_client: OpenAIFoodExtractionClient
    ) -> None:
        parse = AsyncMock(side_effect=ConnectionError("network down"))
        openai_client._client.chat.completions.parse = parse

        for _ in range(6):
            assert await openai_client.extract("150g de arroz") == []

        # five failures open the circuit; the sixth call never reaches the API
        assert parse.await_count == 5
        assert openai_client._breaker.opened
