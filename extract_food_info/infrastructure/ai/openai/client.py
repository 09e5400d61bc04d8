"""OpenAI client - Implements IModelExtractor port.

Key Features:
- Structured outputs (native Pydantic support)
- Circuit breaker (5 failures -> 60s open)
- Configurable attempts with exponential backoff (default: single attempt)
- Best-effort contract: every failure becomes an empty list
"""

# mypy: warn-unused-ignores=False

import math
import time
from typing import Any, Dict, List, Optional

import structlog
from circuitbreaker import CircuitBreaker
from openai import APIError, AsyncOpenAI
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from extract_food_info.domain.meal.core.exceptions import (
    InvalidFoodItemError,
    UpstreamModelError,
)
from extract_food_info.domain.meal.extraction.entities.extracted_food import (
    ExtractedFoodItem,
    MealType,
)
from extract_food_info.domain.meal.extraction.services.meal_type_classifier import (
    MealTypeClassifier,
)
from extract_food_info.infrastructure.ai.openai.models import FoodExtractionResponse
from extract_food_info.infrastructure.ai.prompts.food_extraction import (
    FOOD_EXTRACTION_SYSTEM_PROMPT,
    build_user_message,
)

logger = structlog.get_logger(__name__)


class OpenAIFoodExtractionClient:
    """
    OpenAI chat client implementing IModelExtractor port.

    This adapter uses OpenAI structured outputs to implement tier 1 of
    the extraction pipeline. It never raises: network failures, refusals,
    malformed bodies and an open circuit all return [], which the
    orchestrator treats as "nothing found".

    Example:
        >>> client = OpenAIFoodExtractionClient(api_key="sk-...")
        >>> items = await client.extract("almocei 150g de arroz")
        >>> items[0].meal_type
        <MealType.LUNCH: 'lunch'>
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        temperature: float = 0.1,
        timeout_s: float = 15.0,
        max_attempts: int = 1,
        classifier: Optional[MealTypeClassifier] = None,
    ):
        """
        Initialize OpenAI client.

        Args:
            api_key: OpenAI API key
            model: Chat model supporting structured outputs
            temperature: Sampling temperature (0.1 for consistency)
            timeout_s: Per-request timeout on the SDK client
            max_attempts: Attempts per call (1 = no retries)
            classifier: Meal slot classifier for unknown model labels
        """
        # SDK retries disabled: attempts are governed by max_attempts only
        self._client = AsyncOpenAI(api_key=api_key, timeout=timeout_s, max_retries=0)
        self._model = model
        self._temperature = temperature
        self._max_attempts = max_attempts
        self._classifier = classifier or MealTypeClassifier()
        self._breaker = CircuitBreaker(
            failure_threshold=5,
            recovery_timeout=60,
            name="openai_food_extraction",
        )
        self._guarded_completion = self._breaker(self._structured_completion)

    async def extract(self, text: str) -> List[ExtractedFoodItem]:
        """
        Extract food items from a meal description.

        Implements IModelExtractor.extract() port.

        Args:
            text: Portuguese meal description

        Returns:
            Extracted items, or [] on any failure
        """
        start_time = time.time()

        logger.info(
            "Extracting food items",
            text_length=len(text),
            model=self._model,
        )

        try:
            response = await self._guarded_completion(text)
            items = self._to_domain_items(response, text)
        except Exception as e:
            logger.warning(
                "OpenAI extraction failed, returning no items",
                error_type=type(e).__name__,
                error=str(e),
                circuit_state=self._breaker.state,
            )
            return []

        logger.info(
            "Food extraction complete",
            item_count=len(items),
            processing_time_ms=int((time.time() - start_time) * 1000),
        )
        return items

    async def _structured_completion(self, text: str) -> FoodExtractionResponse:
        """
        Execute OpenAI completion with structured output.

        Raises:
            APIError: On API failures (after the configured attempts)
            UpstreamModelError: On refusal or empty parsed output
        """
        messages: List[Dict[str, Any]] = [
            {"role": "system", "content": FOOD_EXTRACTION_SYSTEM_PROMPT},
            {"role": "user", "content": build_user_message(text)},
        ]

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=1, min=2, max=10),
            retry=retry_if_exception_type((TimeoutError, ConnectionError, APIError)),
            reraise=True,
        ):
            with attempt:
                response = await self._client.chat.completions.parse(
                    model=self._model,
                    messages=messages,  # type: ignore[arg-type]
                    response_format=FoodExtractionResponse,
                    temperature=self._temperature,
                )

        usage = response.usage
        if usage is not None:
            logger.debug(
                "OpenAI response received",
                model=self._model,
                total_tokens=usage.total_tokens,
            )

        message = response.choices[0].message
        if getattr(message, "refusal", None):
            raise UpstreamModelError(f"Model refused: {message.refusal}")
        parsed = message.parsed
        if parsed is None:
            raise UpstreamModelError("OpenAI returned empty parsed response")
        return parsed

    def _to_domain_items(
        self,
        response: FoodExtractionResponse,
        text: str,
    ) -> List[ExtractedFoodItem]:
        """
        Convert Pydantic response to domain entities.

        The meal slot belongs to the whole text: the first recognized label
        is applied to every item, and when no label is recognized the
        keyword classifier decides. Unit is forced to grams; entries that
        violate item invariants are skipped.
        """
        meal_type = self._resolve_meal_type(response, text)
        items: List[ExtractedFoodItem] = []

        for entry in response.food_items:
            quantity = entry.quantity
            if math.isfinite(quantity) and float(quantity).is_integer():
                quantity = int(quantity)

            try:
                items.append(
                    ExtractedFoodItem(
                        name=entry.name,
                        quantity=quantity,
                        meal_type=meal_type,
                    )
                )
            except InvalidFoodItemError as e:
                logger.debug("Skipping invalid model entry", reason=str(e))

        return items

    def _resolve_meal_type(self, response: FoodExtractionResponse, text: str) -> MealType:
        labels = [MealType.from_label(entry.meal_type) for entry in response.food_items]
        recognized = [label for label in labels if label is not None]
        if len(set(recognized)) > 1:
            logger.debug(
                "Model returned mixed meal labels, keeping the first",
                labels=[label.value for label in recognized],
            )
        if recognized:
            return recognized[0]
        return self._classifier.classify(text)
