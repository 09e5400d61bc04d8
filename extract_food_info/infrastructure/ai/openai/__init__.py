"""OpenAI client implementation for food extraction."""

from extract_food_info.infrastructure.ai.openai.client import OpenAIFoodExtractionClient
from extract_food_info.infrastructure.ai.openai.models import (
    ExtractedFoodEntry,
    FoodExtractionResponse,
)

__all__ = [
    "OpenAIFoodExtractionClient",
    "ExtractedFoodEntry",
    "FoodExtractionResponse",
]
