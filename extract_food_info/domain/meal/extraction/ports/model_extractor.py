"""Port (interface) for generative-model food extractors.

This port defines the contract that external model providers
(e.g., OpenAI chat completions) must implement to act as tier 1
of the extraction pipeline.
"""

from typing import List, Protocol

from extract_food_info.domain.meal.extraction.entities.extracted_food import (
    ExtractedFoodItem,
)


class IModelExtractor(Protocol):
    """
    Interface for model-based food extractors.

    This port follows the Dependency Inversion Principle:
    - Domain layer defines the interface (port)
    - Infrastructure layer implements it (adapter)

    Implementations can be:
    - OpenAI structured outputs (production)
    - Stub extractor (offline mode, tests)
    """

    async def extract(self, text: str) -> List[ExtractedFoodItem]:
        """
        Extract food items from a meal description.

        Args:
            text: Portuguese meal description (e.g. a voice transcript)

        Returns:
            Extracted items. An empty list means "nothing found" and is
            also what adapters return when the upstream call fails.

        Example:
            >>> items = await extractor.extract("almocei 150g de arroz")
            >>> items[0].quantity
            150
        """
        ...
