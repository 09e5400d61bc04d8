"""Stub model extractor for testing and offline mode.

Returns configured food items without calling external APIs.
"""

from typing import List, Optional, Sequence

from extract_food_info.domain.meal.extraction.entities.extracted_food import (
    ExtractedFoodItem,
)


class StubModelExtractor:
    """
    Stub implementation of IModelExtractor.

    With no configured items every call returns an empty list, which sends
    the request straight to the rule-based parser. Records every text it
    receives so tests can assert on what tier 1 was asked.
    """

    def __init__(self, items: Optional[Sequence[ExtractedFoodItem]] = None):
        self._items = list(items or [])
        self.calls: List[str] = []

    async def extract(self, text: str) -> List[ExtractedFoodItem]:
        self.calls.append(text)
        return list(self._items)
