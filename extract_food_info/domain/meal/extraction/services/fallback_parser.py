"""Rule-based fallback parser (tier 2 of the extraction pipeline).

Deterministic and offline: meal slot from keywords, items from regex
matchers. Never fails for string input.
"""

import logging
from typing import List, Optional

from extract_food_info.domain.meal.extraction.entities.extracted_food import (
    DEFAULT_QUANTITY_G,
    MIN_NAME_LENGTH,
    ExtractedFoodItem,
    ExtractionResult,
    ExtractionSource,
    MealType,
)
from extract_food_info.domain.meal.extraction.services.meal_type_classifier import (
    MealTypeClassifier,
)
from extract_food_info.domain.meal.extraction.services.pattern_extractor import (
    NameBoundary,
    PatternExtractor,
    RawCandidate,
)

logger = logging.getLogger(__name__)


class FallbackParser:
    """
    Parse a Portuguese meal description without any external service.

    Steps:
    1. Classify the meal slot once for the whole text
    2. Collect raw candidates from the pattern matchers
    3. Normalize each candidate (default 100 g, trimmed name)
    4. Drop names of MIN_NAME_LENGTH - 1 characters or fewer

    Example:
        >>> parser = FallbackParser()
        >>> result = parser.parse("150g de arroz")
        >>> result.to_dicts()
        [{'name': 'arroz', 'quantity': 150, 'unit': 'g', 'mealType': 'snack'}]
    """

    def __init__(
        self,
        classifier: Optional[MealTypeClassifier] = None,
        extractor: Optional[PatternExtractor] = None,
        name_boundary: NameBoundary = NameBoundary.GREEDY,
    ):
        self.classifier = classifier or MealTypeClassifier()
        self.extractor = extractor or PatternExtractor(name_boundary=name_boundary)

    def parse(self, text: str) -> ExtractionResult:
        meal_type = self.classifier.classify(text)
        candidates = self.extractor.extract(text)

        items: List[ExtractedFoodItem] = []
        for candidate in candidates:
            item = self._to_item(candidate, meal_type)
            if item is not None:
                items.append(item)

        logger.debug(
            "Fallback parse completed",
            extra={
                "text_length": len(text),
                "meal_type": meal_type.value,
                "candidates": len(candidates),
                "items": len(items),
            },
        )
        return ExtractionResult(items=tuple(items), source=ExtractionSource.FALLBACK)

    @staticmethod
    def _to_item(
        candidate: RawCandidate, meal_type: MealType
    ) -> Optional[ExtractedFoodItem]:
        name = candidate.name_text.strip()
        if len(name) < MIN_NAME_LENGTH:
            return None
        if candidate.quantity_text:
            try:
                quantity = int(candidate.quantity_text)
            except ValueError:
                # digit runs past the interpreter's int conversion limit
                logger.debug(
                    "Discarding candidate with unreadable quantity",
                    extra={"digits": len(candidate.quantity_text), "food_name": name},
                )
                return None
        else:
            quantity = DEFAULT_QUANTITY_G
        if quantity <= 0:
            # "0g de arroz": a zero quantity is not a food item
            return None
        return ExtractedFoodItem(name=name, quantity=quantity, meal_type=meal_type)
