"""Extraction domain entities."""

from extract_food_info.domain.meal.extraction.entities.extracted_food import (
    DEFAULT_QUANTITY_G,
    GRAMS,
    MIN_NAME_LENGTH,
    DegradedResult,
    ExtractedFoodItem,
    ExtractionResult,
    ExtractionSource,
    MealType,
)

__all__ = [
    "DEFAULT_QUANTITY_G",
    "GRAMS",
    "MIN_NAME_LENGTH",
    "MealType",
    "ExtractionSource",
    "ExtractedFoodItem",
    "ExtractionResult",
    "DegradedResult",
]
