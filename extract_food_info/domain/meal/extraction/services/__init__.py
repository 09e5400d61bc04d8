"""Extraction domain services."""

from extract_food_info.domain.meal.extraction.services.fallback_parser import (
    FallbackParser,
)
from extract_food_info.domain.meal.extraction.services.meal_type_classifier import (
    MealTypeClassifier,
)
from extract_food_info.domain.meal.extraction.services.pattern_extractor import (
    NameBoundary,
    PatternExtractor,
    RawCandidate,
)

__all__ = [
    "FallbackParser",
    "MealTypeClassifier",
    "NameBoundary",
    "PatternExtractor",
    "RawCandidate",
]
