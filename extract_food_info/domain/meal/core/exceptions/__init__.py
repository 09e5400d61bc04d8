"""Domain exceptions for the food extraction bounded context."""

from extract_food_info.domain.meal.core.exceptions.domain_errors import (
    FoodExtractionError,
    InvalidFoodItemError,
    MissingInputError,
    UnhandledPipelineError,
    UpstreamModelError,
)

__all__ = [
    "FoodExtractionError",
    "MissingInputError",
    "UpstreamModelError",
    "UnhandledPipelineError",
    "InvalidFoodItemError",
]
