"""Meal slot inference from Portuguese keywords."""

from typing import Tuple

from extract_food_info.domain.meal.extraction.entities.extracted_food import MealType

# Priority order: first rule with a matching keyword wins.
MEAL_KEYWORD_RULES: Tuple[Tuple[Tuple[str, ...], MealType], ...] = (
    (("café da manhã", "manhã"), MealType.BREAKFAST),
    (("almoço",), MealType.LUNCH),
    (("jantar",), MealType.DINNER),
)


class MealTypeClassifier:
    """
    Infer the meal slot of a whole description.

    Plain substring containment on the lowercased text, checked in
    MEAL_KEYWORD_RULES order; snack when nothing matches. No scoring.

    Example:
        >>> MealTypeClassifier().classify("No ALMOÇO comi arroz")
        <MealType.LUNCH: 'lunch'>
    """

    def __init__(self, default: MealType = MealType.SNACK):
        self._default = default

    def classify(self, text: str) -> MealType:
        lowered = text.lower()
        for keywords, meal_type in MEAL_KEYWORD_RULES:
            if any(keyword in lowered for keyword in keywords):
                return meal_type
        return self._default
