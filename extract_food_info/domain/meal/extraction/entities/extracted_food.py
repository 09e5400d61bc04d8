"""Extraction entities - food items extracted from a meal description.

These entities represent the output of the two-tier extraction pipeline.
All of them are transient: built per request, returned, discarded.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional

from extract_food_info.domain.meal.core.exceptions import InvalidFoodItemError

GRAMS = "g"
DEFAULT_QUANTITY_G = 100
MIN_NAME_LENGTH = 3


class MealType(str, Enum):
    """Canonical meal slot, assigned once per input text."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"

    @classmethod
    def from_label(cls, label: Optional[str]) -> Optional["MealType"]:
        """
        Map a Portuguese (or canonical) meal label to a MealType.

        Args:
            label: Label returned by the model (e.g. "café da manhã")

        Returns:
            Matching MealType, or None for unknown labels

        Example:
            >>> MealType.from_label("Almoço")
            <MealType.LUNCH: 'lunch'>
            >>> MealType.from_label("ceia") is None
            True
        """
        if not label:
            return None
        key = label.strip().lower()
        if key in _PORTUGUESE_LABELS:
            return _PORTUGUESE_LABELS[key]
        try:
            return cls(key)
        except ValueError:
            return None


_PORTUGUESE_LABELS = {
    "café da manhã": MealType.BREAKFAST,
    "almoço": MealType.LUNCH,
    "jantar": MealType.DINNER,
    "lanche": MealType.SNACK,
}


class ExtractionSource(str, Enum):
    """Which tier produced an ExtractionResult."""

    MODEL = "model"
    FALLBACK = "fallback"
    LAST_RESORT = "last_resort"


@dataclass(frozen=True)
class ExtractedFoodItem:
    """
    Entity: Single food item extracted from a meal description.

    Example:
        ExtractedFoodItem(
            name="arroz",
            quantity=150,
            meal_type=MealType.LUNCH,
        )
    """

    name: str
    quantity: float
    meal_type: MealType
    unit: str = GRAMS

    def __post_init__(self) -> None:
        """Validate invariants after initialization."""
        name = (self.name or "").strip()
        if len(name) < MIN_NAME_LENGTH:
            raise InvalidFoodItemError(f"Name too short: {self.name!r}")
        if isinstance(self.quantity, float) and not math.isfinite(self.quantity):
            raise InvalidFoodItemError(f"Quantity must be finite, got {self.quantity}")
        if self.quantity <= 0:
            raise InvalidFoodItemError(f"Quantity must be positive, got {self.quantity}")
        if self.unit != GRAMS:
            raise InvalidFoodItemError(f"Unit must be '{GRAMS}', got {self.unit!r}")
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "meal_type", MealType(self.meal_type))

    def to_dict(self) -> dict[str, Any]:
        """Wire representation used by the HTTP boundary."""
        return {
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "mealType": self.meal_type.value,
        }


@dataclass(frozen=True)
class ExtractionResult:
    """
    Entity: Ordered list of extracted items plus the tier that produced them.

    Ordering is extraction order. Items are never deduplicated: two
    matchers capturing the same phrase yield two items.
    """

    items: tuple[ExtractedFoodItem, ...] = ()
    source: ExtractionSource = ExtractionSource.FALLBACK

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def __iter__(self) -> Iterator[ExtractedFoodItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def is_empty(self) -> bool:
        return not self.items

    def to_dicts(self) -> list[dict[str, Any]]:
        return [item.to_dict() for item in self.items]


@dataclass(frozen=True)
class DegradedResult(ExtractionResult):
    """
    Entity: Result of the last-resort path.

    Carries the swallowed error and the status signal the HTTP boundary
    must use. The status is 200 unless configured to reproduce the legacy
    500-with-body behavior.
    """

    source: ExtractionSource = ExtractionSource.LAST_RESORT
    reason: str = ""
    status_code: int = 200
