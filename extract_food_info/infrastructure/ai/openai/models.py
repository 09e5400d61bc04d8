"""Pydantic models for OpenAI structured outputs.

These models define the schema for structured outputs from OpenAI API.
Used with chat.completions.parse() for native Pydantic support.
"""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

MealLabel = Literal["café da manhã", "almoço", "jantar", "lanche"]


class ExtractedFoodEntry(BaseModel):
    """
    Single food item extracted from a meal description.

    This is the Pydantic model for OpenAI structured outputs.
    Maps to domain entity ExtractedFoodItem. Quantity is not constrained
    here: invalid entries are skipped one by one during mapping instead
    of failing the whole response.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(
        ...,
        description="Food name in Portuguese (e.g., 'arroz', 'feijão preto')",
    )
    quantity: float = Field(
        ...,
        description="Quantity in grams",
    )
    unit: str = Field(
        default="g",
        description="Always 'g'",
    )
    meal_type: MealLabel = Field(
        ...,
        alias="mealType",
        description="Meal slot in Portuguese",
    )


class FoodExtractionResponse(BaseModel):
    """
    Complete response from food extraction.

    This is the root model for OpenAI structured outputs.
    """

    model_config = ConfigDict(populate_by_name=True)

    food_items: List[ExtractedFoodEntry] = Field(
        default_factory=list,
        alias="foodItems",
        description="Food items mentioned in the description",
    )
