"""Stub provider implementations for testing.

These providers return fake data without calling external APIs.
"""

from extract_food_info.infrastructure.meal.providers.stub_model_extractor import (
    StubModelExtractor,
)

__all__ = ["StubModelExtractor"]
