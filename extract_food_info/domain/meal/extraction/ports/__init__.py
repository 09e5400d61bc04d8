"""Extraction domain ports (interfaces)."""

from extract_food_info.domain.meal.extraction.ports.model_extractor import IModelExtractor

__all__ = ["IModelExtractor"]
