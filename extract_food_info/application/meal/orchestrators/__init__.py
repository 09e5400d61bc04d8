"""Application orchestrators for meal workflows."""

from extract_food_info.application.meal.orchestrators.extraction_orchestrator import (
    ExtractionOrchestrator,
    ExtractionStage,
    next_stage,
)

__all__ = ["ExtractionOrchestrator", "ExtractionStage", "next_stage"]
