"""Two-tier food extraction orchestrator.

Tier 1 is a generative model behind IModelExtractor, bounded by a timeout.
Tier 2 is the deterministic FallbackParser. The orchestrator never raises:
anything escaping the tiers is absorbed and turned into a DegradedResult.
"""

import asyncio
import logging
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

from extract_food_info.domain.meal.core.exceptions import UnhandledPipelineError
from extract_food_info.domain.meal.extraction.entities.extracted_food import (
    DegradedResult,
    ExtractedFoodItem,
    ExtractionResult,
    ExtractionSource,
)
from extract_food_info.domain.meal.extraction.ports.model_extractor import (
    IModelExtractor,
)
from extract_food_info.domain.meal.extraction.services.fallback_parser import (
    FallbackParser,
)
from extract_food_info.metrics import food_extraction as metrics

logger = logging.getLogger(__name__)


class ExtractionStage(str, Enum):
    TRY_MODEL = "try_model"
    TRY_FALLBACK = "try_fallback"
    DONE = "done"


def next_stage(
    stage: ExtractionStage,
    items: Sequence[ExtractedFoodItem],
    error: Optional[BaseException] = None,
) -> ExtractionStage:
    """
    Pure transition function of the extraction state machine.

    TRY_MODEL goes to DONE only when the model produced at least one item
    without error; otherwise to TRY_FALLBACK. TRY_FALLBACK always ends.

    Raises:
        ValueError: When called with DONE (terminal stage)
    """
    if stage is ExtractionStage.TRY_MODEL:
        if error is None and len(items) > 0:
            return ExtractionStage.DONE
        return ExtractionStage.TRY_FALLBACK
    if stage is ExtractionStage.TRY_FALLBACK:
        return ExtractionStage.DONE
    raise ValueError(f"No transition out of terminal stage {stage.value}")


class ExtractionOrchestrator:
    """
    Orchestrate the model -> fallback extraction workflow.

    Flow:
    1. Ask the model extractor, bounded by model_timeout_s
    2. Non-empty answer: return it (source=model), parser never runs
    3. Empty answer, error or timeout: run FallbackParser (source=fallback)
    4. Anything else escaping 1-3: last resort via recover()

    Example:
        >>> orchestrator = ExtractionOrchestrator(StubModelExtractor())
        >>> result = await orchestrator.extract("150g de arroz")
        >>> result.source
        <ExtractionSource.FALLBACK: 'fallback'>
    """

    def __init__(
        self,
        model_extractor: IModelExtractor,
        fallback_parser: Optional[FallbackParser] = None,
        model_timeout_s: float = 15.0,
        degraded_status_code: int = 200,
    ):
        """
        Initialize orchestrator.

        Args:
            model_extractor: Tier-1 extractor (OpenAI or stub)
            fallback_parser: Tier-2 rule-based parser
            model_timeout_s: Bound on the tier-1 call
            degraded_status_code: HTTP status carried by DegradedResult
        """
        self._model = model_extractor
        self._fallback = fallback_parser or FallbackParser()
        self._model_timeout_s = model_timeout_s
        self._degraded_status_code = degraded_status_code

    async def extract(self, text: Any) -> ExtractionResult:
        """
        Run the pipeline on a meal description. Never raises.

        Args:
            text: Meal description; anything that is not a str counts as
                unavailable and yields an empty DegradedResult

        Returns:
            ExtractionResult (source model or fallback), or DegradedResult
        """
        with metrics.time_extraction():
            try:
                result = await self._run(text)
            except Exception as e:
                return self.recover(text, e)

        metrics.record_request(result.source.value, "ok")
        metrics.record_items(len(result), source=result.source.value)
        logger.info(
            "Extraction completed",
            extra={"source": result.source.value, "item_count": len(result)},
        )
        return result

    def recover(self, text: Any, error: BaseException) -> DegradedResult:
        """
        Last-resort path: rule-based parse of the original text.

        Also used by the HTTP boundary for failures before the pipeline
        starts (text is then None). Never raises.
        """
        reason = str(UnhandledPipelineError(error))
        logger.error(
            "Extraction pipeline failed, using last resort",
            extra={"error_type": type(error).__name__},
            exc_info=error,
        )
        metrics.record_fallback("unhandled")

        items: Tuple[ExtractedFoodItem, ...] = ()
        if isinstance(text, str):
            try:
                items = self._fallback.parse(text).items
            except Exception as parse_error:
                logger.error(
                    "Last-resort parse failed, returning no items",
                    extra={"error_type": type(parse_error).__name__},
                )

        result = DegradedResult(
            items=items,
            reason=reason,
            status_code=self._degraded_status_code,
        )
        metrics.record_request(result.source.value, "degraded")
        metrics.record_items(len(result), source=result.source.value)
        return result

    async def _run(self, text: Any) -> ExtractionResult:
        if not isinstance(text, str):
            raise TypeError(f"Text must be a string, got {type(text).__name__}")

        logger.info("Orchestrating food extraction", extra={"text_length": len(text)})

        stage = ExtractionStage.TRY_MODEL
        result = ExtractionResult()
        while stage is not ExtractionStage.DONE:
            if stage is ExtractionStage.TRY_MODEL:
                items, error = await self._try_model(text)
                stage = next_stage(stage, items, error)
                if stage is ExtractionStage.DONE:
                    result = ExtractionResult(items=tuple(items), source=ExtractionSource.MODEL)
            else:
                result = self._fallback.parse(text)
                stage = next_stage(stage, result.items)

        return result

    async def _try_model(
        self, text: str
    ) -> Tuple[List[ExtractedFoodItem], Optional[BaseException]]:
        try:
            items = list(
                await asyncio.wait_for(self._model.extract(text), timeout=self._model_timeout_s)
            )
        except asyncio.TimeoutError as e:
            logger.warning(
                "Model extractor timed out, falling back",
                extra={"timeout_s": self._model_timeout_s},
            )
            metrics.record_fallback("model_timeout")
            return [], e
        except Exception as e:
            logger.warning(
                "Model extractor failed, falling back",
                extra={"error_type": type(e).__name__},
            )
            metrics.record_fallback("model_error")
            return [], e

        if not items:
            logger.info("Model extractor found nothing, falling back")
            metrics.record_fallback("model_empty")
        return items, None
