"""Domain exceptions for the food extraction bounded context.

This module defines the exception hierarchy for extraction errors.
All extraction exceptions inherit from FoodExtractionError.
"""


class FoodExtractionError(Exception):
    """Base exception for food extraction.

    All extraction-specific exceptions should inherit from this class.
    This allows the HTTP boundary to catch and map extraction errors uniformly.
    """

    pass


class MissingInputError(FoodExtractionError):
    """Raised when the request carries no text to extract from.

    Surfaced as 400 before the pipeline runs.
    """

    def __init__(self, message: str = "No text provided") -> None:
        super().__init__(message)


class UpstreamModelError(FoodExtractionError):
    """Raised when the generative-model call fails or returns unusable output.

    Examples:
    - Network failure or non-2xx response
    - Model refusal / empty structured output
    - Body that does not match the structured-output contract

    Never surfaced to the caller: the model adapter absorbs it and
    reports "no items", which sends the request to the rule-based parser.
    """

    pass


class UnhandledPipelineError(FoodExtractionError):
    """Wraps any exception absorbed at the orchestrator boundary.

    The wrapped error becomes the reason of a DegradedResult.
    """

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"{type(cause).__name__}: {cause}")


class InvalidFoodItemError(FoodExtractionError):
    """Raised when ExtractedFoodItem invariants are violated.

    Examples:
    - Name shorter than 3 characters after trimming
    - Non-positive quantity
    - Unit other than grams
    """

    pass
