"""Instrumentation helpers for the food extraction pipeline.

Metrics:
* Counter food_extraction_requests_total{source,status}
* Counter food_extraction_fallback_total{reason}
* Counter food_extraction_items_total{source}
* Samples food_extraction_latency_ms

`source` is the tier that produced the result (model|fallback|last_resort).
`reason` is why tier 1 was abandoned (see FALLBACK_REASONS).
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator

from .core import registry

REQUESTS_TOTAL = "food_extraction_requests_total"
FALLBACK_TOTAL = "food_extraction_fallback_total"
ITEMS_TOTAL = "food_extraction_items_total"
LATENCY_MS = "food_extraction_latency_ms"

FALLBACK_REASONS = ("model_empty", "model_error", "model_timeout", "unhandled")


def record_request(source: str, status: str) -> None:
    registry.inc(REQUESTS_TOTAL, source=source, status=status)


def record_fallback(reason: str) -> None:
    if reason not in FALLBACK_REASONS:
        raise ValueError(f"Unknown fallback reason: {reason!r}")
    registry.inc(FALLBACK_TOTAL, reason=reason)


def record_items(count: int, *, source: str) -> None:
    if count <= 0:
        return
    registry.inc(ITEMS_TOTAL, count, source=source)


def record_latency_ms(ms: float) -> None:
    registry.observe(LATENCY_MS, ms)


@contextmanager
def time_extraction() -> Iterator[None]:
    """Observe the wall-clock duration of the wrapped block in ms."""
    start = time.perf_counter()
    try:
        yield
    finally:
        record_latency_ms((time.perf_counter() - start) * 1000.0)


def reset_all() -> None:
    """Reset every metric (test utility)."""
    registry.reset()
