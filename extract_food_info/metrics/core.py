"""In-memory metrics store for the extraction service.

Counters and bounded latency windows keyed by (name, sorted tags).
Nothing is exported over HTTP; values are read back by tests and logs.
"""

from __future__ import annotations

from collections import deque
from threading import Lock
from typing import Deque, Dict, List, Optional, Tuple

MetricKey = Tuple[str, Tuple[Tuple[str, str], ...]]

DEFAULT_WINDOW = 2000


def _key(name: str, tags: Dict[str, str]) -> MetricKey:
    return name, tuple(sorted(tags.items()))


class MetricsRegistry:
    """Tagged counters plus sliding sample windows behind a single lock."""

    def __init__(self, window: int = DEFAULT_WINDOW) -> None:
        self._window = window
        self._counts: Dict[MetricKey, int] = {}
        self._samples: Dict[MetricKey, Deque[float]] = {}
        self._lock = Lock()

    def inc(self, name: str, amount: int = 1, **tags: str) -> None:
        key = _key(name, tags)
        with self._lock:
            self._counts[key] = self._counts.get(key, 0) + amount

    def observe(self, name: str, value: float, **tags: str) -> None:
        key = _key(name, tags)
        with self._lock:
            window = self._samples.get(key)
            if window is None:
                window = self._samples[key] = deque(maxlen=self._window)
            window.append(value)

    def counter_value(self, name: str, **tags: str) -> Optional[int]:
        """Current value of a counter, None if it was never incremented."""
        with self._lock:
            return self._counts.get(_key(name, tags))

    def samples(self, name: str, **tags: str) -> List[float]:
        """Retained observations, oldest first."""
        with self._lock:
            return list(self._samples.get(_key(name, tags), ()))

    def reset(self) -> None:
        with self._lock:
            self._counts.clear()
            self._samples.clear()


registry = MetricsRegistry()
