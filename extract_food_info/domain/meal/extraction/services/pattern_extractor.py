"""Regex matchers that pull (quantity, name) candidates out of a description.

Three independent matchers scan the SAME original text. They do not consume
each other's spans, so one phrase can be captured more than once; the
results are concatenated in matcher order with no deduplication.

Name capture is a maximal run of letters and whitespace. On sentences with
several foods the run swallows trailing words ("arroz no jantar"). That is
the default (GREEDY) behavior; NameBoundary.STOPWORDS cuts the name before
the first Portuguese connective instead.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

# Latin letters plus the accented Latin-1 block (À..ú) used by Portuguese.
LETTERS = "a-zA-ZÀ-ú"
UNIT_MARKER = r"(?:gramas?|g)"

QUANTITY_FIRST_PATTERN = re.compile(
    rf"(\d+)\s*{UNIT_MARKER}\s*(?:de\s+)?([{LETTERS}\s]+)",
    re.IGNORECASE,
)
NAME_FIRST_PATTERN = re.compile(
    rf"([{LETTERS}\s]+)\s+(\d+)\s*{UNIT_MARKER}",
    re.IGNORECASE,
)
VERB_PHRASE_PATTERN = re.compile(
    rf"(?:comi|ingeri|consumi)\s+([{LETTERS}\s]+)",
    re.IGNORECASE,
)

CONNECTIVES = (
    "e",
    "no",
    "na",
    "nos",
    "nas",
    "com",
    "de",
    "do",
    "da",
    "para",
    "pelo",
    "pela",
    "ao",
    "à",
    "depois",
    "antes",
)
_CONNECTIVE_PATTERN = re.compile(
    r"(?:^|\s)(?:" + "|".join(CONNECTIVES) + r")(?=\s|$)",
    re.IGNORECASE,
)


class NameBoundary(str, Enum):
    """Where a captured food name ends."""

    GREEDY = "greedy"  # full letter run
    STOPWORDS = "stopwords"  # cut before the first connective


@dataclass(frozen=True)
class RawCandidate:
    """A (quantity, name) pair found by one matcher, before normalization."""

    matcher: str
    name_text: str
    quantity_text: Optional[str] = None


class PatternExtractor:
    """
    Scan a description with the quantity-first, name-first and verb-phrase
    matchers.

    Example:
        >>> extractor = PatternExtractor()
        >>> extractor.extract("150g de arroz")
        [RawCandidate(matcher='quantity_first', name_text='arroz', quantity_text='150')]
    """

    # (matcher name, compiled pattern, quantity group, name group)
    MATCHERS: Tuple[Tuple[str, re.Pattern[str], Optional[int], int], ...] = (
        ("quantity_first", QUANTITY_FIRST_PATTERN, 1, 2),
        ("name_first", NAME_FIRST_PATTERN, 2, 1),
        ("verb_phrase", VERB_PHRASE_PATTERN, None, 1),
    )

    def __init__(self, name_boundary: NameBoundary = NameBoundary.GREEDY):
        self.name_boundary = NameBoundary(name_boundary)

    def extract(self, text: str) -> List[RawCandidate]:
        candidates: List[RawCandidate] = []
        for matcher, pattern, quantity_group, name_group in self.MATCHERS:
            for match in pattern.finditer(text):
                quantity = match.group(quantity_group) if quantity_group else None
                candidates.append(
                    RawCandidate(
                        matcher=matcher,
                        name_text=self._bound_name(match.group(name_group)),
                        quantity_text=quantity,
                    )
                )
        return candidates

    def _bound_name(self, name: str) -> str:
        if self.name_boundary is NameBoundary.GREEDY:
            return name
        stripped = name.strip()
        connective = _CONNECTIVE_PATTERN.search(stripped)
        if connective is None:
            return stripped
        return stripped[: connective.start()]
