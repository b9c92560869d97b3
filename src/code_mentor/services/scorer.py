"""Scorer — reduce an issue list to two 0-100 health scores."""

from __future__ import annotations

import math
from typing import Iterable

from code_mentor.domain.entities import Issue

CLEAN_CODE_FACTOR = 0.8


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def clamp(value: int, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, value))


def raw_penalty(issues: Iterable[Issue]) -> int:
    return sum(issue.severity.penalty * issue.occurrences for issue in issues)


def score(issues: Iterable[Issue]) -> tuple[int, int]:
    """Return ``(architecture_score, clean_code_score)``.

    Positive findings carry a negative penalty, but both scores stay
    within ``[0, 100]``.
    """
    penalty = raw_penalty(issues)
    architecture = clamp(round_half_up(100 - penalty))
    clean_code = clamp(round_half_up(100 - penalty * CLEAN_CODE_FACTOR))
    return architecture, clean_code


def overall(architecture: int, clean_code: int) -> int:
    return round_half_up((architecture + clean_code) / 2)


def mean(values: Iterable[int]) -> int:
    items = list(values)
    if not items:
        return 0
    return round_half_up(sum(items) / len(items))
