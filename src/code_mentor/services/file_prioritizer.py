"""File importance ranking — weighted path heuristics.

Every weight whose pattern matches a path is added to that path's priority,
so a typed component under ``/components/`` outranks a plain utility script.
Sorting is stable: equal priorities keep discovery order.
"""

from __future__ import annotations

import re
from typing import Sequence, TypeVar

from code_mentor.domain.entities import FileEntry

# ── Heuristic weight constants ──────────────────────────────────────────────

PATH_WEIGHTS: tuple[tuple[re.Pattern[str], int], ...] = (
    (re.compile(r"/pages/|/app/"), 10),
    (re.compile(r"/components/.*\.tsx?$"), 8),
    (re.compile(r"/hooks/"), 7),
    (re.compile(r"/utils/|/lib/"), 6),
    (re.compile(r"/services/"), 6),
    (re.compile(r"index\.(ts|tsx|js|jsx)$"), 5),
    (re.compile(r"\.(ts|tsx)$"), 3),
    (re.compile(r"\.(js|jsx)$"), 1),
)

E = TypeVar("E", FileEntry, str)


def path_priority(path: str) -> int:
    """Sum of the weights of every pattern the path matches."""
    normalized = "/" + path.lstrip("/")
    return sum(weight for pattern, weight in PATH_WEIGHTS if pattern.search(normalized))


def prioritize(files: Sequence[E], limit: int | None = None) -> list[E]:
    """Return ``files`` sorted by descending priority, optionally truncated."""
    ranked = sorted(
        files,
        key=lambda f: path_priority(f if isinstance(f, str) else f.path),
        reverse=True,
    )
    return ranked if limit is None else ranked[:limit]
