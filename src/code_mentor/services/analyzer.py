"""Single-file analysis: matcher → heuristics → scorer → suggestions."""

from __future__ import annotations

import logging
import time

from code_mentor.domain.entities import (
    AnalysisOptions,
    FileAnalysisResult,
    Issue,
    Severity,
    Summary,
)
from code_mentor.domain.rules.corpus import RuleCorpus
from code_mentor.services.file_filter import detect_layer
from code_mentor.services.heuristics import run_heuristics
from code_mentor.services.matcher import RuleMatcher
from code_mentor.services.scorer import score
from code_mentor.services.suggestions import suggest

logger = logging.getLogger(__name__)


class CodeAnalyzer:
    """Produces a :class:`FileAnalysisResult` from a path and its content.

    Pure CPU work with no I/O; the same input always yields the same result.
    """

    def __init__(self, corpus: RuleCorpus | None = None) -> None:
        self._matcher = RuleMatcher(corpus or RuleCorpus.default())

    @property
    def corpus(self) -> RuleCorpus:
        return self._matcher.corpus

    def analyze(
        self, path: str, content: str, options: AnalysisOptions | None = None
    ) -> FileAnalysisResult:
        options = options or AnalysisOptions()
        started = time.perf_counter()
        layer = detect_layer(path)

        if options.max_file_size is not None and len(content) > options.max_file_size:
            logger.warning(
                "File too large to analyse: %s (%d > %d)",
                path,
                len(content),
                options.max_file_size,
            )
            issues = [_oversized_issue(len(content), options.max_file_size)]
        else:
            issues = self._matcher.match(content, layer, options)
            if options.run_heuristics:
                issues.extend(run_heuristics(content))

        architecture, clean_code = score(issues)
        result = FileAnalysisResult(
            file=path,
            issues=tuple(issues),
            summary=Summary.from_issues(issues),
            architecture_score=architecture,
            clean_code_score=clean_code,
            suggestions=tuple(suggest(issues)),
            layer=layer,
        )

        logger.debug(
            "Analysed %s in %.1f ms: %d issues, architecture=%d clean_code=%d",
            path,
            (time.perf_counter() - started) * 1000,
            result.total_issues,
            architecture,
            clean_code,
        )
        return result


def _oversized_issue(size: int, limit: int) -> Issue:
    return Issue(
        category="fileSize",
        issue="File too large to analyze",
        recommendation="Consider splitting this file into smaller modules",
        severity=Severity.MEDIUM,
        occurrences=1,
        rule_id="file-too-large",
        explanation=f"The file has {size} characters; the analysis limit is {limit}.",
    )
