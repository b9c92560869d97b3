"""Aggregator — fold per-file results into one repository report."""

from __future__ import annotations

from typing import Sequence

from code_mentor.domain.entities import (
    CriticalFile,
    FileAnalysisResult,
    OverallScore,
    RepositoryAnalysisResult,
    Severity,
    SourceInventory,
    Summary,
    TopIssue,
)
from code_mentor.services.file_filter import structure_signals
from code_mentor.services.heuristics import CATEGORY as CLEAN_CODE
from code_mentor.services.scorer import mean, round_half_up
from code_mentor.services.suggestions import merge_suggestions

TOP_ISSUES_LIMIT = 15
RETAINED_FILES_LIMIT = 10
CRITICAL_FILE_SCORE = 50
MANY_CRITICAL_ISSUES = 5
MANY_CLEAN_CODE_ISSUES = 20

NO_FILES_FOUND = "No source files were found to analyze"
REPOSITORY_GOOD_PRACTICE = "repository-implementation"


def overall_score(results: Sequence[FileAnalysisResult]) -> OverallScore:
    """Mean per-file scores; zero when nothing could be analysed."""
    if not results:
        return OverallScore(architecture=0, clean_code=0, overall=0)
    n = len(results)
    arch = sum(r.architecture_score for r in results) / n
    clean = sum(r.clean_code_score for r in results) / n
    return OverallScore(
        architecture=mean(r.architecture_score for r in results),
        clean_code=mean(r.clean_code_score for r in results),
        overall=round_half_up((arch + clean) / 2),
    )


def top_issues(
    results: Sequence[FileAnalysisResult], limit: int = TOP_ISSUES_LIMIT
) -> list[TopIssue]:
    """Group issues by (label, severity), rank by severity then count."""
    grouped: dict[tuple[str, Severity], TopIssue] = {}
    for result in results:
        for issue in result.issues:
            key = (issue.issue, issue.severity)
            current = grouped.get(key)
            if current is None:
                grouped[key] = TopIssue(
                    issue=issue.issue,
                    severity=issue.severity,
                    count=issue.occurrences,
                    recommendation=issue.recommendation,
                    design_pattern=issue.design_pattern,
                )
            else:
                grouped[key] = TopIssue(
                    issue=current.issue,
                    severity=current.severity,
                    count=current.count + issue.occurrences,
                    recommendation=current.recommendation,
                    design_pattern=current.design_pattern,
                )
    ranked = sorted(grouped.values(), key=lambda t: (t.severity.rank, t.count), reverse=True)
    return ranked[:limit]


def critical_files(results: Sequence[FileAnalysisResult]) -> list[CriticalFile]:
    flagged = [
        CriticalFile(
            file=r.file,
            score=r.architecture_score,
            critical_issues=r.summary.critical,
        )
        for r in results
        if r.architecture_score < CRITICAL_FILE_SCORE
    ]
    return sorted(flagged, key=lambda c: c.score)


def repository_recommendations(
    results: Sequence[FileAnalysisResult],
    inventory: SourceInventory,
    summary: Summary,
) -> list[str]:
    """Structural advice, derived from the repository shape rather than single issues."""
    signals = structure_signals([*inventory.paths, *inventory.test_files])
    recs: list[str] = []

    if not signals.has_clean_architecture:
        recs.append(
            "Adopt Clean Architecture: separate domain, application and infrastructure layers"
        )
    if summary.critical > 0:
        recs.append(
            f"URGENT: resolve {summary.critical} critical issue(s) affecting the architecture"
        )
    if summary.critical > MANY_CRITICAL_ISSUES:
        recs.append(
            "Refactor around the SOLID principles: many critical issues point at mixed responsibilities"
        )
    if not inventory.test_files:
        recs.append("Add automated tests: no test files were found")
    if not signals.has_dependency_injection:
        recs.append("Introduce a dependency injection container to decouple components")

    has_repository = any(
        i.rule_id == REPOSITORY_GOOD_PRACTICE for r in results for i in r.issues
    )
    if not has_repository:
        recs.append("Implement the Repository pattern to abstract data access")

    clean_code_issues = sum(1 for r in results for i in r.issues if i.category == CLEAN_CODE)
    if clean_code_issues > MANY_CLEAN_CODE_ISSUES:
        recs.append(
            f"Improve readability: {clean_code_issues} clean code issues were detected"
        )

    if not recs:
        recs.append("The repository follows good architecture practices")
    return recs


def aggregate(
    repository: str,
    branch: str,
    results: Sequence[FileAnalysisResult],
    inventory: SourceInventory,
) -> RepositoryAnalysisResult:
    total_files = len(inventory.files)

    if total_files == 0:
        return RepositoryAnalysisResult(
            repository=repository,
            branch=branch,
            total_files=0,
            analyzed_files=0,
            overall_score=OverallScore(architecture=100, clean_code=100, overall=100),
            summary=Summary(),
            recommendations=(NO_FILES_FOUND,),
        )

    summary = Summary.combine(r.summary for r in results)
    return RepositoryAnalysisResult(
        repository=repository,
        branch=branch,
        total_files=total_files,
        analyzed_files=len(results),
        overall_score=overall_score(results),
        summary=summary,
        top_issues=tuple(top_issues(results)),
        recommendations=tuple(repository_recommendations(results, inventory, summary)),
        suggestions=tuple(merge_suggestions(r.suggestions for r in results)),
        critical_files=tuple(critical_files(results)),
        files=tuple(results[:RETAINED_FILES_LIMIT]),
    )
