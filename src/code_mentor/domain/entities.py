"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable


class Severity(str, Enum):
    """Ordinal finding severity."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    GOOD = "good"
    INFO = "info"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    @property
    def penalty(self) -> int:
        return _SEVERITY_PENALTY[self]


_SEVERITY_RANK: dict[Severity, int] = {
    Severity.CRITICAL: 4,
    Severity.HIGH: 3,
    Severity.MEDIUM: 2,
    Severity.LOW: 1,
    Severity.INFO: 0,
    Severity.GOOD: -1,
}

_SEVERITY_PENALTY: dict[Severity, int] = {
    Severity.CRITICAL: 25,
    Severity.HIGH: 15,
    Severity.MEDIUM: 8,
    Severity.LOW: 3,
    Severity.GOOD: -5,
    Severity.INFO: 0,
}


class EntryType(str, Enum):
    FILE = "file"
    DIR = "dir"


# ── Rules & findings ────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Rule:
    """A textual detection rule.

    ``scope`` optionally restricts counting to brace-delimited regions that
    start where ``scope`` matches; a region contributes only when it holds at
    least ``min_matches`` matches of ``pattern``.
    """

    rule_id: str
    pattern: re.Pattern[str]
    issue: str
    recommendation: str
    severity: Severity
    category: str = ""
    occurrence_weight: int = 1
    explanation: str | None = None
    design_pattern: str | None = None
    architecture_layer: str | None = None
    code_example: str | None = None
    resources: tuple[str, ...] = ()
    scope: re.Pattern[str] | None = None
    min_matches: int = 1


@dataclass(frozen=True, slots=True)
class Issue:
    """A single rule or heuristic finding against one file."""

    category: str
    issue: str
    recommendation: str
    severity: Severity
    occurrences: int
    rule_id: str = ""
    explanation: str | None = None
    design_pattern: str | None = None
    architecture_layer: str | None = None
    code_example: str | None = None
    resources: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.occurrences < 1:
            raise ValueError(f"Issue '{self.issue}' must have at least one occurrence")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "category": self.category,
            "issue": self.issue,
            "recommendation": self.recommendation,
            "severity": self.severity.value,
            "occurrences": self.occurrences,
        }
        optional = {
            "ruleId": self.rule_id or None,
            "explanation": self.explanation,
            "designPattern": self.design_pattern,
            "architectureLayer": self.architecture_layer,
            "codeExample": self.code_example,
            "resources": list(self.resources) or None,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        return data


@dataclass(frozen=True, slots=True)
class Summary:
    """Issue counts by severity bucket; always derived, never mutated."""

    total: int = 0
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    good: int = 0
    info: int = 0

    @classmethod
    def from_issues(cls, issues: Iterable[Issue]) -> Summary:
        counts = {severity.value: 0 for severity in Severity}
        total = 0
        for issue in issues:
            counts[issue.severity.value] += 1
            total += 1
        return cls(total=total, **counts)

    @classmethod
    def combine(cls, summaries: Iterable[Summary]) -> Summary:
        result = cls()
        for s in summaries:
            result = cls(
                total=result.total + s.total,
                critical=result.critical + s.critical,
                high=result.high + s.high,
                medium=result.medium + s.medium,
                low=result.low + s.low,
                good=result.good + s.good,
                info=result.info + s.info,
            )
        return result

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "critical": self.critical,
            "high": self.high,
            "medium": self.medium,
            "low": self.low,
            "good": self.good,
            "info": self.info,
        }


@dataclass(frozen=True, slots=True)
class ArchitectureSuggestion:
    """A structured remediation proposal derived from a set of issues."""

    title: str
    description: str
    pattern: str
    benefit: str
    implementation: str
    example: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "pattern": self.pattern,
            "benefit": self.benefit,
            "implementation": self.implementation,
        }
        if self.example:
            data["example"] = self.example
        return data


@dataclass(frozen=True, slots=True)
class FileAnalysisResult:
    """Outcome of analysing one file's content."""

    file: str
    issues: tuple[Issue, ...]
    summary: Summary
    architecture_score: int
    clean_code_score: int
    suggestions: tuple[ArchitectureSuggestion, ...] = ()
    layer: str = "Unknown Layer"

    @property
    def total_issues(self) -> int:
        return len(self.issues)

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "layer": self.layer,
            "totalIssues": self.total_issues,
            "issues": [i.to_dict() for i in self.issues],
            "summary": self.summary.to_dict(),
            "architectureScore": self.architecture_score,
            "cleanCodeScore": self.clean_code_score,
            "suggestions": [s.to_dict() for s in self.suggestions],
        }


@dataclass(frozen=True, slots=True)
class TopIssue:
    """An issue label aggregated across every analysed file."""

    issue: str
    severity: Severity
    count: int
    recommendation: str
    design_pattern: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "issue": self.issue,
            "severity": self.severity.value,
            "count": self.count,
            "recommendation": self.recommendation,
        }
        if self.design_pattern:
            data["designPattern"] = self.design_pattern
        return data


@dataclass(frozen=True, slots=True)
class OverallScore:
    architecture: int
    clean_code: int
    overall: int

    def to_dict(self) -> dict[str, int]:
        return {
            "architecture": self.architecture,
            "cleanCode": self.clean_code,
            "overall": self.overall,
        }


@dataclass(frozen=True, slots=True)
class CriticalFile:
    file: str
    score: int
    critical_issues: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "score": self.score,
            "criticalIssues": self.critical_issues,
        }


@dataclass(frozen=True, slots=True)
class RepositoryAnalysisResult:
    """Repository-level report folded from per-file results."""

    repository: str
    branch: str
    total_files: int
    analyzed_files: int
    overall_score: OverallScore
    summary: Summary
    top_issues: tuple[TopIssue, ...] = ()
    recommendations: tuple[str, ...] = ()
    suggestions: tuple[ArchitectureSuggestion, ...] = ()
    critical_files: tuple[CriticalFile, ...] = ()
    files: tuple[FileAnalysisResult, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "repository": self.repository,
            "branch": self.branch,
            "totalFiles": self.total_files,
            "analyzedFiles": self.analyzed_files,
            "overallScore": self.overall_score.to_dict(),
            "summary": self.summary.to_dict(),
            "topIssues": [t.to_dict() for t in self.top_issues],
            "recommendations": list(self.recommendations),
            "designPatternSuggestions": [s.to_dict() for s in self.suggestions],
            "criticalFiles": [c.to_dict() for c in self.critical_files],
            "fileResults": [f.to_dict() for f in self.files],
        }


# ── Remote collaborator payloads ────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class RateLimitInfo:
    """Snapshot of the host's rate-limit counters."""

    remaining: int
    reset_epoch: int
    limit: int

    def to_dict(self) -> dict[str, int]:
        return {
            "remaining": self.remaining,
            "resetEpoch": self.reset_epoch,
            "limit": self.limit,
        }


@dataclass(frozen=True, slots=True)
class RepoInfo:
    """High-level metadata about a hosted repository."""

    name: str
    full_name: str
    default_branch: str
    description: str = ""
    language: str = "Unknown"
    visibility: str = "public"
    is_private: bool = False
    stars: int = 0
    forks: int = 0
    topics: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class FileEntry:
    """A single directory listing entry."""

    name: str
    path: str
    type: EntryType
    size: int = 0
    sha: str = ""


@dataclass(frozen=True, slots=True)
class FileContent:
    """A fetched file with its decoded text content."""

    name: str
    path: str
    content: str
    size: int
    sha: str = ""


@dataclass(frozen=True, slots=True)
class SourceInventory:
    """Result of a recursive source-file discovery walk."""

    files: tuple[FileEntry, ...] = ()
    test_files: tuple[str, ...] = ()
    skipped_directories: tuple[str, ...] = ()
    truncated: bool = False

    @property
    def paths(self) -> list[str]:
        return [f.path for f in self.files]


@dataclass(slots=True)
class AnalysisOptions:
    """Knobs for a single file analysis."""

    include_good_practices: bool = False
    enabled_categories: frozenset[str] | None = None
    max_file_size: int | None = None
    run_heuristics: bool = True
