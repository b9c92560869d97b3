"""Tests for the suggestion generator."""

from code_mentor.domain.entities import FileAnalysisResult, Issue, Severity, Summary
from code_mentor.services.suggestions import (
    DEPENDENCY_INJECTION,
    LAYERED_ARCHITECTURE,
    REPOSITORY_PATTERN,
    SINGLE_RESPONSIBILITY,
    file_recommendations,
    merge_suggestions,
    suggest,
)


def issue(rule_id, severity=Severity.HIGH, category="test"):
    return Issue(
        category=category,
        issue=rule_id,
        recommendation="fix",
        severity=severity,
        occurrences=1,
        rule_id=rule_id,
    )


class TestSuggest:
    """Test mapping issue patterns to proposals."""

    def test_nothing_for_no_issues(self):
        assert suggest([]) == []

    def test_http_calls_suggest_repository(self):
        assert suggest([issue("direct-http-call")]) == [REPOSITORY_PATTERN]

    def test_instantiation_suggests_injection(self):
        assert suggest([issue("direct-instantiation")]) == [DEPENDENCY_INJECTION]

    def test_factory_suppresses_injection(self):
        issues = [issue("direct-instantiation"), issue("factory-pattern", Severity.GOOD)]
        assert DEPENDENCY_INJECTION not in suggest(issues)

    def test_srp_violation_suggests_layers_and_srp(self):
        suggestions = suggest([issue("srp-violation", Severity.CRITICAL)])
        assert suggestions == [LAYERED_ARCHITECTURE, SINGLE_RESPONSIBILITY]

    def test_merge_deduplicates_by_pattern(self):
        merged = merge_suggestions(
            [
                [REPOSITORY_PATTERN, LAYERED_ARCHITECTURE],
                [REPOSITORY_PATTERN],
                [DEPENDENCY_INJECTION],
            ]
        )
        assert [s.pattern for s in merged] == [
            "Repository Pattern",
            "Layered Architecture",
            "Dependency Injection",
        ]


class TestFileRecommendations:
    """Test plain-language advice for one file."""

    def make_result(self, issues, architecture, clean_code):
        return FileAnalysisResult(
            file="src/a.ts",
            issues=tuple(issues),
            summary=Summary.from_issues(issues),
            architecture_score=architecture,
            clean_code_score=clean_code,
        )

    def test_clean_file(self):
        recs = file_recommendations(self.make_result([], 100, 100))
        assert len(recs) == 1
        assert recs[0].startswith("Excellent")

    def test_poor_file(self):
        issues = [issue("srp-violation", Severity.CRITICAL, "solidPrinciples")] * 3
        recs = file_recommendations(self.make_result(issues, 25, 40))

        assert "Architecture needs significant refactoring" in recs
        assert "Resolve 3 critical issue(s) first" in recs
        assert any("SOLID" in r for r in recs)
