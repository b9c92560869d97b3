"""Tests for repository-level aggregation."""

from code_mentor.domain.entities import (
    EntryType,
    FileAnalysisResult,
    FileEntry,
    Issue,
    Severity,
    SourceInventory,
    Summary,
)
from code_mentor.services.aggregator import (
    NO_FILES_FOUND,
    aggregate,
    critical_files,
    overall_score,
    top_issues,
)
from code_mentor.services.suggestions import REPOSITORY_PATTERN


def issue(label, severity, occurrences=1, rule_id="", category="test"):
    return Issue(
        category=category,
        issue=label,
        recommendation=f"fix {label}",
        severity=severity,
        occurrences=occurrences,
        rule_id=rule_id,
    )


def result(path, issues, architecture, clean_code, suggestions=()):
    return FileAnalysisResult(
        file=path,
        issues=tuple(issues),
        summary=Summary.from_issues(issues),
        architecture_score=architecture,
        clean_code_score=clean_code,
        suggestions=tuple(suggestions),
    )


def inventory(*paths, tests=()):
    return SourceInventory(
        files=tuple(
            FileEntry(name=p.rsplit("/", 1)[-1], path=p, type=EntryType.FILE) for p in paths
        ),
        test_files=tuple(tests),
    )


class TestAggregate:
    """Test folding per-file results into one report."""

    def test_empty_repository(self):
        """No discoverable files yields a perfect score and a single notice."""
        report = aggregate("acme/shop", "main", [], inventory())

        assert report.analyzed_files == 0
        assert report.overall_score.to_dict() == {
            "architecture": 100,
            "cleanCode": 100,
            "overall": 100,
        }
        assert report.recommendations == (NO_FILES_FOUND,)

    def test_summary_is_sum_of_file_summaries(self):
        results = [
            result("src/a.ts", [issue("SRP", Severity.CRITICAL), issue("HTTP", Severity.HIGH)], 60, 68),
            result("src/b.ts", [issue("SRP", Severity.CRITICAL)], 75, 80),
        ]
        report = aggregate("acme/shop", "main", results, inventory("src/a.ts", "src/b.ts"))

        assert report.summary.critical == 2
        assert report.summary.high == 1
        assert report.summary.total == 3
        assert report.overall_score.architecture == 68  # (60 + 75) / 2 = 67.5
        assert report.overall_score.clean_code == 74
        assert report.overall_score.overall == 71  # (67.5 + 74) / 2 = 70.75

    def test_report_serialises_camel_case(self):
        results = [result("src/a.ts", [], 100, 100, [REPOSITORY_PATTERN])]
        data = aggregate("acme/shop", "main", results, inventory("src/a.ts")).to_dict()

        assert data["totalFiles"] == 1
        assert data["analyzedFiles"] == 1
        assert data["designPatternSuggestions"][0]["pattern"] == "Repository Pattern"
        assert data["fileResults"][0]["file"] == "src/a.ts"

    def test_retains_at_most_ten_file_results(self):
        paths = [f"src/f{i}.ts" for i in range(12)]
        results = [result(p, [], 100, 100) for p in paths]
        report = aggregate("acme/shop", "main", results, inventory(*paths))
        assert len(report.files) == 10
        assert report.analyzed_files == 12


class TestTopIssues:
    """Test cross-file issue ranking."""

    def test_groups_by_label_and_severity(self):
        results = [
            result("a", [issue("HTTP", Severity.HIGH, 2)], 70, 76),
            result("b", [issue("HTTP", Severity.HIGH, 3)], 55, 64),
        ]
        top = top_issues(results)
        assert len(top) == 1
        assert top[0].count == 5

    def test_severity_ranks_before_count(self):
        results = [
            result("a", [issue("Names", Severity.MEDIUM, 40), issue("SRP", Severity.CRITICAL, 1)], 0, 0)
        ]
        assert [t.issue for t in top_issues(results)] == ["SRP", "Names"]

    def test_capped_at_fifteen(self):
        issues = [issue(f"label {i}", Severity.LOW) for i in range(20)]
        assert len(top_issues([result("a", issues, 40, 52)])) == 15


class TestScoresAndCriticalFiles:
    def test_overall_score_without_results(self):
        assert overall_score([]).overall == 0

    def test_critical_files_sorted_by_score(self):
        results = [
            result("ok.ts", [], 90, 92),
            result("bad.ts", [issue("SRP", Severity.CRITICAL)], 40, 52),
            result("worse.ts", [issue("SRP", Severity.CRITICAL, 3)], 25, 40),
        ]
        flagged = critical_files(results)
        assert [c.file for c in flagged] == ["worse.ts", "bad.ts"]
        assert flagged[0].critical_issues == 1


class TestRecommendations:
    """Test structural advice derived from the repository shape."""

    def test_missing_layers_tests_and_repository(self):
        results = [result("src/a.ts", [issue("SRP", Severity.CRITICAL)], 75, 80)]
        report = aggregate("acme/shop", "main", results, inventory("src/a.ts"))

        recs = " | ".join(report.recommendations)
        assert "Clean Architecture" in recs
        assert "URGENT" in recs
        assert "tests" in recs
        assert "Repository pattern" in recs

    def test_well_structured_repository(self):
        paths = (
            "src/domain/user.ts",
            "src/application/get-user.ts",
            "src/infrastructure/api-user-repository.ts",
            "src/container/dependencies.ts",
        )
        results = [
            result(
                "src/infrastructure/api-user-repository.ts",
                [issue("Repository implementation", Severity.GOOD, rule_id="repository-implementation")],
                100,
                100,
            )
        ]
        report = aggregate(
            "acme/shop", "main", results, inventory(*paths, tests=("src/user.test.ts",))
        )
        assert report.recommendations == ("The repository follows good architecture practices",)
